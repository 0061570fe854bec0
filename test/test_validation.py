from decimal import Decimal
from pdv_pix.config import ConfiguracaoPix
from pdv_pix.validation import (DadosInvalidos,
                                solicitacao_de_dados,
                                validar_chave_pix)
import pytest


def test_solicitacao_de_dados_completa():
    solicitacao = solicitacao_de_dados({
        'chave_pix': '12345678901',
        'nome_recebedor': ' LOJA TESTE ',
        'cidade_recebedor': 'SAO PAULO',
        'valor': 99.9,
        'txid': 'TX123'
    })

    assert solicitacao.chave_pix == '12345678901'
    assert solicitacao.nome_recebedor == ' LOJA TESTE '
    assert solicitacao.cidade_recebedor == 'SAO PAULO'
    assert solicitacao.valor == 99.9
    assert isinstance(solicitacao.valor, float)
    assert solicitacao.txid == 'TX123'


def test_solicitacao_de_dados_opcionais_vazios():
    solicitacao = solicitacao_de_dados({
        'chave_pix': 'email@example.com',
        'nome_recebedor': '   ',
        'txid': ''
    })

    assert solicitacao.nome_recebedor == '   '
    assert solicitacao.cidade_recebedor is None
    assert solicitacao.valor is None
    assert solicitacao.txid is None


def test_solicitacao_de_dados_chave_informada():
    solicitacao = solicitacao_de_dados({'valor': '15'}, chave_pix='chave@loja.com')

    assert solicitacao.chave_pix == 'chave@loja.com'
    assert solicitacao.valor == Decimal('15')


@pytest.mark.parametrize('dados', [
    {},
    {'chave_pix': 123},
    {'chave_pix': '1', 'valor': '10,50'},
    {'chave_pix': '1', 'valor': True},
    {'chave_pix': '1', 'valor': [10]},
    {'chave_pix': '1', 'nome_recebedor': 42},
])
def test_solicitacao_de_dados_invalida(dados):
    with pytest.raises(DadosInvalidos):
        solicitacao_de_dados(dados)


def test_validar_chave_pix():
    campos = validar_chave_pix({'tipo': 'email', 'valor_chave': ' a@b.com '})

    assert campos == {'tipo': 'email', 'valor_chave': 'a@b.com'}


def test_validar_chave_pix_parcial():
    assert validar_chave_pix({'ativa': False}, parcial=True) == {'ativa': False}


@pytest.mark.parametrize('dados, parcial', [
    ({'tipo': 'email'}, False),
    ({'valor_chave': 'a@b.com'}, False),
    ({'tipo': 'boleto', 'valor_chave': 'x'}, False),
    ({'tipo': 'cpf', 'valor_chave': '   '}, False),
    ({'tipo': 'aleatoria', 'valor_chave': 'X' * 78}, False),
    ({'ativa': 'sim'}, True),
    ({}, True),
])
def test_validar_chave_pix_invalida(dados, parcial):
    with pytest.raises(DadosInvalidos):
        validar_chave_pix(dados, parcial=parcial)


def test_configuracao_de_mapping():
    config = ConfiguracaoPix.from_mapping({
        'PIX_NOME_RECEBEDOR': 'PAOLA ROTISSERIE',
        'PIX_ESTRITO': 'true'
    })

    assert config.nome_recebedor == 'PAOLA ROTISSERIE'
    assert config.cidade_recebedor == 'SAO PAULO'
    assert config.txid == '***'
    assert config.estrito is True
    assert config.transliterar is False


def test_solicitacao_de_dados_valor_texto():
    assert solicitacao_de_dados(
        {'chave_pix': '1', 'valor': ' 1.005 '}).valor == Decimal('1.005')
    assert solicitacao_de_dados({'chave_pix': '1', 'valor': 7}).valor == 7
