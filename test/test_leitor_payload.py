from pdv_pix.error import CrcInvalido, PayloadInvalido
from pdv_pix.gerador_qr_code import (SolicitacaoPix,
                                     calcular_crc16,
                                     gerar_payload_pix)
from pdv_pix.leitor_payload import CampoEmv, ler_campos, validar_payload
import pytest


PAYLOAD = (
    '00020126330014br.gov.bcb.pix011112345678901'
    '5204000053039865406100.50'
    '5802BR5910LOJA TESTE6009SAO PAULO62090505TX1236304880B'
)


def test_ler_campos():
    campos = ler_campos('000201' + '5802BR' + '0500')

    assert campos == [
        CampoEmv('00', '01'),
        CampoEmv('58', 'BR'),
        CampoEmv('05', '')
    ]
    assert [c.codificar() for c in campos] == ['000201', '5802BR', '0500']
    assert campos[1].tamanho == 2


def test_ler_campos_vazio():
    assert ler_campos('') == []


@pytest.mark.parametrize('texto', [
    '000',
    '00AB01',
    'X00201',
    '000501',
])
def test_ler_campos_malformado(texto):
    with pytest.raises(PayloadInvalido):
        ler_campos(texto)


def test_validar_payload():
    dados = validar_payload(PAYLOAD)

    assert dados == {
        'chave_pix': '12345678901',
        'nome_recebedor': 'LOJA TESTE',
        'cidade_recebedor': 'SAO PAULO',
        'valor': '100.50',
        'moeda': '986',
        'pais': 'BR',
        'txid': 'TX123',
        'crc': '880B'
    }


def test_validar_payload_sem_valor():
    payload = gerar_payload_pix(SolicitacaoPix('email@example.com'))
    dados = validar_payload(payload)

    assert dados['chave_pix'] == 'email@example.com'
    assert dados['valor'] is None
    assert dados['txid'] == '***'
    assert dados['nome_recebedor'] == 'ROTI PAOLA'


def test_validar_payload_crc_divergente():
    adulterado = PAYLOAD.replace('100.50', '100.51')

    with pytest.raises(CrcInvalido):
        validar_payload(adulterado)


@pytest.mark.parametrize('payload', [
    '',
    PAYLOAD[6:],
    PAYLOAD[:-4] + '880b',
    PAYLOAD[:-8],
    PAYLOAD[:-2],
])
def test_validar_payload_malformado(payload):
    with pytest.raises(PayloadInvalido):
        validar_payload(payload)


def test_validar_payload_outro_arranjo():
    payload = gerar_payload_pix(SolicitacaoPix('12345678901'))
    outro = payload.replace('br.gov.bcb.pix', 'br.gov.bcb.xyz')[:-4]

    outro += calcular_crc16(outro)

    with pytest.raises(PayloadInvalido) as erro:
        validar_payload(outro)

    assert not isinstance(erro.value, CrcInvalido)
