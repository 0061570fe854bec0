from flask import jsonify, request
from pdv_pix.config import TIPOS_CHAVE_PIX, MAX_CHAVE_PIX
from pdv_pix.gerador_qr_code import SolicitacaoPix
from pdv_pix.log import configurar_logging
from werkzeug.exceptions import BadRequest
from decimal import Decimal, InvalidOperation
import logging


configurar_logging()
logger = logging.getLogger(__name__)


class DadosInvalidos(Exception):
    def __init__(self, mensagem):
        self.mensagem = mensagem
        super().__init__(mensagem)


def validar_json():
    try:
        if not request.is_json:
            logger.warning('Requisição deve ser Content_type: application/json.')
            return None, (jsonify(
                {'erro': 'Requisição deve ser Content-type: application/json!'}), 400)

        dados = request.get_json()
        if not dados or not isinstance(dados, dict):
            logger.warning('Dados ausentes ou inválidos no corpo da requisição.')
            return None, (jsonify(
                {'erro': 'Dados ausentes ou inválidos no corpo da requisição!'}), 400)

        return dados, None
    except BadRequest:
        logger.warning('JSON malformado! Dados inválidos no corpo da requisição.')
        return None, (jsonify({'erro': 'JSON malformado. Dados inválidos!'}), 400)


def _texto_opcional(dados, campo):
    valor = dados.get(campo)
    if valor is None:
        return None

    if not isinstance(valor, str):
        raise DadosInvalidos(f'Valor inválido para {campo}!')

    return valor or None


def _valor_opcional(dados):
    valor = dados.get('valor')
    if valor is None:
        return None

    if isinstance(valor, bool) or not isinstance(valor, (int, float, str)):
        raise DadosInvalidos('Valor inválido para valor!')

    if not isinstance(valor, str):
        return valor

    try:
        return Decimal(valor.strip())
    except InvalidOperation:
        raise DadosInvalidos('Valor inválido para valor!')


def solicitacao_de_dados(dados, chave_pix=None) -> SolicitacaoPix:
    if chave_pix is None:
        chave_pix = dados.get('chave_pix')

        if not isinstance(chave_pix, str):
            raise DadosInvalidos('Campo obrigatório: chave_pix')

    return SolicitacaoPix(
        chave_pix=chave_pix,
        nome_recebedor=_texto_opcional(dados, 'nome_recebedor'),
        cidade_recebedor=_texto_opcional(dados, 'cidade_recebedor'),
        valor=_valor_opcional(dados),
        txid=_texto_opcional(dados, 'txid')
    )


REGRAS_CHAVE_PIX = {
    'tipo': lambda v: isinstance(v, str) and v in TIPOS_CHAVE_PIX,
    'valor_chave': lambda v: (isinstance(v, str)
                              and 0 < len(v.strip()) <= MAX_CHAVE_PIX),
    'ativa': lambda v: isinstance(v, bool)
}


def validar_chave_pix(dados, parcial=False):
    obrigatorios = [] if parcial else ['tipo', 'valor_chave']

    faltando = [c for c in obrigatorios if c not in dados or dados[c] is None]
    if faltando:
        raise DadosInvalidos(f"Campo obrigatório: {', '.join(faltando)}")

    campos = {}
    for campo, regra in REGRAS_CHAVE_PIX.items():
        if campo not in dados:
            continue

        valor = dados[campo]
        if not regra(valor):
            logger.warning(f'Valor inválido para {campo}: {valor!r}')
            raise DadosInvalidos(f'Valor inválido para {campo}!')

        campos[campo] = valor.strip() if isinstance(valor, str) else valor

    if not campos:
        raise DadosInvalidos('Nenhum campo válido para atualizar!')

    return campos
