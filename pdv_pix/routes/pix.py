from flask import Blueprint, current_app, jsonify
from pdv_pix.config import LIMITE_GERACAO
from pdv_pix.error import ErroPix, tratamento_erro_pix
from pdv_pix.gerador_qr_code import gerar_payload_pix
from pdv_pix.imagem_qr import gerar_imagem_qr_base64
from pdv_pix.leitor_payload import validar_payload
from pdv_pix.limiter import limiter
from pdv_pix.validation import (DadosInvalidos,
                                solicitacao_de_dados,
                                validar_json)
from pdv_pix.log import configurar_logging
import logging


configurar_logging()
logger = logging.getLogger(__name__)


pix_bp = Blueprint('pix', __name__)


def _gerar_a_partir_da_requisicao():
    dados, erro = validar_json()
    if erro:
        return None, erro

    try:
        solicitacao = solicitacao_de_dados(dados)
    except DadosInvalidos as erro:
        logger.warning(f'Dados inválidos para payload PIX: {erro.mensagem}')
        return None, (jsonify({'erro': erro.mensagem}), 400)

    return gerar_payload_pix(solicitacao, current_app.config['PIX']), None


@pix_bp.route('/payload', methods=['POST'])
@limiter.limit(LIMITE_GERACAO)
def gerar_payload():
    try:
        logger.info('Gerando payload PIX...')

        payload, erro = _gerar_a_partir_da_requisicao()
        if erro:
            return erro

        logger.info('Payload PIX gerado com sucesso.')
        return jsonify({'payload': payload}), 201

    except ErroPix as erro:
        return tratamento_erro_pix(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao gerar payload PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao gerar payload PIX!'}), 500


@pix_bp.route('/qrcode', methods=['POST'])
@limiter.limit(LIMITE_GERACAO)
def gerar_qrcode():
    try:
        logger.info('Gerando QR Code PIX...')

        payload, erro = _gerar_a_partir_da_requisicao()
        if erro:
            return erro

        imagem = gerar_imagem_qr_base64(payload)

        logger.info('QR Code PIX gerado com sucesso.')
        return jsonify({'payload': payload, 'imagem_base64': imagem}), 201

    except ErroPix as erro:
        return tratamento_erro_pix(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao gerar QR Code PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao gerar QR Code PIX!'}), 500


@pix_bp.route('/validar', methods=['POST'])
def validar():
    try:
        logger.info('Validando payload PIX...')

        dados, erro = validar_json()
        if erro:
            return erro

        payload = dados.get('payload')
        if not isinstance(payload, str) or not payload:
            logger.warning('Campo obrigatório: payload')
            return jsonify({'erro': 'Campo obrigatório: payload'}), 400

        campos = validar_payload(payload.strip())

        logger.info('Payload PIX válido.')
        return jsonify({'valido': True, **campos}), 200

    except ErroPix as erro:
        return tratamento_erro_pix(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao validar payload PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao validar payload PIX!'}), 500
