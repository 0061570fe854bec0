from flask import jsonify, request
from flask_limiter.errors import RateLimitExceeded
from mysql.connector import errors
from pdv_pix.log import configurar_logging
import logging


configurar_logging()
logger = logging.getLogger(__name__)


class ErroPix(ValueError):
    mensagem = 'Dados inválidos para o payload PIX!'

    def __init__(self, detalhe=None):
        self.detalhe = detalhe or self.mensagem
        super().__init__(self.detalhe)


class ChaveInvalida(ErroPix):
    mensagem = 'Chave PIX inválida!'


class ValorMuitoLongo(ErroPix):
    mensagem = 'Campo do payload excede 99 caracteres!'


class ValorInvalido(ErroPix):
    mensagem = 'Valor da transação inválido!'


class ValorNegativo(ValorInvalido):
    mensagem = 'Valor da transação não pode ser negativo!'


class PayloadInvalido(ErroPix):
    mensagem = 'Payload PIX malformado!'


class CrcInvalido(PayloadInvalido):
    mensagem = 'CRC16 do payload PIX não confere!'


def tratamento_erro_pix(erro):
    if isinstance(erro, CrcInvalido):
        logger.warning(f'CRC16 divergente: {str(erro)}')
        return jsonify({'erro': erro.mensagem, 'detalhe': erro.detalhe}), 422

    if isinstance(erro, PayloadInvalido):
        logger.warning(f'Payload PIX malformado: {str(erro)}')
        return jsonify({'erro': erro.mensagem, 'detalhe': erro.detalhe}), 422

    if isinstance(erro, ErroPix):
        logger.warning(f'{type(erro).__name__}: {str(erro)}')
        return jsonify({'erro': erro.mensagem, 'detalhe': erro.detalhe}), 422

    logger.error(f'Erro inesperado ao gerar payload PIX: {str(erro)}')
    return jsonify({'erro': 'Erro inesperado ao gerar payload PIX!'}), 500


def tratamento_erro_mysql(erro):
    if isinstance(erro, errors.IntegrityError):
        logger.warning(f'Violação de integridade ou chave duplicada: {str(erro)}')
        return jsonify({'erro': 'Violação de integridade ou chave duplicada!'}), 409

    if isinstance(erro, errors.DataError):
        logger.warning(f'Tipo de dado inválido no banco SQL: {str(erro)}')
        return jsonify({'erro': 'Tipo de dado inválido no banco SQL!'}), 400

    if isinstance(erro, errors.OperationalError):
        logger.error(f'Erro de operação no banco SQL: {str(erro)}')
        return jsonify({'erro': 'Erro de operação no banco SQL!'}), 500

    if isinstance(erro, errors.ProgrammingError):
        logger.error(f'Erro de uso incorreto do cursor ou SQL inválida: {str(erro)}')
        return jsonify({'erro': 'Erro de uso incorreto do cursor ou SQL inválida!'}), 500

    if isinstance(erro, errors.InterfaceError):
        logger.error(f'Erro de comunicação com banco SQL: {str(erro)}')
        return jsonify({'erro': 'Erro de comunicação com banco SQL!'}), 500

    if isinstance(erro, errors.PoolError):
        logger.critical(f'Pool de conexões esgotado: {str(erro)}')
        return jsonify({'erro': 'Serviço temporariamente indisponível!'}), 503

    if isinstance(erro, errors.DatabaseError):
        logger.critical(f'Erro grave no banco SQL: {str(erro)}')
        return jsonify({'erro': 'Erro grave no banco SQL!'}), 500

    logger.error(f'Erro inesperado no banco SQL: {str(erro)}')
    return jsonify({'erro': 'Erro inesperado no banco SQL!'}), 500


def register_erro_handlers(app):
    @app.errorhandler(ErroPix)
    def erro_pix(erro):
        return tratamento_erro_pix(erro)

    @app.errorhandler(errors.Error)
    def erro_mysql(erro):
        return tratamento_erro_mysql(erro)

    @app.errorhandler(404)
    def rota_nao_encontrado(erro):
        logger.warning(f'Rota não encontrada: {str(erro)}')
        return jsonify({'erro': 'Rota não encontrada!'}), 404

    @app.errorhandler(RateLimitExceeded)
    def rate_limit_handler(e):
        logger.warning(
            f"RATE LIMIT excedido | IP={request.remote_addr} | rota={request.path}"
        )
        return jsonify({
            'erro': 'Muitas requisições. Tente novamente mais tarde.'
        }), 429

    @app.errorhandler(400)
    def dados_invalidos(erro):
        logger.warning(f'Dados inválidos na rota: {str(erro)}')
        return jsonify({'erro': 'Dados inválidos na rota!'}), 400

    @app.errorhandler(405)
    def metodo_errado(erro):
        logger.warning(f'Método HTTP não permitido nesta rota: {str(erro)}')
        return jsonify({'erro': 'Método HTTP não permitido nesta rota!'}), 405

    @app.errorhandler(422)
    def logica_errada(erro):
        logger.warning(f'Dados corretos, mas lógica errada: {str(erro)}')
        return jsonify({'erro': 'Dados corretos, mas lógica errada!'}), 422

    @app.errorhandler(Exception)
    def erro_interno(erro):
        logger.error(f'Erro inesperado ao acessar a rota: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao acessar a rota!'}), 500
