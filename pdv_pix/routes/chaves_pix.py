from flask import Blueprint, current_app, jsonify, request
from mysql.connector import errors
from pdv_pix.config import LIMITE_GERACAO
from pdv_pix.database import conexao
from pdv_pix.error import ErroPix, tratamento_erro_pix, tratamento_erro_mysql
from pdv_pix.gerador_qr_code import gerar_payload_pix
from pdv_pix.limiter import limiter
from pdv_pix.validation import (DadosInvalidos,
                                solicitacao_de_dados,
                                validar_chave_pix,
                                validar_json)
from pdv_pix.log import configurar_logging
import logging


configurar_logging()
logger = logging.getLogger(__name__)


chaves_pix_bp = Blueprint('chaves-pix', __name__)


COLUNAS = 'id, tipo, valor_chave, ativa, criado_em'


def _como_dict(linha):
    return {
        'id': linha[0],
        'tipo': linha[1],
        'valor_chave': linha[2],
        'ativa': bool(linha[3]),
        'criado_em': linha[4]
    }


@chaves_pix_bp.route('/', methods=['GET'])
def listar_chaves_pix():
    try:
        somente_ativas = request.args.get('ativas', '').lower() in ('1', 'true')
        logger.info(f'Listando chaves PIX (somente_ativas={somente_ativas})...')

        sql = f'SELECT {COLUNAS} FROM chaves_pix'
        if somente_ativas:
            sql += ' WHERE ativa = TRUE'
        sql += ' ORDER BY criado_em DESC'

        with conexao() as cursor:
            cursor.execute(sql)
            dados = [_como_dict(c) for c in cursor.fetchall()]

        if not dados:
            logger.warning('Nenhuma chave PIX cadastrada ainda.')
            return jsonify([]), 200

        logger.info('Listagem de chaves PIX bem-sucedida.')
        return jsonify(dados), 200

    except errors.Error as erro:
        return tratamento_erro_mysql(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao listar chaves PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao listar chaves PIX!'}), 500


@chaves_pix_bp.route('/<int:id>', methods=['GET'])
def buscar_chave_pix(id):
    try:
        logger.info(f'Buscando chave PIX com id={id}...')
        with conexao() as cursor:
            cursor.execute(
                f'SELECT {COLUNAS} FROM chaves_pix WHERE id = %s', (id,))
            dado = cursor.fetchone()

        if not dado:
            logger.warning(f'Chave PIX id={id} não encontrada.')
            return jsonify({'erro': 'Chave PIX não encontrada!'}), 404

        logger.info('Busca de chave PIX bem-sucedida.')
        return jsonify(_como_dict(dado)), 200

    except errors.Error as erro:
        return tratamento_erro_mysql(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao buscar chave PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao buscar chave PIX!'}), 500


@chaves_pix_bp.route('/', methods=['POST'])
def adicionar_chave_pix():
    try:
        logger.info('Adicionando chave PIX...')

        dados, erro = validar_json()
        if erro:
            return erro

        try:
            campos = validar_chave_pix(dados)
        except DadosInvalidos as erro:
            return jsonify({'erro': erro.mensagem}), 400

        with conexao() as cursor:
            cursor.execute('''
                INSERT INTO chaves_pix (tipo, valor_chave, ativa)
                    VALUES (%s, %s, %s)''',
                (campos['tipo'], campos['valor_chave'],
                 campos.get('ativa', True)))
            novo_id = cursor.lastrowid

        logger.info(f'Chave PIX id={novo_id} adicionada com sucesso.')
        return jsonify(
            {'mensagem': 'Chave PIX adicionada com sucesso!', 'id': novo_id}), 201

    except errors.Error as erro:
        return tratamento_erro_mysql(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao adicionar chave PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao adicionar chave PIX!'}), 500


def _atualizar(id, campos):
    atribuicoes = ', '.join(f'{c} = %s' for c in campos)

    with conexao() as cursor:
        cursor.execute(
            'SELECT id FROM chaves_pix WHERE id = %s FOR UPDATE', (id,))

        if not cursor.fetchone():
            return False

        cursor.execute(
            f'UPDATE chaves_pix SET {atribuicoes} WHERE id = %s',
            (*campos.values(), id))

    return True


@chaves_pix_bp.route('/<int:id>', methods=['PUT'])
def atualizar_chave_pix(id):
    try:
        logger.info(f'Atualizando chave PIX id={id}...')

        dados, erro = validar_json()
        if erro:
            return erro

        try:
            campos = validar_chave_pix(dados, parcial=True)
        except DadosInvalidos as erro:
            return jsonify({'erro': erro.mensagem}), 400

        if not _atualizar(id, campos):
            logger.warning(f'Chave PIX id={id} não encontrada.')
            return jsonify({'erro': 'Chave PIX não encontrada!'}), 404

        logger.info(f'Chave PIX id={id} atualizada com sucesso.')
        return jsonify({'mensagem': 'Chave PIX atualizada com sucesso!'}), 200

    except errors.Error as erro:
        return tratamento_erro_mysql(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao atualizar chave PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao atualizar chave PIX!'}), 500


@chaves_pix_bp.route('/<int:id>/status', methods=['PATCH'])
def alterar_status_chave_pix(id):
    try:
        dados, erro = validar_json()
        if erro:
            return erro

        ativa = dados.get('ativa')
        if not isinstance(ativa, bool):
            logger.warning(f'Valor inválido para ativa: {ativa!r}')
            return jsonify({'erro': 'Valor inválido para ativa!'}), 400

        logger.info(f'Alterando status da chave PIX id={id} para ativa={ativa}...')

        if not _atualizar(id, {'ativa': ativa}):
            logger.warning(f'Chave PIX id={id} não encontrada.')
            return jsonify({'erro': 'Chave PIX não encontrada!'}), 404

        return jsonify({'id': id, 'ativa': ativa}), 200

    except errors.Error as erro:
        return tratamento_erro_mysql(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao alterar status da chave PIX: {str(erro)}')
        return jsonify(
            {'erro': 'Erro inesperado ao alterar status da chave PIX!'}), 500


@chaves_pix_bp.route('/<int:id>', methods=['DELETE'])
def deletar_chave_pix(id):
    try:
        logger.info(f'Deletando chave PIX id={id}...')
        with conexao() as cursor:
            cursor.execute('DELETE FROM chaves_pix WHERE id = %s', (id,))
            removidas = cursor.rowcount

        if not removidas:
            logger.warning(f'Chave PIX id={id} não encontrada.')
            return jsonify({'erro': 'Chave PIX não encontrada!'}), 404

        logger.info(f'Chave PIX id={id} deletada com sucesso.')
        return '', 204

    except errors.Error as erro:
        return tratamento_erro_mysql(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao deletar chave PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao deletar chave PIX!'}), 500


@chaves_pix_bp.route('/<int:id>/payload', methods=['POST'])
@limiter.limit(LIMITE_GERACAO)
def gerar_payload_chave_pix(id):
    try:
        logger.info(f'Gerando payload PIX com a chave id={id}...')

        dados = request.get_json(silent=True) or {}
        if not isinstance(dados, dict):
            logger.warning('Dados inválidos no corpo da requisição.')
            return jsonify({'erro': 'Dados inválidos no corpo da requisição!'}), 400

        with conexao() as cursor:
            cursor.execute(
                'SELECT valor_chave, ativa FROM chaves_pix WHERE id = %s', (id,))
            chave = cursor.fetchone()

        if not chave:
            logger.warning(f'Chave PIX id={id} não encontrada.')
            return jsonify({'erro': 'Chave PIX não encontrada!'}), 404

        if not chave[1]:
            logger.warning(f'Chave PIX id={id} está inativa.')
            return jsonify({'erro': 'Chave PIX inativa!'}), 409

        try:
            solicitacao = solicitacao_de_dados(dados, chave_pix=chave[0])
        except DadosInvalidos as erro:
            return jsonify({'erro': erro.mensagem}), 400

        payload = gerar_payload_pix(solicitacao, current_app.config['PIX'])

        logger.info(f'Payload PIX gerado com a chave id={id}.')
        return jsonify({'payload': payload}), 201

    except ErroPix as erro:
        return tratamento_erro_pix(erro)

    except errors.Error as erro:
        return tratamento_erro_mysql(erro)

    except Exception as erro:
        logger.error(f'Erro inesperado ao gerar payload PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao gerar payload PIX!'}), 500
