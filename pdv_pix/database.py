from contextlib import closing, contextmanager
from pdv_pix.config import (DB_HOST, DB_USER, DB_PASSWORD, DB_NOME,
                            DB_POOL_NOME, DB_POOL_TAMANHO, TIPOS_CHAVE_PIX)
from pdv_pix.log import configurar_logging
import logging
import mysql.connector


configurar_logging()
logger = logging.getLogger(__name__)


@contextmanager
def criar_banco():
    with closing(mysql.connector.connect(
        host=DB_HOST,
        user=DB_USER,
        password=DB_PASSWORD
    )) as con:
        try:
            cursor = con.cursor()
            yield cursor
            con.commit()
        except Exception as erro:
            con.rollback()
            logger.error(f'Erro ao criar banco SQL: {str(erro)}')
            raise


@contextmanager
def conexao():
    with closing(mysql.connector.connect(
        host=DB_HOST,
        user=DB_USER,
        password=DB_PASSWORD,
        autocommit=False,
        database=DB_NOME,
        pool_name=DB_POOL_NOME,
        pool_size=DB_POOL_TAMANHO
    )) as con:
        try:
            cursor = con.cursor(dictionary=False)
            yield cursor
            con.commit()
        except Exception as erro:
            con.rollback()
            logger.error(f'Transação desfeita no banco SQL: {str(erro)}')
            raise


def inicializador_banco():
    with criar_banco() as cursor:
        cursor.execute(f'''
            CREATE DATABASE IF NOT EXISTS {DB_NOME}
                DEFAULT CHARSET utf8mb4
                DEFAULT COLLATE utf8mb4_unicode_ci;''')

    tipos = ', '.join(f"'{t}'" for t in TIPOS_CHAVE_PIX)

    with conexao() as cursor:
        cursor.execute(f'''
            CREATE TABLE IF NOT EXISTS chaves_pix (
                id INT UNSIGNED PRIMARY KEY AUTO_INCREMENT,
                tipo ENUM({tipos}) NOT NULL,
                valor_chave VARCHAR(77) NOT NULL UNIQUE
                    CHECK(LENGTH(TRIM(valor_chave)) > 0),
                ativa BOOLEAN NOT NULL DEFAULT TRUE,
                criado_em DATETIME DEFAULT CURRENT_TIMESTAMP,
                INDEX idx_chaves_pix_ativa (ativa)
            ) ENGINE=InnoDB DEFAULT CHARSET = utf8mb4 COLLATE = utf8mb4_unicode_ci;
        ''')

    logger.info('Banco SQL inicializado.')
