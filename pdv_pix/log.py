from logging.handlers import RotatingFileHandler
from pdv_pix.config import LOG_DIR, LOG_ARQUIVO
import os
import logging


_configurado = False


def configurar_logging():
    global _configurado
    if _configurado:
        return

    os.makedirs(LOG_DIR, exist_ok=True)
    
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(
        os.path.join(LOG_DIR, LOG_ARQUIVO),
        maxBytes=2000000,
        backupCount=5
    )

    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        '[%(asctime)s] [%(levelname)s] [%(name)s] - [%(message)s]'
    ))

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG)
    console.setFormatter(logging.Formatter(
        '%(levelname)s: %(message)s'
    ))

    logger.addHandler(file_handler)
    logger.addHandler(console)

    _configurado = True
