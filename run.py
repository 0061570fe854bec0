from pdv_pix import create_api
from pdv_pix.log import configurar_logging
import logging


configurar_logging()
logger = logging.getLogger(__name__)


def main():
    app = create_api()

    logger.info('API PIX rodando na porta 5000.')
    app.run(debug=False, port=5000)


if __name__ == '__main__':
    main()
