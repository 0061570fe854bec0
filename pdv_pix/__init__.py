from flask import Flask
from pdv_pix.config import ConfiguracaoPix
from pdv_pix.routes.pix import pix_bp
from pdv_pix.routes.chaves_pix import chaves_pix_bp
from pdv_pix.database import inicializador_banco
from pdv_pix.error import register_erro_handlers
from pdv_pix.limiter import limiter


def create_api(config=None):
    app = Flask('pdv_pix')

    if config:
        app.config.update(config)

    app.config['PIX'] = ConfiguracaoPix.from_mapping(app.config)

    limiter.init_app(app)

    if not app.config.get('TESTING'):
        inicializador_banco()

    app.register_blueprint(pix_bp, url_prefix='/pix')
    app.register_blueprint(chaves_pix_bp, url_prefix='/chaves-pix')

    register_erro_handlers(app)

    return app
