from contextlib import contextmanager
from unittest.mock import MagicMock, patch
from pdv_pix import create_api
from pdv_pix.config import ConfiguracaoPix
import pytest


@pytest.fixture(scope='session')
def app():
    return create_api({
        'TESTING': True,
        'RATELIMIT_ENABLED': False
    })


@pytest.fixture
def client(app):
    with app.app_context():
        with app.test_client() as client:
            yield client


@pytest.fixture
def modo_estrito(app):
    original = app.config['PIX']
    app.config['PIX'] = ConfiguracaoPix(estrito=True)
    yield app.config['PIX']
    app.config['PIX'] = original


@pytest.fixture
def cursor_falso():
    cursor = MagicMock()

    @contextmanager
    def conexao_falsa():
        yield cursor

    with patch('pdv_pix.routes.chaves_pix.conexao', conexao_falsa):
        yield cursor
