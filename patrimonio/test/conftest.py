"""
Pytest configuration and fixtures

Each test gets a fresh app bound to an in-memory SQLite database with the
critical and reference seed data inserted, and rate limiting disabled.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ['LOG_TO_FILE'] = 'False'
os.environ.setdefault('LOG_LEVEL', 'WARNING')

import pytest
from patrimonio import create_app
from patrimonio import db as _db
from patrimonio.build import insert_critical_data, insert_reference_data

ADMIN_EMAIL = 'admin@email.com'
ADMIN_PASSWORD = 'admin123'
USER_EMAIL = 'user@email.com'
USER_PASSWORD = 'user123'

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'RATELIMIT_ENABLED': False,
    'APP_ENV': 'testing',
    'ADMIN_PASSWORD': ADMIN_PASSWORD,
    'JWT_SECRET': 'test-jwt-secret',
}


def make_app(**overrides):
    app = create_app(dict(TEST_CONFIG, **overrides))
    with app.app_context():
        _db.create_all()
        insert_critical_data()
        insert_reference_data()
    return app


@pytest.fixture(scope='function')
def app():
    """
    Create Flask application for testing

    No app context is held open while the test runs: each test client request
    pushes its own, so ``g`` (and the user Flask-Login caches there) never
    leaks from one request into the next.
    """
    app = make_app()

    yield app

    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


def login(client, email=ADMIN_EMAIL, password=ADMIN_PASSWORD):
    """Helper function to log in through the API"""
    return client.post('/api/auth/login', json={'email': email, 'password': password})


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture(scope='function')
def admin_headers(client):
    """Authorization headers for the seeded default admin"""
    response = login(client)
    assert response.status_code == 200, response.get_json()
    return bearer(response.get_json()['data']['token'])


@pytest.fixture(scope='function')
def regular_user(client, admin_headers):
    """A user holding the USER role, created through the API"""
    perfis = client.get('/api/perfis', headers=admin_headers).get_json()['data']
    perfil_id = next(p['id'] for p in perfis if p['nome'] == 'USER')

    response = client.post('/api/users', json={
        'email': USER_EMAIL,
        'password': USER_PASSWORD,
        'perfilId': perfil_id,
        'emailRecuperacao': 'recupera@email.com',
    }, headers=admin_headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()['data']


@pytest.fixture(scope='function')
def user_headers(client, regular_user):
    """Authorization headers for a non-admin user"""
    response = login(client, USER_EMAIL, USER_PASSWORD)
    assert response.status_code == 200, response.get_json()
    return bearer(response.get_json()['data']['token'])


def reference_id(model, nome):
    return model.query.filter_by(nome=nome).first().id


@pytest.fixture(scope='function')
def seed_ids(app):
    """Ids of the seeded reference rows used by most asset and movement tests"""
    from patrimonio.data.core.asset_info.categoria import Categoria
    from patrimonio.data.core.localizacao import Localizacao
    from patrimonio.data.core.movement_info.tipo_movimentacao import TipoMovimentacao

    with app.app_context():
        return {
            'categoria': reference_id(Categoria, 'móvel'),
            'localizacao': reference_id(Localizacao, 'igreja matriz'),
            'emprestimo': reference_id(TipoMovimentacao, 'empréstimo'),
            'devolucao': reference_id(TipoMovimentacao, 'devolução'),
        }


def bem_payload(seed_ids, tombo='T-001', **extra):
    payload = {
        'tombo': tombo,
        'nome': 'Cadeira de madeira',
        'categoriaId': seed_ids['categoria'],
        'localizacaoId': seed_ids['localizacao'],
        'sala': 'Sala 1',
    }
    payload.update(extra)
    return payload


def loan_payload(bem_id, tipo_id, **extra):
    payload = {
        'bemId': bem_id,
        'tipoId': tipo_id,
        'pessoa': 'Maria',
        'contato': '(11) 99999-0000',
        'pastoral': 'Catequese',
        'dataEmprestimo': '2024-01-10',
    }
    payload.update(extra)
    return payload


@pytest.fixture(scope='function')
def bem(client, admin_headers, seed_ids):
    """An asset created through the API"""
    response = client.post('/api/bens', json=bem_payload(seed_ids), headers=admin_headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()['data']
