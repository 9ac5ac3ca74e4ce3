"""
Application factory, error envelope and database build
"""

import json
import pytest
from sqlalchemy.exc import IntegrityError
from patrimonio import create_app, db
from patrimonio.build import build_database, insert_critical_data, insert_reference_data, verify_critical_data
from patrimonio.data.core.asset_info.categoria import Categoria
from patrimonio.data.core.user_info.usuario import Usuario
from patrimonio.presentation.errors import classify_integrity_error
from conftest import TEST_CONFIG


def test_health_is_public(client):
    response = client.get('/health')
    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'ok'
    assert body['timestamp']


def test_unknown_route(client):
    response = client.get('/api/nao-existe')
    assert response.status_code == 404
    body = response.get_json()
    assert body['success'] is False
    assert body['error']['code'] == 'NOT_FOUND'


def test_wrong_method(client):
    response = client.get('/api/auth/login')
    assert response.status_code == 405
    assert response.get_json()['error']['code'] == 'METHOD_NOT_ALLOWED'


def test_response_headers(app, client):
    response = client.get('/health')
    assert response.headers['Access-Control-Allow-Origin'] == app.config['FRONTEND_URL']
    assert response.headers['X-Content-Type-Options'] == 'nosniff'


def test_unexpected_error_is_hidden(app, client):
    @app.route('/boom')
    def boom():
        raise ValueError('segredo interno')

    response = client.get('/boom')
    assert response.status_code == 500
    body = response.get_json()
    assert body['error']['code'] == 'INTERNAL_SERVER_ERROR'
    assert 'segredo' not in body['error']['message']


def test_secret_key_required():
    with pytest.raises(RuntimeError):
        create_app(dict(TEST_CONFIG, SECRET_KEY=None))


def test_jwt_secret_falls_back_to_secret_key():
    app = create_app(dict(TEST_CONFIG, JWT_SECRET=None))
    assert app.config['JWT_SECRET'] == app.config['SECRET_KEY']


def test_build_is_idempotent(app):
    with app.app_context():
        assert verify_critical_data()
        users_before = Usuario.query.count()
        categorias_before = Categoria.query.count()

        insert_critical_data()
        insert_reference_data()
        build_database(app)

        assert Usuario.query.count() == users_before
        assert Categoria.query.count() == categorias_before


def test_seeded_admin_password_hash_never_serialized(app):
    with app.app_context():
        admin = Usuario.query.filter_by(email='admin@email.com').first()
        assert admin.senha_hash
        assert admin.check_password(app.config['ADMIN_PASSWORD'])

        data = admin.to_dict(include_relationships=True)
    assert 'senhaHash' not in data
    assert data['perfil']['nome'] == 'ADMIN'


def test_build_without_reference_rows():
    app = create_app(dict(TEST_CONFIG))
    build_database(app, seed_reference=False)
    with app.app_context():
        assert verify_critical_data()
        assert Categoria.query.count() == 0
        db.session.remove()
        db.drop_all()


@pytest.mark.parametrize('driver_message, expected', [
    ('UNIQUE constraint failed: bens.tombo', (409, 'CONFLICT')),
    ('duplicate key value violates unique constraint "bens_tombo_key"', (409, 'CONFLICT')),
    ('FOREIGN KEY constraint failed', (400, 'FOREIGN_KEY_ERROR')),
    ('insert or update on table "bens" violates foreign key constraint', (400, 'FOREIGN_KEY_ERROR')),
])
def test_classify_integrity_error(driver_message, expected):
    error = IntegrityError('INSERT ...', {}, Exception(driver_message))
    status_code, code, _ = classify_integrity_error(error)
    assert (status_code, code) == expected


def test_envelope_keys_keep_their_order(client, admin_headers):
    response = client.post('/api/categorias', json={'nome': 'ferramenta'}, headers=admin_headers)
    body = json.loads(response.data)
    assert list(body) == ['success', 'data', 'message']
