"""
User administration routes
"""

import uuid
from conftest import ADMIN_EMAIL, bearer, login


def perfil_id(client, headers, nome):
    perfis = client.get('/api/perfis', headers=headers).get_json()['data']
    return next(p['id'] for p in perfis if p['nome'] == nome)


def admin_id(client, headers):
    return client.get('/api/auth/me', headers=headers).get_json()['data']['id']


def new_user_payload(client, headers, email='novo@email.com', **extra):
    payload = {
        'email': email,
        'password': 'segredo1',
        'perfilId': perfil_id(client, headers, 'USER'),
        'emailRecuperacao': 'novo.recupera@email.com',
    }
    payload.update(extra)
    return payload


def test_admin_creates_user(client, admin_headers):
    response = client.post('/api/users', json=new_user_payload(client, admin_headers), headers=admin_headers)
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['email'] == 'novo@email.com'
    assert data['perfil']['nome'] == 'USER'
    assert data['tempPassword'] is False
    assert 'senhaHash' not in data
    assert 'password' not in data

    assert login(client, 'novo@email.com', 'segredo1').status_code == 200


def test_duplicate_email(client, admin_headers):
    client.post('/api/users', json=new_user_payload(client, admin_headers), headers=admin_headers)
    response = client.post('/api/users', json=new_user_payload(client, admin_headers), headers=admin_headers)
    assert response.status_code == 409
    assert response.get_json()['error']['code'] == 'USER_EXISTS'


def test_unknown_perfil(client, admin_headers):
    payload = new_user_payload(client, admin_headers, perfilId=str(uuid.uuid4()))
    response = client.post('/api/users', json=payload, headers=admin_headers)
    assert response.status_code == 404
    assert response.get_json()['error']['code'] == 'PERFIL_NOT_FOUND'


def test_invalid_email_and_short_password(client, admin_headers):
    payload = new_user_payload(client, admin_headers, email='not-an-email', password='123')
    response = client.post('/api/users', json=payload, headers=admin_headers)
    assert response.status_code == 400
    fields = {detail['field'] for detail in response.get_json()['error']['details']}
    assert fields == {'email', 'password'}


def test_non_admin_cannot_mutate(client, admin_headers, user_headers, regular_user):
    payload = new_user_payload(client, admin_headers)
    response = client.post('/api/users', json=payload, headers=user_headers)
    assert response.status_code == 403
    assert response.get_json()['error']['code'] == 'FORBIDDEN'

    response = client.delete(f'/api/users/{regular_user["id"]}', headers=user_headers)
    assert response.status_code == 403


def test_non_admin_can_read(client, user_headers, regular_user):
    response = client.get('/api/users', headers=user_headers)
    assert response.status_code == 200
    emails = {u['email'] for u in response.get_json()['data']}
    assert {ADMIN_EMAIL, 'user@email.com'} <= emails

    response = client.get(f'/api/users/{regular_user["id"]}', headers=user_headers)
    assert response.get_json()['data']['email'] == 'user@email.com'


def test_get_unknown_user(client, admin_headers):
    response = client.get(f'/api/users/{uuid.uuid4()}', headers=admin_headers)
    assert response.status_code == 404
    assert response.get_json()['error']['code'] == 'USER_NOT_FOUND'


def test_default_admin_email_is_protected(client, admin_headers):
    target = admin_id(client, admin_headers)
    response = client.put(f'/api/users/{target}', json={'email': 'outro@email.com'}, headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()['error']['code'] == 'CANNOT_UPDATE_ADMIN'

    # Other fields of the default admin may change
    response = client.put(f'/api/users/{target}', json={'emailRecuperacao': 'nova@email.com'},
                          headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['emailRecuperacao'] == 'nova@email.com'


def test_default_admin_cannot_be_deleted(client, admin_headers):
    response = client.delete(f'/api/users/{admin_id(client, admin_headers)}', headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()['error']['code'] == 'CANNOT_DELETE_ADMIN'


def test_update_to_used_email(client, admin_headers, regular_user):
    created = client.post('/api/users', json=new_user_payload(client, admin_headers),
                          headers=admin_headers).get_json()['data']
    response = client.put(f"/api/users/{created['id']}", json={'email': 'user@email.com'}, headers=admin_headers)
    assert response.status_code == 409
    assert response.get_json()['error']['code'] == 'EMAIL_IN_USE'


def test_promote_user_to_admin(client, admin_headers, user_headers, regular_user):
    admin_perfil = perfil_id(client, admin_headers, 'ADMIN')
    response = client.put(f'/api/users/{regular_user["id"]}', json={'perfilId': admin_perfil}, headers=admin_headers)
    assert response.status_code == 200

    # The role is read from the database, so the old token now passes the admin gate
    response = client.post('/api/categorias', json={'nome': 'ferramenta'}, headers=user_headers)
    assert response.status_code == 201


def test_deleted_user_loses_access(client, admin_headers, user_headers, regular_user):
    response = client.delete(f'/api/users/{regular_user["id"]}', headers=admin_headers)
    assert response.status_code == 200

    assert login(client, 'user@email.com', 'user123').status_code == 401

    # Still listed, marked inactive
    listing = client.get('/api/users', headers=admin_headers).get_json()['data']
    row = next(u for u in listing if u['id'] == regular_user['id'])
    assert row['ativo'] is False


def test_inactive_admin_is_refused(client, admin_headers):
    created = client.post('/api/users',
                          json=new_user_payload(client, admin_headers,
                                                perfilId=perfil_id(client, admin_headers, 'ADMIN')),
                          headers=admin_headers).get_json()['data']
    token = login(client, 'novo@email.com', 'segredo1').get_json()['data']['token']
    client.delete(f"/api/users/{created['id']}", headers=admin_headers)

    response = client.post('/api/categorias', json={'nome': 'ferramenta'}, headers=bearer(token))
    assert response.status_code == 403
    assert response.get_json()['error']['code'] == 'USER_INACTIVE'


def test_default_admin_cannot_be_deactivated_by_update(client, admin_headers):
    response = client.put(f'/api/users/{admin_id(client, admin_headers)}', json={'ativo': False},
                          headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()['error']['code'] == 'CANNOT_DELETE_ADMIN'

    assert login(client).status_code == 200


def test_user_deactivated_by_update(client, admin_headers, regular_user):
    response = client.put(f"/api/users/{regular_user['id']}", json={'ativo': False}, headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['ativo'] is False
    assert login(client, 'user@email.com', 'user123').status_code == 401
