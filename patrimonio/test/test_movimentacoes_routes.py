"""
Movement routes and the loan/return lifecycle
"""

from datetime import date
import uuid
from conftest import loan_payload


def create_loan(client, headers, bem_id, tipo_id, **extra):
    return client.post('/api/movimentacoes', json=loan_payload(bem_id, tipo_id, **extra), headers=headers)


def test_create_loan_defaults_snapshot_fields(client, admin_headers, seed_ids, bem):
    response = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'])
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['tombo'] == 'T-001'
    assert data['nomeItem'] == 'Cadeira de madeira'
    assert data['dataEmprestimo'] == '2024-01-10'
    assert data['dataDevolucao'] is None
    assert data['bem']['id'] == bem['id']
    assert data['tipo']['requerDevolucao'] is True
    assert data['usuario']['email'] == 'admin@email.com'
    assert 'senhaHash' not in data['usuario']


def test_second_loan_rejected(client, admin_headers, seed_ids, bem):
    first = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'])
    second = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'], pessoa='João')

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.get_json()['error']['code'] == 'ITEM_ALREADY_ON_LOAN'


def test_loan_check_applies_even_with_return_date(client, admin_headers, seed_ids, bem):
    create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'])
    response = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'],
                           dataDevolucao='2024-01-20')
    assert response.status_code == 400
    assert response.get_json()['error']['code'] == 'ITEM_ALREADY_ON_LOAN'


def test_non_loan_movement_always_permitted(client, admin_headers, seed_ids, bem):
    create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'])
    response = create_loan(client, admin_headers, bem['id'], seed_ids['devolucao'])
    assert response.status_code == 201

    active = client.get('/api/movimentacoes/active', headers=admin_headers).get_json()['data']
    assert len(active) == 1
    assert active[0]['tipo']['nome'] == 'empréstimo'


def test_return_then_new_loan(client, admin_headers, seed_ids, bem):
    loan = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo']).get_json()['data']

    response = client.post(f"/api/movimentacoes/{loan['id']}/return", headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['dataDevolucao'] == date.today().isoformat()

    assert client.get('/api/movimentacoes/active', headers=admin_headers).get_json()['data'] == []
    assert create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo']).status_code == 201


def test_return_twice_never_overwrites(client, admin_headers, seed_ids, bem):
    loan = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo']).get_json()['data']

    first = client.put(f"/api/movimentacoes/{loan['id']}", json={'dataDevolucao': '2024-01-15'},
                       headers=admin_headers)
    assert first.status_code == 200

    again = client.post(f"/api/movimentacoes/{loan['id']}/return", headers=admin_headers)
    assert again.status_code == 400
    assert again.get_json()['error']['code'] == 'ALREADY_RETURNED'

    explicit = client.put(f"/api/movimentacoes/{loan['id']}", json={'dataDevolucao': '2024-02-01'},
                          headers=admin_headers)
    assert explicit.status_code == 400
    assert explicit.get_json()['error']['code'] == 'ALREADY_RETURNED'

    stored = client.get(f"/api/movimentacoes/{loan['id']}", headers=admin_headers).get_json()['data']
    assert stored['dataDevolucao'] == '2024-01-15'


def test_return_before_loan_date_rejected(client, admin_headers, seed_ids, bem):
    loan = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo']).get_json()['data']
    response = client.put(f"/api/movimentacoes/{loan['id']}", json={'dataDevolucao': '2024-01-01'},
                          headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()['error']['code'] == 'INVALID_RETURN_DATE'


def test_note_editable_after_return(client, admin_headers, seed_ids, bem):
    loan = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo']).get_json()['data']
    client.post(f"/api/movimentacoes/{loan['id']}/return", headers=admin_headers)

    response = client.put(f"/api/movimentacoes/{loan['id']}", json={'observacao': 'Devolvido com risco'},
                          headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['observacao'] == 'Devolvido com risco'


def test_note_length_limit(client, admin_headers, seed_ids, bem):
    response = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'], observacao='x' * 501)
    assert response.status_code == 400
    assert response.get_json()['error']['details'][0]['field'] == 'observacao'


def test_empty_update_rejected(client, admin_headers, seed_ids, bem):
    loan = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo']).get_json()['data']
    response = client.put(f"/api/movimentacoes/{loan['id']}", json={}, headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()['error']['code'] == 'VALIDATION_ERROR'


def test_invalid_date_format(client, admin_headers, seed_ids, bem):
    response = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'], dataEmprestimo='10/01/2024')
    assert response.status_code == 400
    assert response.get_json()['error']['details'][0]['field'] == 'dataEmprestimo'


def test_unknown_asset_and_type(client, admin_headers, seed_ids, bem):
    response = create_loan(client, admin_headers, str(uuid.uuid4()), seed_ids['emprestimo'])
    assert response.status_code == 404
    assert response.get_json()['error']['code'] == 'BEM_NOT_FOUND'

    response = create_loan(client, admin_headers, bem['id'], str(uuid.uuid4()))
    assert response.status_code == 404
    assert response.get_json()['error']['code'] == 'TIPO_NOT_FOUND'


def test_deleted_asset_cannot_be_loaned(client, admin_headers, seed_ids, bem):
    client.delete(f"/api/bens/{bem['id']}", headers=admin_headers)
    response = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'])
    assert response.status_code == 404
    assert response.get_json()['error']['code'] == 'BEM_NOT_FOUND'


def test_unknown_movement(client, admin_headers):
    response = client.get(f'/api/movimentacoes/{uuid.uuid4()}', headers=admin_headers)
    assert response.status_code == 404
    assert response.get_json()['error']['code'] == 'MOVIMENTACAO_NOT_FOUND'

    response = client.post(f'/api/movimentacoes/{uuid.uuid4()}/return', headers=admin_headers)
    assert response.status_code == 404


def test_list_newest_first(client, admin_headers, seed_ids, bem):
    first = create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo']).get_json()['data']
    second = create_loan(client, admin_headers, bem['id'], seed_ids['devolucao']).get_json()['data']

    listing = client.get('/api/movimentacoes', headers=admin_headers).get_json()['data']
    assert [item['id'] for item in listing] == [second['id'], first['id']]


def test_movement_type_with_open_loans_cannot_be_deleted(client, admin_headers, seed_ids, bem):
    create_loan(client, admin_headers, bem['id'], seed_ids['emprestimo'])
    response = client.delete(f"/api/tipos-movimentacao/{seed_ids['emprestimo']}", headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()['error']['code'] == 'HAS_DEPENDENCIES'
