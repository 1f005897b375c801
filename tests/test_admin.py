import pytest

from chaplog.migration_runner import seed_admin
from tests.conftest import auth_header


@pytest.fixture
def admin_headers(app, client):
    with app.app_context():
        seed_admin(app.config)
    response = client.post('/api/auth/login', json={
        'email': app.config['ADMIN_EMAIL'],
        'password': app.config['ADMIN_PASSWORD'],
    })
    assert response.status_code == 200
    return auth_header(response.get_json()['data']['accessToken'])


def test_admin_routes_reject_regular_users(client, headers):
    response = client.get('/api/admin/users', headers=headers)
    assert response.status_code == 403
    assert response.get_json()['success'] is False


def test_admin_routes_require_authentication(client):
    assert client.get('/api/admin/users').status_code == 401


def test_list_and_count_users(client, admin_headers, register):
    register(email='alice@example.com', user_name='alice')
    register(email='bob@example.com', user_name='bob')

    page = client.get('/api/admin/users', headers=admin_headers).get_json()['data']
    assert page['totalCount'] == 3

    search = client.get('/api/admin/users?searchTerm=alice', headers=admin_headers).get_json()['data']
    assert [user['email'] for user in search['items']] == ['alice@example.com']

    count = client.get('/api/admin/users/count', headers=admin_headers).get_json()['data']
    assert count == 3


def test_get_and_delete_user(client, admin_headers, register, create_book):
    auth = register(email='leaving@example.com')
    user_id = auth['user']['id']
    create_book(auth_header(auth['accessToken']))

    assert client.get(f'/api/admin/users/{user_id}', headers=admin_headers).get_json()['data']['email'] == \
        'leaving@example.com'

    assert client.delete(f'/api/admin/users/{user_id}', headers=admin_headers).status_code == 200
    assert client.get(f'/api/admin/users/{user_id}', headers=admin_headers).status_code == 404
    assert client.get('/api/admin/users/count', headers=admin_headers).get_json()['data'] == 1


def test_cannot_delete_admin(client, app, admin_headers):
    admin_id = client.get('/api/auth/me', headers=admin_headers).get_json()['data']['id']

    response = client.delete(f'/api/admin/users/{admin_id}', headers=admin_headers)

    assert response.status_code == 403


def test_delete_unknown_user(client, admin_headers):
    assert client.delete('/api/admin/users/unknown', headers=admin_headers).status_code == 404


def test_seed_admin_skips_when_users_exist(app, register):
    register()
    with app.app_context():
        assert seed_admin(app.config) is None
