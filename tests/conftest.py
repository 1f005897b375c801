import pytest

from chaplog import create_app
from chaplog.config import TestingConfig
from chaplog.db import db

DEFAULT_PASSWORD = 'Password123!'


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth_header(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def register(client):
    """Register a user and return the auth payload from the envelope."""
    def _register(email='reader@example.com', password=DEFAULT_PASSWORD, user_name='reader'):
        response = client.post('/api/auth/register', json={
            'email': email,
            'password': password,
            'userName': user_name,
        })
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']

    return _register


@pytest.fixture
def headers(register):
    return auth_header(register()['accessToken'])


@pytest.fixture
def create_book(client):
    def _create_book(headers, **overrides):
        payload = {'title': 'Dune', 'author': 'Frank Herbert', 'totalPages': 300, 'genre': 'Science Fiction'}
        payload.update(overrides)
        response = client.post('/api/books', json=payload, headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']

    return _create_book


@pytest.fixture
def create_entry(client):
    def _create_entry(headers, book_id, start_page=1, end_page=20, reading_date='2025-06-10', rating=4, **extra):
        payload = {
            'readingDate': reading_date,
            'startPage': start_page,
            'endPage': end_page,
            'rating': rating,
        }
        payload.update(extra)
        response = client.post(f'/api/reading-entries/book/{book_id}', json=payload, headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']

    return _create_entry
