from tests.conftest import auth_header


def test_create_book_defaults(client, headers):
    response = client.post('/api/books', json={'title': 'Dune', 'author': 'Frank Herbert', 'totalPages': 412},
                           headers=headers)

    assert response.status_code == 201
    book = response.get_json()['data']
    assert book['status'] == 'unread'
    assert book['currentPage'] == 0
    assert book['progress'] == 0
    assert book['entryCount'] == 0
    assert book['lastEntryDate'] is None


def test_create_book_validation(client, headers):
    response = client.post('/api/books', json={'author': 'Nobody', 'totalPages': 0, 'publicationYear': 99},
                           headers=headers)

    assert response.status_code == 400
    fields = {error['field'] for error in response.get_json()['errors']}
    assert {'title', 'totalPages', 'publicationYear'} <= fields


def test_books_are_scoped_to_owner(client, register, create_book):
    owner = auth_header(register(email='owner@example.com')['accessToken'])
    intruder = auth_header(register(email='intruder@example.com')['accessToken'])
    book = create_book(owner)

    assert client.get(f"/api/books/{book['id']}", headers=intruder).status_code == 404
    assert client.delete(f"/api/books/{book['id']}", headers=intruder).status_code == 404
    assert client.get(f"/api/books/{book['id']}/exists", headers=intruder).get_json()['data'] is False
    assert client.get(f"/api/books/{book['id']}/exists", headers=owner).get_json()['data'] is True


def test_list_books_paging_filter_and_sort(client, headers, create_book):
    create_book(headers, title='Carrie', author='Stephen King', genre='Horror')
    create_book(headers, title='Anathem', author='Neal Stephenson')
    create_book(headers, title='Bleak House', author='Charles Dickens', genre='Classic')

    response = client.get('/api/books?sortBy=title&ascending=true&pageSize=2', headers=headers)

    assert response.status_code == 200
    page = response.get_json()['data']
    assert [b['title'] for b in page['items']] == ['Anathem', 'Bleak House']
    assert page['totalCount'] == 3
    assert page['pageCount'] == 2
    assert page['hasNextPage'] is True
    assert page['hasPreviousPage'] is False

    search = client.get('/api/books?searchTerm=king', headers=headers).get_json()['data']
    assert [b['title'] for b in search['items']] == ['Carrie']

    unread = client.get('/api/books?status=unread', headers=headers).get_json()['data']
    assert unread['totalCount'] == 3


def test_list_books_rejects_bad_query(client, headers):
    assert client.get('/api/books?sortBy=rating', headers=headers).status_code == 400
    assert client.get('/api/books?status=abandoned', headers=headers).status_code == 400
    assert client.get('/api/books?pageSize=101', headers=headers).status_code == 400
    assert client.get('/api/books?page=0', headers=headers).status_code == 400


def test_update_book(client, headers, create_book):
    book = create_book(headers)

    response = client.put(f"/api/books/{book['id']}", json={
        'title': 'Dune Messiah',
        'author': 'Frank Herbert',
        'totalPages': 256,
        'notes': 'Second in the series',
    }, headers=headers)

    assert response.status_code == 200
    updated = response.get_json()['data']
    assert updated['title'] == 'Dune Messiah'
    assert updated['notes'] == 'Second in the series'
    assert updated['status'] == 'unread'


def test_update_status_completed_fills_progress(client, headers, create_book):
    book = create_book(headers, totalPages=200)

    response = client.patch(f"/api/books/{book['id']}/status", json={'status': 'completed'}, headers=headers)

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['status'] == 'completed'
    assert data['currentPage'] == 200
    assert data['progress'] == 100
    assert data['completedAt'] is not None


def test_update_status_rejects_unknown_value(client, headers, create_book):
    book = create_book(headers)
    response = client.patch(f"/api/books/{book['id']}/status", json={'status': 'finished'}, headers=headers)
    assert response.status_code == 400


def test_delete_book_cascades(client, headers, create_book, create_entry):
    book = create_book(headers)
    entry = create_entry(headers, book['id'], 1, 300)
    client.post(f"/api/book-reviews/book/{book['id']}", json={
        'completedDate': '2025-06-10',
        'overallImpression': 'Great',
        'overallRating': 5,
        'recommendationLevel': 5,
    }, headers=headers)

    assert client.delete(f"/api/books/{book['id']}", headers=headers).status_code == 200

    assert client.get(f"/api/books/{book['id']}", headers=headers).status_code == 404
    assert client.get(f"/api/reading-entries/{entry['id']}", headers=headers).status_code == 404
    assert client.get(f"/api/book-reviews/book/{book['id']}", headers=headers).status_code == 404


def test_books_require_authentication(client):
    response = client.get('/api/books')
    assert response.status_code == 401
    assert response.get_json()['success'] is False
