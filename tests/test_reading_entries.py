def _get_book(client, headers, book_id):
    return client.get(f'/api/books/{book_id}', headers=headers).get_json()['data']


def test_first_entry_starts_reading(client, headers, create_book, create_entry):
    book = create_book(headers, totalPages=300)

    entry = create_entry(headers, book['id'], 1, 50, chapter='Chapter 1', learnings=['spice'])

    assert entry['book']['title'] == 'Dune'
    assert entry['learnings'] == ['spice']
    updated = _get_book(client, headers, book['id'])
    assert updated['status'] == 'reading'
    assert updated['currentPage'] == 50
    assert updated['startedAt'] is not None
    assert updated['entryCount'] == 1
    assert updated['lastEntryDate'] == '2025-06-10'


def test_progress_never_regresses(client, headers, create_book, create_entry):
    book = create_book(headers, totalPages=300)
    create_entry(headers, book['id'], 1, 120)

    create_entry(headers, book['id'], 10, 30)

    updated = _get_book(client, headers, book['id'])
    assert updated['currentPage'] == 120
    assert updated['status'] == 'reading'


def test_reaching_last_page_completes_book(client, headers, create_book, create_entry):
    book = create_book(headers, totalPages=300)
    create_entry(headers, book['id'], 1, 150)
    create_entry(headers, book['id'], 151, 300)

    updated = _get_book(client, headers, book['id'])
    assert updated['status'] == 'completed'
    assert updated['progress'] == 100
    assert updated['completedAt'] is not None


def test_book_without_total_pages_stays_reading(client, headers, create_book, create_entry):
    book = create_book(headers, totalPages=None)
    create_entry(headers, book['id'], 1, 900)

    updated = _get_book(client, headers, book['id'])
    assert updated['status'] == 'reading'
    assert updated['progress'] == 0


def test_invalid_page_ranges(client, headers, create_book):
    book = create_book(headers, totalPages=100)
    url = f"/api/reading-entries/book/{book['id']}"
    base = {'readingDate': '2025-06-10', 'rating': 3}

    assert client.post(url, json={**base, 'startPage': 30, 'endPage': 10}, headers=headers).status_code == 400
    assert client.post(url, json={**base, 'startPage': 0, 'endPage': 10}, headers=headers).status_code == 400
    assert client.post(url, json={**base, 'startPage': 90, 'endPage': 101}, headers=headers).status_code == 400
    assert client.post(url, json={**base, 'startPage': 1, 'endPage': 10, 'rating': 6}, headers=headers).status_code == 400
    assert _get_book(client, headers, book['id'])['currentPage'] == 0


def test_create_entry_with_book_id_in_body(client, headers, create_book):
    book = create_book(headers)

    response = client.post('/api/reading-entries', json={
        'bookId': book['id'],
        'readingDate': '2025-06-11',
        'startPage': 1,
        'endPage': 12,
        'rating': 5,
    }, headers=headers)

    assert response.status_code == 201
    assert response.get_json()['data']['bookId'] == book['id']


def test_create_entry_for_missing_book(client, headers):
    response = client.post('/api/reading-entries/book/does-not-exist', json={
        'readingDate': '2025-06-11', 'startPage': 1, 'endPage': 2, 'rating': 3,
    }, headers=headers)
    assert response.status_code == 404


def test_list_entries_sort_and_search(client, headers, create_book, create_entry):
    dune = create_book(headers)
    emma = create_book(headers, title='Emma', author='Jane Austen', totalPages=400)
    create_entry(headers, dune['id'], 1, 10, reading_date='2025-06-01', rating=2)
    create_entry(headers, emma['id'], 1, 40, reading_date='2025-06-03', rating=5, impression='witty')
    create_entry(headers, dune['id'], 11, 30, reading_date='2025-06-02', rating=4)

    by_date = client.get('/api/reading-entries', headers=headers).get_json()['data']
    assert [e['readingDate'] for e in by_date['items']] == ['2025-06-03', '2025-06-02', '2025-06-01']
    assert by_date['pageSize'] == 10

    by_rating = client.get('/api/reading-entries?sortBy=rating-asc', headers=headers).get_json()['data']
    assert [e['rating'] for e in by_rating['items']] == [2, 4, 5]

    by_pages = client.get('/api/reading-entries?sortBy=pages-desc', headers=headers).get_json()['data']
    assert by_pages['items'][0]['endPage'] == 40

    search = client.get('/api/reading-entries?search=witty', headers=headers).get_json()['data']
    assert search['totalCount'] == 1
    assert search['items'][0]['book']['title'] == 'Emma'

    assert client.get('/api/reading-entries?sortBy=newest', headers=headers).status_code == 400


def test_list_entries_by_book(client, headers, register, create_book, create_entry):
    book = create_book(headers)
    create_entry(headers, book['id'], 1, 10, reading_date='2025-06-01')
    create_entry(headers, book['id'], 11, 20, reading_date='2025-06-05')

    response = client.get(f"/api/reading-entries/book/{book['id']}", headers=headers)

    data = response.get_json()['data']
    assert data['totalCount'] == 2
    assert data['items'][0]['readingDate'] == '2025-06-05'

    other = {'Authorization': f"Bearer {register(email='other@example.com')['accessToken']}"}
    assert client.get(f"/api/reading-entries/book/{book['id']}", headers=other).status_code == 404


def test_update_and_delete_entry(client, headers, create_book, create_entry):
    book = create_book(headers)
    entry = create_entry(headers, book['id'], 1, 50)

    response = client.put(f"/api/reading-entries/{entry['id']}", json={
        'readingDate': '2025-06-12',
        'startPage': 1,
        'endPage': 20,
        'rating': 2,
        'notes': 'slow start',
    }, headers=headers)

    assert response.status_code == 200
    assert response.get_json()['data']['notes'] == 'slow start'
    # Editing an entry leaves the book's progress alone
    assert _get_book(client, headers, book['id'])['currentPage'] == 50

    assert client.get(f"/api/reading-entries/{entry['id']}/exists", headers=headers).get_json()['data'] is True
    assert client.delete(f"/api/reading-entries/{entry['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/reading-entries/{entry['id']}", headers=headers).status_code == 404
    assert client.get(f"/api/reading-entries/{entry['id']}/exists", headers=headers).get_json()['data'] is False


def test_malformed_page_number_is_a_validation_error(client, headers, create_book):
    book = create_book(headers)

    response = client.post(f"/api/reading-entries/book/{book['id']}", json={
        'readingDate': '2025-06-10', 'startPage': '--5', 'endPage': 10, 'rating': 3,
    }, headers=headers)

    assert response.status_code == 400
    assert response.get_json()['errors'] == [{'field': 'startPage', 'message': 'startPage must be an integer'}]


def test_non_positive_start_page_reports_one_error(client, headers, create_book):
    book = create_book(headers)

    response = client.post(f"/api/reading-entries/book/{book['id']}", json={
        'readingDate': '2025-06-10', 'startPage': 0, 'endPage': 10, 'rating': 3,
    }, headers=headers)

    assert response.status_code == 400
    assert response.get_json()['errors'] == [{'field': 'startPage', 'message': 'startPage must be 1 or greater'}]


def test_reading_date_with_trailing_text_is_rejected(client, headers, create_book):
    book = create_book(headers)

    response = client.post(f"/api/reading-entries/book/{book['id']}", json={
        'readingDate': '2025-06-10xyz', 'startPage': 1, 'endPage': 10, 'rating': 3,
    }, headers=headers)

    assert response.status_code == 400
    assert [error['field'] for error in response.get_json()['errors']] == ['readingDate']
