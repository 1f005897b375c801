import pytest

REVIEW = {
    'completedDate': '2025-06-20',
    'overallImpression': 'A slow burn that pays off.',
    'keyLearnings': ['patience', 'ecology'],
    'overallRating': 4,
    'recommendationLevel': 5,
}


@pytest.fixture
def completed_book(client, headers, create_book):
    book = create_book(headers, totalPages=300)
    client.patch(f"/api/books/{book['id']}/status", json={'status': 'completed'}, headers=headers)
    return book


def test_review_requires_completed_book(client, headers, create_book):
    book = create_book(headers)

    response = client.post(f"/api/book-reviews/book/{book['id']}", json=REVIEW, headers=headers)

    assert response.status_code == 409
    assert response.get_json()['message'] == "Can only review completed books"


def test_create_review(client, headers, completed_book):
    response = client.post(f"/api/book-reviews/book/{completed_book['id']}", json=REVIEW, headers=headers)

    assert response.status_code == 201
    review = response.get_json()['data']
    assert review['bookId'] == completed_book['id']
    assert review['keyLearnings'] == ['patience', 'ecology']
    assert review['completedDate'] == '2025-06-20'


def test_only_one_review_per_book(client, headers, completed_book):
    url = f"/api/book-reviews/book/{completed_book['id']}"
    client.post(url, json=REVIEW, headers=headers)

    response = client.post(url, json=REVIEW, headers=headers)

    assert response.status_code == 409


def test_review_validation(client, headers, completed_book):
    response = client.post(f"/api/book-reviews/book/{completed_book['id']}",
                           json={**REVIEW, 'overallRating': 0, 'recommendationLevel': 9}, headers=headers)

    assert response.status_code == 400
    fields = {error['field'] for error in response.get_json()['errors']}
    assert fields == {'overallRating', 'recommendationLevel'}


def test_review_for_missing_book(client, headers):
    response = client.post('/api/book-reviews/book/missing', json=REVIEW, headers=headers)
    assert response.status_code == 404


def test_list_reviews_includes_book_details(client, headers, completed_book):
    client.post(f"/api/book-reviews/book/{completed_book['id']}", json=REVIEW, headers=headers)

    response = client.get('/api/book-reviews', headers=headers)

    page = response.get_json()['data']
    assert page['totalCount'] == 1
    assert page['pageSize'] == 10
    item = page['items'][0]
    assert item['bookTitle'] == 'Dune'
    assert item['bookAuthor'] == 'Frank Herbert'
    assert item['bookTotalPages'] == 300


def test_update_and_delete_review(client, headers, completed_book):
    url = f"/api/book-reviews/book/{completed_book['id']}"
    client.post(url, json=REVIEW, headers=headers)

    updated = client.put(url, json={**REVIEW, 'overallRating': 2}, headers=headers)
    assert updated.status_code == 200
    assert updated.get_json()['data']['overallRating'] == 2

    assert client.get(f'{url}/exists', headers=headers).get_json()['data'] is True
    assert client.delete(url, headers=headers).status_code == 200
    assert client.get(url, headers=headers).status_code == 404
    assert client.get(f'{url}/exists', headers=headers).get_json()['data'] is False


def test_reviews_are_scoped_to_owner(client, headers, register, completed_book):
    url = f"/api/book-reviews/book/{completed_book['id']}"
    client.post(url, json=REVIEW, headers=headers)
    other = {'Authorization': f"Bearer {register(email='other@example.com')['accessToken']}"}

    assert client.get(url, headers=other).status_code == 404
    assert client.delete(url, headers=other).status_code == 404
