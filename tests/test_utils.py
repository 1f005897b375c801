import pytest

from chaplog.utils import validation
from chaplog.utils.errors import ValidationError
from chaplog.utils.pagination import paged_result
from chaplog.utils.sorting import BookSortField, EntrySortOrder, parse_bool, parse_book_sort, parse_entry_sort


def test_parse_book_sort():
    assert parse_book_sort(None) is BookSortField.CREATED_AT
    assert parse_book_sort('TITLE') is BookSortField.TITLE
    assert parse_book_sort('createdat') is BookSortField.CREATED_AT
    with pytest.raises(ValidationError):
        parse_book_sort('publisher')


def test_parse_entry_sort():
    assert parse_entry_sort('') is EntrySortOrder.DATE_DESC
    assert parse_entry_sort('Rating-Desc') is EntrySortOrder.RATING_DESC
    with pytest.raises(ValidationError) as exc_info:
        parse_entry_sort('random')
    assert exc_info.value.errors[0]['field'] == 'sortBy'


def test_parse_bool():
    assert parse_bool('true') is True
    assert parse_bool('0') is False
    assert parse_bool(None, default=True) is True


def test_paged_result():
    result = paged_result(['a', 'b'], total_count=5, page=2, page_size=2)

    assert result['pageCount'] == 3
    assert result['hasPreviousPage'] is True
    assert result['hasNextPage'] is True

    empty = paged_result([], total_count=0, page=1, page_size=20)
    assert empty['pageCount'] == 0
    assert empty['hasNextPage'] is False


def test_validation_collects_every_error():
    errors = []
    data = {'title': '  ', 'pages': 'many', 'when': '2025-13-01', 'tags': ['ok', 3]}

    validation.required_string(data, 'title', errors)
    validation.optional_int(data, 'pages', errors)
    validation.required_date(data, 'when', errors)
    validation.string_list(data, 'tags', errors)

    assert [error['field'] for error in errors] == ['title', 'pages', 'when', 'tags']
    with pytest.raises(ValidationError) as exc_info:
        validation.raise_if_errors(errors)
    assert len(exc_info.value.errors) == 4


def test_validation_accepts_good_values():
    errors = []
    data = {'email': 'reader@example.com', 'url': 'https://covers.example.com/dune.jpg', 'year': '1965'}

    assert validation.email(data, 'email', errors) == 'reader@example.com'
    assert validation.optional_url(data, 'url', errors) == 'https://covers.example.com/dune.jpg'
    assert validation.optional_int(data, 'year', errors, minimum=1000, maximum=9999) == 1965
    assert errors == []


@pytest.mark.parametrize('raw', ['--5', '²', '1.5', '12abc'])
def test_validation_rejects_malformed_integers(raw):
    errors = []

    assert validation.optional_int({'pages': raw}, 'pages', errors) is None
    assert errors == [{'field': 'pages', 'message': 'pages must be an integer'}]


@pytest.mark.parametrize('raw', ['2025-06-10xyz', '2025-06-10T08:00:00', '10/06/2025'])
def test_validation_rejects_dates_with_extra_text(raw):
    errors = []

    assert validation.required_date({'when': raw}, 'when', errors) is None
    assert [error['field'] for error in errors] == ['when']
