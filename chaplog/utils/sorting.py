from enum import Enum

from chaplog.utils.errors import ValidationError


class BookSortField(Enum):
    TITLE = 'title'
    AUTHOR = 'author'
    STATUS = 'status'
    CREATED_AT = 'createdAt'


class EntrySortOrder(Enum):
    DATE_DESC = 'date-desc'
    DATE_ASC = 'date-asc'
    RATING_DESC = 'rating-desc'
    RATING_ASC = 'rating-asc'
    PAGES_DESC = 'pages-desc'


def _parse(enum_cls, raw, default, field):
    if raw is None or raw == '':
        return default
    for member in enum_cls:
        if member.value.lower() == raw.lower():
            return member
    allowed = ', '.join(m.value for m in enum_cls)
    raise ValidationError(
        f"Invalid {field}",
        [{"field": field, "message": f"{field} must be one of: {allowed}"}],
    )


def parse_book_sort(raw):
    return _parse(BookSortField, raw, BookSortField.CREATED_AT, 'sortBy')


def parse_entry_sort(raw):
    return _parse(EntrySortOrder, raw, EntrySortOrder.DATE_DESC, 'sortBy')


def parse_bool(raw, default=False):
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')
