from flask import current_app

from chaplog.models.book import BOOK_STATUSES, Book
from chaplog.repositories import BookRepository, UserRepository
from chaplog.utils import validation
from chaplog.utils.clock import utcnow
from chaplog.utils.errors import NotFoundError, ValidationError
from chaplog.utils.pagination import paged_result
from chaplog.utils.sorting import BookSortField


def parse_book_fields(data):
    """Validate the editable book fields shared by create and update."""
    data = validation.require_json(data)
    errors = []
    fields = {
        'title': validation.required_string(data, 'title', errors, max_length=500),
        'author': validation.required_string(data, 'author', errors, max_length=500),
        'publisher': validation.optional_string(data, 'publisher', errors, max_length=256),
        'publication_year': validation.optional_int(data, 'publicationYear', errors, minimum=1000, maximum=9999),
        'total_pages': validation.optional_int(data, 'totalPages', errors, minimum=1),
        'genre': validation.optional_string(data, 'genre', errors, max_length=100),
        'cover_image_url': validation.optional_url(data, 'coverImageUrl', errors),
        'notes': validation.optional_string(data, 'notes', errors),
    }
    validation.raise_if_errors(errors)
    return fields


def apply_status(book, status, now):
    """Move ``book`` into ``status``, stamping the reading timestamps."""
    book.status = status
    if status == 'reading' and book.started_at is None:
        book.started_at = now
    if status == 'completed':
        if book.started_at is None:
            book.started_at = now
        book.completed_at = now


class BookService:
    def __init__(self, book_repository=None, user_repository=None):
        self.books = book_repository or BookRepository()
        self.users = user_repository or UserRepository()

    def get_book(self, book_id, user_id):
        book = self.books.get_owned(book_id, user_id)
        if book is None:
            raise NotFoundError("Book not found")
        return self._to_dto(book)

    def get_books(self, user_id, page=1, page_size=20, status=None, search_term=None,
                  sort_by=BookSortField.CREATED_AT, ascending=False):
        if status and status not in BOOK_STATUSES:
            raise ValidationError("Invalid status",
                                  [{"field": "status", "message": f"status must be one of: {', '.join(BOOK_STATUSES)}"}])

        books, total_count = self.books.get_paged_with_filters(
            user_id, page, page_size, status, search_term, sort_by, ascending)
        stats = self.books.entry_stats([book.id for book in books])
        items = [self._to_dto(book, stats.get(book.id, (0, None))) for book in books]
        return paged_result(items, total_count, page, page_size)

    def create_book(self, data, user_id):
        if self.users.get_by_id(user_id) is None:
            raise NotFoundError("User not found")

        fields = parse_book_fields(data)
        book = Book(user_id=user_id, status='unread', current_page=0, **fields)
        self.books.create(book)
        current_app.logger.info(f"Book created: {book.id} for user {user_id}")
        return self._to_dto(book, (0, None))

    def update_book(self, book_id, data, user_id):
        book = self.books.get_owned(book_id, user_id)
        if book is None:
            raise NotFoundError("Book not found")

        fields = parse_book_fields(data)
        for name, value in fields.items():
            setattr(book, name, value)
        book.updated_at = utcnow()
        self.books.update(book)
        return self._to_dto(book)

    def delete_book(self, book_id, user_id):
        book = self.books.get_owned(book_id, user_id)
        if book is None:
            raise NotFoundError("Book not found")
        self.books.delete(book)
        current_app.logger.info(f"Book deleted: {book_id} for user {user_id}")

    def update_status(self, book_id, user_id, status):
        if status not in BOOK_STATUSES:
            raise ValidationError("Invalid status",
                                  [{"field": "status", "message": f"status must be one of: {', '.join(BOOK_STATUSES)}"}])

        book = self.books.get_owned(book_id, user_id)
        if book is None:
            raise NotFoundError("Book not found")

        now = utcnow()
        apply_status(book, status, now)
        if status == 'completed' and book.total_pages:
            book.current_page = book.total_pages
        book.updated_at = now
        self.books.update(book)
        return self._to_dto(book)

    def book_exists(self, book_id, user_id):
        return self.books.exists_for_user(book_id, user_id)

    def _to_dto(self, book, stats=None):
        if stats is None:
            stats = self.books.entry_stats([book.id]).get(book.id, (0, None))
        entry_count, last_entry_date = stats
        data = book.to_dict()
        data['entryCount'] = entry_count
        data['lastEntryDate'] = last_entry_date.isoformat() if last_entry_date else None
        return data
