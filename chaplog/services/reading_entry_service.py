from flask import current_app

from chaplog.db import db
from chaplog.models.reading_entry import ReadingEntry
from chaplog.repositories import BookRepository, ReadingEntryRepository
from chaplog.services.book_service import apply_status
from chaplog.utils import validation
from chaplog.utils.clock import utcnow
from chaplog.utils.errors import NotFoundError
from chaplog.utils.pagination import paged_result
from chaplog.utils.sorting import EntrySortOrder


def parse_entry_fields(data, total_pages=None):
    data = validation.require_json(data)
    errors = []
    fields = {
        'reading_date': validation.required_date(data, 'readingDate', errors),
        'start_page': validation.required_int(data, 'startPage', errors, minimum=1),
        'end_page': validation.required_int(data, 'endPage', errors, minimum=1),
        'chapter': validation.optional_string(data, 'chapter', errors, max_length=256),
        'notes': validation.optional_string(data, 'notes', errors),
        'impression': validation.optional_string(data, 'impression', errors),
        'learnings': validation.string_list(data, 'learnings', errors),
        'rating': validation.required_int(data, 'rating', errors, minimum=1, maximum=5),
    }
    start_page, end_page = fields['start_page'], fields['end_page']
    if start_page is not None and end_page is not None:
        if start_page > end_page:
            validation.add_error(errors, 'startPage', "Invalid page range")
        elif total_pages and end_page > total_pages:
            validation.add_error(errors, 'endPage', "End page exceeds total pages")
    validation.raise_if_errors(errors)
    return fields


def advance_book_progress(book, end_page, now):
    """
    Move the book forward after a new entry.

    Progress only advances: an entry ending at or before the current page
    leaves the book untouched, so status never regresses.
    """
    if end_page <= book.current_page:
        return False

    book.current_page = end_page
    if book.status == 'unread':
        apply_status(book, 'reading', now)
    if book.total_pages and book.current_page >= book.total_pages:
        apply_status(book, 'completed', now)
    book.updated_at = now
    return True


class ReadingEntryService:
    def __init__(self, entry_repository=None, book_repository=None):
        self.entries = entry_repository or ReadingEntryRepository()
        self.books = book_repository or BookRepository()

    def get_entry(self, entry_id, user_id):
        entry = self.entries.get_owned(entry_id, user_id)
        if entry is None:
            raise NotFoundError("Reading entry not found")
        return entry.to_dict()

    def get_entries_by_book(self, book_id, user_id, page=1, page_size=20):
        if not self.books.exists_for_user(book_id, user_id):
            raise NotFoundError("Book not found")

        entries, total_count = self.entries.get_paged_by_book(book_id, page, page_size)
        return paged_result([entry.to_dict() for entry in entries], total_count, page, page_size)

    def get_entries_by_user(self, user_id, page=1, page_size=10, sort_order=EntrySortOrder.DATE_DESC,
                            search_query=None):
        entries, total_count = self.entries.get_paged_by_user(
            user_id, page, page_size, sort_order, search_query)
        return paged_result([entry.to_dict() for entry in entries], total_count, page, page_size)

    def create_entry(self, book_id, data, user_id):
        book = self.books.get_owned(book_id, user_id) if book_id else None
        if book is None:
            raise NotFoundError("Book not found")

        fields = parse_entry_fields(data, book.total_pages)
        now = utcnow()
        entry = ReadingEntry(book_id=book.id, user_id=user_id, created_at=now, updated_at=now, **fields)
        db.session.add(entry)

        previous_status = book.status
        if advance_book_progress(book, entry.end_page, now) and book.status != previous_status:
            current_app.logger.info(f"Book {book.id} moved from {previous_status} to {book.status}")

        db.session.commit()
        return entry.to_dict()

    def update_entry(self, entry_id, data, user_id):
        entry = self.entries.get_owned(entry_id, user_id)
        if entry is None:
            raise NotFoundError("Reading entry not found")

        fields = parse_entry_fields(data, entry.book.total_pages if entry.book else None)
        for name, value in fields.items():
            setattr(entry, name, value)
        entry.updated_at = utcnow()
        self.entries.update(entry)
        return entry.to_dict()

    def delete_entry(self, entry_id, user_id):
        entry = self.entries.get_owned(entry_id, user_id)
        if entry is None:
            raise NotFoundError("Reading entry not found")
        self.entries.delete(entry)

    def entry_exists(self, entry_id, user_id):
        return self.entries.exists_for_user(entry_id, user_id)
