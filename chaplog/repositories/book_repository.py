from sqlalchemy import func, or_

from chaplog.db import db
from chaplog.models.book import Book
from chaplog.models.reading_entry import ReadingEntry
from chaplog.repositories.base import BaseRepository
from chaplog.utils.pagination import paginate
from chaplog.utils.sorting import BookSortField

BOOK_SORT_COLUMNS = {
    BookSortField.TITLE: Book.title,
    BookSortField.AUTHOR: Book.author,
    BookSortField.STATUS: Book.status,
    BookSortField.CREATED_AT: Book.created_at,
}


class BookRepository(BaseRepository):
    model = Book

    def get_owned(self, book_id, user_id):
        return Book.query.filter_by(id=book_id, user_id=user_id).first()

    def exists_for_user(self, book_id, user_id):
        return self.exists(Book.id == book_id, Book.user_id == user_id)

    def get_paged_with_filters(self, user_id, page, page_size, status=None, search_term=None,
                               sort_by=BookSortField.CREATED_AT, ascending=False):
        query = Book.query.filter(Book.user_id == user_id)

        if status:
            query = query.filter(Book.status == status)

        if search_term:
            pattern = f"%{search_term}%"
            query = query.filter(or_(
                Book.title.ilike(pattern),
                Book.author.ilike(pattern),
                Book.publisher.ilike(pattern),
                Book.genre.ilike(pattern),
            ))

        column = BOOK_SORT_COLUMNS[sort_by]
        query = query.order_by(column.asc() if ascending else column.desc(), Book.id)
        return paginate(query, page, page_size)

    def entry_stats(self, book_ids):
        """Map book id -> (entry count, latest reading date) for the given books."""
        if not book_ids:
            return {}
        rows = (
            db.session.query(
                ReadingEntry.book_id,
                func.count(ReadingEntry.id),
                func.max(ReadingEntry.reading_date),
            )
            .filter(ReadingEntry.book_id.in_(book_ids))
            .group_by(ReadingEntry.book_id)
            .all()
        )
        return {book_id: (count, last_date) for book_id, count, last_date in rows}

    def count_by_status(self, user_id, status):
        return self.count(Book.user_id == user_id, Book.status == status)

    def count_for_user(self, user_id):
        return self.count(Book.user_id == user_id)

    def get_genres(self, user_id):
        rows = (
            db.session.query(Book.genre)
            .filter(Book.user_id == user_id, Book.genre.isnot(None), Book.genre != '')
            .distinct()
            .order_by(Book.genre)
            .all()
        )
        return [row[0] for row in rows]

    def count_by_genre(self, user_id, genre):
        return self.count(Book.user_id == user_id, Book.genre == genre)

    def recently_updated(self, user_id, limit):
        return (
            Book.query.filter_by(user_id=user_id)
            .order_by(Book.updated_at.desc())
            .limit(limit)
            .all()
        )
