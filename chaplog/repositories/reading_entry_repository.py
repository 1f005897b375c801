from sqlalchemy import func, or_

from chaplog.db import db
from chaplog.models.book import Book
from chaplog.models.reading_entry import ReadingEntry
from chaplog.repositories.base import BaseRepository
from chaplog.utils.pagination import paginate
from chaplog.utils.sorting import EntrySortOrder

PAGES_READ = ReadingEntry.end_page - ReadingEntry.start_page + 1

ENTRY_SORT_ORDERS = {
    EntrySortOrder.DATE_DESC: (ReadingEntry.reading_date.desc(), ReadingEntry.created_at.desc()),
    EntrySortOrder.DATE_ASC: (ReadingEntry.reading_date.asc(), ReadingEntry.created_at.asc()),
    EntrySortOrder.RATING_DESC: (ReadingEntry.rating.desc(), ReadingEntry.reading_date.desc()),
    EntrySortOrder.RATING_ASC: (ReadingEntry.rating.asc(), ReadingEntry.reading_date.desc()),
    EntrySortOrder.PAGES_DESC: ((ReadingEntry.end_page - ReadingEntry.start_page).desc(), ReadingEntry.reading_date.desc()),
}


class ReadingEntryRepository(BaseRepository):
    model = ReadingEntry

    def get_owned(self, entry_id, user_id):
        return ReadingEntry.query.filter_by(id=entry_id, user_id=user_id).first()

    def exists_for_user(self, entry_id, user_id):
        return self.exists(ReadingEntry.id == entry_id, ReadingEntry.user_id == user_id)

    def get_paged_by_book(self, book_id, page, page_size):
        query = (
            ReadingEntry.query.filter(ReadingEntry.book_id == book_id)
            .order_by(*ENTRY_SORT_ORDERS[EntrySortOrder.DATE_DESC])
        )
        return paginate(query, page, page_size)

    def get_paged_by_user(self, user_id, page, page_size, sort_order=EntrySortOrder.DATE_DESC, search_query=None):
        query = ReadingEntry.query.join(Book).filter(ReadingEntry.user_id == user_id)

        if search_query:
            pattern = f"%{search_query}%"
            query = query.filter(or_(
                Book.title.ilike(pattern),
                ReadingEntry.impression.ilike(pattern),
                ReadingEntry.notes.ilike(pattern),
            ))

        query = query.order_by(*ENTRY_SORT_ORDERS[sort_order])
        return paginate(query, page, page_size)

    def get_in_date_range(self, user_id, start_date, end_date):
        return (
            ReadingEntry.query.filter(
                ReadingEntry.user_id == user_id,
                ReadingEntry.reading_date >= start_date,
                ReadingEntry.reading_date <= end_date,
            )
            .order_by(ReadingEntry.reading_date, ReadingEntry.created_at)
            .all()
        )

    def latest_created(self, user_id, limit):
        return (
            ReadingEntry.query.filter_by(user_id=user_id)
            .order_by(ReadingEntry.created_at.desc())
            .limit(limit)
            .all()
        )

    def distinct_reading_dates(self, user_id):
        rows = (
            db.session.query(ReadingEntry.reading_date)
            .filter(ReadingEntry.user_id == user_id)
            .distinct()
            .order_by(ReadingEntry.reading_date.desc())
            .all()
        )
        return [row[0] for row in rows]

    def average_rating(self, user_id):
        value = (
            db.session.query(func.avg(ReadingEntry.rating))
            .filter(ReadingEntry.user_id == user_id)
            .scalar()
        )
        return round(float(value), 2) if value is not None else 0.0

    def total_pages_read(self, user_id):
        return self._sum_pages(ReadingEntry.user_id == user_id)

    def pages_read_between(self, user_id, start_date, end_date):
        return self._sum_pages(
            ReadingEntry.user_id == user_id,
            ReadingEntry.reading_date >= start_date,
            ReadingEntry.reading_date <= end_date,
        )

    def count_between(self, user_id, start_date, end_date):
        return self.count(
            ReadingEntry.user_id == user_id,
            ReadingEntry.reading_date >= start_date,
            ReadingEntry.reading_date <= end_date,
        )

    def _sum_pages(self, *criteria):
        value = (
            db.session.query(func.coalesce(func.sum(PAGES_READ), 0))
            .filter(*criteria)
            .scalar()
        )
        return int(value or 0)
