from chaplog.models.book_review import BookReview
from chaplog.repositories.base import BaseRepository
from chaplog.utils.pagination import paginate


class BookReviewRepository(BaseRepository):
    model = BookReview

    def get_by_book_id(self, book_id):
        return BookReview.query.filter_by(book_id=book_id).first()

    def exists_for_book(self, book_id):
        return self.exists(BookReview.book_id == book_id)

    def get_paged_by_user(self, user_id, page, page_size):
        query = (
            BookReview.query.filter(BookReview.user_id == user_id)
            .order_by(BookReview.created_at.desc(), BookReview.id)
        )
        return paginate(query, page, page_size)

    def count_completed_between(self, user_id, start_date, end_date):
        return self.count(
            BookReview.user_id == user_id,
            BookReview.completed_date >= start_date,
            BookReview.completed_date <= end_date,
        )

    def latest_created(self, user_id, limit):
        return (
            BookReview.query.filter_by(user_id=user_id)
            .order_by(BookReview.created_at.desc())
            .limit(limit)
            .all()
        )
