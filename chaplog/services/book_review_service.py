from chaplog.models.book_review import BookReview
from chaplog.repositories import BookRepository, BookReviewRepository
from chaplog.utils import validation
from chaplog.utils.clock import utcnow
from chaplog.utils.errors import ConflictError, NotFoundError
from chaplog.utils.pagination import paged_result


def parse_review_fields(data):
    data = validation.require_json(data)
    errors = []
    fields = {
        'completed_date': validation.required_date(data, 'completedDate', errors),
        'overall_impression': validation.required_string(data, 'overallImpression', errors),
        'key_learnings': validation.string_list(data, 'keyLearnings', errors),
        'overall_rating': validation.required_int(data, 'overallRating', errors, minimum=1, maximum=5),
        'recommendation_level': validation.required_int(data, 'recommendationLevel', errors, minimum=1, maximum=5),
    }
    validation.raise_if_errors(errors)
    return fields


class BookReviewService:
    def __init__(self, review_repository=None, book_repository=None):
        self.reviews = review_repository or BookReviewRepository()
        self.books = book_repository or BookRepository()

    def get_review_by_book(self, book_id, user_id):
        review = self._get_owned_review(book_id, user_id)
        return review.to_dict()

    def get_reviews_by_user(self, user_id, page=1, page_size=10):
        reviews, total_count = self.reviews.get_paged_by_user(user_id, page, page_size)
        items = [review.to_dict_with_book() for review in reviews]
        return paged_result(items, total_count, page, page_size)

    def create_review(self, book_id, data, user_id):
        book = self.books.get_owned(book_id, user_id)
        if book is None:
            raise NotFoundError("Book not found")

        if book.status != 'completed':
            raise ConflictError("Can only review completed books")

        if self.reviews.exists_for_book(book_id):
            raise ConflictError("Review already exists for this book")

        fields = parse_review_fields(data)
        review = BookReview(book_id=book.id, user_id=user_id, **fields)
        self.reviews.create(review)
        return review.to_dict()

    def update_review(self, book_id, data, user_id):
        review = self._get_owned_review(book_id, user_id)
        fields = parse_review_fields(data)
        for name, value in fields.items():
            setattr(review, name, value)
        review.updated_at = utcnow()
        self.reviews.update(review)
        return review.to_dict()

    def delete_review(self, book_id, user_id):
        review = self._get_owned_review(book_id, user_id)
        self.reviews.delete(review)

    def review_exists(self, book_id, user_id):
        review = self.reviews.get_by_book_id(book_id)
        return review is not None and review.user_id == user_id

    def _get_owned_review(self, book_id, user_id):
        review = self.reviews.get_by_book_id(book_id)
        if review is None or review.user_id != user_id:
            raise NotFoundError("Review not found")
        return review
