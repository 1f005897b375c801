from flask import Blueprint, request

from chaplog.services.book_review_service import BookReviewService
from chaplog.utils.auth import get_current_user_id, jwt_required
from chaplog.utils.pagination import get_paging_args
from chaplog.utils.responses import success_response

book_review_routes = Blueprint('book_reviews', __name__)
review_service = BookReviewService()


@book_review_routes.route('', methods=['GET'])
@jwt_required
def get_reviews():
    page, page_size = get_paging_args(default_page_size=10)
    return success_response(review_service.get_reviews_by_user(get_current_user_id(), page, page_size))


@book_review_routes.route('/book/<book_id>', methods=['GET'])
@jwt_required
def get_review(book_id):
    return success_response(review_service.get_review_by_book(book_id, get_current_user_id()))


@book_review_routes.route('/book/<book_id>', methods=['POST'])
@jwt_required
def create_review(book_id):
    review = review_service.create_review(book_id, request.get_json(silent=True), get_current_user_id())
    return success_response(review, "Review created successfully", 201)


@book_review_routes.route('/book/<book_id>', methods=['PUT'])
@jwt_required
def update_review(book_id):
    review = review_service.update_review(book_id, request.get_json(silent=True), get_current_user_id())
    return success_response(review, "Review updated successfully")


@book_review_routes.route('/book/<book_id>', methods=['DELETE'])
@jwt_required
def delete_review(book_id):
    review_service.delete_review(book_id, get_current_user_id())
    return success_response(None, "Review deleted successfully")


@book_review_routes.route('/book/<book_id>/exists', methods=['GET'])
@jwt_required
def review_exists(book_id):
    return success_response(review_service.review_exists(book_id, get_current_user_id()))
