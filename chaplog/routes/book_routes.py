from flask import Blueprint, request

from chaplog.services.book_service import BookService
from chaplog.utils.auth import get_current_user_id, jwt_required
from chaplog.utils.pagination import get_paging_args
from chaplog.utils.responses import success_response
from chaplog.utils.sorting import parse_bool, parse_book_sort

book_routes = Blueprint('books', __name__)
book_service = BookService()


@book_routes.route('', methods=['GET'])
@jwt_required
def get_books():
    page, page_size = get_paging_args()
    result = book_service.get_books(
        get_current_user_id(),
        page,
        page_size,
        status=request.args.get('status') or None,
        search_term=request.args.get('searchTerm') or None,
        sort_by=parse_book_sort(request.args.get('sortBy')),
        ascending=parse_bool(request.args.get('ascending')),
    )
    return success_response(result)


@book_routes.route('/<book_id>', methods=['GET'])
@jwt_required
def get_book(book_id):
    return success_response(book_service.get_book(book_id, get_current_user_id()))


@book_routes.route('', methods=['POST'])
@jwt_required
def create_book():
    book = book_service.create_book(request.get_json(silent=True), get_current_user_id())
    return success_response(book, "Book created successfully", 201)


@book_routes.route('/<book_id>', methods=['PUT'])
@jwt_required
def update_book(book_id):
    book = book_service.update_book(book_id, request.get_json(silent=True), get_current_user_id())
    return success_response(book, "Book updated successfully")


@book_routes.route('/<book_id>', methods=['DELETE'])
@jwt_required
def delete_book(book_id):
    book_service.delete_book(book_id, get_current_user_id())
    return success_response(None, "Book deleted successfully")


@book_routes.route('/<book_id>/status', methods=['PATCH'])
@jwt_required
def update_book_status(book_id):
    data = request.get_json(silent=True) or {}
    book = book_service.update_status(book_id, get_current_user_id(), data.get('status'))
    return success_response(book, "Book status updated successfully")


@book_routes.route('/<book_id>/exists', methods=['GET'])
@jwt_required
def book_exists(book_id):
    return success_response(book_service.book_exists(book_id, get_current_user_id()))
