from flask import Blueprint, request

from chaplog.services.reading_entry_service import ReadingEntryService
from chaplog.utils.auth import get_current_user_id, jwt_required
from chaplog.utils.pagination import get_paging_args
from chaplog.utils.responses import success_response
from chaplog.utils.sorting import parse_entry_sort

reading_entry_routes = Blueprint('reading_entries', __name__)
entry_service = ReadingEntryService()


@reading_entry_routes.route('', methods=['GET'])
@jwt_required
def get_entries():
    page, page_size = get_paging_args(default_page_size=10)
    result = entry_service.get_entries_by_user(
        get_current_user_id(),
        page,
        page_size,
        sort_order=parse_entry_sort(request.args.get('sortBy')),
        search_query=request.args.get('search') or None,
    )
    return success_response(result)


@reading_entry_routes.route('', methods=['POST'])
@jwt_required
def create_entry():
    data = request.get_json(silent=True) or {}
    entry = entry_service.create_entry(data.get('bookId'), data, get_current_user_id())
    return success_response(entry, "Reading entry created successfully", 201)


@reading_entry_routes.route('/book/<book_id>', methods=['POST'])
@jwt_required
def create_entry_for_book(book_id):
    entry = entry_service.create_entry(book_id, request.get_json(silent=True), get_current_user_id())
    return success_response(entry, "Reading entry created successfully", 201)


@reading_entry_routes.route('/book/<book_id>', methods=['GET'])
@jwt_required
def get_entries_by_book(book_id):
    page, page_size = get_paging_args()
    return success_response(entry_service.get_entries_by_book(book_id, get_current_user_id(), page, page_size))


@reading_entry_routes.route('/<entry_id>', methods=['GET'])
@jwt_required
def get_entry(entry_id):
    return success_response(entry_service.get_entry(entry_id, get_current_user_id()))


@reading_entry_routes.route('/<entry_id>', methods=['PUT'])
@jwt_required
def update_entry(entry_id):
    entry = entry_service.update_entry(entry_id, request.get_json(silent=True), get_current_user_id())
    return success_response(entry, "Reading entry updated successfully")


@reading_entry_routes.route('/<entry_id>', methods=['DELETE'])
@jwt_required
def delete_entry(entry_id):
    entry_service.delete_entry(entry_id, get_current_user_id())
    return success_response(None, "Reading entry deleted successfully")


@reading_entry_routes.route('/<entry_id>/exists', methods=['GET'])
@jwt_required
def entry_exists(entry_id):
    return success_response(entry_service.entry_exists(entry_id, get_current_user_id()))
