from flask import Blueprint, request

from chaplog.services.admin_service import AdminService
from chaplog.utils.auth import admin_required
from chaplog.utils.pagination import get_paging_args
from chaplog.utils.responses import success_response

admin_routes = Blueprint('admin', __name__)
admin_service = AdminService()


@admin_routes.route('/users', methods=['GET'])
@admin_required
def get_users():
    page, page_size = get_paging_args()
    return success_response(admin_service.get_users(page, page_size, request.args.get('searchTerm') or None))


@admin_routes.route('/users/count', methods=['GET'])
@admin_required
def get_user_count():
    return success_response(admin_service.total_users())


@admin_routes.route('/users/<user_id>', methods=['GET'])
@admin_required
def get_user(user_id):
    return success_response(admin_service.get_user(user_id))


@admin_routes.route('/users/<user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id):
    admin_service.delete_user(user_id)
    return success_response(None, "User deleted successfully")
