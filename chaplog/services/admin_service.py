from flask import current_app

from chaplog.repositories import UserRepository
from chaplog.utils.auth import ADMIN_ROLE
from chaplog.utils.errors import ForbiddenError, NotFoundError
from chaplog.utils.pagination import paged_result


class AdminService:
    def __init__(self, user_repository=None):
        self.users = user_repository or UserRepository()

    def get_users(self, page=1, page_size=20, search_term=None):
        users, total_count = self.users.get_paged(page, page_size, search_term)
        return paged_result([user.to_dict() for user in users], total_count, page, page_size)

    def get_user(self, user_id):
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user.to_dict()

    def delete_user(self, user_id):
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        if user.role == ADMIN_ROLE:
            raise ForbiddenError("Cannot delete admin user")

        self.users.delete(user)
        current_app.logger.info(f"Admin deleted user: {user_id}")

    def total_users(self):
        return self.users.total_count()
