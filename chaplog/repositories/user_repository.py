from chaplog.models.user import User
from chaplog.repositories.base import BaseRepository
from chaplog.utils.pagination import paginate


class UserRepository(BaseRepository):
    model = User

    def get_by_email(self, email):
        return User.query.filter_by(normalized_email=email.strip().upper()).first()

    def email_exists(self, email):
        return self.exists(User.normalized_email == email.strip().upper())

    def get_paged(self, page, page_size, search_term=None):
        query = User.query
        if search_term:
            pattern = f"%{search_term}%"
            query = query.filter(User.email.ilike(pattern) | User.username.ilike(pattern))
        query = query.order_by(User.created_at.desc())
        return paginate(query, page, page_size)

    def total_count(self):
        return User.query.count()

    def any_users(self):
        return self.exists()
