from chaplog.repositories.user_repository import UserRepository
from chaplog.repositories.book_repository import BookRepository
from chaplog.repositories.reading_entry_repository import ReadingEntryRepository
from chaplog.repositories.book_review_repository import BookReviewRepository
from chaplog.repositories.refresh_token_repository import RefreshTokenRepository

__all__ = [
    'UserRepository',
    'BookRepository',
    'ReadingEntryRepository',
    'BookReviewRepository',
    'RefreshTokenRepository',
]
