from chaplog.models.user import User
from chaplog.models.book import Book
from chaplog.models.reading_entry import ReadingEntry
from chaplog.models.book_review import BookReview
from chaplog.models.refresh_token import RefreshToken

__all__ = ['User', 'Book', 'ReadingEntry', 'BookReview', 'RefreshToken']
