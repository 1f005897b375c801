from chaplog.db import db
from chaplog.models._helpers import isoformat, new_id
from chaplog.utils.clock import utcnow

BOOK_STATUSES = ('unread', 'reading', 'completed')


class Book(db.Model):
    __tablename__ = 'books'
    __table_args__ = (
        db.CheckConstraint("status IN ('unread', 'reading', 'completed')", name='ck_books_status'),
        db.CheckConstraint('current_page >= 0', name='ck_books_current_page'),
        db.CheckConstraint('total_pages IS NULL OR total_pages > 0', name='ck_books_total_pages'),
        db.Index('ix_books_user_status', 'user_id', 'status'),
        db.Index('ix_books_title_author', 'title', 'author'),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    title = db.Column(db.String(500), nullable=False)
    author = db.Column(db.String(500), nullable=False)
    publisher = db.Column(db.String(256))
    publication_year = db.Column(db.Integer)
    total_pages = db.Column(db.Integer)
    genre = db.Column(db.String(100))
    cover_image_url = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default='unread', index=True)
    notes = db.Column(db.Text)
    current_page = db.Column(db.Integer, nullable=False, default=0)
    started_at = db.Column(db.DateTime)
    completed_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    # Relationships
    user = db.relationship('User', back_populates='books')
    reading_entries = db.relationship('ReadingEntry', back_populates='book', cascade='all')
    review = db.relationship('BookReview', back_populates='book', uselist=False, cascade='all')

    @property
    def progress(self):
        if not self.total_pages:
            return 0
        return min(100, int(self.current_page * 100 / self.total_pages))

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'author': self.author,
            'publisher': self.publisher,
            'publicationYear': self.publication_year,
            'totalPages': self.total_pages,
            'genre': self.genre,
            'coverImageUrl': self.cover_image_url,
            'status': self.status,
            'notes': self.notes,
            'currentPage': self.current_page,
            'progress': self.progress,
            'startedAt': isoformat(self.started_at),
            'completedAt': isoformat(self.completed_at),
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Book(id={self.id}, title={self.title}, author={self.author})>"
