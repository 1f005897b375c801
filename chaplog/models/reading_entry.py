from chaplog.db import db
from chaplog.models._helpers import isoformat, new_id
from chaplog.utils.clock import utcnow


class ReadingEntry(db.Model):
    __tablename__ = 'reading_entries'
    __table_args__ = (
        db.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_reading_entries_rating'),
        db.CheckConstraint('start_page <= end_page AND start_page > 0', name='ck_reading_entries_pages'),
        db.Index('ix_reading_entries_book_date', 'book_id', 'reading_date'),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    book_id = db.Column(db.String(36), db.ForeignKey('books.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    reading_date = db.Column(db.Date, nullable=False, index=True)
    start_page = db.Column(db.Integer, nullable=False)
    end_page = db.Column(db.Integer, nullable=False)
    chapter = db.Column(db.String(256))
    notes = db.Column(db.Text)
    impression = db.Column(db.Text)
    learnings = db.Column(db.JSON, nullable=False, default=list)
    rating = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    # Relationships
    book = db.relationship('Book', back_populates='reading_entries')
    user = db.relationship('User', back_populates='reading_entries')

    @property
    def pages_read(self):
        return self.end_page - self.start_page + 1

    def to_dict(self):
        book = self.book
        return {
            'id': self.id,
            'bookId': self.book_id,
            'book': {
                'id': book.id if book else self.book_id,
                'title': book.title if book else 'Unknown',
                'author': book.author if book else 'Unknown',
            },
            'readingDate': isoformat(self.reading_date),
            'startPage': self.start_page,
            'endPage': self.end_page,
            'chapter': self.chapter,
            'notes': self.notes,
            'impression': self.impression,
            'learnings': list(self.learnings or []),
            'rating': self.rating,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<ReadingEntry(id={self.id}, book_id={self.book_id}, pages={self.start_page}-{self.end_page})>"
