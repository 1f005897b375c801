from chaplog.db import db
from chaplog.models._helpers import isoformat, new_id
from chaplog.utils.clock import utcnow


class BookReview(db.Model):
    __tablename__ = 'book_reviews'
    __table_args__ = (
        db.CheckConstraint('overall_rating BETWEEN 1 AND 5', name='ck_book_reviews_overall_rating'),
        db.CheckConstraint('recommendation_level BETWEEN 1 AND 5', name='ck_book_reviews_recommendation_level'),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    book_id = db.Column(db.String(36), db.ForeignKey('books.id', ondelete='CASCADE'), nullable=False, unique=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    completed_date = db.Column(db.Date, nullable=False)
    overall_impression = db.Column(db.Text, nullable=False)
    key_learnings = db.Column(db.JSON, nullable=False, default=list)
    overall_rating = db.Column(db.Integer, nullable=False)
    recommendation_level = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    # Relationships
    book = db.relationship('Book', back_populates='review')
    user = db.relationship('User', back_populates='book_reviews')

    def to_dict(self):
        return {
            'id': self.id,
            'bookId': self.book_id,
            'completedDate': isoformat(self.completed_date),
            'overallImpression': self.overall_impression,
            'keyLearnings': list(self.key_learnings or []),
            'overallRating': self.overall_rating,
            'recommendationLevel': self.recommendation_level,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def to_dict_with_book(self):
        data = self.to_dict()
        book = self.book
        data.update({
            'bookTitle': book.title,
            'bookAuthor': book.author,
            'bookGenre': book.genre or '',
            'bookTotalPages': book.total_pages or 0,
            'bookImageUrl': book.cover_image_url,
        })
        return data

    def __repr__(self):
        return f"<BookReview(id={self.id}, book_id={self.book_id}, rating={self.overall_rating})>"
