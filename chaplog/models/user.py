from chaplog.db import db
from chaplog.models._helpers import isoformat, new_id
from chaplog.utils.clock import utcnow


class User(db.Model):
    __tablename__ = 'users'
    __table_args__ = (
        db.CheckConstraint("role IN ('User', 'Admin')", name='ck_users_role'),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    email = db.Column(db.String(256), nullable=False, unique=True)
    normalized_email = db.Column(db.String(256), nullable=False, unique=True)
    username = db.Column(db.String(256), nullable=False)
    normalized_username = db.Column(db.String(256), nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    security_stamp = db.Column(db.String(256), default=new_id)
    concurrency_stamp = db.Column(db.String(256), default=new_id)
    email_confirmed = db.Column(db.Boolean, nullable=False, default=False)
    lockout_enabled = db.Column(db.Boolean, nullable=False, default=True)
    lockout_end = db.Column(db.DateTime)
    access_failed_count = db.Column(db.Integer, nullable=False, default=0)
    role = db.Column(db.String(50), nullable=False, default='User')
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    last_login_at = db.Column(db.DateTime)

    # Relationships
    books = db.relationship('Book', back_populates='user', cascade='all')
    reading_entries = db.relationship('ReadingEntry', back_populates='user', cascade='all')
    book_reviews = db.relationship('BookReview', back_populates='user', cascade='all')
    refresh_tokens = db.relationship('RefreshToken', back_populates='user', cascade='all')

    def is_locked_out(self, now):
        return self.lockout_end is not None and self.lockout_end > now

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'userName': self.username,
            'role': self.role,
            'emailConfirmed': self.email_confirmed,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, email={self.email})>"
