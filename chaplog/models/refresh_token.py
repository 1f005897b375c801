from chaplog.db import db
from chaplog.models._helpers import new_id
from chaplog.utils.clock import utcnow


class RefreshToken(db.Model):
    __tablename__ = 'refresh_tokens'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    token = db.Column(db.String(256), nullable=False, unique=True)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    created_by_ip = db.Column(db.String(45))
    revoked_at = db.Column(db.DateTime)
    revoked_by_ip = db.Column(db.String(45))
    replaced_by_token = db.Column(db.String(256))

    # Relationships
    user = db.relationship('User', back_populates='refresh_tokens')

    @property
    def is_expired(self):
        return utcnow() >= self.expires_at

    @property
    def is_revoked(self):
        return self.revoked_at is not None

    @property
    def is_active(self):
        return not self.is_revoked and not self.is_expired

    def __repr__(self):
        return f"<RefreshToken(id={self.id}, user_id={self.user_id}, active={self.is_active})>"
