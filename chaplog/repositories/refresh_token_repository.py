from chaplog.db import db
from chaplog.models.refresh_token import RefreshToken
from chaplog.repositories.base import BaseRepository
from chaplog.utils.clock import utcnow


class RefreshTokenRepository(BaseRepository):
    model = RefreshToken

    def get_by_token(self, token):
        return RefreshToken.query.filter_by(token=token).first()

    def revoke(self, refresh_token, revoked_by_ip=None, replaced_by_token=None, commit=True):
        refresh_token.revoked_at = utcnow()
        refresh_token.revoked_by_ip = revoked_by_ip
        refresh_token.replaced_by_token = replaced_by_token
        if commit:
            db.session.commit()

    def delete_expired(self):
        deleted = RefreshToken.query.filter(RefreshToken.expires_at < utcnow()).delete(synchronize_session=False)
        db.session.commit()
        return deleted
