import base64
import secrets
from datetime import timedelta
from typing import Any, Dict, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from chaplog.db import db
from chaplog.models.refresh_token import RefreshToken
from chaplog.models.user import User
from chaplog.repositories import RefreshTokenRepository, UserRepository
from chaplog.utils import validation
from chaplog.utils.auth import USER_ROLE, create_access_token
from chaplog.utils.clock import utcnow
from chaplog.utils.errors import ConflictError, UnauthorizedError, ValidationError

REFRESH_TOKEN_BYTES = 64


class AuthService:
    def __init__(self, user_repository=None, refresh_token_repository=None):
        self.users = user_repository or UserRepository()
        self.refresh_tokens = refresh_token_repository or RefreshTokenRepository()

    def register(self, data: Dict[str, Any], ip_address: Optional[str] = None) -> Dict[str, Any]:
        data = validation.require_json(data)
        errors = []
        email = validation.email(data, 'email', errors)
        password = data.get('password')
        if not isinstance(password, str) or not password:
            validation.add_error(errors, 'password', "password is required")
        elif len(password) < 8:
            validation.add_error(errors, 'password', "password must be at least 8 characters")
        username = validation.required_string(data, 'userName', errors, max_length=256)
        validation.raise_if_errors(errors)

        current_app.logger.info(f"Starting user registration for email: {email}, userName: {username}")

        if self.users.email_exists(email):
            current_app.logger.warning(f"Registration failed: email already exists: {email}")
            raise ConflictError("Email is already registered")

        # Usernames are not unique; only the email identifies an account.
        user = User(
            email=email,
            normalized_email=email.upper(),
            username=username,
            normalized_username=username.upper(),
            password_hash=generate_password_hash(password),
            role=USER_ROLE,
            email_confirmed=False,
            lockout_enabled=True,
            access_failed_count=0,
        )
        try:
            self.users.create(user)
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            db.session.rollback()
            current_app.logger.warning(f"Registration failed: email already exists: {email}")
            raise ConflictError("Email is already registered")

        response = self._issue_tokens(user, ip_address)
        current_app.logger.info(f"User registration completed successfully: {user.id}, {user.email}")
        return response

    def login(self, data: Dict[str, Any], ip_address: Optional[str] = None) -> Dict[str, Any]:
        data = validation.require_json(data)
        errors = []
        email = validation.email(data, 'email', errors)
        validation.required_string(data, 'password', errors)
        validation.raise_if_errors(errors)

        user = self.users.get_by_email(email)
        if user is None:
            current_app.logger.info(f"Login failed for unknown email: {email}")
            raise UnauthorizedError("Invalid email or password")

        now = utcnow()
        if not check_password_hash(user.password_hash, data['password']):
            self._record_failed_attempt(user, now)
            raise UnauthorizedError("Invalid email or password")

        if user.is_locked_out(now):
            current_app.logger.warning(f"Login rejected for locked out user: {user.id}")
            raise UnauthorizedError("Account is locked out")

        user.access_failed_count = 0
        user.last_login_at = now
        self.users.update(user)

        return self._issue_tokens(user, ip_address)

    def refresh(self, refresh_token: Optional[str], ip_address: Optional[str] = None) -> Dict[str, Any]:
        if not refresh_token:
            raise ValidationError("Refresh token is required",
                                  [{"field": "refreshToken", "message": "refreshToken is required"}])

        token = self.refresh_tokens.get_by_token(refresh_token)
        if token is None or not token.is_active:
            if token is not None and token.replaced_by_token:
                current_app.logger.warning(f"Rotated refresh token reused for user: {token.user_id}")
            raise UnauthorizedError("Invalid refresh token")

        user = token.user
        new_token = self._build_refresh_token(user.id, ip_address)
        db.session.add(new_token)
        self.refresh_tokens.revoke(token, ip_address, new_token.token, commit=False)
        db.session.commit()
        current_app.logger.info(f"Refresh token rotated for user: {user.id}")

        return self._auth_response(user, create_access_token(user), new_token.token)

    def revoke(self, refresh_token: Optional[str], ip_address: Optional[str] = None):
        if not refresh_token:
            raise ValidationError("Refresh token is required",
                                  [{"field": "refreshToken", "message": "refreshToken is required"}])

        token = self.refresh_tokens.get_by_token(refresh_token)
        if token is None or not token.is_active:
            raise ValidationError("Invalid refresh token")

        self.refresh_tokens.revoke(token, ip_address)
        current_app.logger.info(f"Refresh token revoked for user: {token.user_id}")

    def get_user(self, user_id) -> Optional[Dict[str, Any]]:
        user = self.users.get_by_id(user_id)
        return user.to_dict() if user else None

    def validate_user(self, user_id) -> bool:
        return self.users.exists(User.id == user_id)

    def cleanup_expired_tokens(self) -> int:
        return self.refresh_tokens.delete_expired()

    def _record_failed_attempt(self, user, now):
        config = current_app.config
        user.access_failed_count = (user.access_failed_count or 0) + 1
        if user.lockout_enabled and user.access_failed_count >= config['MAX_FAILED_ACCESS_ATTEMPTS']:
            user.lockout_end = now + timedelta(minutes=config['LOCKOUT_MINUTES'])
            user.access_failed_count = 0
            current_app.logger.warning(f"User {user.id} locked out until {user.lockout_end.isoformat()}")
        else:
            current_app.logger.info(f"Failed login attempt {user.access_failed_count} for user: {user.id}")
        self.users.update(user)

    def _build_refresh_token(self, user_id, ip_address):
        return RefreshToken(
            user_id=user_id,
            token=base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode('ascii'),
            expires_at=utcnow() + timedelta(days=current_app.config['REFRESH_TOKEN_EXPIRY_DAYS']),
            created_by_ip=ip_address,
        )

    def _issue_tokens(self, user, ip_address):
        refresh_token = self._build_refresh_token(user.id, ip_address)
        self.refresh_tokens.create(refresh_token)
        current_app.logger.info(f"Refresh token created for user: {user.id}")
        return self._auth_response(user, create_access_token(user), refresh_token.token)

    def _auth_response(self, user, access_token, refresh_token):
        return {
            'accessToken': access_token,
            'token': access_token,
            'refreshToken': refresh_token,
            'expiresIn': current_app.config['JWT_EXPIRY_MINUTES'] * 60,
            'user': user.to_dict(),
        }
