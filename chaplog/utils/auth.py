import uuid
from datetime import timedelta
from functools import wraps

import jwt
from flask import current_app, g, request

from chaplog.utils.clock import utcnow
from chaplog.utils.errors import ForbiddenError, UnauthorizedError

ALGORITHM = 'HS256'
ADMIN_ROLE = 'Admin'
USER_ROLE = 'User'


def create_access_token(user):
    """Sign a short-lived access token for ``user``."""
    config = current_app.config
    now = utcnow()
    payload = {
        'sub': user.id,
        'email': user.email,
        'name': user.username,
        'role': user.role,
        'jti': str(uuid.uuid4()),
        'iat': now,
        'exp': now + timedelta(minutes=config['JWT_EXPIRY_MINUTES']),
        'iss': config['JWT_ISSUER'],
        'aud': config['JWT_AUDIENCE'],
    }
    return jwt.encode(payload, config['JWT_KEY'], algorithm=ALGORITHM)


def decode_access_token(token):
    config = current_app.config
    try:
        return jwt.decode(
            token,
            config['JWT_KEY'],
            algorithms=[ALGORITHM],
            issuer=config['JWT_ISSUER'],
            audience=config['JWT_AUDIENCE'],
            options={'require': ['exp', 'sub', 'iss', 'aud']},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        current_app.logger.info(f"Rejected access token: {str(e)}")
        raise UnauthorizedError("Invalid token")


def _bearer_token():
    auth_header = request.headers.get('Authorization', '')
    scheme, _, token = auth_header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        raise UnauthorizedError("Authentication required")
    return token.strip()


def jwt_required(f):
    """Reject the request unless it carries a valid Bearer access token."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        claims = decode_access_token(_bearer_token())
        g.current_user_id = claims['sub']
        g.current_user_role = claims.get('role')
        g.jwt_claims = claims
        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    @wraps(f)
    @jwt_required
    def decorated_function(*args, **kwargs):
        if g.current_user_role != ADMIN_ROLE:
            raise ForbiddenError("Administrator role required")
        return f(*args, **kwargs)

    return decorated_function


def get_current_user_id():
    user_id = g.get('current_user_id')
    if not user_id:
        raise UnauthorizedError("User ID not found in token")
    return user_id
