from flask import Blueprint, request

from chaplog.services.auth_service import AuthService
from chaplog.utils.auth import get_current_user_id, jwt_required
from chaplog.utils.errors import NotFoundError
from chaplog.utils.responses import success_response

auth_routes = Blueprint('auth_routes', __name__)
auth_service = AuthService()


# Register User Route
@auth_routes.route('/register', methods=['POST'])
def register_user():
    result = auth_service.register(request.get_json(silent=True), request.remote_addr)
    return success_response(result, "User registered successfully", 201)


# Login User Route
@auth_routes.route('/login', methods=['POST'])
def login_user():
    result = auth_service.login(request.get_json(silent=True), request.remote_addr)
    return success_response(result, "Login successful")


@auth_routes.route('/refresh-token', methods=['POST'])
def refresh_token():
    data = request.get_json(silent=True) or {}
    result = auth_service.refresh(data.get('refreshToken'), request.remote_addr)
    return success_response(result, "Token refreshed successfully")


@auth_routes.route('/revoke-token', methods=['POST'])
@jwt_required
def revoke_token():
    data = request.get_json(silent=True) or {}
    auth_service.revoke(data.get('refreshToken'), request.remote_addr)
    return success_response(None, "Token revoked successfully")


@auth_routes.route('/me', methods=['GET'])
@jwt_required
def get_current_user():
    user = auth_service.get_user(get_current_user_id())
    if user is None:
        raise NotFoundError("User not found")
    return success_response(user)


# Lets clients check that the account behind a token still exists
@auth_routes.route('/validate', methods=['GET'])
@jwt_required
def validate_token():
    return success_response(auth_service.validate_user(get_current_user_id()))
