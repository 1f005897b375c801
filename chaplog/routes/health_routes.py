from flask import Blueprint, current_app
from sqlalchemy import text

from chaplog.db import db
from chaplog.utils.responses import error_response, success_response

health_routes = Blueprint('health', __name__)


@health_routes.route('/health', methods=['GET'])
def health_check():
    try:
        db.session.execute(text('SELECT 1'))
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Health check failed: {str(e)}")
        return error_response("Database unavailable", 503)
    return success_response({"status": "healthy", "database": "connected"})
