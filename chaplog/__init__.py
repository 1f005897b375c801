from flask import Flask, current_app
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from chaplog.cli import register_commands
from chaplog.config import Config
from chaplog.db import db, init_db
from chaplog.middleware import init_rate_limiter, init_request_logging
from chaplog.routes.admin_routes import admin_routes
from chaplog.routes.auth_routes import auth_routes
from chaplog.routes.book_review_routes import book_review_routes
from chaplog.routes.book_routes import book_routes
from chaplog.routes.health_routes import health_routes
from chaplog.routes.reading_entry_routes import reading_entry_routes
from chaplog.routes.statistics_routes import statistics_routes
from chaplog.utils.errors import ChapLogError
from chaplog.utils.responses import error_response


def register_error_handlers(app):
    @app.errorhandler(ChapLogError)
    def handle_chaplog_error(e):
        return error_response(e.message, e.status_code, e.errors)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return error_response(e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        current_app.logger.error(f"Unhandled exception: {str(e)}", exc_info=e)
        return error_response(str(e) or "An unexpected error occurred", 500)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.sort_keys = app.config['JSON_SORT_KEYS']

    # Initialize the database
    init_db(app)

    # Logging runs first so rate-limited requests are still traced
    init_request_logging(app)
    init_rate_limiter(app)

    # Register routes
    app.register_blueprint(auth_routes, url_prefix='/api/auth')
    app.register_blueprint(book_routes, url_prefix='/api/books')
    app.register_blueprint(reading_entry_routes, url_prefix='/api/reading-entries')
    app.register_blueprint(book_review_routes, url_prefix='/api/book-reviews')
    app.register_blueprint(statistics_routes, url_prefix='/api/statistics')
    app.register_blueprint(admin_routes, url_prefix='/api/admin')
    app.register_blueprint(health_routes)

    register_error_handlers(app)
    register_commands(app)
    CORS(app, origins=app.config['CORS_ORIGINS'].split(','), expose_headers=['X-Request-ID', 'Retry-After'])
    return app
