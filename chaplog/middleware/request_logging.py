import time
import uuid

from flask import current_app, g, request


def init_request_logging(app):
    """Tag every request with an id and log how long it took."""

    @app.before_request
    def start_request():
        g.request_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())
        g.request_started = time.perf_counter()
        current_app.logger.info(f"[{g.request_id}] {request.method} {request.path} started")

    @app.after_request
    def finish_request(response):
        request_id = g.get('request_id')
        if request_id is None:
            return response
        elapsed_ms = (time.perf_counter() - g.request_started) * 1000
        response.headers['X-Request-ID'] = request_id
        current_app.logger.info(
            f"[{request_id}] {request.method} {request.path} completed with {response.status_code} "
            f"in {elapsed_ms:.1f}ms"
        )
        return response
