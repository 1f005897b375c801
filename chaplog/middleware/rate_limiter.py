"""
Per-client fixed-window rate limiting.

Each client IP gets a counter that resets when its window expires. A daemon
thread periodically drops expired windows so idle clients do not accumulate.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Optional

from flask import current_app, request

logger = logging.getLogger(__name__)


@dataclass
class ClientWindow:
    """Request count for one client within the current window."""
    window_start: float
    count: int = 0


class RateLimiter:
    """
    Thread-safe fixed-window limiter keyed by client identifier.

    ``clock`` returns monotonic seconds and can be swapped out in tests.
    """

    def __init__(self, max_requests: int = 100, window_seconds: float = 60,
                 clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self.clients: Dict[str, ClientWindow] = {}
        self._lock = Lock()
        self._stop_event = threading.Event()
        self._sweeper: Optional[threading.Thread] = None

    def hit(self, client_id: str):
        """
        Record one request from ``client_id``.

        Returns ``(allowed, retry_after_seconds)``.
        """
        now = self.clock()
        with self._lock:
            window = self.clients.get(client_id)
            if window is None or now - window.window_start >= self.window_seconds:
                window = ClientWindow(window_start=now)
                self.clients[client_id] = window

            if window.count >= self.max_requests:
                retry_after = self.window_seconds - (now - window.window_start)
                return False, max(1, math.ceil(retry_after))

            window.count += 1
            return True, 0

    def sweep(self) -> int:
        """Remove expired windows; returns how many were dropped."""
        now = self.clock()
        with self._lock:
            expired = [
                client_id for client_id, window in self.clients.items()
                if now - window.window_start >= self.window_seconds
            ]
            for client_id in expired:
                del self.clients[client_id]
        return len(expired)

    def start_sweeper(self, interval: Optional[float] = None):
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        interval = interval or self.window_seconds
        self._stop_event.clear()
        self._sweeper = threading.Thread(target=self._sweep_loop, args=(interval,),
                                         name='rate-limit-sweeper', daemon=True)
        self._sweeper.start()

    def stop_sweeper(self):
        self._stop_event.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout=1)
            self._sweeper = None

    def _sweep_loop(self, interval):
        while not self._stop_event.wait(interval):
            removed = self.sweep()
            if removed:
                logger.debug(f"Rate limiter removed {removed} expired client windows")


def init_rate_limiter(app, limiter: Optional[RateLimiter] = None):
    limiter = limiter or RateLimiter(
        max_requests=app.config['RATE_LIMIT_MAX_REQUESTS'],
        window_seconds=app.config['RATE_LIMIT_WINDOW_SECONDS'],
    )
    app.extensions['rate_limiter'] = limiter

    @app.before_request
    def enforce_rate_limit():
        client_id = request.remote_addr or 'unknown'
        allowed, retry_after = limiter.hit(client_id)
        if not allowed:
            current_app.logger.warning(f"Rate limit exceeded for client: {client_id}")
            return "Rate limit exceeded. Try again later.", 429, {
                'Retry-After': str(retry_after),
                'Content-Type': 'text/plain; charset=utf-8',
            }
        return None

    if app.config.get('RATE_LIMIT_SWEEP_ENABLED', True):
        limiter.start_sweeper()

    return limiter
