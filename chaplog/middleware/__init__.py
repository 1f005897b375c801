from chaplog.middleware.rate_limiter import RateLimiter, init_rate_limiter
from chaplog.middleware.request_logging import init_request_logging

__all__ = ['RateLimiter', 'init_rate_limiter', 'init_request_logging']
