import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name, default):
    value = os.getenv(name)
    return int(value) if value else default


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///chaplog.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False  # Disable track modifications for performance
    JSON_SORT_KEYS = False

    # Access token settings
    JWT_KEY = os.getenv('JWT_KEY', 'dev-only-signing-key-change-me-in-production')
    JWT_ISSUER = os.getenv('JWT_ISSUER', 'chaplog-api')
    JWT_AUDIENCE = os.getenv('JWT_AUDIENCE', 'chaplog-client')
    JWT_EXPIRY_MINUTES = _int_env('JWT_EXPIRY_MINUTES', 60)
    REFRESH_TOKEN_EXPIRY_DAYS = _int_env('REFRESH_TOKEN_EXPIRY_DAYS', 7)

    # Account lockout
    MAX_FAILED_ACCESS_ATTEMPTS = _int_env('MAX_FAILED_ACCESS_ATTEMPTS', 5)
    LOCKOUT_MINUTES = _int_env('LOCKOUT_MINUTES', 15)

    # Rate limiting (per client IP, fixed window)
    RATE_LIMIT_MAX_REQUESTS = _int_env('RATE_LIMIT_MAX_REQUESTS', 100)
    RATE_LIMIT_WINDOW_SECONDS = _int_env('RATE_LIMIT_WINDOW_SECONDS', 60)
    RATE_LIMIT_SWEEP_ENABLED = True

    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Seeded by `flask migrate-db` when the users table is empty
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'admin@chaplog.com')
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'Admin123!')

    MIGRATION_MAX_RETRIES = 5
    MIGRATION_BASE_DELAY_SECONDS = 2.0


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_KEY = 'testing-signing-key-with-enough-length-for-hs256'
    RATE_LIMIT_MAX_REQUESTS = 1000
    RATE_LIMIT_SWEEP_ENABLED = False
    MIGRATION_BASE_DELAY_SECONDS = 0.0
