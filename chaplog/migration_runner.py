"""
Startup database tasks: apply Alembic migrations (retrying while the database
comes up) and make sure an administrator account exists.
"""
import logging
import os
import time

from alembic import command
from alembic.config import Config as AlembicConfig
from werkzeug.security import generate_password_hash

from chaplog.models.user import User
from chaplog.repositories import UserRepository
from chaplog.utils.auth import ADMIN_ROLE

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'migrations')


def alembic_config():
    config = AlembicConfig()
    config.set_main_option('script_location', MIGRATIONS_DIR)
    return config


def upgrade_to_head():
    """Apply every pending revision. Must run inside an app context."""
    command.upgrade(alembic_config(), 'head')


def run_migrations_with_retry(upgrade=upgrade_to_head, max_retries=5, base_delay=2.0, sleep=time.sleep):
    """
    Call ``upgrade`` until it succeeds, backing off exponentially between
    attempts (``base_delay * 2 ** (attempt - 1)`` seconds).

    Returns the attempt number that succeeded; re-raises the last error once
    ``max_retries`` attempts have failed.
    """
    for attempt in range(1, max_retries + 1):
        try:
            logger.info(f"Applying database migrations (attempt {attempt}/{max_retries})")
            upgrade()
            logger.info("Database migrations applied successfully")
            return attempt
        except Exception as e:
            if attempt == max_retries:
                logger.error(f"Database migration failed after {max_retries} attempts: {str(e)}")
                raise
            delay = base_delay * 2 ** (attempt - 1)
            logger.warning(f"Migration attempt {attempt} failed: {str(e)}. Retrying in {delay} seconds")
            sleep(delay)


def seed_admin(config, user_repository=None):
    """Create the configured admin account when the users table is empty."""
    users = user_repository or UserRepository()
    if users.any_users():
        logger.info("Users already present; skipping admin seed")
        return None

    email = config['ADMIN_EMAIL']
    username = config['ADMIN_USERNAME']
    admin = User(
        email=email,
        normalized_email=email.upper(),
        username=username,
        normalized_username=username.upper(),
        password_hash=generate_password_hash(config['ADMIN_PASSWORD']),
        role=ADMIN_ROLE,
        email_confirmed=True,
        lockout_enabled=False,
        access_failed_count=0,
    )
    users.create(admin)
    logger.info(f"Seeded admin user: {admin.email}")
    return admin
