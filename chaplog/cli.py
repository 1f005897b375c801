import click
from flask import current_app

from chaplog.migration_runner import run_migrations_with_retry, seed_admin, upgrade_to_head
from chaplog.services.auth_service import AuthService


def register_commands(app):
    @app.cli.command('migrate-db')
    def migrate_db():
        """Apply migrations with retries, then seed the admin account."""
        config = current_app.config
        try:
            run_migrations_with_retry(
                upgrade_to_head,
                max_retries=config['MIGRATION_MAX_RETRIES'],
                base_delay=config['MIGRATION_BASE_DELAY_SECONDS'],
            )
        except Exception as e:
            raise click.ClickException(f"Database migration failed: {str(e)}")

        admin = seed_admin(config)
        if admin is not None:
            click.echo(f"Created admin user {admin.email}")
        click.echo("Database is up to date")

    @app.cli.command('cleanup-tokens')
    def cleanup_tokens():
        """Delete expired refresh tokens."""
        deleted = AuthService().cleanup_expired_tokens()
        current_app.logger.info(f"Deleted {deleted} expired refresh tokens")
        click.echo(f"Deleted {deleted} expired refresh tokens")
