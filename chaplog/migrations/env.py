from logging.config import fileConfig

from alembic import context
from flask import has_app_context

from chaplog.config import Config
from chaplog.db import db

config = context.config

if config.config_file_name is not None and config.attributes.get('configure_logger', True):
    fileConfig(config.config_file_name)

target_metadata = db.metadata


def run_migrations_offline():
    url = config.get_main_option('sqlalchemy.url') or Config.SQLALCHEMY_DATABASE_URI
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    with db.engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == 'sqlite',
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
elif has_app_context():
    run_migrations_online()
else:
    # Invoked through the alembic CLI rather than `flask migrate-db`
    from chaplog import create_app

    with create_app().app_context():
        run_migrations_online()
