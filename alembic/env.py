"""Alembic environment for the Postboard schema (users, follows, articles, likes, comments)."""

import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from app.core.config import settings
from app.core.database import enable_sqlite_foreign_keys
from app.models import Base

config = context.config
# alembic.ini carries no logging sections; fall back to a basic format.
if config.config_file_name is not None and config.file_config.has_section("formatters"):
    fileConfig(config.config_file_name)
else:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("alembic.env")

target_metadata = Base.metadata


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit SQL for DATABASE_URL without connecting."""
    url = settings.DATABASE_URL
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=_is_sqlite(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect to DATABASE_URL and apply migrations."""
    url = settings.DATABASE_URL
    connectable = create_engine(url, poolclass=NullPool)
    if _is_sqlite(url):
        enable_sqlite_foreign_keys(connectable)
    logger.info("Running migrations against %s", connectable.url.render_as_string(hide_password=True))
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite cannot ALTER most constraints in place.
            render_as_batch=_is_sqlite(url),
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
