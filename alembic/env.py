"""
Alembic env - migrations for users, access_tokens and farms.
The app talks to the database through asyncpg; migrations use the sync psycopg2 driver
against the same DATABASE_URL.
"""

import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import make_url

from farm_registry.config import get_settings
from farm_registry.db.base import Base
from farm_registry.db.models import AccessToken, Farm, User  # noqa: F401 - registers tables on Base.metadata
from farm_registry.db.session import sync_database_url

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

# escape % for configparser interpolation
config.set_main_option("sqlalchemy.url", sync_database_url(get_settings().database_url).replace("%", "%%"))
target_metadata = Base.metadata


def skip_empty_autogenerate(context, revision, directives) -> None:
    if getattr(config.cmd_opts, "autogenerate", False) and directives[0].upgrade_ops.is_empty():
        directives[:] = []
        logger.info("No schema changes detected; no revision written.")


def configure_kwargs(url) -> dict:
    # SQLite cannot ALTER constraints in place
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": make_url(url).get_backend_name() == "sqlite",
        "process_revision_directives": skip_empty_autogenerate,
    }


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, literal_binds=True, dialect_opts={"paramstyle": "named"}, **configure_kwargs(url))
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(connection=connection, **configure_kwargs(config.get_main_option("sqlalchemy.url")))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
