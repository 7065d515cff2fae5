"""Alembic environment: async migrations for the users and salaries tables.

The target URL comes from the same Settings the API reads, so a deployment
that sets DATABASE_URL (postgresql:// or postgresql+asyncpg://) migrates the
database the service will query. ``alembic -x db_url=...`` overrides it for
one-off runs against another database.

Design Decisions:
    - compare_type on: amount is NUMERIC(10, 2) and precision drift must show
      up in autogenerate
    - NullPool: a migration run opens one connection and exits
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from app.config import async_database_url, get_settings
from app.db.base import Base
from app.models.employee import Employee  # noqa: F401
from app.models.salary import Salary  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _target_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("db_url")
    if override:
        return async_database_url(override)
    return get_settings().database_url


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata, compare_type=True, **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the users/salaries schema without a live connection."""
    _configure(
        url=_target_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _target_url()
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
