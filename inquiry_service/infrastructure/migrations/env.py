from __future__ import annotations

import asyncio

import structlog
from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from inquiry_service.infrastructure.db.engine import DATABASE_URL, _mask_password
from inquiry_service.infrastructure.db.orm import Base
from inquiry_service.infrastructure.logging import setup_logging

setup_logging()
log = structlog.stdlib.get_logger("alembic.env")

target_metadata = Base.metadata


def get_url() -> str:
    """``-x url=...`` on the alembic command line wins over DATABASE_URL."""
    url = context.get_x_argument(as_dictionary=True).get("url") or DATABASE_URL
    if not url:
        raise RuntimeError("DATABASE_URL is empty; set it or pass -x url=<database url>.")
    return url


def run_migrations_offline() -> None:
    url = get_url()
    log.info("migrations.offline.started", url=_mask_password(url))
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()
    log.info("migrations.offline.completed")


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    url = get_url()
    log.info("migrations.started", url=_mask_password(url))
    connectable = create_async_engine(url, poolclass=pool.NullPool)
    try:
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await connectable.dispose()
    log.info("migrations.completed")


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
