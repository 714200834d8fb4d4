"""Alembic migration environment, run against the service's async engine."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from image_assets.db import models  # noqa: F401
from image_assets.infrastructure.database.base import Base
from image_assets.infrastructure.database.session import dispose_engine, get_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure_and_run(connection: Connection) -> None:
    # SQLite cannot ALTER most columns in place; batch mode rebuilds the table.
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def _upgrade_images_schema() -> None:
    try:
        async with get_engine().connect() as connection:
            await connection.run_sync(_configure_and_run)
    finally:
        await dispose_engine()


if context.is_offline_mode():
    raise SystemExit("SQL script generation (--sql) is not supported; run migrations against DATABASE__URL")

asyncio.run(_upgrade_images_schema())
