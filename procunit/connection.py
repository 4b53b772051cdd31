"""Database connection lifecycle."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import asyncpg

from procunit.config import RunnerConfig

log = logging.getLogger(__name__)


@asynccontextmanager
async def connect(config: RunnerConfig) -> AsyncGenerator[asyncpg.Connection, None]:
    """Open a connection for the run and close it when done."""
    connection = await asyncpg.connect(
        config.dsn.get_secret_value(),
        command_timeout=config.command_timeout,
        server_settings=config.server_settings or None,
    )
    log.debug("Connected to database")
    try:
        yield connection
    finally:
        await connection.close()
