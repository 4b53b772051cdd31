"""Installation of the SQL assertion library."""

import logging
from pathlib import Path

import asyncpg

log = logging.getLogger(__name__)

ASSERTIONS_PATH = Path(__file__).parent / "sql" / "assert.sql"


def load_assertions_sql() -> str:
    """Read the packaged assertion library source."""
    return ASSERTIONS_PATH.read_text()


async def install_assertions(connection: asyncpg.Connection) -> None:
    """Create or replace the ``assert`` schema and its helper functions."""
    log.info("Installing assertion library from %s", ASSERTIONS_PATH.name)
    await connection.execute(load_assertions_sql())
