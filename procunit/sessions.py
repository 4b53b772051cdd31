"""Termination of stuck backend sessions."""

import logging
from collections.abc import Sequence

import asyncpg

from procunit.models.routine import TerminatedSession

log = logging.getLogger(__name__)

TERMINATE_SQL = """
SELECT pid, query, pg_catalog.pg_terminate_backend(pid) AS terminated
FROM pg_catalog.pg_stat_activity
WHERE pid <> pg_catalog.pg_backend_pid()
  AND datname = $1
  AND state = 'active'
"""


async def terminate_sessions(
    connection: asyncpg.Connection, database: str
) -> Sequence[TerminatedSession]:
    """Terminate every other active session connected to a database.

    Args:
        connection: Connection used to issue the termination
        database: Name of the database whose sessions are terminated

    Returns:
        The sessions that were signalled, with their in-flight queries

    """
    rows = await connection.fetch(TERMINATE_SQL, database)
    sessions = [TerminatedSession.model_validate(dict(row)) for row in rows]
    for session in sessions:
        log.info(
            "Terminated session pid=%d terminated=%s query=%s",
            session.pid,
            session.terminated,
            session.query,
        )
    return sessions
