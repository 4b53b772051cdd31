"""Routine catalog backed by the PostgreSQL system catalog."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import asyncpg

from procunit.catalog.base import RoutineCatalog
from procunit.models.routine import Routine

log = logging.getLogger(__name__)

LIKE_ESCAPE = "/"

LIST_ROUTINES_SQL = """
SELECT DISTINCT
    n.nspname AS namespace,
    p.proname AS name,
    CASE WHEN p.prokind = 'p' THEN 'procedure' ELSE 'function' END AS kind
FROM pg_catalog.pg_proc p
JOIN pg_catalog.pg_namespace n ON p.pronamespace = n.oid
WHERE p.proname LIKE $1 ESCAPE '/'
ORDER BY p.proname, n.nspname
"""

FIND_ROUTINE_SQL = """
SELECT
    n.nspname AS namespace,
    p.proname AS name,
    CASE WHEN p.prokind = 'p' THEN 'procedure' ELSE 'function' END AS kind
FROM pg_catalog.pg_proc p
JOIN pg_catalog.pg_namespace n ON p.pronamespace = n.oid
WHERE n.nspname = $1 AND p.proname = $2
LIMIT 1
"""


def like_prefix(prefix: str) -> str:
    """Build a LIKE pattern matching names that start with ``prefix``."""
    escaped = (
        prefix.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"{escaped}%"


@dataclass(frozen=True, kw_only=True)
class PostgresCatalog(RoutineCatalog):
    """Catalog that queries ``pg_proc`` over an asyncpg connection."""

    connection: asyncpg.Connection = field(repr=False)

    async def list_routines(self, prefix: str) -> Sequence[Routine]:
        """List routines whose name starts with ``prefix``."""
        rows = await self.connection.fetch(LIST_ROUTINES_SQL, like_prefix(prefix))
        routines = [Routine.model_validate(dict(row)) for row in rows]
        log.debug("Found %d routine(s) with prefix %s", len(routines), prefix)
        return routines

    async def find_routine(self, namespace: str, name: str) -> Routine | None:
        """Look up a routine by exact namespace and name."""
        row = await self.connection.fetchrow(FIND_ROUTINE_SQL, namespace, name)
        if row is None:
            return None
        return Routine.model_validate(dict(row))
