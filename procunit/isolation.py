"""Run statements inside an isolated, independently rolled back boundary."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import asyncpg

from procunit.conditions import check
from procunit.errors import ConditionFailedError, IsolationError
from procunit.models.routine import Routine

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Call:
    """A single routine invocation within a statement."""

    routine: Routine
    condition: bool = False

    def __str__(self) -> str:
        return self.routine.invocation

    async def run(self, connection: asyncpg.Connection) -> None:
        """Invoke the routine, checking its result if it is a condition."""
        if self.condition:
            await check(connection, self.routine)
        else:
            await connection.execute(self.routine.invocation)


@dataclass(frozen=True)
class Statement:
    """Ordered calls executed as one unit of work."""

    calls: Sequence[Call]

    def __str__(self) -> str:
        return "; ".join(str(call) for call in self.calls)

    @classmethod
    def of(cls, routine: Routine) -> "Statement":
        """Build a statement that invokes a single routine."""
        return cls([Call(routine=routine)])


async def run_isolated(connection: asyncpg.Connection, statement: Statement) -> None:
    """Execute a statement inside its own transaction block.

    On an idle connection the block is a top-level transaction that commits on
    success; inside a transaction opened by the caller it is a savepoint.
    Either way a failure undoes everything the statement did and nothing else.

    Raises:
        IsolationError: If any call fails. The original SQLSTATE is kept, so
            assertion failures stay distinguishable from other errors.

    """
    try:
        async with connection.transaction():
            for call in statement.calls:
                await call.run(connection)
    except (asyncpg.PostgresError, ConditionFailedError) as exc:
        error = IsolationError.wrap(str(statement), exc)
        log.debug("Isolated statement failed: %s", error)
        raise error from exc
