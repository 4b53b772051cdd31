"""Evaluation of precondition and postcondition hooks."""

import asyncpg

from procunit.errors import ConditionFailedError
from procunit.models.routine import Routine


async def check(connection: asyncpg.Connection, routine: Routine) -> None:
    """Evaluate a boolean hook and raise unless it returns true.

    A false or NULL result raises ConditionFailedError, which classifies
    exactly like an assertion failure inside the test body.
    """
    if await connection.fetchval(routine.invocation) is True:
        return
    raise ConditionFailedError(routine.display_name)
