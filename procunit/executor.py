"""Suite executor coordinating discovery and execution of test units."""

import logging
import time
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

import asyncpg

from procunit.catalog.base import RoutineCatalog
from procunit.config import HookKind, NamingConfig
from procunit.errors import FailureKind, IsolationError
from procunit.isolation import Call, Statement, run_isolated
from procunit.models.result import TestResult, TestStatus
from procunit.models.routine import Routine
from procunit.resolver import HookResolver

log = logging.getLogger(__name__)

STATUS_BY_KIND: dict[FailureKind, TestStatus] = {
    FailureKind.ASSERTION_FAILURE: "failure",
    FailureKind.ENVIRONMENT_ERROR: "error",
}


@dataclass(frozen=True, kw_only=True)
class SuiteExecutor:
    """Discovers test units and runs each through its full lifecycle.

    Units run one at a time on a single connection. For every unit the setup
    hook runs first, then precondition, body and postcondition share a single
    isolation boundary, and the teardown hook runs last.
    """

    catalog: RoutineCatalog
    connection: asyncpg.Connection = field(repr=False)
    naming: NamingConfig = field(default_factory=NamingConfig)

    @property
    def resolver(self) -> HookResolver:
        return HookResolver(catalog=self.catalog, naming=self.naming)

    async def run_all(self) -> AsyncIterator[TestResult]:
        """Run every discovered test unit."""
        async for result in self.run_suite(None):
            yield result

    async def run_suite(self, suite: str | None = None) -> AsyncIterator[TestResult]:
        """Run all test units of a suite, yielding results as they complete.

        Args:
            suite: Name prefix following the unit marker (e.g., "billing"
                selects "test_case_billing*"); None runs everything

        Yields:
            One result per discovered unit, in name order

        Raises:
            IsolationError: If a setup or teardown hook fails

        """
        units = await self.catalog.list_routines(self.naming.unit_prefix(suite))
        log.info("Discovered %d test unit(s) for suite %s", len(units), suite or "*")

        for unit in units:
            await self._run_hook(unit, HookKind.SETUP)
            try:
                result = await self._run_measured(unit)
                log.info(
                    "Test completed: name=%s status=%s duration=%.3fs",
                    result.name,
                    result.status,
                    result.duration,
                )
                yield result
            finally:
                await self._run_hook(unit, HookKind.TEARDOWN)

    async def _run_hook(self, unit: Routine, kind: HookKind) -> None:
        """Run a setup or teardown hook, letting failures propagate."""
        hook = await self.resolver.resolve(unit, kind)
        if hook is None:
            return
        log.debug("Running %s hook %s", kind, hook.display_name)
        await run_isolated(self.connection, Statement.of(hook))

    async def _build_statement(self, unit: Routine) -> Statement:
        """Combine precondition, unit and postcondition into one statement."""
        precondition = await self.resolver.resolve(unit, HookKind.PRECONDITION)
        postcondition = await self.resolver.resolve(unit, HookKind.POSTCONDITION)

        calls: list[Call] = []
        if precondition is not None:
            calls.append(Call(routine=precondition, condition=True))
        calls.append(Call(routine=unit))
        if postcondition is not None:
            calls.append(Call(routine=postcondition, condition=True))
        return Statement(calls)

    async def _run_measured(self, unit: Routine) -> TestResult:
        """Run the conditions and the unit itself and classify the outcome."""
        statement = await self._build_statement(unit)

        start = time.perf_counter()
        try:
            await run_isolated(self.connection, statement)
        except IsolationError as exc:
            status = STATUS_BY_KIND[exc.kind]
            message = str(exc)
        else:
            status = "success"
            message = "OK"
        duration = time.perf_counter() - start

        return TestResult(
            name=unit.display_name,
            status=status,
            message=message,
            duration=duration,
        )
