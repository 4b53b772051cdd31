"""Abstract base class for routine catalogs."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from procunit.models.routine import Routine


@dataclass(frozen=True, kw_only=True)
class RoutineCatalog(ABC):
    """Registry of routines the runner can discover and invoke.

    Lookups always reflect the current state of the underlying store; nothing
    is cached between calls, so routines created by a setup hook are visible
    to the lookups that follow it.
    """

    @abstractmethod
    async def list_routines(self, prefix: str) -> Sequence[Routine]:
        """List routines whose name starts with the given literal prefix.

        Args:
            prefix: Exact name prefix (e.g., "test_case_billing")

        Returns:
            Matching routines ordered by name, then namespace

        """

    @abstractmethod
    async def find_routine(self, namespace: str, name: str) -> Routine | None:
        """Look up a routine by exact namespace and name.

        Args:
            namespace: Schema to search
            name: Exact routine name

        Returns:
            The routine, or None if it does not exist

        """

    async def exists(self, namespace: str, name: str) -> bool:
        """Check whether a routine with this exact name exists."""
        return await self.find_routine(namespace, name) is not None
