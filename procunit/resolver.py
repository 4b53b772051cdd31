"""Resolve lifecycle hooks for test units by naming convention."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from procunit.catalog.base import RoutineCatalog
from procunit.config import HookKind, NamingConfig
from procunit.models.routine import Routine

log = logging.getLogger(__name__)


def candidate_names(
    unit_name: str,
    expected_prefix_tokens: int,
    marker: str,
    delimiter: str = "_",
) -> Sequence[str]:
    """Build hook names for a unit, most specific first.

    Args:
        unit_name: Name of the test unit (e.g., "test_case_company_finance")
        expected_prefix_tokens: Leading tokens that form the unit marker
        marker: Hook marker (e.g., "test_setup")
        delimiter: Token delimiter

    Returns:
        Candidate hook names from the full subject path down to its first
        token (e.g., ["test_setup_company_finance", "test_setup_company"]).
        Empty when the unit name has no subject path.

    """
    subject = unit_name.split(delimiter)[expected_prefix_tokens:]
    return [
        delimiter.join([marker, *subject[:length]])
        for length in range(len(subject), 0, -1)
    ]


async def resolve(
    catalog: RoutineCatalog,
    unit: Routine,
    expected_prefix_tokens: int,
    marker: str,
    delimiter: str = "_",
) -> Routine | None:
    """Return the most specific existing hook for a unit, if any.

    Hooks are looked up in the unit's own namespace only.
    """
    for name in candidate_names(unit.name, expected_prefix_tokens, marker, delimiter):
        if (hook := await catalog.find_routine(unit.namespace, name)) is not None:
            return hook
    return None


@dataclass(frozen=True, kw_only=True)
class HookResolver:
    """Resolves hooks of every kind using a fixed naming configuration."""

    catalog: RoutineCatalog
    naming: NamingConfig = field(default_factory=NamingConfig)

    async def resolve(self, unit: Routine, kind: HookKind) -> Routine | None:
        """Resolve the hook of the given kind for a unit."""
        hook = await resolve(
            self.catalog,
            unit,
            self.naming.prefix_token_count,
            self.naming.marker(kind),
            self.naming.delimiter,
        )
        if hook is not None:
            log.debug("Resolved %s hook for %s: %s", kind, unit.name, hook.name)
        return hook
