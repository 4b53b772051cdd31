"""Configuration for the test runner."""

from collections.abc import Mapping
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class HookKind(StrEnum):
    """Lifecycle hooks that can be attached to a test unit."""

    SETUP = "setup"
    PRECONDITION = "precondition"
    POSTCONDITION = "postcondition"
    TEARDOWN = "teardown"


class NamingConfig(BaseModel):
    """Naming conventions used to discover units and resolve their hooks.

    A unit named ``test_case_company_finance_invoice`` has the subject path
    ``company_finance_invoice``; its setup hook is the first of
    ``test_setup_company_finance_invoice``, ``test_setup_company_finance`` and
    ``test_setup_company`` that exists.
    """

    model_config = ConfigDict(frozen=True)

    delimiter: str = Field(default="_", min_length=1)
    test_case: str = "test_case"
    setup: str = "test_setup"
    precondition: str = "test_precondition"
    postcondition: str = "test_postcondition"
    teardown: str = "test_teardown"

    @property
    def prefix_token_count(self) -> int:
        """Number of leading name tokens that make up the unit marker."""
        return len(self.test_case.split(self.delimiter))

    def marker(self, kind: HookKind) -> str:
        """Return the name marker for a hook kind."""
        markers: Mapping[HookKind, str] = {
            HookKind.SETUP: self.setup,
            HookKind.PRECONDITION: self.precondition,
            HookKind.POSTCONDITION: self.postcondition,
            HookKind.TEARDOWN: self.teardown,
        }
        return markers[kind]

    def unit_prefix(self, suite: str | None = None) -> str:
        """Return the literal name prefix shared by all units of a suite."""
        return f"{self.test_case}{self.delimiter}{suite or ''}"


class RunnerConfig(BaseModel):
    """Configuration for connecting to the database under test."""

    dsn: SecretStr
    command_timeout: float | None = None
    server_settings: dict[str, str] = Field(default_factory=dict)
    naming: NamingConfig = Field(default_factory=NamingConfig)
