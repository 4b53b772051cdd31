"""Models for routines found in the database catalog."""

from typing import Literal

from pydantic import Field

from procunit.models.base import Model


def quote_ident(identifier: str) -> str:
    """Quote an SQL identifier, doubling any embedded quotes."""
    return '"' + identifier.replace('"', '""') + '"'


class Routine(Model):
    """A zero-argument routine stored in the database.

    Used both for discovered test units and for resolved hooks.
    """

    namespace: str = Field(..., description="Schema the routine lives in")
    name: str = Field(..., description="Routine name, unqualified")
    kind: Literal["function", "procedure"] = Field(
        default="function", description="Whether the routine is called or selected"
    )

    @property
    def display_name(self) -> str:
        """Name used in results and messages (``namespace.name``)."""
        return f"{self.namespace}.{self.name}"

    @property
    def qualified_name(self) -> str:
        """Quoted, schema-qualified name safe to embed in SQL."""
        return f"{quote_ident(self.namespace)}.{quote_ident(self.name)}"

    @property
    def invocation(self) -> str:
        """SQL that invokes the routine without arguments."""
        if self.kind == "procedure":
            return f"CALL {self.qualified_name}()"
        return f"SELECT {self.qualified_name}()"


class TerminatedSession(Model):
    """A backend session that was asked to terminate."""

    pid: int
    query: str | None = None
    terminated: bool
