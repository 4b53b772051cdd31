"""Error types and outcome classification."""

from enum import StrEnum

# triggered_action_exception, raised by every assertion helper
FAILURE_SQLSTATE = "09000"


class FailureKind(StrEnum):
    """Why a unit of work did not complete."""

    ASSERTION_FAILURE = "assertion_failure"
    ENVIRONMENT_ERROR = "environment_error"


def classify(sqlstate: str | None) -> FailureKind:
    """Map an SQLSTATE to the kind of failure it signals."""
    if sqlstate == FAILURE_SQLSTATE:
        return FailureKind.ASSERTION_FAILURE
    return FailureKind.ENVIRONMENT_ERROR


class ConditionFailedError(Exception):
    """Raised when a precondition or postcondition hook does not return true."""

    sqlstate = FAILURE_SQLSTATE

    def __init__(self, routine_name: str) -> None:
        self.routine_name = routine_name
        self.message = f"Condition failure: {routine_name}()"
        self.detail: str | None = None
        super().__init__(self.message)


class IsolationError(Exception):
    """Raised when a statement run inside an isolation boundary fails.

    Keeps the SQLSTATE of the original error so callers can tell assertion
    failures apart from environment errors, and embeds the executed statement
    together with the original diagnostics.
    """

    def __init__(
        self,
        *,
        sqlstate: str,
        statement: str,
        message: str,
        detail: str | None = None,
    ) -> None:
        self.sqlstate = sqlstate
        self.kind = classify(sqlstate)
        self.statement = statement
        self.message = message
        self.detail = detail
        super().__init__(self.describe())

    def describe(self) -> str:
        """Format the diagnostic envelope."""
        text = f"{self.sqlstate}: Error on executing: {self.statement} {self.message}"
        if self.detail:
            text = f"{text} {self.detail}"
        return text

    @classmethod
    def wrap(cls, statement: str, exc: Exception) -> "IsolationError":
        """Build an envelope around an error raised by a database call."""
        return cls(
            sqlstate=getattr(exc, "sqlstate", None) or "XX000",
            statement=statement,
            message=getattr(exc, "message", None) or str(exc),
            detail=getattr(exc, "detail", None),
        )
