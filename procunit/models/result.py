"""Models for test execution results."""

from dataclasses import dataclass
from typing import Literal, TypeAlias

TestStatus: TypeAlias = Literal["success", "failure", "error"]


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Result of a single test unit execution.

    ``failure`` means an assertion or a condition hook said no, ``error`` means
    anything else went wrong while running the unit.
    """

    __test__ = False

    name: str
    status: Literal["success", "failure", "error"]
    message: str
    duration: float
