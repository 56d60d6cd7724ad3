"""Result states and the rules used to combine them."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class ResultState(Enum):
    """Outcome of a test node."""

    UNKNOWN = "unknown"
    PASSED = "passed"
    PASSED_WITH_WARNING = "passed with warning"
    SKIPPED = "skipped"
    FAILED = "failed"
    EXCEPTION = "exception"

    def __str__(self) -> str:
        return self.value

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def is_passing(self) -> bool:
        return self in (ResultState.PASSED, ResultState.PASSED_WITH_WARNING)


_SEVERITY = {
    ResultState.UNKNOWN: 0,
    ResultState.PASSED: 1,
    ResultState.PASSED_WITH_WARNING: 2,
    ResultState.SKIPPED: 3,
    ResultState.FAILED: 4,
    ResultState.EXCEPTION: 5,
}


def worst(current: ResultState, other: ResultState) -> ResultState:
    """Return the more severe of two states."""
    return other if other.severity > current.severity else current


def aggregate(states: Iterable[ResultState]) -> ResultState:
    """Combine the results of the children of a sequence.

    Unknown children are ignored unless every child is unknown. Skipped
    children only decide the outcome when every known child was skipped,
    otherwise the most severe of the remaining states wins.
    """
    known = [state for state in states if state is not ResultState.UNKNOWN]
    if not known:
        return ResultState.UNKNOWN
    ran = [state for state in known if state is not ResultState.SKIPPED]
    if not ran:
        return ResultState.SKIPPED
    return max(ran, key=lambda state: state.severity)


@dataclass
class PassRate:
    """Per category counts of the leaf-like nodes of a tree."""

    unknown: int = 0
    passed: int = 0
    passed_with_warning: int = 0
    exception: int = 0
    failed: int = 0
    skipped: int = 0
    total: int = 0

    def add(self, state: ResultState) -> None:
        if state is ResultState.UNKNOWN:
            self.unknown += 1
        elif state is ResultState.PASSED:
            self.passed += 1
        elif state is ResultState.PASSED_WITH_WARNING:
            self.passed_with_warning += 1
        elif state is ResultState.EXCEPTION:
            self.exception += 1
        elif state is ResultState.FAILED:
            self.failed += 1
        elif state is ResultState.SKIPPED:
            self.skipped += 1
        self.total += 1

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return 100 * self.passed / self.total

    def describe(self) -> str:
        return (
            f"Pass rate: {self.percentage:.2f}% ("
            f"{self.unknown} unknown, "
            f"{self.passed} passed, "
            f"{self.passed_with_warning} passed with warning, "
            f"{self.exception} threw exceptions, "
            f"{self.failed} failed, "
            f"{self.skipped} skipped, "
            f"{self.total} total)"
        )
