"""Exceptions raised by the test framework."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Union


class TestFrameworkError(Exception):
    """Base class for all harness errors."""

    __test__ = False


class DirectoryNotConfigured(TestFrameworkError):
    def __init__(self, role: str, id: str) -> None:
        super().__init__(f"No {role} directory found with id {id}")
        self.role = role
        self.id = id


class ApplicationPathNotSet(TestFrameworkError):
    def __init__(self) -> None:
        super().__init__("Application path not set")


class UnknownContextVariable(TestFrameworkError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown context variable: {name}")
        self.name = name


class ReportWriteFailed(TestFrameworkError):
    def __init__(self, path: Union[str, Path], cause: BaseException) -> None:
        super().__init__(f"Failed to write test report {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


class ObserverFailed(TestFrameworkError):
    """Raised by an observer during dispatch. Never propagates out of a run."""

    def __init__(self, observer: Any, cause: BaseException) -> None:
        super().__init__(f"Observer {observer!r} failed: {cause}")
        self.observer = observer
        self.cause = cause


class ConfigurationError(TestFrameworkError):
    pass
