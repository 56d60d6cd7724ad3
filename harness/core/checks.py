"""Assertions evaluated while a test runs."""
from __future__ import annotations

from abc import ABC, abstractmethod
from itertools import zip_longest
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

from harness.core.context import PathResolution, TestContext
from harness.core.results import ResultState

if TYPE_CHECKING:
    from harness.core.node import Test


class TestCheck(ABC):
    """An assertion bound to the test currently running."""

    __test__ = False

    def __init__(self) -> None:
        self.result = ResultState.UNKNOWN

    def run(self, test: "Test") -> ResultState:
        self.result = self.evaluate()
        test.record_check(self)
        return self.result

    @abstractmethod
    def evaluate(self) -> ResultState:
        """Return PASSED or FAILED."""

    def diagnostics(self) -> List[str]:
        return []


class ConditionCheck(TestCheck):
    def __init__(self, condition: bool, message: Optional[str] = None) -> None:
        super().__init__()
        self.condition = condition
        self.message = message

    def evaluate(self) -> ResultState:
        return ResultState.PASSED if self.condition else ResultState.FAILED

    def diagnostics(self) -> List[str]:
        if self.result is ResultState.FAILED and self.message:
            return [self.message]
        return []


class FileComparisonTestCheck(TestCheck):
    """Compares a generated file with its reference, line by line."""

    def __init__(self, output_file_path: Union[str, Path], reference_file_path: Union[str, Path]) -> None:
        super().__init__()
        self.output_file_path = Path(output_file_path)
        self.reference_file_path = Path(reference_file_path)
        self.first_different_line: Optional[str] = None
        self.first_different_line_number: Optional[int] = None
        self._problem: Optional[str] = None

    @classmethod
    def create_from_context(
        cls,
        context: TestContext,
        output_file_path: Union[str, Path],
        reference_file_path: Optional[Union[str, Path]] = None,
        resolution: PathResolution = PathResolution.NONE,
    ) -> "FileComparisonTestCheck":
        """Build a check from paths relative to the output and reference directories.

        When *reference_file_path* is omitted the output and the reference
        file share the same relative path.
        """
        if reference_file_path is None:
            reference_file_path = output_file_path
        return cls(
            context.get_output_path(output_file_path),
            context.get_reference_path(reference_file_path, resolution),
        )

    def evaluate(self) -> ResultState:
        self.first_different_line = None
        self.first_different_line_number = None
        self._problem = None
        if not self.output_file_path.exists():
            self._problem = f"output file {self.output_file_path} not found"
            return ResultState.FAILED
        if not self.reference_file_path.exists():
            self._problem = f"reference file {self.reference_file_path} not found"
            return ResultState.FAILED

        output_lines = _read_lines(self.output_file_path)
        reference_lines = _read_lines(self.reference_file_path)
        for number, (output, reference) in enumerate(zip_longest(output_lines, reference_lines), start=1):
            if output != reference:
                self.first_different_line_number = number
                self.first_different_line = "" if output is None else output
                self._problem = (
                    f"{self.output_file_path} differs from {self.reference_file_path} "
                    f"at line {number}: {self.first_different_line!r}"
                )
                return ResultState.FAILED
        return ResultState.PASSED

    def diagnostics(self) -> List[str]:
        return [self._problem] if self._problem else []


def _read_lines(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8") as file:
        return [line.rstrip("\r\n") for line in file]
