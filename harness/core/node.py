"""Base test node and the leaf test."""
from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple, Union

from harness.core.checks import ConditionCheck, FileComparisonTestCheck, TestCheck
from harness.core.context import PathResolution, TestContext
from harness.core.observers import EventType, ObserverRegistry
from harness.core.results import PassRate, ResultState, worst
from harness.services.logging_service import logging_service

if TYPE_CHECKING:
    from harness.core.sequence import TestSequence
    from harness.reporting.junit_xml_writer import JUnitXMLWriter

logger = logging_service.get_logger(__name__)


@dataclass(frozen=True)
class TestNumber:
    """Dotted position of a node in the tree, e.g. ``1.2.3``."""

    __test__ = False

    parts: Tuple[int, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "TestNumber":
        if not text:
            return cls()
        return cls(tuple(int(part) for part in text.split(".")))

    def child(self, index: int) -> "TestNumber":
        return TestNumber(self.parts + (index,))

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.parts)


class TestNode(ABC):
    """A unit of the test tree, either a leaf test or a sequence."""

    __test__ = False

    def __init__(self, name: str, context: Optional[TestContext] = None) -> None:
        self.name = name
        self.context = context if context is not None else TestContext()
        self.observers = ObserverRegistry()
        self.diagnostics: List[str] = []
        self._number = TestNumber()
        self._result = ResultState.UNKNOWN
        self._parent_ref: Optional[weakref.ReferenceType] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._number} {self.name!r} {self._result}>"

    @property
    def number(self) -> TestNumber:
        return self._number

    @property
    def parent(self) -> Optional["TestSequence"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def depth(self) -> int:
        parent = self.parent
        return 0 if parent is None else parent.depth + 1

    @property
    def result(self) -> ResultState:
        return self._result

    def passed(self) -> bool:
        return self.result.is_passing()

    def skipped(self) -> bool:
        return self.result is ResultState.SKIPPED

    def is_leaf_like(self) -> bool:
        return True

    @abstractmethod
    def run(self) -> None:
        """Execute the node and record its result."""

    def traverse(self, visitor: Callable[["TestNode"], Any]) -> None:
        visitor(self)

    def get_pass_rate(self) -> PassRate:
        rate = PassRate()

        def _count(node: TestNode) -> None:
            if node.is_leaf_like():
                rate.add(node.result)

        self.traverse(_count)
        return rate

    def notify(self, event_type: EventType) -> None:
        registries: List[ObserverRegistry] = []
        node: Optional[TestNode] = self
        while node is not None:
            registries.append(node.observers)
            node = node.parent
        for registry in reversed(registries):
            registry.notify(event_type, self)

    def add_to_report(self, writer: "JUnitXMLWriter") -> None:
        if self.is_leaf_like():
            writer.add_result(self.name, str(self.number), self.result, self.diagnostics)

    def _attach(self, parent: "TestSequence", number: TestNumber) -> None:
        if self.context is not parent.context:
            current = self.context.parent
            if current is not None and current is not parent.context:
                raise ValueError(f"The context of {self.name} already belongs to another context tree")
            self.context.attach(parent.context)
        self._parent_ref = weakref.ref(parent)
        self._set_number(number)

    def _set_number(self, number: TestNumber) -> None:
        self._number = number


class Test(TestNode):
    """Leaf test running a handler that records its outcome through checks."""

    def __init__(
        self,
        name: str,
        handler: Optional[Callable[["Test"], Any]] = None,
        context: Optional[TestContext] = None,
    ) -> None:
        super().__init__(name, context)
        self._handler = handler
        self._passed_checks = 0

    def run(self) -> None:
        self._result = ResultState.UNKNOWN
        self._passed_checks = 0
        self.diagnostics = []
        self.notify(EventType.START)
        try:
            self.do_run()
            if self._result is ResultState.UNKNOWN and self._passed_checks > 0:
                self._result = ResultState.PASSED
        except Exception as exc:
            logger.error("Test %s %s raised %s: %s", self.number, self.name, type(exc).__name__, exc)
            self.record(ResultState.EXCEPTION)
            self.diagnostics.append(f"{type(exc).__name__}: {exc}")
        self.notify(EventType.END)

    def do_run(self) -> None:
        if self._handler is not None:
            self._handler(self)

    def record(self, state: ResultState) -> None:
        """Apply an outcome, keeping the current one if it is more severe."""
        self._result = worst(self._result, state)

    def mark_passed(self) -> None:
        self.record(ResultState.PASSED)

    def mark_passed_with_warning(self, message: Optional[str] = None) -> None:
        self.record(ResultState.PASSED_WITH_WARNING)
        if message:
            self.diagnostics.append(message)

    def mark_failed(self, message: Optional[str] = None) -> None:
        self.record(ResultState.FAILED)
        if message:
            self.diagnostics.append(message)

    def mark_skipped(self) -> None:
        self.record(ResultState.SKIPPED)

    def record_check(self, check: TestCheck) -> None:
        if check.result is ResultState.PASSED:
            self._passed_checks += 1
            return
        self.record(check.result)
        self.diagnostics.extend(check.diagnostics())

    def check(self, condition: bool, message: Optional[str] = None) -> bool:
        return ConditionCheck(condition, message).run(self) is ResultState.PASSED

    def check_equal(self, actual: Any, expected: Any) -> bool:
        return self.check(actual == expected, f"{actual!r} != {expected!r}")

    def check_file(
        self,
        output: Union[str, Path],
        reference: Optional[Union[str, Path]] = None,
        resolution: PathResolution = PathResolution.NONE,
    ) -> bool:
        check = FileComparisonTestCheck.create_from_context(self.context, output, reference, resolution)
        return check.run(self) is ResultState.PASSED
