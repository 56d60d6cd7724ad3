"""Lifecycle notifications sent to observers while a test tree runs."""
from __future__ import annotations

import sys
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, TextIO

from harness.core.errors import ObserverFailed
from harness.services.logging_service import logging_service

if TYPE_CHECKING:
    from harness.core.node import TestNode

logger = logging_service.get_logger(__name__)


class EventType(Enum):
    START = "start"
    END = "end"


class TestObserver:
    """Base class for objects interested in test lifecycle events."""

    __test__ = False

    def on_lifecycle_event(self, event_type: EventType, test: "TestNode") -> None:
        pass


class ObserverRegistry:
    """Observers attached to a node, notified in registration order."""

    def __init__(self) -> None:
        self._observers: List[TestObserver] = []

    def add(self, observer: TestObserver) -> None:
        self._observers.append(observer)

    def __iter__(self) -> Iterator[TestObserver]:
        return iter(list(self._observers))

    def __len__(self) -> int:
        return len(self._observers)

    def notify(self, event_type: EventType, test: "TestNode") -> None:
        for observer in self:
            try:
                observer.on_lifecycle_event(event_type, test)
            except Exception as exc:
                failure = ObserverFailed(observer, exc)
                logger.warning("%s (event %s for %s)", failure, event_type.value, test.name)


class TestProgressObserver(TestObserver):
    """Prints a line when a test starts and when it completes."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def on_lifecycle_event(self, event_type: EventType, test: "TestNode") -> None:
        indent = "    " * max(test.depth - 1, 0)
        if event_type is EventType.START:
            print(f"{indent}{test.name} started", file=self._stream)
        else:
            print(f"{indent}{test.name} completed, result is {test.result}", file=self._stream)
