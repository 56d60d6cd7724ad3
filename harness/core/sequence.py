"""Sequences of tests and the hidden top level sequence."""
from __future__ import annotations

from typing import Any, Callable, Iterator, List, Optional, Tuple, TypeVar, Union

from harness.core.context import TestContext
from harness.core.node import TestNode, TestNumber
from harness.core.observers import EventType
from harness.core.results import ResultState, aggregate

NodeT = TypeVar("NodeT", bound=TestNode)


class TestSequence(TestNode):
    """Ordered collection of tests and nested sequences."""

    def __init__(self, name: str, context: Optional[TestContext] = None) -> None:
        super().__init__(name, context)
        self._children: List[TestNode] = []

    def append(self, test: NodeT) -> NodeT:
        if test.parent is not None:
            raise ValueError(f"{test.name} already belongs to sequence {test.parent.name}")
        test._attach(self, self.number.child(len(self._children) + 1))
        self._children.append(test)
        return test

    @property
    def children(self) -> Tuple[TestNode, ...]:
        return tuple(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[TestNode]:
        return iter(self._children)

    def __getitem__(self, index: int) -> TestNode:
        return self._children[index]

    @property
    def result(self) -> ResultState:
        return aggregate(child.result for child in self._children)

    def is_leaf_like(self) -> bool:
        return not self._children

    def run(self) -> None:
        self.notify(EventType.START)
        for child in list(self._children):
            child.run()
        self.notify(EventType.END)

    def traverse(self, visitor: Callable[[TestNode], Any]) -> None:
        visitor(self)
        for child in self._children:
            child.traverse(visitor)

    def find(self, number: Union[TestNumber, str]) -> Optional[TestNode]:
        """Return the node with the given number in this subtree."""
        if isinstance(number, str):
            number = TestNumber.parse(number)
        if number == self.number:
            return self
        for child in self._children:
            if number.parts[: len(child.number.parts)] != child.number.parts:
                continue
            if isinstance(child, TestSequence):
                return child.find(number)
            return child if child.number == number else None
        return None

    def _set_number(self, number: TestNumber) -> None:
        super()._set_number(number)
        for index, child in enumerate(self._children, start=1):
            child._set_number(number.child(index))


class TopTestSequence(TestSequence):
    """Root of the tree owned by the harness.

    It never reports its own start and end, only those of its descendants.
    """

    def notify(self, event_type: EventType) -> None:
        pass
