"""JUnit XML test report writer."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Union
from xml.sax.saxutils import escape, quoteattr

from harness.core.errors import ReportWriteFailed
from harness.core.results import ResultState
from harness.services.logging_service import logging_service

logger = logging_service.get_logger(__name__)


class JUnitXMLWriter:
    """Collects results and persists them as a JUnit XML document.

    Calls are expected in the order ``begin_report``, ``begin_suite``, any
    number of ``add_result``, ``end_suite`` and ``end_report``. The file is
    written by ``end_report``; missing parent directories are created.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lines: List[str] = []

    def begin_report(self) -> None:
        self._lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<testsuites>"]

    def begin_suite(self, total: int, name: Optional[str] = None) -> None:
        name_attr = f" name={quoteattr(name)}" if name else ""
        self._lines.append(f'  <testsuite{name_attr} tests="{total}">')

    def add_result(
        self,
        name: str,
        number: str,
        state: ResultState,
        diagnostics: Iterable[str] = (),
    ) -> None:
        details = "\n".join(diagnostics)
        opening = f"    <testcase name={quoteattr(name)} classname={quoteattr(number)}"
        if state is ResultState.PASSED and not details:
            self._lines.append(f"{opening}/>")
            return

        self._lines.append(f"{opening}>")
        message = quoteattr(details or str(state))
        if state is ResultState.FAILED:
            self._lines.append(f"      <failure message={message}/>")
        elif state is ResultState.EXCEPTION:
            self._lines.append(f"      <error message={message}/>")
        elif state is ResultState.UNKNOWN:
            self._lines.append(f'      <failure type="unknown" message={message}/>')
        elif state is ResultState.SKIPPED:
            self._lines.append("      <skipped/>")
        if details:
            self._lines.append(f"      <system-out>{escape(details)}</system-out>")
        self._lines.append("    </testcase>")

    def end_suite(self) -> None:
        self._lines.append("  </testsuite>")

    def end_report(self) -> None:
        self._lines.append("</testsuites>")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("\n".join(self._lines) + "\n", encoding="utf-8")
        except OSError as exc:
            raise ReportWriteFailed(self.path, exc) from exc
        logger.info("JUnit XML report written to %s", self.path)
