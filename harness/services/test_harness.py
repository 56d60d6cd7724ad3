"""Top level driver: runs the test tree, prints the results and writes reports."""
from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Optional, TextIO

from harness.config.harness_config import HarnessConfiguration
from harness.core.context import TestContext
from harness.core.errors import ReportWriteFailed
from harness.core.node import TestNode
from harness.core.observers import TestProgressObserver
from harness.core.results import PassRate
from harness.core.sequence import TopTestSequence
from harness.reporting.junit_xml_writer import JUnitXMLWriter
from harness.services.logging_service import logging_service

logger = logging_service.get_logger(__name__)

PERSISTENT_STORAGE_ID = "persistent-storage"
TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"


class ReturnCode(IntEnum):
    OK = 0
    TEST_FAILURE = 1
    EXCEPTION = 2
    CONFIGURATION_PROBLEM = 3


@dataclass
class HarnessOutcome:
    return_code: ReturnCode
    pass_rate: Optional[PassRate] = None
    report_error: Optional[ReportWriteFailed] = None
    error: Optional[BaseException] = None


class TestHarness:
    """Owns the root context and the top level sequence of a test run."""

    __test__ = False

    def __init__(
        self,
        title: str,
        configuration: Optional[HarnessConfiguration] = None,
        stream: Optional[TextIO] = None,
        timestamp_output_directory: bool = True,
        now: Optional[datetime] = None,
    ) -> None:
        self.title = title
        self.configuration = configuration or HarnessConfiguration()
        self._stream = stream if stream is not None else sys.stdout
        self._context = TestContext.create_default()
        self._top_sequence = TopTestSequence(title, self._context)
        self._top_sequence.observers.add(TestProgressObserver(self._stream))

        config = self.configuration
        if config.context_data is not None:
            self._context.set_data_directory(config.context_data)
        if config.context_output is not None:
            self._context.set_output_directory(config.context_output)
        if config.context_reference is not None:
            self._context.set_reference_directory(config.context_reference)
        if config.context_application_path is not None:
            self._context.set_application_path(config.context_application_path)
        if config.persistent_storage is not None:
            self._context.set_output_directory(config.persistent_storage, PERSISTENT_STORAGE_ID)
        if timestamp_output_directory and self._context.get_output_directory() != Path(""):
            self._prepare_output_directory(now or datetime.now(timezone.utc))

    @property
    def context(self) -> TestContext:
        return self._context

    @property
    def tests(self) -> TopTestSequence:
        return self._top_sequence

    def _prepare_output_directory(self, now: datetime) -> None:
        stamp = now.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
        self._context.set_output_directory(self._context.get_output_directory() / stamp)

    def run(self) -> ReturnCode:
        return self.execute().return_code

    def execute(self) -> HarnessOutcome:
        try:
            self._write(f"Test Suite: {self.title}")
            return self._run_tests()
        except (Exception, SystemExit) as exc:
            logger.exception("Test suite %s aborted", self.title)
            return HarnessOutcome(ReturnCode.EXCEPTION, error=exc)

    def _run_tests(self) -> HarnessOutcome:
        self._write("")
        self._top_sequence.run()
        self._write("")

        self._print_detailed_results()
        pass_rate = self._top_sequence.get_pass_rate()
        failed = not self._top_sequence.passed() and not self._top_sequence.skipped()
        self._print_summary(pass_rate, failed)

        outcome = HarnessOutcome(
            ReturnCode.TEST_FAILURE if failed else ReturnCode.OK,
            pass_rate=pass_rate,
        )
        report_path = self.configuration.junit_xml_test_report
        if report_path:
            try:
                self.write_junit_xml_test_report(Path(report_path), pass_rate)
            except ReportWriteFailed as exc:
                logger.error("%s", exc)
                outcome.report_error = exc
        return outcome

    def _print_detailed_results(self) -> None:
        def _print_failure(test: TestNode) -> None:
            if not test.passed() and test.is_leaf_like():
                self._write(f"{test.name} {test.result}")

        self._top_sequence.traverse(_print_failure)

    def _print_summary(self, pass_rate: PassRate, failed: bool) -> None:
        self._write(pass_rate.describe())
        self._write("")
        self._write("Test Suite FAILED!!!" if failed else "Test Suite passed")

    def write_junit_xml_test_report(self, path: Path, pass_rate: Optional[PassRate] = None) -> None:
        if pass_rate is None:
            pass_rate = self._top_sequence.get_pass_rate()
        writer = JUnitXMLWriter(path)
        writer.begin_report()
        writer.begin_suite(pass_rate.total, self.title)
        self._top_sequence.traverse(lambda test: test.add_to_report(writer))
        writer.end_suite()
        writer.end_report()

    def _write(self, line: str) -> None:
        print(line, file=self._stream)
