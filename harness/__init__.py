"""Hierarchical test harness: test trees, result aggregation and test contexts."""

from harness.core.checks import ConditionCheck, FileComparisonTestCheck, TestCheck
from harness.core.context import DEFAULT_ID, PathResolution, TestContext
from harness.core.errors import (
    ApplicationPathNotSet,
    ConfigurationError,
    DirectoryNotConfigured,
    ObserverFailed,
    ReportWriteFailed,
    TestFrameworkError,
    UnknownContextVariable,
)
from harness.core.node import Test, TestNode, TestNumber
from harness.core.observers import EventType, ObserverRegistry, TestObserver, TestProgressObserver
from harness.core.results import PassRate, ResultState, aggregate
from harness.core.sequence import TestSequence, TopTestSequence
from harness.config.harness_config import HarnessConfiguration, load_configuration
from harness.services.test_harness import HarnessOutcome, ReturnCode, TestHarness

__all__ = [
    "ApplicationPathNotSet",
    "ConditionCheck",
    "ConfigurationError",
    "DEFAULT_ID",
    "DirectoryNotConfigured",
    "EventType",
    "FileComparisonTestCheck",
    "HarnessConfiguration",
    "HarnessOutcome",
    "ObserverFailed",
    "ObserverRegistry",
    "PassRate",
    "PathResolution",
    "ReportWriteFailed",
    "ResultState",
    "ReturnCode",
    "Test",
    "TestCheck",
    "TestContext",
    "TestFrameworkError",
    "TestHarness",
    "TestNode",
    "TestNumber",
    "TestObserver",
    "TestProgressObserver",
    "TestSequence",
    "TopTestSequence",
    "UnknownContextVariable",
    "aggregate",
    "load_configuration",
]
