"""Command line entry point shared by test executables."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from harness.config.harness_config import OPTION_NAMES, HarnessConfiguration, load_configuration
from harness.core.errors import ConfigurationError
from harness.services.logging_service import logging_service
from harness.services.test_harness import ReturnCode, TestHarness

logger = logging_service.get_logger(__name__)

Populate = Callable[[TestHarness], None]


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="Run a test suite.")
    parser.add_argument("--config", type=Path, help="JSON file with harness options")
    for name in OPTION_NAMES:
        parser.add_argument(f"--{name}", dest=name, metavar="VALUE")
    return parser


def parse_configuration(argv: Optional[Sequence[str]] = None) -> HarnessConfiguration:
    args = build_parser().parse_args(argv)
    options = vars(args)
    config_file = options.pop("config")
    return load_configuration(config_file, options)


def run_main(title: str, populate: Populate, argv: Optional[List[str]] = None) -> int:
    """Build a harness from the command line, let *populate* add tests, and run it."""
    try:
        configuration = parse_configuration(argv)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return int(ReturnCode.CONFIGURATION_PROBLEM)

    logging_service.configure(configuration.log_level)
    harness = TestHarness(title, configuration)
    try:
        populate(harness)
    except Exception:
        logger.exception("Failed to build test suite %s", title)
        return int(ReturnCode.EXCEPTION)
    return int(harness.run())


def main(title: str, populate: Populate) -> None:
    sys.exit(run_main(title, populate))
