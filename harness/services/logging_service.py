"""Harness wide logging helpers."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class LoggingService:
    """Central logging configuration helper."""

    def __init__(self) -> None:
        self._configured = False

    @property
    def configured(self) -> bool:
        return self._configured

    def configure(self, level: Union[int, str] = logging.WARNING, log_file: Optional[Path] = None) -> None:
        if self._configured:
            return
        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file))

        logging.basicConfig(
            level=level.upper() if isinstance(level, str) else level,
            format=LOG_FORMAT,
            handlers=handlers,
        )
        self._configured = True

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        return logging.getLogger(name)


logging_service = LoggingService()
