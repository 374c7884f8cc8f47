"""
Logging for ci-baseline.

All package loggers hang below ``ci_baseline``. Console records are rendered
by rich (or as JSON lines) on stderr, so reports written to stdout stay
machine readable. Component loggers attach ``key=value`` context to each
record.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

ROOT_LOGGER_NAME = "ci_baseline"
FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the component context attached."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _level_number(level: str) -> int:
    number = getattr(logging, level.upper(), None)
    return number if isinstance(number, int) else logging.INFO


def _console_handler(level: int, json_format: bool) -> logging.Handler:
    handler: logging.Handler
    if json_format:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JSONFormatter())
    else:
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(level)
    return handler


def _file_handler(log_file: Path, json_format: bool) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(FILE_FORMAT))
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Configure the ``ci_baseline`` logger tree.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Also write every record to this rotating file
        json_format: Emit JSON lines instead of rich console output

    Returns:
        The package root logger
    """
    number = _level_number(level)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(logging.DEBUG if log_file else number)
    root.addHandler(_console_handler(number, json_format))
    if log_file:
        root.addHandler(_file_handler(log_file, json_format))
    root.propagate = False
    return root


class ComponentLogger:
    """Logger for one component, adding ``key=value`` context to messages."""

    def __init__(self, component: str, parent: Optional[str] = None):
        self.component = component
        parts = [ROOT_LOGGER_NAME, parent, component]
        self.logger = logging.getLogger(".".join(p for p in parts if p))

    def _log(self, level: int, msg: str, context: dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        text = " | ".join([msg, *(f"{k}={v}" for k, v in context.items())])
        self.logger.log(level, text, extra={"context": {"component": self.component, **context}})

    def debug(self, msg: str, **context: Any) -> None:
        self._log(logging.DEBUG, msg, context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(logging.INFO, msg, context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(logging.WARNING, msg, context)


def get_logger(component: str, parent: Optional[str] = None) -> ComponentLogger:
    """Return the logger for ``component``, optionally nested under ``parent``."""
    return ComponentLogger(component, parent)
