"""Structured logging for PineSage.

All handlers write to stderr: when the MCP server runs on stdio, stdout
carries the JSON-RPC stream and must stay clean.
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Union

ROOT_LOGGER = "pinesage"

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
}
_RESET = "\033[0m"


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class HumanFormatter(logging.Formatter):
    """Readable single-line format, optionally colored by level."""

    def __init__(self, use_colors: bool = True):
        super().__init__(datefmt="%H:%M:%S")
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if self.use_colors and level in _LEVEL_COLORS:
            level = f"{_LEVEL_COLORS[level]}{level:<8}{_RESET}"
        else:
            level = f"{level:<8}"
        line = f"{self.formatTime(record, self.datefmt)} {level} {record.name}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: Union[str, int] = "INFO",
    json_format: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Configure the ``pinesage`` logger.

    Args:
        level: Log level name or number.
        json_format: Emit JSON records instead of human-readable lines.
        log_file: Optional file receiving the same records.

    Returns:
        The configured root PineSage logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(
        JSONFormatter() if json_format else HumanFormatter(use_colors=sys.stderr.isatty())
    )
    logger.addHandler(stream)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter() if json_format else HumanFormatter(use_colors=False))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``pinesage`` namespace."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


@contextmanager
def log_operation(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
) -> Iterator[None]:
    """Log the start and completion time of an operation."""
    start = time.perf_counter()
    logger.log(level, f"{operation} started")
    try:
        yield
    except Exception as e:
        elapsed = (time.perf_counter() - start) * 1000
        logger.log(logging.ERROR, f"{operation} failed after {elapsed:.1f}ms: {e}")
        raise
    elapsed = (time.perf_counter() - start) * 1000
    logger.log(level, f"{operation} completed in {elapsed:.1f}ms")
