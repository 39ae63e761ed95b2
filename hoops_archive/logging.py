"""Logging configuration using Loguru.

Console output goes to stderr so that CLI tables on stdout stay clean; file
output is rotated daily and written as JSON lines by default.

Example:
    >>> from hoops_archive.logging import setup_logging, get_logger
    >>> setup_logging(level="DEBUG", program="girls")
    >>> logger = get_logger(__name__)
    >>> logger.info("Loaded {} games", len(games))

Status Tags:
    >>> from hoops_archive.logging import SUCCESS, FAIL, WARN
    >>> logger.info(f"{SUCCESS} games.json migrated")
    >>> logger.warning(f"{WARN} Row 20251212202506 has more makes than attempts")
    >>> logger.error(f"{FAIL} players.json could not be parsed")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger

# Color-coded status tags for terminal output
SUCCESS = "\033[92m[SUCCESS]\033[0m"  # Green
FAIL = "\033[91m[FAIL]\033[0m"        # Red
WARN = "\033[93m[WARN]\033[0m"        # Yellow

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[program]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[program]} | "
    "{name}:{function}:{line} | {message}"
)


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (e.g. from jinja2 or pandas) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    level: str = "INFO",
    log_dir: str | Path = "logs",
    program: str = "boys",
    console: bool = True,
    rotation: str = "1 day",
    retention: str = "30 days",
    serialize: bool = True,
) -> None:
    """Configure application logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
        program: Program name attached to every record (boys or girls).
        console: Whether to add the colored stderr sink.
        rotation: When to rotate log files (e.g., "1 day", "10 MB").
        retention: How long to keep old log files.
        serialize: Whether to write JSON-formatted logs to file.
    """
    logger.remove()
    logger.configure(extra={"program": program})

    if console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_path / "hoops_archive_{time:YYYY-MM-DD}.log",
        level=level,
        format=FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        serialize=serialize,
        enqueue=True,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: str) -> Any:
    """Return the loguru logger bound with ``name``.

    Records emitted before :func:`setup_logging` runs still carry a
    ``program`` extra so the formats above never fail.
    """
    return logger.bind(name=name).patch(
        lambda record: record["extra"].setdefault("program", "-")
    )


__all__ = ["get_logger", "logger", "setup_logging", "SUCCESS", "FAIL", "WARN"]
