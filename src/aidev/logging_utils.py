"""Logging setup for the ai-developer CLI.

Log records go either to a file or to the shared rich console. The wait
spinner runs on that console too, so lines logged while it is live are
drawn above it instead of through it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.logging import RichHandler

from aidev.console import console

LOGGER_NAME = "aidev"
LEVEL_ENV = "AIDEV_LOG_LEVEL"
FILE_ENV = "AIDEV_LOG_FILE"

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _terminal_handler() -> logging.Handler:
    handler = RichHandler(
        console=console,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def configure_logging(log_level: str | None = None, log_file: str | None = None) -> logging.Logger:
    """Attach a handler to the ``aidev`` logger.

    Nothing is configured unless a level or a log file is given, as arguments
    or through AIDEV_LOG_LEVEL / AIDEV_LOG_FILE. A log file replaces terminal
    output; without a level it records warnings and above.

    Raises:
        ValueError: If the level is not a logging level name.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level_name = (log_level or os.getenv(LEVEL_ENV) or "").upper()
    log_file = log_file or os.getenv(FILE_ENV) or None
    if not (level_name or log_file):
        return logger

    level = logging.getLevelName(level_name or "WARNING")
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {level_name}")

    logger.handlers = [_file_handler(log_file) if log_file else _terminal_handler()]
    logger.setLevel(level)
    logger.propagate = False
    return logger


def abbreviate(text: str | None, limit: int = 200) -> str:
    """Shorten tool arguments or output to one log-friendly line."""
    if not text:
        return ""
    line = text.replace("\r", "").replace("\n", "\\n")
    return line if len(line) <= limit else line[:limit] + "..."
