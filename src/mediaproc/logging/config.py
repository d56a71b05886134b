"""Root logger setup from LoggingConfig."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

from mediaproc.logging.context import OperationContextFilter
from mediaproc.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from mediaproc.config.models import LoggingConfig

TEXT_FORMAT = "%(asctime)s - %(operation_tag)s%(name)s - %(levelname)s - %(message)s"


def _file_handler(config: LoggingConfig) -> logging.Handler | None:
    path = config.file.expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to ``config``.

    Logs go to the rotating file when one is configured, and to stderr
    when no file is set, when it cannot be opened, or when
    ``include_stderr`` asks for both.
    """
    handlers: list[logging.Handler] = []
    if config.file:
        if handler := _file_handler(config):
            handlers.append(handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    if config.format.lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")

    context_filter = OperationContextFilter()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(config.level.upper())
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)
