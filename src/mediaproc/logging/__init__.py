"""Structured logging for mediaproc."""

from mediaproc.logging.config import configure_logging
from mediaproc.logging.context import (
    OperationContextFilter,
    clear_operation_context,
    get_operation_context,
    operation_context,
    set_operation_context,
)
from mediaproc.logging.handlers import JSONFormatter

__all__ = [
    "configure_logging",
    "JSONFormatter",
    "OperationContextFilter",
    "operation_context",
    "set_operation_context",
    "clear_operation_context",
    "get_operation_context",
]
