"""Operation context for structured logging.

Tracks the composite operation and output currently being produced using
contextvars, so every log record emitted while it runs can be tagged.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_output: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "output", default=None
)


def set_operation_context(operation: str, output: str | None = None) -> None:
    """Set the current operation context.

    Args:
        operation: Operation name (e.g., "overlay", "concat").
        output: Storage key of the output being produced, or None.
    """
    _operation.set(operation)
    _output.set(output)


def clear_operation_context() -> None:
    """Clear the current operation context."""
    _operation.set(None)
    _output.set(None)


def get_operation_context() -> tuple[str | None, str | None]:
    """Get current operation context.

    Returns:
        Tuple of (operation, output), either may be None.
    """
    return _operation.get(), _output.get()


@contextmanager
def operation_context(
    operation: str, output: str | None = None
) -> Generator[None, None, None]:
    """Context manager for an operation.

    Sets the context on entry and restores the previous one on exit, so
    nested operations report the innermost name.

    Example:
        with operation_context("overlay", "out.mp4"):
            logger.info("Normalizing inputs")  # tagged [overlay:out.mp4]
    """
    old_operation = _operation.get()
    old_output = _output.get()
    try:
        set_operation_context(operation, output)
        yield
    finally:
        _operation.set(old_operation)
        _output.set(old_output)


class OperationContextFilter(logging.Filter):
    """Logging filter that injects operation context into log records.

    Adds ``operation`` and ``output`` attributes for JSON output and a
    compact ``operation_tag`` like ``[overlay:out.mp4] `` for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        operation, output = get_operation_context()

        record.operation = operation
        record.output = output

        if operation:
            if output:
                record.operation_tag = f"[{operation}:{output}] "
            else:
                record.operation_tag = f"[{operation}] "
        else:
            record.operation_tag = ""

        return True  # Never filter out records
