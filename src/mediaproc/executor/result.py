"""Operation result types.

Every public operation returns either a Success or a Failure. Expected
failure modes (empty input, missing input, ffmpeg failure, publish
failure) are values, not exceptions. Composite operations pass a child
Failure through unchanged so callers always see the root cause.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Union


class ErrorCode(IntEnum):
    """Failure codes shared by every operation."""

    EMPTY_INPUT = 100
    INPUT_NOT_FOUND = 101
    PROCESS_FAILED = 102
    PUBLISH_FAILED = 103


_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.EMPTY_INPUT: "Input file must not be empty",
    ErrorCode.INPUT_NOT_FOUND: "Input file does not exist",
    ErrorCode.PROCESS_FAILED: "ffmpeg run failed",
    ErrorCode.PUBLISH_FAILED: "Publish to remote storage failed",
}


@dataclass(frozen=True)
class Success:
    """Successful operation outcome."""

    value: Any = None
    """Optional payload (MediaInfo for probes, output key for steps)."""

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed operation outcome."""

    code: ErrorCode
    message: str
    context: Any = None
    """Diagnostic data: the offending key, or ffmpeg output lines."""

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def of(cls, code: ErrorCode, context: Any = None) -> Failure:
        """Build a Failure with the standard message for ``code``."""
        return cls(code=code, message=_MESSAGES[code], context=context)

    def __str__(self) -> str:
        return f"Error {int(self.code)}: {self.message}"


OperationResult = Union[Success, Failure]
