"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (job file, config)
    20-29: Input errors
    30-39: Tool errors
    40-49: Operation errors
"""

from enum import IntEnum

from mediaproc.executor.result import ErrorCode, Failure


class ExitCode(IntEnum):
    """Exit codes for mediaproc CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    JOB_VALIDATION_ERROR = 10
    CONFIG_ERROR = 11

    # Input errors (20-29)
    EMPTY_INPUT = 20
    TARGET_NOT_FOUND = 21

    # Tool errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Operation errors (40-49)
    OPERATION_FAILED = 40
    PUBLISH_FAILED = 41


FAILURE_EXIT_CODES: dict[ErrorCode, ExitCode] = {
    ErrorCode.EMPTY_INPUT: ExitCode.EMPTY_INPUT,
    ErrorCode.INPUT_NOT_FOUND: ExitCode.TARGET_NOT_FOUND,
    ErrorCode.PROCESS_FAILED: ExitCode.OPERATION_FAILED,
    ErrorCode.PUBLISH_FAILED: ExitCode.PUBLISH_FAILED,
}


def exit_code_for(failure: Failure) -> ExitCode:
    """Map an operation Failure to its CLI exit code.

    A process failure whose command could not be started at all means
    the ffmpeg binary is missing or not executable.
    """
    context = failure.context
    if (
        failure.code == ErrorCode.PROCESS_FAILED
        and isinstance(context, dict)
        and context.get("started") is False
    ):
        return ExitCode.TOOL_NOT_AVAILABLE
    return FAILURE_EXIT_CODES.get(failure.code, ExitCode.GENERAL_ERROR)
