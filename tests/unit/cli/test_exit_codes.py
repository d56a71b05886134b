"""Tests for exit code mapping."""

import pytest

from mediaproc.cli.exit_codes import ExitCode, exit_code_for
from mediaproc.executor.result import ErrorCode, Failure


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (ErrorCode.EMPTY_INPUT, ExitCode.EMPTY_INPUT),
        (ErrorCode.INPUT_NOT_FOUND, ExitCode.TARGET_NOT_FOUND),
        (ErrorCode.PROCESS_FAILED, ExitCode.OPERATION_FAILED),
        (ErrorCode.PUBLISH_FAILED, ExitCode.PUBLISH_FAILED),
    ],
)
def test_exit_code_for(code: ErrorCode, expected: ExitCode) -> None:
    assert exit_code_for(Failure.of(code)) == expected


def test_exit_codes_are_unique() -> None:
    values = [member.value for member in ExitCode]
    assert len(values) == len(set(values))


def test_unstartable_ffmpeg_maps_to_tool_not_available() -> None:
    failure = Failure.of(
        ErrorCode.PROCESS_FAILED,
        context={"lines": [], "returncode": 1, "started": False},
    )

    assert exit_code_for(failure) == ExitCode.TOOL_NOT_AVAILABLE


def test_started_ffmpeg_failure_maps_to_operation_failed() -> None:
    failure = Failure.of(
        ErrorCode.PROCESS_FAILED,
        context={"lines": [], "returncode": 1, "started": True},
    )

    assert exit_code_for(failure) == ExitCode.OPERATION_FAILED
