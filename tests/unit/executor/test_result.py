"""Tests for Success/Failure result values."""

from mediaproc.executor.result import ErrorCode, Failure, Success


class TestErrorCode:
    def test_codes(self) -> None:
        assert ErrorCode.EMPTY_INPUT == 100
        assert ErrorCode.INPUT_NOT_FOUND == 101
        assert ErrorCode.PROCESS_FAILED == 102
        assert ErrorCode.PUBLISH_FAILED == 103


class TestFailure:
    def test_of_uses_standard_message(self) -> None:
        failure = Failure.of(ErrorCode.INPUT_NOT_FOUND, context="a.mp4")

        assert failure.code == ErrorCode.INPUT_NOT_FOUND
        assert failure.message == "Input file does not exist"
        assert failure.context == "a.mp4"
        assert not failure.ok

    def test_str(self) -> None:
        assert str(Failure.of(ErrorCode.EMPTY_INPUT)) == (
            "Error 100: Input file must not be empty"
        )


class TestSuccess:
    def test_ok_and_value(self) -> None:
        result = Success("out.mp4")

        assert result.ok
        assert result.value == "out.mp4"

    def test_default_value_is_none(self) -> None:
        assert Success().value is None
