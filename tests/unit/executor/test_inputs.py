"""Tests for input validation and source resolution."""

from unittest.mock import MagicMock

import pytest

from mediaproc.executor.inputs import as_input_list, resolve_source, validate_inputs
from mediaproc.executor.result import ErrorCode


class TestAsInputList:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, []),
            ("", []),
            ("a.mp4", ["a.mp4"]),
            (["a.mp4", "b.mp4"], ["a.mp4", "b.mp4"]),
            (("a.mp4",), ["a.mp4"]),
        ],
    )
    def test_normalizes(self, value, expected) -> None:
        assert as_input_list(value) == expected


class TestValidateInputs:
    """Tests for validate_inputs."""

    @pytest.mark.parametrize("inputs", ["", [], ["a.mp4", ""]])
    def test_empty_input_is_100_without_touching_storage(self, inputs) -> None:
        """Emptiness is checked before storage is consulted."""
        storage = MagicMock()

        failure = validate_inputs(storage, inputs)

        assert failure.code == ErrorCode.EMPTY_INPUT
        storage.exists.assert_not_called()
        storage.local_exists.assert_not_called()

    def test_missing_input_is_101_naming_key(self, storage, make_input) -> None:
        make_input("a.mp4")

        failure = validate_inputs(storage, ["a.mp4", "missing.mp4"])

        assert failure.code == ErrorCode.INPUT_NOT_FOUND
        assert failure.context == "missing.mp4"

    def test_present_inputs_pass(self, storage, make_input) -> None:
        make_input("a.mp4", "b.mp4")

        assert validate_inputs(storage, ["a.mp4", "b.mp4"]) is None

    def test_local_working_copy_counts_as_present(self, remote_storage) -> None:
        """Scratch files on a remote tier only exist locally."""
        remote_storage.put_local("tmp_video/x.mp4", b"scratch")

        assert validate_inputs(remote_storage, "tmp_video/x.mp4") is None


class TestResolveSource:
    def test_local_tier_returns_key(self, storage) -> None:
        assert resolve_source(storage, "a.mp4") == "a.mp4"

    def test_remote_tier_returns_url(self, remote_storage) -> None:
        assert (
            resolve_source(remote_storage, "in/a.mp4")
            == "https://cdn.example.com/media/in/a.mp4"
        )

    def test_remote_tier_prefers_local_copy(self, remote_storage) -> None:
        remote_storage.put_local("tmp_audio/x.mp3", b"scratch")

        assert resolve_source(remote_storage, "tmp_audio/x.mp3") == "tmp_audio/x.mp3"
