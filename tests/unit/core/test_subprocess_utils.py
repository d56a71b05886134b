"""Tests for core subprocess utilities."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from mediaproc.core.subprocess_utils import FFmpegRunner, ProcessResult, run_command


class TestRunCommand:
    """Tests for run_command function."""

    @patch("mediaproc.core.subprocess_utils.subprocess.run")
    def test_merges_stderr_into_stdout(self, mock_run: MagicMock) -> None:
        """run_command captures ffmpeg's stderr through stdout."""
        mock_run.return_value = MagicMock(stdout="line one\nline two\n", returncode=0)

        result = run_command(["ffmpeg", "-i", "a.mp4"])

        call_kwargs = mock_run.call_args[1]
        assert call_kwargs["stdout"] == subprocess.PIPE
        assert call_kwargs["stderr"] == subprocess.STDOUT
        assert call_kwargs["stdin"] == subprocess.DEVNULL
        assert result.lines == ("line one", "line two")
        assert result.returncode == 0
        assert result.success

    @patch("mediaproc.core.subprocess_utils.subprocess.run")
    def test_lines_kept_as_printed(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="a\n\n  b  \n", returncode=0)

        result = run_command(["ffmpeg"])

        assert result.lines == ("a", "", "  b  ")

    @patch("mediaproc.core.subprocess_utils.subprocess.run")
    def test_converts_path_args(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="", returncode=0)

        run_command(["ffmpeg", Path("/tmp/a.mp4")])

        assert mock_run.call_args[0][0] == ["ffmpeg", "/tmp/a.mp4"]

    @patch("mediaproc.core.subprocess_utils.subprocess.run")
    def test_zero_timeout_means_unbounded(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="", returncode=0)

        run_command(["ffmpeg"], timeout=0)

        assert mock_run.call_args[1]["timeout"] is None

    @patch("mediaproc.core.subprocess_utils.subprocess.run")
    def test_nonzero_exit_is_not_success(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="Invalid data\n", returncode=1)

        result = run_command(["ffmpeg", "-i", "bad.mp4"])

        assert not result.success
        assert result.returncode == 1
        assert result.started

    @patch("mediaproc.core.subprocess_utils.subprocess.run")
    def test_timeout_returns_minus_one(self, mock_run: MagicMock) -> None:
        """A timeout is reported as a result, not raised."""
        mock_run.side_effect = subprocess.TimeoutExpired(
            cmd=["ffmpeg"], timeout=5, output=b"frame=  10\n"
        )

        result = run_command(["ffmpeg"], timeout=5)

        assert result.timed_out
        assert result.returncode == -1
        assert result.lines == ("frame=  10",)
        assert not result.success

    @patch("mediaproc.core.subprocess_utils.subprocess.run")
    def test_missing_binary_returns_not_started(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = FileNotFoundError("No such file: 'ffmpeg'")

        result = run_command(["ffmpeg"])

        assert not result.started
        assert result.returncode == 1
        assert not result.success


class TestProcessResult:
    def test_text_joins_lines(self) -> None:
        result = ProcessResult(lines=("a", "b"), returncode=0)

        assert result.text == "a\nb"


class TestFFmpegRunner:
    @patch("mediaproc.core.subprocess_utils.run_command")
    def test_prepends_binary_and_passes_timeout(self, mock_run: MagicMock) -> None:
        runner = FFmpegRunner("/opt/ffmpeg/bin/ffmpeg", timeout=60)

        runner.run(["-i", "a.mp4"])

        mock_run.assert_called_once_with(
            ["/opt/ffmpeg/bin/ffmpeg", "-i", "a.mp4"], timeout=60
        )
