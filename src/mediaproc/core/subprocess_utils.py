"""Subprocess utilities for external tool invocation.

This module provides the process runner used for every ffmpeg call:
arguments are passed as an argv list (never through a shell), stderr is
merged into stdout because ffmpeg writes its diagnostics there, and the
captured lines plus the exit status are returned as a ProcessResult.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from mediaproc.config.models import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of one external process run."""

    lines: tuple[str, ...]
    """Combined stdout/stderr output, one entry per line."""

    returncode: int
    """Exit status. 1 if the process could not start, -1 on timeout."""

    timed_out: bool = False
    started: bool = True

    @property
    def success(self) -> bool:
        return self.started and not self.timed_out and self.returncode == 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def run_command(
    args: Sequence[str | Path],
    timeout: int | None = DEFAULT_TIMEOUT,
) -> ProcessResult:
    """Run an external command, merging stderr into the captured output.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds. None or 0 means no limit.

    Returns:
        ProcessResult. A command that cannot be started yields returncode 1
        and started=False; a timeout yields returncode -1 and timed_out=True.
    """
    str_args = [str(arg) for arg in args]
    command_name = str_args[0].split("/")[-1] if str_args else "unknown"
    effective_timeout = timeout if timeout else None

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()

    try:
        result = subprocess.run(  # nosec B603 - argv list, no shell
            str_args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            text=True,
            errors="replace",
            timeout=effective_timeout,
        )
    except subprocess.TimeoutExpired as e:
        elapsed = time.monotonic() - start_time
        logger.warning(
            "Command timed out after %ds: %s",
            effective_timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": command_name,
                "timeout_seconds": effective_timeout,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        return ProcessResult(
            lines=tuple(_decode(e.output).splitlines()),
            returncode=-1,
            timed_out=True,
        )
    except OSError as e:
        logger.error("Could not start %s: %s", command_name, e)
        return ProcessResult(lines=(str(e),), returncode=1, started=False)

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": result.returncode,
        },
    )

    return ProcessResult(
        lines=tuple((result.stdout or "").splitlines()),
        returncode=result.returncode,
    )


class FFmpegRunner:
    """Runs the ffmpeg binary with a fixed path and timeout."""

    def __init__(
        self,
        ffmpeg_path: Path | str = "ffmpeg",
        timeout: int | None = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the runner.

        Args:
            ffmpeg_path: ffmpeg executable name or path.
            timeout: Per-invocation timeout in seconds. None or 0 = unbounded.
        """
        self.ffmpeg_path = str(ffmpeg_path)
        self.timeout = timeout

    def run(self, args: Sequence[str | Path]) -> ProcessResult:
        """Run ffmpeg with ``args`` (the binary itself is prepended)."""
        return run_command([self.ffmpeg_path, *args], timeout=self.timeout)
