"""Shared test fixtures for mediaproc."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from mediaproc.config.models import PipelineConfig
from mediaproc.core.subprocess_utils import ProcessResult
from mediaproc.pipeline.orchestrator import PipelineOrchestrator
from mediaproc.storage.filesystem import LocalStorage, MountedRemoteStorage

SAMPLE_PROBE_OUTPUT = """\
ffmpeg version 6.1.1 Copyright (c) 2000-2023 the FFmpeg developers
Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'clip.mp4':
  Metadata:
    major_brand     : isom
  Duration: 00:00:12.48, start: 0.000000, bitrate: 1205 kb/s
  Stream #0:0[0x1](und): Video: h264 (High) (avc1 / 0x31637661), yuv420p, \
540x960, 1070 kb/s, 30 fps, 30 tbr, 15360 tbn (default)
  Stream #0:1[0x2](und): Audio: aac (LC) (mp4a / 0x6134706D), 44100 Hz, \
stereo, fltp, 128 kb/s (default)
At least one output file must be specified
"""


def probe_output(
    width: int = 540, height: int = 960, duration: str = "00:00:12.48"
) -> str:
    """Build ffmpeg probe text for a clip of the given size and duration."""
    return SAMPLE_PROBE_OUTPUT.replace("540x960", f"{width}x{height}").replace(
        "00:00:12.48", duration
    )


class FakeRunner:
    """Stands in for FFmpegRunner.

    Probe calls (``-i <file>`` only) answer with the text registered for
    the file's name. Any other call writes its last argument as the
    output file unless the output path contains a ``fail_on`` marker.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.probe_text: dict[str, str] = {}
        self.fail_on: list[str] = []

    @staticmethod
    def is_probe(args: Sequence[str]) -> bool:
        return len(args) == 2 and args[0] == "-i"

    def run(self, args: Sequence[str | Path]) -> ProcessResult:
        args = [str(arg) for arg in args]
        self.calls.append(args)

        if self.is_probe(args):
            name = args[1].rsplit("/", 1)[-1]
            text = self.probe_text.get(name, "")
            return ProcessResult(lines=tuple(text.splitlines()), returncode=1)

        output = Path(args[-1])
        if any(marker in str(output) for marker in self.fail_on):
            return ProcessResult(lines=("Conversion failed!",), returncode=1)

        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(b"media")
        return ProcessResult(lines=("done",), returncode=0)

    @property
    def transcodes(self) -> list[list[str]]:
        """Calls that were not probes."""
        return [call for call in self.calls if not self.is_probe(call)]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    """Local-tier storage rooted in a temporary directory."""
    return LocalStorage(tmp_path / "storage")


@pytest.fixture
def remote_storage(tmp_path: Path) -> MountedRemoteStorage:
    """Remote-tier storage with a local working root and a mounted remote."""
    return MountedRemoteStorage(
        tmp_path / "work", tmp_path / "remote", "https://cdn.example.com/media"
    )


@pytest.fixture
def make_input(storage: LocalStorage):
    """Create input files in the local storage tier."""

    def _make(*keys: str) -> list[str]:
        for key in keys:
            storage.put_local(key, b"input")
        return list(keys)

    return _make


@pytest.fixture
def orchestrator(
    storage: LocalStorage, fake_runner: FakeRunner
) -> PipelineOrchestrator:
    return PipelineOrchestrator(storage, fake_runner, PipelineConfig())


@pytest.fixture
def register_probe(fake_runner: FakeRunner):
    """Register probe output for a file name on the fake runner."""

    def _register(
        name: str, width: int = 540, height: int = 960, duration: str = "00:00:12.48"
    ) -> None:
        fake_runner.probe_text[name] = probe_output(width, height, duration)

    return _register


@pytest.fixture
def sample_probe_output() -> str:
    return SAMPLE_PROBE_OUTPUT
