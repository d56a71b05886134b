"""Parameterized single-step operations.

Each operation is a TranscodeStep run that differs only in its output
options and input prefix. The ``*_options`` builders are pure so the
exact ffmpeg arguments can be checked without running anything.
"""

from __future__ import annotations

from mediaproc.config.models import (
    DEFAULT_HEIGHT,
    DEFAULT_RESIZE_HEIGHT,
    DEFAULT_RESIZE_WIDTH,
    DEFAULT_THREADS,
    DEFAULT_WIDTH,
)
from mediaproc.executor.result import OperationResult
from mediaproc.executor.step import TranscodeStep

DEFAULT_MIN_RATE = 1000
DEFAULT_MAX_RATE = 2000
DEFAULT_BUF_SIZE = 1000
DEFAULT_GIF_FRAMES = 30

Size = tuple[int, int]


def thumbnail_options(
    pad: Size | None = (DEFAULT_WIDTH, DEFAULT_HEIGHT),
    scale: Size | None = (DEFAULT_WIDTH, DEFAULT_HEIGHT),
    frame_rate: int = 0,
    min_rate: int = DEFAULT_MIN_RATE,
    max_rate: int = DEFAULT_MAX_RATE,
    buf_size: int = DEFAULT_BUF_SIZE,
    duration_cap: int = 0,
) -> list[str]:
    """Build options for a normalizing re-encode.

    Args:
        pad: Pad target (width, height), or None to skip padding.
        scale: Scale target (width, height), or None to skip scaling.
        frame_rate: Output frame rate; 0 keeps the source rate.
        min_rate: Video bitrate in kb/s; 0 omits it.
        max_rate: Maximum bitrate in kb/s; 0 omits it.
        buf_size: Rate control buffer in kb/s; 0 omits it.
        duration_cap: Clip the output to this many seconds; 0 = unbounded.
    """
    options: list[str] = []

    filters = []
    if pad is not None:
        filters.append(f"pad={pad[0]}:{pad[1]}")
    if scale is not None:
        filters.append(f"scale={scale[0]}:{scale[1]}")
    if filters:
        options.extend(["-vf", ",".join(filters)])

    if frame_rate > 0:
        options.extend(["-r", str(frame_rate)])
    if min_rate > 0:
        options.extend(["-b:v", f"{min_rate}k"])
    if buf_size > 0:
        options.extend(["-bufsize", f"{buf_size}k"])
    if max_rate > 0:
        options.extend(["-maxrate", f"{max_rate}k"])
    if duration_cap > 0:
        options.extend(["-t", str(duration_cap)])
    options.append("-y")
    return options


def frame_grab_options() -> list[str]:
    return ["-r", "1", "-vframes", "1", "-an", "-f", "mjpeg", "-y"]


def extract_audio_options() -> list[str]:
    return ["-vcodec", "copy", "-vn", "-y"]


def extract_video_options() -> list[str]:
    return ["-vcodec", "copy", "-an", "-y"]


def resize_options(
    width: int = DEFAULT_RESIZE_WIDTH,
    height: int = DEFAULT_RESIZE_HEIGHT,
) -> list[str]:
    """Letterbox into width x height: scale to fit, then pad centered."""
    factor = f"min({width}/iw\\,{height}/ih)"
    return [
        "-vf",
        f"scale=iw*{factor}:ih*{factor},"
        f"pad={width}:{height}:({width}-iw)/2:({height}-ih)/2",
        "-y",
    ]


def gif_options(frames: int = DEFAULT_GIF_FRAMES) -> list[str]:
    return ["-vframes", str(frames), "-f", "gif", "-y"]


def thumbnail(
    step: TranscodeStep,
    input_key: str,
    output: str,
    *,
    pad: Size | None = (DEFAULT_WIDTH, DEFAULT_HEIGHT),
    scale: Size | None = (DEFAULT_WIDTH, DEFAULT_HEIGHT),
    frame_rate: int = 0,
    min_rate: int = DEFAULT_MIN_RATE,
    max_rate: int = DEFAULT_MAX_RATE,
    buf_size: int = DEFAULT_BUF_SIZE,
    duration_cap: int = 0,
    publish: bool = True,
    threads: int = DEFAULT_THREADS,
) -> OperationResult:
    """Re-encode a video to a normalized size and bitrate."""
    options = thumbnail_options(
        pad, scale, frame_rate, min_rate, max_rate, buf_size, duration_cap
    )
    return step.run(input_key, output, options, publish, threads=threads)


def frame_grab(
    step: TranscodeStep,
    input_key: str,
    output: str,
    *,
    at: str = "00:00:00",
    publish: bool = True,
    threads: int = DEFAULT_THREADS,
) -> OperationResult:
    """Grab a single JPEG frame at timestamp ``at``."""
    return step.run(
        input_key,
        output,
        frame_grab_options(),
        publish,
        prefix=["-ss", at],
        threads=threads,
    )


def extract_audio(
    step: TranscodeStep,
    input_key: str,
    output: str,
    *,
    publish: bool = False,
    threads: int = DEFAULT_THREADS,
) -> OperationResult:
    """Write the audio of ``input_key`` without its video stream."""
    return step.run(
        input_key, output, extract_audio_options(), publish, threads=threads
    )


def extract_video(
    step: TranscodeStep,
    input_key: str,
    output: str,
    *,
    publish: bool = False,
    threads: int = DEFAULT_THREADS,
) -> OperationResult:
    """Write the video of ``input_key`` without its audio stream."""
    return step.run(
        input_key, output, extract_video_options(), publish, threads=threads
    )


def resize(
    step: TranscodeStep,
    input_key: str,
    output: str,
    *,
    width: int = DEFAULT_RESIZE_WIDTH,
    height: int = DEFAULT_RESIZE_HEIGHT,
    publish: bool = False,
    threads: int = DEFAULT_THREADS,
) -> OperationResult:
    """Letterbox a video into width x height."""
    return step.run(
        input_key, output, resize_options(width, height), publish, threads=threads
    )


def gif(
    step: TranscodeStep,
    input_key: str,
    output: str,
    *,
    frames: int = DEFAULT_GIF_FRAMES,
    publish: bool = True,
    threads: int = DEFAULT_THREADS,
) -> OperationResult:
    """Render the first ``frames`` frames as an animated GIF."""
    return step.run(input_key, output, gif_options(frames), publish, threads=threads)
