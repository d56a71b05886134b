"""CLI commands for single-step operations."""

from __future__ import annotations

import click

from mediaproc.cli.common import SIZE, get_orchestrator, report_result
from mediaproc.executor.operations import (
    DEFAULT_BUF_SIZE,
    DEFAULT_GIF_FRAMES,
    DEFAULT_MAX_RATE,
    DEFAULT_MIN_RATE,
)
from mediaproc.pipeline.orchestrator import CONFIGURED_SIZE, SizeSetting


def publish_option(default: bool):  # noqa: ANN201
    """``--publish/--no-publish`` with an operation-specific default."""
    return click.option(
        "--publish/--no-publish",
        default=default,
        show_default=True,
        help="Copy the result to the remote tier.",
    )


@click.command("thumbnail")
@click.argument("input_key", metavar="INPUT")
@click.argument("output")
@click.option(
    "--pad",
    type=SIZE,
    default=CONFIGURED_SIZE,
    show_default="configured size",
    help="Pad to WIDTHxHEIGHT, or 'none' to skip padding.",
)
@click.option(
    "--scale",
    type=SIZE,
    default=CONFIGURED_SIZE,
    show_default="configured size",
    help="Scale to WIDTHxHEIGHT, or 'none' to skip scaling.",
)
@click.option(
    "--frame-rate",
    type=click.IntRange(min=0),
    default=0,
    help="Output frame rate (0 keeps the source rate).",
)
@click.option("--min-rate", type=click.IntRange(min=0), default=DEFAULT_MIN_RATE)
@click.option("--max-rate", type=click.IntRange(min=0), default=DEFAULT_MAX_RATE)
@click.option("--buf-size", type=click.IntRange(min=0), default=DEFAULT_BUF_SIZE)
@publish_option(True)
@click.pass_context
def thumbnail_command(
    ctx: click.Context,
    input_key: str,
    output: str,
    pad: SizeSetting,
    scale: SizeSetting,
    frame_rate: int,
    min_rate: int,
    max_rate: int,
    buf_size: int,
    publish: bool,
) -> None:
    """Re-encode INPUT to a normalized size and bitrate.

    Pad and scale default to the configured pipeline size.
    """
    result = get_orchestrator(ctx).thumbnail(
        input_key,
        output,
        pad=pad,
        scale=scale,
        frame_rate=frame_rate,
        min_rate=min_rate,
        max_rate=max_rate,
        buf_size=buf_size,
        publish=publish,
    )
    report_result(result)


@click.command("frame")
@click.argument("input_key", metavar="INPUT")
@click.argument("output")
@click.option("--at", default="00:00:00", show_default=True, help="Timestamp.")
@publish_option(True)
@click.pass_context
def frame_command(
    ctx: click.Context, input_key: str, output: str, at: str, publish: bool
) -> None:
    """Grab one JPEG frame of INPUT."""
    report_result(
        get_orchestrator(ctx).frame_grab(input_key, output, at=at, publish=publish)
    )


@click.command("extract-audio")
@click.argument("input_key", metavar="INPUT")
@click.argument("output")
@publish_option(False)
@click.pass_context
def extract_audio_command(
    ctx: click.Context, input_key: str, output: str, publish: bool
) -> None:
    """Write the audio of INPUT without its video."""
    result = get_orchestrator(ctx).extract_audio(input_key, output, publish=publish)
    report_result(result)


@click.command("extract-video")
@click.argument("input_key", metavar="INPUT")
@click.argument("output")
@publish_option(False)
@click.pass_context
def extract_video_command(
    ctx: click.Context, input_key: str, output: str, publish: bool
) -> None:
    """Write the video of INPUT without its audio."""
    result = get_orchestrator(ctx).extract_video(input_key, output, publish=publish)
    report_result(result)


@click.command("resize")
@click.argument("input_key", metavar="INPUT")
@click.argument("output")
@click.option("--width", type=click.IntRange(min=1), default=None)
@click.option("--height", type=click.IntRange(min=1), default=None)
@publish_option(False)
@click.pass_context
def resize_command(
    ctx: click.Context,
    input_key: str,
    output: str,
    width: int | None,
    height: int | None,
    publish: bool,
) -> None:
    """Letterbox INPUT into WIDTH x HEIGHT."""
    result = get_orchestrator(ctx).resize(
        input_key, output, width=width, height=height, publish=publish
    )
    report_result(result)


@click.command("gif")
@click.argument("input_key", metavar="INPUT")
@click.argument("output")
@click.option(
    "--frames",
    type=click.IntRange(min=1),
    default=DEFAULT_GIF_FRAMES,
    show_default=True,
)
@publish_option(True)
@click.pass_context
def gif_command(
    ctx: click.Context, input_key: str, output: str, frames: int, publish: bool
) -> None:
    """Render the first frames of INPUT as an animated GIF."""
    report_result(
        get_orchestrator(ctx).gif(input_key, output, frames=frames, publish=publish)
    )
