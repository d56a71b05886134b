"""CLI commands for composite pipelines."""

from __future__ import annotations

import click

from mediaproc.cli.common import SIZE, get_orchestrator, report_result
from mediaproc.cli.operations import publish_option
from mediaproc.executor.operations import (
    DEFAULT_BUF_SIZE,
    DEFAULT_MAX_RATE,
    DEFAULT_MIN_RATE,
)
from mediaproc.pipeline.orchestrator import CONFIGURED_SIZE, SizeSetting


@click.command("overlay")
@click.argument("source")
@click.argument("main")
@click.argument("output")
@publish_option(False)
@click.pass_context
def overlay_command(
    ctx: click.Context, source: str, main: str, output: str, publish: bool
) -> None:
    """Show SOURCE beside MAIN, clipped to MAIN's duration."""
    result = get_orchestrator(ctx).overlay([source, main], output, publish=publish)
    report_result(result)


@click.command("same-style")
@click.argument("new")
@click.argument("source")
@click.argument("output")
@click.option(
    "--mute/--no-mute",
    default=True,
    show_default=True,
    help="Drop NEW's own audio instead of merging it with SOURCE's.",
)
@publish_option(True)
@click.pass_context
def same_style_command(
    ctx: click.Context, new: str, source: str, output: str, mute: bool, publish: bool
) -> None:
    """Put SOURCE's audio under NEW, clipped to SOURCE's duration."""
    result = get_orchestrator(ctx).same_style(
        [new, source], output, mute=mute, publish=publish
    )
    report_result(result)


@click.command("loop-audio")
@click.argument("video")
@click.argument("audio")
@click.argument("output")
@publish_option(True)
@click.pass_context
def loop_audio_command(
    ctx: click.Context, video: str, audio: str, output: str, publish: bool
) -> None:
    """Replace VIDEO's audio with AUDIO looped to the video's length."""
    result = get_orchestrator(ctx).background_audio_loop(
        [video, audio], output, publish=publish
    )
    report_result(result)


@click.command("background-audio")
@click.argument("audio")
@click.argument("video")
@click.argument("output")
@publish_option(True)
@click.pass_context
def background_audio_command(
    ctx: click.Context, audio: str, video: str, output: str, publish: bool
) -> None:
    """Replace VIDEO's audio with AUDIO, clipped to the video's duration."""
    result = get_orchestrator(ctx).background_audio(
        [audio, video], output, publish=publish
    )
    report_result(result)


@click.command("insert-audio")
@click.argument("video")
@click.argument("audio")
@click.argument("output")
@click.option(
    "--at-ms",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Insert offset in milliseconds.",
)
@click.option(
    "--mute-source/--mix-source",
    default=True,
    show_default=True,
    help="Drop VIDEO's own audio, or mix AUDIO over it.",
)
@publish_option(True)
@click.pass_context
def insert_audio_command(
    ctx: click.Context,
    video: str,
    audio: str,
    output: str,
    at_ms: int,
    mute_source: bool,
    publish: bool,
) -> None:
    """Lay AUDIO into VIDEO starting at --at-ms."""
    result = get_orchestrator(ctx).insert_audio(
        [video, audio],
        output,
        at_ms=at_ms,
        mute_source=mute_source,
        publish=publish,
    )
    report_result(result)


@click.command("concat")
@click.argument("inputs", nargs=-1, required=True)
@click.option("--output", "-o", required=True, help="Output key.")
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
@click.option("--frame-rate", type=click.IntRange(min=0), default=0)
@click.option("--min-rate", type=click.IntRange(min=0), default=DEFAULT_MIN_RATE)
@click.option("--max-rate", type=click.IntRange(min=0), default=DEFAULT_MAX_RATE)
@click.option("--buf-size", type=click.IntRange(min=0), default=DEFAULT_BUF_SIZE)
@publish_option(True)
@click.pass_context
def concat_command(
    ctx: click.Context,
    inputs: tuple[str, ...],
    output: str,
    pad: SizeSetting,
    scale: SizeSetting,
    frame_rate: int,
    min_rate: int,
    max_rate: int,
    buf_size: int,
    publish: bool,
) -> None:
    """Normalize INPUTS and join them in order into --output."""
    result = get_orchestrator(ctx).concat(
        list(inputs),
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
