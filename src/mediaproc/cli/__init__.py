"""CLI module for mediaproc."""

import logging
import sys
from pathlib import Path

import click

from mediaproc.cli.exit_codes import ExitCode
from mediaproc.config import ConfigError, TomlParseError, get_config
from mediaproc.config.logging_factory import configure_logging_from_cli

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    config,  # noqa: ANN001
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the loaded config and CLI options.

    Args:
        config: Effective MediaProcConfig.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    configure_logging_from_cli(
        config.logging,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    _logging_configured = True


@click.group()
@click.version_option(package_name="mediaproc")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: $MEDIAPROC_CONFIG_PATH or ~/.mediaproc/config.toml).",
)
@click.option(
    "--storage-root",
    type=click.Path(path_type=Path),
    default=None,
    help="Local storage directory.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    storage_root: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """mediaproc - ffmpeg transcoding and composite media pipelines."""
    ctx.ensure_object(dict)

    # Preserve a config or orchestrator passed in by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(
                config_path=config_path,
                storage_root=storage_root,
                log_level=log_level,
                strict=config_path is not None,
            )
        except (ConfigError, TomlParseError) as e:
            click.echo(f"Error: Invalid configuration: {e}", err=True)
            sys.exit(ExitCode.CONFIG_ERROR)

    _configure_logging(ctx.obj["config"], log_level, log_file, log_json)
    logger.debug("Storage root: %s", ctx.obj["config"].storage.root)


# Defer import to avoid circular dependency
def _register_commands():
    from mediaproc.cli.composites import (
        background_audio_command,
        concat_command,
        insert_audio_command,
        loop_audio_command,
        overlay_command,
        same_style_command,
    )
    from mediaproc.cli.operations import (
        extract_audio_command,
        extract_video_command,
        frame_command,
        gif_command,
        resize_command,
        thumbnail_command,
    )
    from mediaproc.cli.probe import probe_command
    from mediaproc.cli.run import run_command

    main.add_command(probe_command)
    main.add_command(thumbnail_command)
    main.add_command(frame_command)
    main.add_command(extract_audio_command)
    main.add_command(extract_video_command)
    main.add_command(resize_command)
    main.add_command(gif_command)
    main.add_command(overlay_command)
    main.add_command(same_style_command)
    main.add_command(loop_audio_command)
    main.add_command(background_audio_command)
    main.add_command(insert_audio_command)
    main.add_command(concat_command)
    main.add_command(run_command)


_register_commands()
