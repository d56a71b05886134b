"""CLI probe command."""

import logging
import sys

import click

from mediaproc.cli.common import echo_failure, get_orchestrator
from mediaproc.cli.exit_codes import exit_code_for
from mediaproc.introspector import format_human, format_json

logger = logging.getLogger(__name__)


@click.command("probe")
@click.argument("file")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def probe_command(ctx: click.Context, file: str, output_format: str) -> None:
    """Show container and stream facts for a media file.

    FILE is the storage key of the file to probe.
    """
    result = get_orchestrator(ctx).probe(file)
    if not result.ok:
        echo_failure(result)
        sys.exit(exit_code_for(result))

    if output_format == "json":
        click.echo(format_json(file, result.value))
    else:
        click.echo(format_human(file, result.value))
