"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
import sys

import click

from mediaproc.cli.exit_codes import exit_code_for
from mediaproc.config.models import MediaProcConfig
from mediaproc.executor.result import ErrorCode, Failure, OperationResult
from mediaproc.pipeline.orchestrator import CONFIGURED_SIZE, PipelineOrchestrator

logger = logging.getLogger(__name__)


class SizeParamType(click.ParamType):
    """A ``WIDTHxHEIGHT`` pair such as ``540x952``, or ``none``.

    ``none`` converts to None, which skips the filter.
    """

    name = "size"

    def convert(self, value, param, ctx):  # noqa: ANN001, ANN201
        if isinstance(value, tuple) or value is CONFIGURED_SIZE:
            return value
        if str(value).lower() == "none":
            return None
        try:
            width, height = (int(part) for part in str(value).lower().split("x"))
        except ValueError:
            self.fail(f"{value!r} is not a WIDTHxHEIGHT size", param, ctx)
        if width <= 0 or height <= 0:
            self.fail(f"{value!r} must have positive dimensions", param, ctx)
        return (width, height)


SIZE = SizeParamType()


def get_orchestrator(ctx: click.Context) -> PipelineOrchestrator:
    """Return the orchestrator for this invocation, building it on first use.

    An orchestrator already present in ``ctx.obj`` is reused.
    """
    obj = ctx.ensure_object(dict)
    orchestrator = obj.get("orchestrator")
    if orchestrator is None:
        config: MediaProcConfig = obj.get("config") or MediaProcConfig()
        orchestrator = PipelineOrchestrator.from_config(config)
        obj["orchestrator"] = orchestrator
    return orchestrator


def echo_failure(failure: Failure) -> None:
    click.echo(str(failure), err=True)
    if failure.code == ErrorCode.INPUT_NOT_FOUND and failure.context:
        click.echo(f"Missing input: {failure.context}", err=True)


def report_result(result: OperationResult) -> None:
    """Print the output key on success, or the error and exit.

    Exits the process with the mapped exit code on failure.
    """
    if result.ok:
        click.echo(result.value)
        return

    echo_failure(result)
    sys.exit(exit_code_for(result))
