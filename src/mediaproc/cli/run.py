"""CLI run command for batch job files."""

import logging
import sys
from pathlib import Path

import click

from mediaproc.batch import JobValidationError, load_job_file, run_jobs
from mediaproc.cli.common import get_orchestrator
from mediaproc.cli.exit_codes import ExitCode, exit_code_for

logger = logging.getLogger(__name__)


@click.command("run")
@click.argument("job_file", type=click.Path(path_type=Path))
@click.option(
    "--keep-going",
    is_flag=True,
    default=False,
    help="Continue with the next job after a failure.",
)
@click.pass_context
def run_command(ctx: click.Context, job_file: Path, keep_going: bool) -> None:
    """Run the jobs listed in JOB_FILE in order.

    Exits with the code of the first failed job.
    """
    try:
        jobs = load_job_file(job_file)
    except JobValidationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(ExitCode.JOB_VALIDATION_ERROR)

    results = run_jobs(get_orchestrator(ctx), jobs, stop_on_failure=not keep_going)

    first_failure = None
    for job, result in results:
        if result.ok:
            click.echo(f"ok      {job.describe()}")
        else:
            click.echo(f"FAILED  {job.describe()}: {result}")
            first_failure = first_failure or result

    skipped = len(jobs) - len(results)
    if skipped:
        click.echo(f"Skipped {skipped} job(s) after failure")

    if first_failure is not None:
        sys.exit(exit_code_for(first_failure))
