"""Sequential execution of validated jobs."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from mediaproc.batch.models import Job
from mediaproc.executor.result import OperationResult
from mediaproc.pipeline.orchestrator import PipelineOrchestrator

logger = logging.getLogger(__name__)


def run_jobs(
    orchestrator: PipelineOrchestrator,
    jobs: Iterable[Job],
    stop_on_failure: bool = True,
) -> list[tuple[Job, OperationResult]]:
    """Run jobs in order.

    Args:
        orchestrator: Orchestrator executing each job.
        jobs: Validated jobs.
        stop_on_failure: Stop after the first failed job.

    Returns:
        (job, result) pairs for every job that ran.
    """
    results: list[tuple[Job, OperationResult]] = []
    for index, job in enumerate(jobs, start=1):
        logger.info("Job %d: %s", index, job.describe())
        result = job.run(orchestrator)
        results.append((job, result))
        if not result.ok:
            logger.warning("Job %d failed: %s", index, result)
            if stop_on_failure:
                break
    return results
