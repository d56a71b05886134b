"""Batch job files: YAML lists of operations run in order."""

from mediaproc.batch.loader import (
    JobValidationError,
    load_job_file,
    load_jobs_from_dict,
)
from mediaproc.batch.models import Job, JobFileModel
from mediaproc.batch.runner import run_jobs

__all__ = [
    "Job",
    "JobFileModel",
    "JobValidationError",
    "load_job_file",
    "load_jobs_from_dict",
    "run_jobs",
]
