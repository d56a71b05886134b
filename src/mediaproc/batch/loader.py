"""Job file loading and validation.

This module provides functions to load YAML job files and validate them
using the Pydantic models in batch.models.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mediaproc.batch.models import Job, JobFileModel


class JobValidationError(Exception):
    """Error during job file validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Format a Pydantic validation error as (message, field)."""
    errors = error.errors()
    if not errors:
        return f"Job validation failed: {error}", None

    first_error = errors[0]
    loc = ".".join(str(x) for x in first_error.get("loc", []))
    msg = first_error.get("msg", str(error))
    if loc:
        return f"Job validation failed: {loc}: {msg}", loc
    return f"Job validation failed: {msg}", None


def load_jobs_from_dict(data: dict[str, Any]) -> list[Job]:
    """Validate a parsed job file.

    Raises:
        JobValidationError: If the data does not describe a valid job list.
    """
    try:
        model = JobFileModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise JobValidationError(message, field) from e
    return list(model.jobs)


def load_job_file(path: Path) -> list[Job]:
    """Load and validate jobs from a YAML file.

    Args:
        path: Path to the YAML job file.

    Returns:
        Validated jobs in file order.

    Raises:
        JobValidationError: If the file is missing, unreadable or invalid.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise JobValidationError(f"Job file not found: {path}") from e
    except OSError as e:
        raise JobValidationError(f"Could not read job file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise JobValidationError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise JobValidationError("Job file is empty")

    if not isinstance(data, dict):
        raise JobValidationError("Job file must be a YAML mapping")

    return load_jobs_from_dict(data)
