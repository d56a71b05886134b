"""Input validation and resolution shared by probes, steps and pipelines."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mediaproc.executor.result import ErrorCode, Failure
from mediaproc.storage.interface import StorageGateway

logger = logging.getLogger(__name__)


def as_input_list(inputs: str | Sequence[str] | None) -> list[str]:
    """Normalize a single key or a sequence of keys to a list."""
    if inputs is None:
        return []
    if isinstance(inputs, str):
        return [inputs] if inputs else []
    return list(inputs)


def validate_inputs(
    storage: StorageGateway,
    inputs: str | Sequence[str] | None,
) -> Failure | None:
    """Check that inputs are non-empty and present in storage.

    Emptiness is checked before storage is touched. A key counts as
    present when it exists in the configured tier or as a local working
    copy (scratch artifacts on a remote tier only exist locally).

    Returns:
        Failure(100) for an empty input, Failure(101) naming the first
        missing key, or None when every input is present.
    """
    files = as_input_list(inputs)
    if not files or any(not f for f in files):
        return Failure.of(ErrorCode.EMPTY_INPUT, context=inputs)

    for key in files:
        if not (storage.exists(key) or storage.local_exists(key)):
            logger.info("Input file not found: %s", key)
            return Failure.of(ErrorCode.INPUT_NOT_FOUND, context=key)

    return None


def resolve_source(storage: StorageGateway, key: str) -> str:
    """Choose how ffmpeg should read ``key``.

    Returns the key itself (later mapped to the local path) when the tier
    is local or a local working copy exists, otherwise the tier's URL.
    """
    if storage.is_local_tier() or storage.local_exists(key):
        return key
    return storage.remote_url_for(key)
