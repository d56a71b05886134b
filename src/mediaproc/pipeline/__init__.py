"""Composite pipelines and scratch artifact management."""

from mediaproc.pipeline.orchestrator import (
    CONFIGURED_SIZE,
    PipelineOrchestrator,
    insert_audio_filter,
)
from mediaproc.pipeline.scratch import (
    ScratchTracker,
    concat_dir,
    concat_manifest,
    concat_part_name,
    scratch_key,
)

__all__ = [
    "CONFIGURED_SIZE",
    "PipelineOrchestrator",
    "ScratchTracker",
    "concat_dir",
    "concat_manifest",
    "concat_part_name",
    "insert_audio_filter",
    "scratch_key",
]
