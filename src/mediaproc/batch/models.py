"""Pydantic models for batch job files.

A job file is a YAML mapping with a ``jobs`` list. Each job names its
operation in ``op`` and carries that operation's arguments:

    jobs:
      - op: thumbnail
        input: raw/clip.mp4
        output: thumbs/clip.mp4
      - op: overlay
        inputs: [reaction.mp4, thumbs/clip.mp4]
        output: duets/clip.mp4
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mediaproc.executor.operations import (
    DEFAULT_BUF_SIZE,
    DEFAULT_GIF_FRAMES,
    DEFAULT_MAX_RATE,
    DEFAULT_MIN_RATE,
)
from mediaproc.executor.result import OperationResult
from mediaproc.pipeline.orchestrator import PipelineOrchestrator

_TIMESTAMP_PATTERN = re.compile(r"^\d+(:\d{1,2}){0,2}(\.\d+)?$")

Size = tuple[Annotated[int, Field(ge=1)], Annotated[int, Field(ge=1)]]


class JobModel(BaseModel, ABC):
    """Fields shared by every job. Subclasses implement run()."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    output: str = Field(min_length=1)
    publish: bool | None = None
    """Override the operation's publish default when set."""

    def _options(self) -> dict[str, Any]:
        if self.publish is None:
            return {}
        return {"publish": self.publish}

    def describe(self) -> str:
        return f"{self.op} -> {self.output}"  # type: ignore[attr-defined]

    @abstractmethod
    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        """Run this job's operation."""


class SingleInputJob(JobModel):
    input: str


class PairInputJob(JobModel):
    inputs: list[str] = Field(min_length=2, max_length=2)


class NormalizeOptions(BaseModel):
    """Re-encode settings shared by thumbnail and concat.

    Leaving ``pad`` or ``scale`` out uses the configured size; setting it
    to null skips that filter.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pad: Size | None = None
    scale: Size | None = None
    frame_rate: int = Field(default=0, ge=0)
    min_rate: int = Field(default=DEFAULT_MIN_RATE, ge=0)
    max_rate: int = Field(default=DEFAULT_MAX_RATE, ge=0)
    buf_size: int = Field(default=DEFAULT_BUF_SIZE, ge=0)

    def _normalize_options(self) -> dict[str, Any]:
        sizes = {
            name: getattr(self, name)
            for name in ("pad", "scale")
            if name in self.model_fields_set
        }
        return {
            **sizes,
            "frame_rate": self.frame_rate,
            "min_rate": self.min_rate,
            "max_rate": self.max_rate,
            "buf_size": self.buf_size,
        }


class ThumbnailJob(SingleInputJob, NormalizeOptions):
    op: Literal["thumbnail"]

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.thumbnail(
            self.input, self.output, **self._normalize_options(), **self._options()
        )


class FrameGrabJob(SingleInputJob):
    op: Literal["frame_grab"]
    at: str = "00:00:00"

    @field_validator("at")
    @classmethod
    def validate_timestamp(cls, v: str) -> str:
        """Accept seconds or [HH:]MM:SS with an optional fraction."""
        if not _TIMESTAMP_PATTERN.match(v):
            raise ValueError(f"Invalid timestamp '{v}'. Expected HH:MM:SS[.ff]")
        return v

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.frame_grab(
            self.input, self.output, at=self.at, **self._options()
        )


class ExtractAudioJob(SingleInputJob):
    op: Literal["extract_audio"]

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.extract_audio(self.input, self.output, **self._options())


class ExtractVideoJob(SingleInputJob):
    op: Literal["extract_video"]

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.extract_video(self.input, self.output, **self._options())


class ResizeJob(SingleInputJob):
    op: Literal["resize"]
    width: int | None = Field(default=None, ge=1)
    height: int | None = Field(default=None, ge=1)

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.resize(
            self.input,
            self.output,
            width=self.width,
            height=self.height,
            **self._options(),
        )


class GifJob(SingleInputJob):
    op: Literal["gif"]
    frames: int = Field(default=DEFAULT_GIF_FRAMES, ge=1)

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.gif(
            self.input, self.output, frames=self.frames, **self._options()
        )


class OverlayJob(PairInputJob):
    op: Literal["overlay"]

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.overlay(self.inputs, self.output, **self._options())


class SameStyleJob(PairInputJob):
    op: Literal["same_style"]
    mute: bool = True

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.same_style(
            self.inputs, self.output, mute=self.mute, **self._options()
        )


class BackgroundAudioLoopJob(PairInputJob):
    op: Literal["background_audio_loop"]

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.background_audio_loop(
            self.inputs, self.output, **self._options()
        )


class BackgroundAudioJob(PairInputJob):
    op: Literal["background_audio"]

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.background_audio(
            self.inputs, self.output, **self._options()
        )


class InsertAudioJob(PairInputJob):
    op: Literal["insert_audio"]
    at_ms: int = Field(default=0, ge=0)
    mute_source: bool = True

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.insert_audio(
            self.inputs,
            self.output,
            at_ms=self.at_ms,
            mute_source=self.mute_source,
            **self._options(),
        )


class ConcatJob(JobModel, NormalizeOptions):
    op: Literal["concat"]
    inputs: list[str] = Field(min_length=1)

    def run(self, orchestrator: PipelineOrchestrator) -> OperationResult:
        return orchestrator.concat(
            self.inputs, self.output, **self._normalize_options(), **self._options()
        )


Job = Annotated[
    Union[
        ThumbnailJob,
        FrameGrabJob,
        ExtractAudioJob,
        ExtractVideoJob,
        ResizeJob,
        GifJob,
        OverlayJob,
        SameStyleJob,
        BackgroundAudioLoopJob,
        BackgroundAudioJob,
        InsertAudioJob,
        ConcatJob,
    ],
    Field(discriminator="op"),
]


class JobFileModel(BaseModel):
    """Top-level job file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    jobs: list[Job] = Field(min_length=1)
