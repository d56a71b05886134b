"""Composite media pipelines built from single transcode steps.

Every composite validates all of its inputs before running anything,
stops at the first failing step and returns that Failure unchanged, and
names its intermediates after the final output key (see scratch.py).
Intermediates are deleted when the composite finishes unless the
pipeline config asks to keep them.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from typing import Union

from mediaproc.config.models import MediaProcConfig, PipelineConfig
from mediaproc.core.subprocess_utils import FFmpegRunner
from mediaproc.executor import operations
from mediaproc.executor.command import Invocation
from mediaproc.executor.inputs import as_input_list, resolve_source, validate_inputs
from mediaproc.executor.result import Failure, OperationResult
from mediaproc.executor.step import TranscodeStep, thread_args
from mediaproc.introspector.probe import MediaProber
from mediaproc.introspector.types import MediaInfo
from mediaproc.logging.context import operation_context
from mediaproc.pipeline.scratch import (
    ScratchTracker,
    concat_dir,
    concat_manifest,
    concat_part_name,
    scratch_key,
)
from mediaproc.storage.filesystem import create_storage
from mediaproc.storage.interface import StorageGateway

logger = logging.getLogger(__name__)

OVERLAY_FILTER = "[1:v]pad=iw*2:ih[a];[a][0:v]overlay=w"
AMERGE_FILTER = "[0:a][1:a]amerge=inputs=2[aout]"
_STEREO = "aformat=sample_fmts=fltp:channel_layouts=stereo,volume=1"


class _ConfiguredSize(enum.Enum):
    TOKEN = "configured"


CONFIGURED_SIZE = _ConfiguredSize.TOKEN
"""Pad/scale default meaning "use the pipeline config size"; None skips."""

SizeSetting = Union[operations.Size, None, _ConfiguredSize]


def _duration_args(info: MediaInfo) -> list[str]:
    if info.seconds:
        return ["-t", str(info.seconds)]
    return []


def insert_audio_filter(at_ms: int, mix_source: bool) -> str:
    """Build the filter graph that lays input 1's audio in at ``at_ms``.

    With ``mix_source`` the delayed audio is mixed over input 0's audio
    track; without it input 0 is assumed silent and the delayed audio is
    padded so it can be clamped to the video with ``-shortest``.
    """
    delay = f"adelay={at_ms}|{at_ms}|{at_ms}"
    if mix_source:
        return (
            f"[0:a]{_STEREO}[a1];"
            f"[1:a]{_STEREO},{delay}[a2];"
            "[a1][a2]amix=inputs=2:duration=first[aout]"
        )
    return f"[1:a]{_STEREO},{delay},apad[aout]"


class PipelineOrchestrator:
    """Entry point for single-step operations and composite pipelines."""

    def __init__(
        self,
        storage: StorageGateway,
        runner: FFmpegRunner,
        config: PipelineConfig | None = None,
    ) -> None:
        self.storage = storage
        self.runner = runner
        self.config = config or PipelineConfig()
        self.step = TranscodeStep(storage, runner)
        self.prober = MediaProber(storage, runner)

    @classmethod
    def from_config(cls, config: MediaProcConfig) -> PipelineOrchestrator:
        """Build an orchestrator with the storage and ffmpeg of ``config``."""
        runner = FFmpegRunner(
            config.tools.ffmpeg or "ffmpeg",
            timeout=config.pipeline.timeout or None,
        )
        return cls(create_storage(config.storage), runner, config.pipeline)

    def _check_inputs(
        self, inputs: Sequence[str], count: int, operation: str
    ) -> tuple[list[str], Failure | None]:
        """Validate a composite's inputs before anything runs.

        Raises:
            ValueError: If a non-empty input list has the wrong length.
        """
        files = as_input_list(inputs)
        if files and len(files) != count:
            raise ValueError(
                f"{operation} takes exactly {count} inputs, got {len(files)}"
            )
        return files, validate_inputs(self.storage, files)

    def _size(self, setting: SizeSetting) -> operations.Size | None:
        if setting is CONFIGURED_SIZE:
            return (self.config.width, self.config.height)
        return setting

    def _scratch(self) -> ScratchTracker:
        return ScratchTracker(self.storage, keep=self.config.keep_scratch)

    def _probe_all(self, *keys: str) -> list[MediaInfo] | Failure:
        infos = []
        for key in keys:
            result = self.prober.probe(key)
            if not result.ok:
                return result
            infos.append(result.value)
        return infos

    # Single-step operations

    def probe(self, key: str) -> OperationResult:
        return self.prober.probe(key)

    def thumbnail(
        self,
        input_key: str,
        output: str,
        *,
        pad: SizeSetting = CONFIGURED_SIZE,
        scale: SizeSetting = CONFIGURED_SIZE,
        frame_rate: int = 0,
        min_rate: int = operations.DEFAULT_MIN_RATE,
        max_rate: int = operations.DEFAULT_MAX_RATE,
        buf_size: int = operations.DEFAULT_BUF_SIZE,
        publish: bool = True,
    ) -> OperationResult:
        """Normalize a video.

        Pad and scale default to the configured size; pass None to skip one.
        """
        with operation_context("thumbnail", output):
            return operations.thumbnail(
                self.step,
                input_key,
                output,
                pad=self._size(pad),
                scale=self._size(scale),
                frame_rate=frame_rate,
                min_rate=min_rate,
                max_rate=max_rate,
                buf_size=buf_size,
                duration_cap=self.config.duration_cap,
                publish=publish,
                threads=self.config.threads,
            )

    def frame_grab(
        self, input_key: str, output: str, *, at: str = "00:00:00", publish: bool = True
    ) -> OperationResult:
        with operation_context("frame_grab", output):
            return operations.frame_grab(
                self.step,
                input_key,
                output,
                at=at,
                publish=publish,
                threads=self.config.threads,
            )

    def extract_audio(
        self, input_key: str, output: str, *, publish: bool = False
    ) -> OperationResult:
        with operation_context("extract_audio", output):
            return operations.extract_audio(
                self.step,
                input_key,
                output,
                publish=publish,
                threads=self.config.threads,
            )

    def extract_video(
        self, input_key: str, output: str, *, publish: bool = False
    ) -> OperationResult:
        with operation_context("extract_video", output):
            return operations.extract_video(
                self.step,
                input_key,
                output,
                publish=publish,
                threads=self.config.threads,
            )

    def resize(
        self,
        input_key: str,
        output: str,
        *,
        width: int | None = None,
        height: int | None = None,
        publish: bool = False,
    ) -> OperationResult:
        with operation_context("resize", output):
            return operations.resize(
                self.step,
                input_key,
                output,
                width=width or self.config.resize_width,
                height=height or self.config.resize_height,
                publish=publish,
                threads=self.config.threads,
            )

    def gif(
        self,
        input_key: str,
        output: str,
        *,
        frames: int = operations.DEFAULT_GIF_FRAMES,
        publish: bool = True,
    ) -> OperationResult:
        with operation_context("gif", output):
            return operations.gif(
                self.step,
                input_key,
                output,
                frames=frames,
                publish=publish,
                threads=self.config.threads,
            )

    # Composites

    def overlay(
        self, inputs: Sequence[str], output: str, *, publish: bool = False
    ) -> OperationResult:
        """Place ``source`` to the right of ``main`` in a double-wide frame.

        Args:
            inputs: ``[source, main]``. ``main`` is resized to the source's
                dimensions first when they differ.
            output: Output key. Clipped to ``main``'s duration.
            publish: Publish the result to the remote tier.
        """
        files, failure = self._check_inputs(inputs, 2, "overlay")
        if failure:
            return failure
        source, main = files

        with operation_context("overlay", output), self._scratch() as scratch:
            infos = self._probe_all(source, main)
            if isinstance(infos, Failure):
                return infos
            source_info, main_info = infos

            if (
                source_info.width
                and source_info.height
                and not main_info.same_dimensions(source_info)
            ):
                logger.info(
                    "Resizing %s to %dx%d", main, source_info.width, source_info.height
                )
                resized = scratch.add(scratch_key(output, "video"))
                result = operations.resize(
                    self.step,
                    main,
                    resized,
                    width=source_info.width,
                    height=source_info.height,
                    publish=False,
                    threads=self.config.threads,
                )
                if not result.ok:
                    return result
                main = resized

            options = [
                "-filter_complex",
                OVERLAY_FILTER,
                *_duration_args(main_info),
                "-y",
            ]
            return self.step.run(
                [source, main], output, options, publish, threads=self.config.threads
            )

    def same_style(
        self,
        inputs: Sequence[str],
        output: str,
        *,
        mute: bool = True,
        publish: bool = True,
    ) -> OperationResult:
        """Put the source's audio under a new video, clipped to the source.

        Args:
            inputs: ``[new, source]``.
            output: Output key.
            mute: Drop the new video's own audio. Otherwise both audio
                tracks are merged into one stereo track.
            publish: Publish the result to the remote tier.
        """
        files, failure = self._check_inputs(inputs, 2, "same_style")
        if failure:
            return failure
        new, source = files
        threads = self.config.threads

        with operation_context("same_style", output), self._scratch() as scratch:
            source_info = self.prober.probe(source)
            if not source_info.ok:
                return source_info
            duration = _duration_args(source_info.value)

            audio = scratch.add(scratch_key(output, "audio"))
            result = operations.extract_audio(
                self.step, source, audio, publish=False, threads=threads
            )
            if not result.ok:
                return result

            if mute:
                video = scratch.add(scratch_key(output, "video"))
                result = operations.extract_video(
                    self.step, new, video, publish=False, threads=threads
                )
                if not result.ok:
                    return result
                options = ["-c:v", "copy", *duration, "-y"]
                return self.step.run(
                    [audio, video], output, options, publish, threads=threads
                )

            options = [
                "-c:v",
                "copy",
                "-map",
                "0:v:0",
                "-filter_complex",
                AMERGE_FILTER,
                "-map",
                "[aout]",
                "-ac",
                "2",
                *duration,
                "-y",
            ]
            return self.step.run(
                [new, audio], output, options, publish, threads=threads
            )

    def background_audio_loop(
        self, inputs: Sequence[str], output: str, *, publish: bool = True
    ) -> OperationResult:
        """Replace a video's audio with a short clip looped to its length.

        Args:
            inputs: ``[video, audio]``.
        """
        files, failure = self._check_inputs(inputs, 2, "background_audio_loop")
        if failure:
            return failure
        video, audio = files

        context = operation_context("background_audio_loop", output)
        with context, self._scratch() as scratch:
            silent = scratch.add(scratch_key(output, "video"))
            result = operations.extract_video(
                self.step, video, silent, publish=False, threads=self.config.threads
            )
            if not result.ok:
                return result

            invocation = (
                Invocation.new()
                .with_input(
                    [
                        resolve_source(self.storage, silent),
                        resolve_source(self.storage, audio),
                    ]
                )
                .with_input_params([(), ("-stream_loop", "-1")])
                .with_output_params(
                    ["-shortest", *thread_args(self.config.threads), "-y"]
                )
                .with_output(output)
            )
            return self.step.execute(invocation, output, publish)

    def background_audio(
        self, inputs: Sequence[str], output: str, *, publish: bool = True
    ) -> OperationResult:
        """Replace a video's audio, clipped to the video's duration.

        Args:
            inputs: ``[audio, video]``.
        """
        files, failure = self._check_inputs(inputs, 2, "background_audio")
        if failure:
            return failure
        audio, video = files

        context = operation_context("background_audio", output)
        with context, self._scratch() as scratch:
            video_info = self.prober.probe(video)
            if not video_info.ok:
                return video_info

            silent = scratch.add(scratch_key(output, "video"))
            result = operations.extract_video(
                self.step, video, silent, publish=False, threads=self.config.threads
            )
            if not result.ok:
                return result

            options = [*_duration_args(video_info.value), "-y"]
            return self.step.run(
                [audio, silent], output, options, publish, threads=self.config.threads
            )

    def insert_audio(
        self,
        inputs: Sequence[str],
        output: str,
        *,
        at_ms: int = 0,
        mute_source: bool = True,
        publish: bool = True,
    ) -> OperationResult:
        """Lay an audio clip into a video starting at ``at_ms`` milliseconds.

        Args:
            inputs: ``[video, audio]``.
            at_ms: Insert offset in milliseconds.
            mute_source: Drop the video's own audio instead of mixing.
        """
        if at_ms < 0:
            raise ValueError(f"at_ms must not be negative, got {at_ms}")
        files, failure = self._check_inputs(inputs, 2, "insert_audio")
        if failure:
            return failure
        video, audio = files

        with operation_context("insert_audio", output), self._scratch() as scratch:
            if mute_source:
                silent = scratch.add(scratch_key(output, "video"))
                result = operations.extract_video(
                    self.step, video, silent, publish=False, threads=self.config.threads
                )
                if not result.ok:
                    return result
                video = silent

            options = [
                "-filter_complex",
                insert_audio_filter(at_ms, mix_source=not mute_source),
                "-map",
                "[aout]",
                "-ac",
                "2",
                "-c:v",
                "copy",
                "-map",
                "0:v:0",
            ]
            if mute_source:
                options.append("-shortest")
            options.append("-y")
            return self.step.run(
                [video, audio], output, options, publish, threads=self.config.threads
            )

    def concat(
        self,
        inputs: Sequence[str],
        output: str,
        *,
        pad: SizeSetting = CONFIGURED_SIZE,
        scale: SizeSetting = CONFIGURED_SIZE,
        frame_rate: int = 0,
        min_rate: int = operations.DEFAULT_MIN_RATE,
        max_rate: int = operations.DEFAULT_MAX_RATE,
        buf_size: int = operations.DEFAULT_BUF_SIZE,
        publish: bool = True,
    ) -> OperationResult:
        """Normalize every input to MPEG-TS and join them in order.

        No manifest is written if any input fails to normalize.
        """
        files = as_input_list(inputs)
        if failure := validate_inputs(self.storage, files):
            return failure

        directory = concat_dir(output)

        with operation_context("concat", output), self._scratch() as scratch:
            names = []
            for index, key in enumerate(files):
                name = concat_part_name(index, key)
                part = scratch.add(f"{directory}/{name}")
                result = operations.thumbnail(
                    self.step,
                    key,
                    part,
                    pad=self._size(pad),
                    scale=self._size(scale),
                    frame_rate=frame_rate,
                    min_rate=min_rate,
                    max_rate=max_rate,
                    buf_size=buf_size,
                    duration_cap=self.config.duration_cap,
                    publish=False,
                    threads=self.config.threads,
                )
                if not result.ok:
                    return result
                names.append(name)

            manifest = scratch.add(concat_manifest(output))
            content = "".join(
                "file '{}'\n".format(name.replace("'", "'\\''")) for name in names
            )
            self.storage.put_local(manifest, content.encode("utf-8"))
            logger.debug("Wrote concat manifest with %d entries", len(names))

            return self.step.run(
                manifest,
                output,
                ["-c:v", "libx264", "-c:a", "copy", "-y"],
                publish,
                prefix=["-f", "concat", "-safe", "0"],
                threads=self.config.threads,
            )
