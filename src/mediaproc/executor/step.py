"""Single-step transcode execution.

A TranscodeStep validates its inputs, runs one ffmpeg invocation into a
local output path, verifies the output exists, and optionally publishes
the artifact to a remote tier. Every step short-circuits on the first
failure and reports it as a Failure value.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import PurePosixPath

from mediaproc.config.models import DEFAULT_THREADS
from mediaproc.core.subprocess_utils import FFmpegRunner, ProcessResult
from mediaproc.executor.command import Invocation
from mediaproc.executor.inputs import as_input_list, resolve_source, validate_inputs
from mediaproc.executor.result import ErrorCode, Failure, OperationResult, Success
from mediaproc.storage.interface import StorageError, StorageGateway

logger = logging.getLogger(__name__)


def thread_args(threads: int) -> list[str]:
    """Build the encoder thread clause.

    Returns:
        ``-threads N -preset ultrafast`` when threads > 0, else nothing.
    """
    if threads > 0:
        return ["-threads", str(threads), "-preset", "ultrafast"]
    return []


class TranscodeStep:
    """Validated input -> output ffmpeg run with optional publish."""

    def __init__(self, storage: StorageGateway, runner: FFmpegRunner) -> None:
        self.storage = storage
        self.runner = runner

    def run(
        self,
        inputs: str | Sequence[str],
        output: str,
        options: Sequence[str] = (),
        publish: bool = False,
        prefix: Sequence[str] = (),
        threads: int = DEFAULT_THREADS,
    ) -> OperationResult:
        """Run one transcode.

        The command line is ``prefix + inputs + options + threads + output``.

        Args:
            inputs: Input key or keys.
            output: Output key.
            options: Output options (argv tokens) placed before the output.
            publish: Copy the result to the remote tier when not local.
            prefix: Arguments placed before the first input (e.g. ``-ss``).
            threads: Encoder threads; 0 omits the thread clause.

        Returns:
            Success(output) or the first Failure encountered.
        """
        if failure := validate_inputs(self.storage, inputs):
            return failure

        sources = [resolve_source(self.storage, key) for key in as_input_list(inputs)]
        invocation = (
            Invocation.new()
            .with_global(prefix)
            .with_input(sources)
            .with_output_params([*options, *thread_args(threads)])
            .with_output(output)
        )
        return self.execute(invocation, output, publish)

    def execute(
        self,
        invocation: Invocation,
        output: str,
        publish: bool = False,
    ) -> OperationResult:
        """Run a pre-built invocation, verify ``output`` and publish it.

        Inputs of ``invocation`` must already be validated by the caller.
        """
        if not output:
            raise ValueError("output key must not be empty")

        try:
            self.prepare_output(output)
        except (OSError, StorageError) as e:
            logger.error("Could not prepare output directory for %s: %s", output, e)
            return Failure.of(
                ErrorCode.PROCESS_FAILED, context={"output": output, "error": str(e)}
            )

        args = invocation.render(self.storage.local_path_for)
        logger.info("Running ffmpeg for %s", output)
        logger.debug("ffmpeg %s", invocation.render_text(self.storage.local_path_for))
        result = self.runner.run(args)

        if failure := self.check_result(result, output, args):
            return failure

        if publish:
            return self.publish(output)
        return Success(output)

    def prepare_output(self, output: str) -> None:
        """Create the output's parent directory on the local disk."""
        parent = str(PurePosixPath(output).parent)
        self.storage.make_directory(parent)

    def check_result(
        self,
        result: ProcessResult,
        output: str,
        args: Sequence[str] = (),
    ) -> Failure | None:
        """Verify the process succeeded and left the output on local disk."""
        if result.success and self.storage.local_exists(output):
            return None

        if not result.started:
            logger.error("ffmpeg could not be started for %s", output)
        elif result.timed_out:
            logger.warning("ffmpeg timed out producing %s", output)
        elif result.returncode != 0:
            logger.warning(
                "ffmpeg exited with %d producing %s", result.returncode, output
            )
        else:
            logger.warning("ffmpeg exited cleanly but %s was not created", output)

        return Failure.of(
            ErrorCode.PROCESS_FAILED,
            context={
                "lines": list(result.lines),
                "returncode": result.returncode,
                "started": result.started,
                "command": list(args),
            },
        )

    def publish(self, output: str) -> OperationResult:
        """Copy the local artifact to the remote tier and drop the local copy.

        A no-op on the local tier.
        """
        if self.storage.is_local_tier():
            return Success(output)

        local_path = self.storage.local_path_for(output)
        try:
            data = self.storage.get(output)
        except OSError as e:
            logger.error("Could not read %s for publishing: %s", local_path, e)
            return Failure.of(
                ErrorCode.PUBLISH_FAILED,
                context={"path": output, "resource": str(local_path)},
            )

        if not self.storage.put(output, data):
            return Failure.of(
                ErrorCode.PUBLISH_FAILED,
                context={"path": output, "resource": str(local_path)},
            )

        self.storage.delete(output)
        logger.info("Published %s", output)
        return Success(output)
