"""ffmpeg-based media probe.

Runs ``ffmpeg -i <file>`` without an output, which makes ffmpeg print the
container and stream summary before exiting with a non-zero status. The
exit status is therefore ignored; only a failure to run at all counts.
"""

import dataclasses
import logging

from mediaproc.core.subprocess_utils import FFmpegRunner
from mediaproc.executor.command import Invocation
from mediaproc.executor.inputs import resolve_source, validate_inputs
from mediaproc.executor.result import ErrorCode, Failure, OperationResult, Success
from mediaproc.introspector.parsers import parse_media_info
from mediaproc.storage.interface import StorageGateway

logger = logging.getLogger(__name__)


class MediaProber:
    """Harvests MediaInfo for storage keys."""

    def __init__(self, storage: StorageGateway, runner: FFmpegRunner) -> None:
        self.storage = storage
        self.runner = runner

    def probe(self, key: str) -> OperationResult:
        """Probe a media file.

        Args:
            key: Storage key of the file.

        Returns:
            Success(MediaInfo), Failure(100) for an empty key, Failure(101)
            if the key does not exist, or Failure(102) if ffmpeg could not
            be run or timed out.
        """
        if failure := validate_inputs(self.storage, key):
            return failure

        invocation = Invocation.new().with_input(resolve_source(self.storage, key))
        result = self.runner.run(invocation.render(self.storage.local_path_for))

        if not result.started or result.timed_out:
            return Failure.of(
                ErrorCode.PROCESS_FAILED,
                context={
                    "lines": list(result.lines),
                    "returncode": result.returncode,
                    "started": result.started,
                },
            )

        info = parse_media_info(result.text)

        # Remote probes cannot report size without fetching the file.
        if self.storage.is_local_tier():
            try:
                size = self.storage.local_path_for(key).stat().st_size
            except OSError as e:
                logger.warning("Could not stat %s: %s", key, e)
            else:
                info = dataclasses.replace(info, size=size)

        logger.debug("Probed %s: %s", key, info.to_dict())
        return Success(info)
