"""Scratch artifact naming and cleanup.

Intermediate files of a composite live under fixed namespaces on the
local working disk and are named by the md5 of the final output key, so
re-running a composite for the same output reuses the same names:

    tmp_video/<hash>.mp4
    tmp_audio/<hash>.mp3
    tmp_concat/<hash>/NNN_<stem>.ts
    tmp_concat/<hash>/files.txt
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import PurePosixPath
from types import TracebackType

from mediaproc.storage.interface import StorageGateway

logger = logging.getLogger(__name__)

VIDEO_DIR = "tmp_video"
AUDIO_DIR = "tmp_audio"
CONCAT_DIR = "tmp_concat"
MANIFEST_NAME = "files.txt"

_KINDS: dict[str, tuple[str, str]] = {
    "video": (VIDEO_DIR, ".mp4"),
    "audio": (AUDIO_DIR, ".mp3"),
}


def output_hash(output: str) -> str:
    return hashlib.md5(output.encode("utf-8"), usedforsecurity=False).hexdigest()


def scratch_key(output: str, kind: str) -> str:
    """Return the scratch key for an intermediate of ``output``.

    Args:
        output: Final output key of the composite.
        kind: "video" or "audio".

    Raises:
        ValueError: If kind is unknown.
    """
    try:
        directory, suffix = _KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown scratch kind: {kind!r}") from None
    return f"{directory}/{output_hash(output)}{suffix}"


def concat_dir(output: str) -> str:
    return f"{CONCAT_DIR}/{output_hash(output)}"


def concat_part_name(index: int, input_key: str) -> str:
    """Name of the index-th concat intermediate, relative to concat_dir.

    The index prefix keeps names unique when inputs share a stem.
    """
    return f"{index:03d}_{PurePosixPath(input_key).stem}.ts"


def concat_manifest(output: str) -> str:
    return f"{concat_dir(output)}/{MANIFEST_NAME}"


class ScratchTracker:
    """Records scratch keys and deletes them when the block exits.

    Example:
        with ScratchTracker(storage, keep=config.keep_scratch) as scratch:
            tmp = scratch.add(scratch_key(output, "video"))
            ...
    """

    def __init__(self, storage: StorageGateway, keep: bool = False) -> None:
        self.storage = storage
        self.keep = keep
        self.keys: list[str] = []

    def add(self, key: str) -> str:
        """Track ``key`` for cleanup and return it."""
        if key not in self.keys:
            self.keys.append(key)
        return key

    def cleanup(self) -> None:
        """Delete every tracked key from the local working disk."""
        if self.keep:
            logger.debug("Keeping %d scratch file(s)", len(self.keys))
            return
        for key in self.keys:
            self.storage.delete(key)
        logger.debug("Removed %d scratch file(s)", len(self.keys))
        self.keys.clear()

    def __enter__(self) -> ScratchTracker:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()
