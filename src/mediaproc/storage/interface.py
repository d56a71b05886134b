"""StorageGateway protocol.

The storage backend is a key-addressed blob store split into two tiers.
On the local tier ffmpeg reads and writes the files directly. On a remote
tier, artifacts are produced on a local working disk first and then
published (copied) to the remote store.

Methods documented as "local" act on the local working disk regardless
of the tier; the others act on the configured tier.
"""

from pathlib import Path
from typing import Protocol


class StorageError(Exception):
    """Raised when a storage backend cannot complete a request."""

    pass


class StorageGateway(Protocol):
    """Protocol for storage backends consumed by the pipeline."""

    def exists(self, key: str) -> bool:
        """Check whether ``key`` exists in the configured tier."""
        ...

    def local_exists(self, key: str) -> bool:
        """Check whether ``key`` exists on the local working disk."""
        ...

    def is_local_tier(self) -> bool:
        """Return True when the configured tier is the local disk."""
        ...

    def local_path_for(self, key: str) -> Path:
        """Map ``key`` to its filesystem path on the local working disk."""
        ...

    def remote_url_for(self, key: str) -> str:
        """Map ``key`` to a URL ffmpeg can read from the configured tier."""
        ...

    def make_directory(self, path: str) -> None:
        """Create a directory (and parents) on the local working disk."""
        ...

    def put(self, key: str, data: bytes) -> bool:
        """Write ``data`` to the configured tier. Returns False on failure."""
        ...

    def get(self, key: str) -> bytes:
        """Read ``key`` from the local working disk."""
        ...

    def put_local(self, key: str, data: bytes) -> None:
        """Write ``data`` to the local working disk."""
        ...

    def delete(self, key: str) -> None:
        """Delete ``key`` from the local working disk, if present."""
        ...
