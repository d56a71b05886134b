"""Filesystem-backed storage gateways.

LocalStorage serves the local tier: ffmpeg reads and writes files under
a single root directory. MountedRemoteStorage serves a remote tier that
is reachable as a mounted directory (NFS share, object-store mount) and
readable by ffmpeg over HTTP(S); processing happens on a local working
root and finished artifacts are published into the mount.
"""

import logging
import shutil
from pathlib import Path, PurePosixPath

from mediaproc.config.models import StorageConfig
from mediaproc.storage.interface import StorageError

logger = logging.getLogger(__name__)


def _normalize_key(key: str) -> str:
    """Normalize a storage key to a relative POSIX path.

    Raises:
        StorageError: If the key is empty or escapes the storage root.
    """
    normalized = PurePosixPath(key.replace("\\", "/").lstrip("/"))
    if not normalized.parts or ".." in normalized.parts:
        raise StorageError(f"Invalid storage key: {key!r}")
    return str(normalized)


class LocalStorage:
    """Local tier rooted at a directory.

    The working disk and the tier are the same directory, so publishing
    is never needed.
    """

    def __init__(self, root: Path | str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            root: Directory holding all keys.
            base_url: Optional public URL prefix returned by remote_url_for.
        """
        self.root = Path(root).expanduser().resolve()
        self.base_url = base_url.rstrip("/") if base_url else None

    def is_local_tier(self) -> bool:
        return True

    def local_path_for(self, key: str) -> Path:
        return self.root / _normalize_key(key)

    def remote_url_for(self, key: str) -> str:
        if self.base_url:
            return f"{self.base_url}/{_normalize_key(key)}"
        return str(self.local_path_for(key))

    def exists(self, key: str) -> bool:
        return self.local_exists(key)

    def local_exists(self, key: str) -> bool:
        try:
            return self.local_path_for(key).is_file()
        except StorageError:
            return False

    def make_directory(self, path: str) -> None:
        if path in ("", "."):
            self.root.mkdir(parents=True, exist_ok=True)
            return
        self.local_path_for(path).mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> bytes:
        return self.local_path_for(key).read_bytes()

    def put_local(self, key: str, data: bytes) -> None:
        path = self.local_path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def put(self, key: str, data: bytes) -> bool:
        try:
            self.put_local(key, data)
        except OSError as e:
            logger.warning("Could not write %s: %s", key, e)
            return False
        return True

    def delete(self, key: str) -> None:
        path = self.local_path_for(key)
        try:
            path.unlink()
            logger.debug("Deleted local file: %s", path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not delete %s: %s", path, e)


class MountedRemoteStorage(LocalStorage):
    """Remote tier published through a mounted directory.

    Inputs are looked up in the remote mount and handed to ffmpeg by URL;
    outputs and scratch files live under the local working root until
    they are published with put().
    """

    def __init__(
        self,
        local_root: Path | str,
        remote_root: Path | str,
        base_url: str,
    ) -> None:
        """Initialize remote storage.

        Args:
            local_root: Working directory where ffmpeg writes outputs.
            remote_root: Mounted directory holding the remote tier.
            base_url: HTTP(S) URL prefix under which remote_root is served.

        Raises:
            StorageError: If base_url is not an HTTP(S) URL.
        """
        if not base_url.startswith(("http://", "https://")):
            raise StorageError(
                f"Remote base URL must start with http:// or https://: {base_url}"
            )
        super().__init__(local_root, base_url=base_url)
        self.remote_root = Path(remote_root).expanduser().resolve()

    def is_local_tier(self) -> bool:
        return False

    def _remote_path(self, key: str) -> Path:
        return self.remote_root / _normalize_key(key)

    def exists(self, key: str) -> bool:
        try:
            return self._remote_path(key).is_file()
        except StorageError:
            return False

    def put(self, key: str, data: bytes) -> bool:
        try:
            target = self._remote_path(key)
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp = target.with_name(f".{target.name}.part")
            tmp.write_bytes(data)
            shutil.move(str(tmp), str(target))
        except (OSError, StorageError) as e:
            logger.warning("Could not publish %s to %s: %s", key, self.remote_root, e)
            return False
        logger.debug("Published %s to %s", key, self.remote_root)
        return True


def create_storage(config: StorageConfig) -> LocalStorage:
    """Build the gateway selected by a StorageConfig.

    Returns:
        MountedRemoteStorage when ``remote_root`` is set, else LocalStorage.
    """
    if config.is_remote:
        return MountedRemoteStorage(config.root, config.remote_root, config.remote_url)
    return LocalStorage(config.root)
