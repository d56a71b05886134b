"""Storage tier adapters.

- interface: StorageGateway protocol consumed by the pipeline
- filesystem: LocalStorage (local tier) and MountedRemoteStorage (remote tier)
"""

from mediaproc.storage.filesystem import (
    LocalStorage,
    MountedRemoteStorage,
    create_storage,
)
from mediaproc.storage.interface import StorageError, StorageGateway

__all__ = [
    "LocalStorage",
    "MountedRemoteStorage",
    "StorageError",
    "StorageGateway",
    "create_storage",
]
