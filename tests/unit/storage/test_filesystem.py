"""Tests for filesystem storage gateways."""

import pytest

from mediaproc.config.models import StorageConfig
from mediaproc.storage.filesystem import (
    LocalStorage,
    MountedRemoteStorage,
    create_storage,
)
from mediaproc.storage.interface import StorageError


class TestLocalStorage:
    """Tests for LocalStorage."""

    def test_is_local_tier(self, storage) -> None:
        assert storage.is_local_tier()

    def test_put_and_get(self, storage) -> None:
        assert storage.put("a/b.txt", b"data")

        assert storage.exists("a/b.txt")
        assert storage.local_exists("a/b.txt")
        assert storage.get("a/b.txt") == b"data"

    def test_delete_missing_is_ignored(self, storage) -> None:
        storage.delete("never-written.mp4")

    def test_delete_removes_file(self, storage) -> None:
        storage.put_local("x.mp4", b"1")

        storage.delete("x.mp4")

        assert not storage.local_exists("x.mp4")

    def test_make_directory_root(self, storage) -> None:
        storage.make_directory(".")

        assert storage.root.is_dir()

    def test_key_cannot_escape_root(self, storage) -> None:
        with pytest.raises(StorageError):
            storage.local_path_for("../outside.mp4")

    def test_escaping_key_does_not_exist(self, storage) -> None:
        assert not storage.exists("../outside.mp4")

    def test_remote_url_without_base_is_local_path(self, storage) -> None:
        assert storage.remote_url_for("a.mp4") == str(storage.local_path_for("a.mp4"))

    def test_remote_url_with_base(self, tmp_path) -> None:
        storage = LocalStorage(tmp_path, base_url="http://media.local/files/")

        assert storage.remote_url_for("a.mp4") == "http://media.local/files/a.mp4"


class TestMountedRemoteStorage:
    """Tests for MountedRemoteStorage."""

    def test_is_not_local_tier(self, remote_storage) -> None:
        assert not remote_storage.is_local_tier()

    def test_exists_checks_remote_only(self, remote_storage) -> None:
        remote_storage.put_local("local-only.mp4", b"1")

        assert remote_storage.local_exists("local-only.mp4")
        assert not remote_storage.exists("local-only.mp4")

    def test_put_writes_remote(self, remote_storage) -> None:
        assert remote_storage.put("out/a.mp4", b"published")

        assert (remote_storage.remote_root / "out" / "a.mp4").read_bytes() == (
            b"published"
        )
        assert not list((remote_storage.remote_root / "out").glob(".*.part"))

    def test_rejects_non_http_base_url(self, tmp_path) -> None:
        with pytest.raises(StorageError):
            MountedRemoteStorage(tmp_path / "w", tmp_path / "r", "ftp://host/")


class TestCreateStorage:
    def test_local(self, tmp_path) -> None:
        storage = create_storage(StorageConfig(root=tmp_path))

        assert isinstance(storage, LocalStorage)
        assert storage.is_local_tier()

    def test_remote(self, tmp_path) -> None:
        storage = create_storage(
            StorageConfig(
                root=tmp_path / "work",
                remote_root=tmp_path / "remote",
                remote_url="https://cdn.example.com",
            )
        )

        assert isinstance(storage, MountedRemoteStorage)
