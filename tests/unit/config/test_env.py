"""Tests for EnvReader."""

from pathlib import Path

from mediaproc.config.env import EnvReader


class TestEnvReader:
    def test_get_str(self) -> None:
        reader = EnvReader(env={"A": "value"})

        assert reader.get_str("A") == "value"
        assert reader.get_str("B", "default") == "default"

    def test_get_int_invalid_returns_default(self, caplog) -> None:
        reader = EnvReader(env={"MEDIAPROC_THREADS": "many"})

        assert reader.get_int("MEDIAPROC_THREADS", 4) == 4
        assert "Invalid integer value for MEDIAPROC_THREADS" in caplog.text

    def test_get_bool(self) -> None:
        reader = EnvReader(env={"YES": "On", "NO": "0"})

        assert reader.get_bool("YES") is True
        assert reader.get_bool("NO") is False
        assert reader.get_bool("MISSING") is None

    def test_get_path_expands_user(self) -> None:
        reader = EnvReader(env={"P": "~/media"})

        assert reader.get_path("P") == Path("~/media").expanduser()
