"""Tests for configuration loading and precedence."""

from pathlib import Path

import pytest

from mediaproc.config.env import EnvReader
from mediaproc.config.loader import get_config, get_default_config_path
from mediaproc.config.models import ConfigError
from mediaproc.config.toml_parser import TomlParseError

CONFIG_TOML = """\
[tools]
ffmpeg = "/opt/ffmpeg/bin/ffmpeg"

[storage]
root = "/srv/media"

[pipeline]
width = 720
height = 1280
threads = 2
keep_scratch = true

[logging]
level = "debug"
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML)
    return path


class TestGetDefaultConfigPath:
    def test_env_override(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("MEDIAPROC_CONFIG_PATH", str(tmp_path / "x.toml"))

        assert get_default_config_path() == tmp_path / "x.toml"

    def test_default_location(self, monkeypatch) -> None:
        monkeypatch.delenv("MEDIAPROC_CONFIG_PATH", raising=False)

        assert get_default_config_path().parts[-2:] == (".mediaproc", "config.toml")


class TestGetConfig:
    """Tests for get_config precedence: defaults < file < env < cli."""

    def test_defaults_when_no_file(self, tmp_path: Path) -> None:
        config = get_config(
            config_path=tmp_path / "missing.toml", env_reader=EnvReader(env={})
        )

        assert config.pipeline.width == 540
        assert config.pipeline.height == 952
        assert config.pipeline.threads == 4
        assert config.pipeline.timeout == 1800
        assert not config.pipeline.keep_scratch
        assert not config.storage.is_remote
        assert config.tools.ffmpeg is None

    def test_file_values(self, config_file: Path) -> None:
        config = get_config(config_path=config_file, env_reader=EnvReader(env={}))

        assert config.tools.ffmpeg == Path("/opt/ffmpeg/bin/ffmpeg")
        assert config.storage.root == Path("/srv/media")
        assert config.pipeline.width == 720
        assert config.pipeline.threads == 2
        assert config.pipeline.keep_scratch
        assert config.logging.level == "debug"

    def test_env_overrides_file(self, config_file: Path) -> None:
        env = EnvReader(
            env={"MEDIAPROC_THREADS": "8", "MEDIAPROC_KEEP_SCRATCH": "false"}
        )

        config = get_config(config_path=config_file, env_reader=env)

        assert config.pipeline.threads == 8
        assert not config.pipeline.keep_scratch
        assert config.pipeline.width == 720

    def test_cli_overrides_env(self, config_file: Path, tmp_path: Path) -> None:
        env = EnvReader(env={"MEDIAPROC_STORAGE_ROOT": "/from/env"})

        config = get_config(
            config_path=config_file, storage_root=tmp_path / "cli", env_reader=env
        )

        assert config.storage.root == tmp_path / "cli"

    def test_remote_tier_from_env(self, tmp_path: Path) -> None:
        env = EnvReader(
            env={
                "MEDIAPROC_REMOTE_ROOT": str(tmp_path / "remote"),
                "MEDIAPROC_REMOTE_URL": "https://cdn.example.com",
            }
        )

        config = get_config(config_path=tmp_path / "none.toml", env_reader=env)

        assert config.storage.is_remote
        assert config.storage.remote_url == "https://cdn.example.com"

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        env = EnvReader(env={"MEDIAPROC_WIDTH": "-5"})

        with pytest.raises(ConfigError):
            get_config(config_path=tmp_path / "none.toml", env_reader=env)

    def test_remote_root_without_url_raises(self, tmp_path: Path) -> None:
        env = EnvReader(env={"MEDIAPROC_REMOTE_ROOT": str(tmp_path)})

        with pytest.raises(ConfigError):
            get_config(config_path=tmp_path / "none.toml", env_reader=env)

    def test_bad_toml_ignored_unless_strict(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[pipeline\nwidth = ")

        config = get_config(config_path=path, env_reader=EnvReader(env={}))
        assert config.pipeline.width == 540

        with pytest.raises(TomlParseError):
            get_config(config_path=path, env_reader=EnvReader(env={}), strict=True)

    def test_wrong_type_in_file_raises_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[pipeline]\nwidth = "wide"\n')

        with pytest.raises(ConfigError, match="pipeline.width"):
            get_config(config_path=path, env_reader=EnvReader(env={}))
