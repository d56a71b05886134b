"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building MediaProcConfig by
composing multiple configuration sources with explicit precedence.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from mediaproc.config.env import EnvReader
from mediaproc.config.models import (
    LoggingConfig,
    MediaProcConfig,
    PipelineConfig,
    StorageConfig,
    ToolPathsConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Tool paths
    ffmpeg_path: Path | None = None

    # Storage config
    storage_root: Path | None = None
    storage_remote_root: Path | None = None
    storage_remote_url: str | None = None

    # Pipeline config
    pipeline_width: int | None = None
    pipeline_height: int | None = None
    pipeline_resize_width: int | None = None
    pipeline_resize_height: int | None = None
    pipeline_duration_cap: int | None = None
    pipeline_threads: int | None = None
    pipeline_timeout: int | None = None
    pipeline_keep_scratch: bool | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds MediaProcConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._sources: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply a configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value it sets.
        """
        for f in fields(source):
            value = getattr(source, f.name)
            if value is not None:
                self._values[f.name] = value
                self._sources[f.name] = source_name

    def source_of(self, name: str) -> str:
        """Return which source set ``name`` ("default" if none did)."""
        return self._sources.get(name, "default")

    def _get(self, name: str, default: Any) -> Any:
        return self._values.get(name, default)

    def build(self) -> MediaProcConfig:
        """Build the final configuration.

        Raises:
            ConfigError: If any value fails model validation.
        """
        storage_defaults = StorageConfig()
        pipeline_defaults = PipelineConfig()
        logging_defaults = LoggingConfig()

        return MediaProcConfig(
            tools=ToolPathsConfig(ffmpeg=self._get("ffmpeg_path", None)),
            storage=StorageConfig(
                root=self._get("storage_root", storage_defaults.root),
                remote_root=self._get("storage_remote_root", None),
                remote_url=self._get("storage_remote_url", None),
            ),
            pipeline=PipelineConfig(
                width=self._get("pipeline_width", pipeline_defaults.width),
                height=self._get("pipeline_height", pipeline_defaults.height),
                resize_width=self._get(
                    "pipeline_resize_width", pipeline_defaults.resize_width
                ),
                resize_height=self._get(
                    "pipeline_resize_height", pipeline_defaults.resize_height
                ),
                duration_cap=self._get(
                    "pipeline_duration_cap", pipeline_defaults.duration_cap
                ),
                threads=self._get("pipeline_threads", pipeline_defaults.threads),
                timeout=self._get("pipeline_timeout", pipeline_defaults.timeout),
                keep_scratch=self._get(
                    "pipeline_keep_scratch", pipeline_defaults.keep_scratch
                ),
            ),
            logging=LoggingConfig(
                level=self._get("logging_level", logging_defaults.level),
                file=self._get("logging_file", logging_defaults.file),
                format=self._get("logging_format", logging_defaults.format),
                include_stderr=self._get(
                    "logging_include_stderr", logging_defaults.include_stderr
                ),
                max_bytes=self._get("logging_max_bytes", logging_defaults.max_bytes),
                backup_count=self._get(
                    "logging_backup_count", logging_defaults.backup_count
                ),
            ),
        )


def _path_or_none(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value)).expanduser()


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create a ConfigSource from a parsed TOML config dict."""
    tools = file_config.get("tools", {})
    storage = file_config.get("storage", {})
    pipeline = file_config.get("pipeline", {})
    logging_conf = file_config.get("logging", {})

    return ConfigSource(
        ffmpeg_path=_path_or_none(tools.get("ffmpeg")),
        storage_root=_path_or_none(storage.get("root")),
        storage_remote_root=_path_or_none(storage.get("remote_root")),
        storage_remote_url=storage.get("remote_url"),
        pipeline_width=pipeline.get("width"),
        pipeline_height=pipeline.get("height"),
        pipeline_resize_width=pipeline.get("resize_width"),
        pipeline_resize_height=pipeline.get("resize_height"),
        pipeline_duration_cap=pipeline.get("duration_cap"),
        pipeline_threads=pipeline.get("threads"),
        pipeline_timeout=pipeline.get("timeout"),
        pipeline_keep_scratch=pipeline.get("keep_scratch"),
        logging_level=logging_conf.get("level"),
        logging_file=_path_or_none(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create a ConfigSource from MEDIAPROC_* environment variables."""
    return ConfigSource(
        ffmpeg_path=reader.get_path("MEDIAPROC_FFMPEG_PATH"),
        storage_root=reader.get_path("MEDIAPROC_STORAGE_ROOT"),
        storage_remote_root=reader.get_path("MEDIAPROC_REMOTE_ROOT"),
        storage_remote_url=reader.get_str("MEDIAPROC_REMOTE_URL"),
        pipeline_width=reader.get_int("MEDIAPROC_WIDTH"),
        pipeline_height=reader.get_int("MEDIAPROC_HEIGHT"),
        pipeline_duration_cap=reader.get_int("MEDIAPROC_DURATION_CAP"),
        pipeline_threads=reader.get_int("MEDIAPROC_THREADS"),
        pipeline_timeout=reader.get_int("MEDIAPROC_TIMEOUT"),
        pipeline_keep_scratch=reader.get_bool("MEDIAPROC_KEEP_SCRATCH"),
        logging_level=reader.get_str("MEDIAPROC_LOG_LEVEL"),
    )
