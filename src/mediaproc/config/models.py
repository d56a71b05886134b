"""Configuration data models.

This module defines dataclasses for mediaproc configuration options.
Defaults are module-level constants so callers can refer to them.
"""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_WIDTH = 540
DEFAULT_HEIGHT = 952
DEFAULT_RESIZE_WIDTH = 540
DEFAULT_RESIZE_HEIGHT = 960
DEFAULT_DURATION_CAP = 0
DEFAULT_THREADS = 4
DEFAULT_TIMEOUT = 1800


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""

    pass


def _require_type(section: str, name: str, value: object, kind: type) -> None:
    # bool is an int subclass; only accept it where a bool is wanted
    if isinstance(value, kind) and (kind is bool or not isinstance(value, bool)):
        return
    raise ConfigError(
        f"{section}.{name} must be {kind.__name__}, got {type(value).__name__}"
    )


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    If ffmpeg is not specified it is looked up in PATH.
    """

    ffmpeg: Path | None = None


@dataclass
class StorageConfig:
    """Configuration for the storage tier."""

    # Local working directory (and the whole tier when remote_root is unset)
    root: Path = Path("storage")

    # Mounted remote tier; None selects the local tier
    remote_root: Path | None = None

    # HTTP(S) prefix under which remote_root is served to ffmpeg
    remote_url: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.remote_url is not None:
            _require_type("storage", "remote_url", self.remote_url, str)
        if self.remote_root is not None and not self.remote_url:
            raise ConfigError("storage.remote_url is required with remote_root")
        if self.remote_url and not self.remote_url.startswith(
            ("http://", "https://")
        ):
            raise ConfigError("storage.remote_url must start with http:// or https://")

    @property
    def is_remote(self) -> bool:
        return self.remote_root is not None


@dataclass(frozen=True)
class PipelineConfig:
    """Defaults consumed by pipeline operations.

    Passed explicitly to the orchestrator; nothing reads it from a global.
    """

    width: int = DEFAULT_WIDTH
    """Default normalize width for thumbnail and concat."""

    height: int = DEFAULT_HEIGHT
    """Default normalize height for thumbnail and concat."""

    resize_width: int = DEFAULT_RESIZE_WIDTH
    resize_height: int = DEFAULT_RESIZE_HEIGHT

    duration_cap: int = DEFAULT_DURATION_CAP
    """Clip normalized outputs to this many seconds; 0 = unbounded."""

    threads: int = DEFAULT_THREADS
    """ffmpeg encoder threads; 0 omits the thread clause."""

    timeout: int = DEFAULT_TIMEOUT
    """Per-invocation timeout in seconds; 0 = unbounded."""

    keep_scratch: bool = False
    """Keep intermediate scratch files after a composite finishes."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in (
            "width",
            "height",
            "resize_width",
            "resize_height",
            "duration_cap",
            "threads",
            "timeout",
        ):
            _require_type("pipeline", name, getattr(self, name), int)
        _require_type("pipeline", "keep_scratch", self.keep_scratch, bool)
        for name in ("width", "height", "resize_width", "resize_height"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"pipeline.{name} must be positive")
        for name in ("duration_cap", "threads", "timeout"):
            if getattr(self, name) < 0:
                raise ConfigError(f"pipeline.{name} must not be negative")


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("level", "format"):
            _require_type("logging", name, getattr(self, name), str)
        _require_type("logging", "include_stderr", self.include_stderr, bool)
        for name in ("max_bytes", "backup_count"):
            _require_type("logging", name, getattr(self, name), int)
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ConfigError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ConfigError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class MediaProcConfig:
    """Top-level configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
