"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (MEDIAPROC_*)
3. Config file (~/.mediaproc/config.toml)
4. Default values

Environment variables:
- MEDIAPROC_CONFIG_PATH: Path to config file (overrides default location)
- MEDIAPROC_FFMPEG_PATH: Path to ffmpeg executable
- MEDIAPROC_STORAGE_ROOT: Local storage / working directory
- MEDIAPROC_REMOTE_ROOT: Mounted remote tier directory
- MEDIAPROC_REMOTE_URL: HTTP(S) prefix serving the remote tier
- MEDIAPROC_WIDTH, MEDIAPROC_HEIGHT: Default normalize size
- MEDIAPROC_DURATION_CAP: Output duration cap in seconds (0 = unbounded)
- MEDIAPROC_THREADS: ffmpeg encoder threads
- MEDIAPROC_TIMEOUT: Per-invocation timeout in seconds (0 = unbounded)
- MEDIAPROC_KEEP_SCRATCH: Keep intermediate scratch files
- MEDIAPROC_LOG_LEVEL: Log level
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from mediaproc.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediaproc.config.env import EnvReader
from mediaproc.config.models import MediaProcConfig
from mediaproc.config.toml_parser import load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mediaproc"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by MEDIAPROC_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("MEDIAPROC_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise TomlParseError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()
    return load_toml_file(path, strict=strict)


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    storage_root: Path | None = None,
    log_level: str | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> MediaProcConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MEDIAPROC_CONFIG_PATH).
        ffmpeg_path: CLI override for the ffmpeg path.
        storage_root: CLI override for the storage root.
        log_level: CLI override for the log level.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise TomlParseError on config file parse failures.

    Returns:
        MediaProcConfig with merged configuration.

    Raises:
        ConfigError: If a merged value is invalid.
        TomlParseError: When strict=True and the config file cannot be parsed.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    builder.apply(
        ConfigSource(
            ffmpeg_path=ffmpeg_path,
            storage_root=storage_root,
            logging_level=log_level,
        ),
        source_name="cli",
    )

    config = builder.build()
    logger.debug(
        "Configuration loaded: storage_root=%s (%s), remote=%s",
        config.storage.root,
        builder.source_of("storage_root"),
        config.storage.is_remote,
    )
    return config
