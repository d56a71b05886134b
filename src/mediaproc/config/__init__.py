"""Configuration management for mediaproc.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (MEDIAPROC_*)
3. Config file (~/.mediaproc/config.toml)
4. Default values (lowest priority)
"""

from mediaproc.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediaproc.config.env import EnvReader
from mediaproc.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from mediaproc.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from mediaproc.config.models import (
    ConfigError,
    LoggingConfig,
    MediaProcConfig,
    PipelineConfig,
    StorageConfig,
    ToolPathsConfig,
)
from mediaproc.config.toml_parser import TomlParseError, load_toml_file, parse_toml

__all__ = [
    # Models
    "ConfigError",
    "LoggingConfig",
    "MediaProcConfig",
    "PipelineConfig",
    "StorageConfig",
    "ToolPathsConfig",
    # Loader
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Layering
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
    "configure_logging_from_cli",
    "parse_toml",
    "load_toml_file",
    "TomlParseError",
]
