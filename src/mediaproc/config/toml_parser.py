"""TOML parsing for configuration files.

Uses tomllib on Python 3.11+ and the tomli package on older interpreters.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

TomlParseError = tomllib.TOMLDecodeError


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML content into a dictionary.

    Raises:
        TomlParseError: If the content is not valid TOML.
    """
    return tomllib.loads(content)


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file.
        strict: Raise TomlParseError instead of returning {} on bad syntax.

    Returns:
        Parsed dictionary. Empty if the file doesn't exist.
    """
    if not path.exists():
        logger.debug("TOML file not found: %s", path)
        return {}

    try:
        config = parse_toml(path.read_text(encoding="utf-8"))
    except TomlParseError as e:
        if strict:
            raise
        logger.warning("Failed to parse TOML file %s: %s", path, e)
        return {}

    logger.debug("Loaded TOML config from %s", path)
    return config
