"""Typed access to MEDIAPROC_* environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class EnvReader:
    """Reads environment variables, converting them to the wanted type.

    Every getter returns ``default`` when the variable is unset. Tests pass
    their own mapping instead of touching ``os.environ``:

        EnvReader(env={"MEDIAPROC_THREADS": "8"}).get_int("MEDIAPROC_THREADS")
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def _get(
        self, var: str, convert: Callable[[str], T], default: T | None
    ) -> T | None:
        raw = self._env.get(var)
        if raw is None:
            return default
        return convert(raw)

    def get_str(self, var: str, default: str | None = None) -> str | None:
        return self._get(var, str, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Unparseable values log a warning and fall back to ``default``."""
        try:
            return self._get(var, int, default)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, self._env[var])
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """true/1/yes/on (any case) are true; anything else is false."""
        return self._get(var, lambda raw: raw.lower() in _TRUE_VALUES, default)

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        return self._get(var, lambda raw: Path(raw).expanduser(), default)
