"""FFmpeg invocation building.

An Invocation is an immutable description of one ffmpeg run: global
arguments, ordered input files with optional per-input parameters, and
ordered output files with optional per-output parameters. Each logical
operation builds a fresh value and renders it once.

Per-file parameters are paired positionally with their files only when
the number of parameter groups equals the number of files; otherwise no
per-file parameters are emitted at all.
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from pathlib import Path

URL_PATTERN = re.compile(r"^(http|https)://")

Params = tuple[str, ...]


def is_url(path: str) -> bool:
    """Return True if ``path`` is an absolute HTTP(S) URL."""
    return bool(URL_PATTERN.match(path))


def _as_files(value: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _as_param_groups(
    value: Sequence[str] | Iterable[Sequence[str]],
) -> tuple[Params, ...]:
    """Normalize parameters to a tuple of argv groups.

    A flat sequence of strings is one group; a sequence of sequences is
    one group per entry.
    """
    items = list(value)
    if not items or all(isinstance(item, str) for item in items):
        return (tuple(items),)  # type: ignore[arg-type]
    return tuple(tuple(item) for item in items)


@dataclass(frozen=True)
class Invocation:
    """Immutable ffmpeg invocation specification."""

    global_args: Params = ()
    inputs: tuple[str, ...] = ()
    input_params: tuple[Params, ...] = ()
    outputs: tuple[str, ...] = ()
    output_params: tuple[Params, ...] = ()

    @classmethod
    def new(cls) -> Invocation:
        return cls()

    def with_input(self, files: str | Iterable[str]) -> Invocation:
        return replace(self, inputs=self.inputs + _as_files(files))

    def with_input_params(
        self, params: Sequence[str] | Iterable[Sequence[str]]
    ) -> Invocation:
        return replace(self, input_params=self.input_params + _as_param_groups(params))

    def with_output(self, files: str | Iterable[str]) -> Invocation:
        return replace(self, outputs=self.outputs + _as_files(files))

    def with_output_params(
        self, params: Sequence[str] | Iterable[Sequence[str]]
    ) -> Invocation:
        return replace(
            self, output_params=self.output_params + _as_param_groups(params)
        )

    def with_global(self, args: Sequence[str]) -> Invocation:
        return replace(self, global_args=self.global_args + tuple(args))

    def render(self, resolve: Callable[[str], Path | str]) -> list[str]:
        """Render the invocation to an ffmpeg argv list (without the binary).

        Args:
            resolve: Maps a non-URL file key to a filesystem path, usually
                StorageGateway.local_path_for.

        Returns:
            Argument list: global args, inputs, then outputs.
        """

        def _resolve(file: str) -> str:
            return file if is_url(file) else str(resolve(file))

        args: list[str] = list(self.global_args)

        paired_inputs = len(self.input_params) == len(self.inputs)
        for i, file in enumerate(self.inputs):
            if paired_inputs:
                args.extend(self.input_params[i])
            args.extend(["-i", _resolve(file)])

        paired_outputs = len(self.output_params) == len(self.outputs)
        for i, file in enumerate(self.outputs):
            if paired_outputs:
                args.extend(self.output_params[i])
            args.append(_resolve(file))

        return args

    def render_text(self, resolve: Callable[[str], Path | str] = str) -> str:
        """Render as a shell-quoted string, for logs and diagnostics."""
        return shlex.join(self.render(resolve))
