"""Media metadata record harvested from ffmpeg diagnostics."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class MediaInfo:
    """Facts extracted from ffmpeg's diagnostic output.

    Every field is optional: a field is set only when its pattern matched.
    A file without an audio stream simply has no audio fields.
    """

    duration: str | None = None
    """Verbatim duration token, e.g. "00:01:30.00"."""

    seconds: int | None = None
    """Whole seconds derived from duration (fraction truncated)."""

    start: float | None = None
    bitrate: int | None = None
    """Container bitrate in kb/s."""

    vcodec: str | None = None
    vformat: str | None = None
    resolution: str | None = None
    width: int | None = None
    height: int | None = None

    acodec: str | None = None
    asamplerate: int | None = None
    """Audio sample rate in Hz."""

    play_time: float | None = None
    """seconds + start, when both are known."""

    size: int | None = None
    """File size in bytes (local tier only)."""

    @property
    def has_video(self) -> bool:
        return self.vcodec is not None

    @property
    def has_audio(self) -> bool:
        return self.acodec is not None

    def same_dimensions(self, other: MediaInfo) -> bool:
        return self.width == other.width and self.height == other.height

    def to_dict(self) -> dict[str, Any]:
        """Return the populated fields only."""
        return {k: v for k, v in asdict(self).items() if v is not None}
