"""Formatters for probe results.

Shared by the CLI and any other consumer that needs to display MediaInfo.
"""

import json

from mediaproc.introspector.types import MediaInfo


def format_human(key: str, info: MediaInfo) -> str:
    """Format MediaInfo for terminal output.

    Args:
        key: Storage key that was probed.
        info: The probe result.

    Returns:
        Multi-line string.
    """
    lines: list[str] = [f"File: {key}"]

    if info.duration is not None:
        duration = info.duration
        if info.seconds is not None:
            duration += f" ({info.seconds}s)"
        lines.append(f"Duration: {duration}")
    if info.bitrate is not None:
        lines.append(f"Bitrate: {info.bitrate} kb/s")
    if info.size is not None:
        lines.append(f"Size: {info.size} bytes")

    lines.append("")
    lines.append("Streams:")
    if info.has_video:
        lines.append(
            f"  Video: {info.vcodec}, {info.vformat}, "
            f"{info.width}x{info.height}"
        )
    if info.has_audio:
        rate = f", {info.asamplerate} Hz" if info.asamplerate is not None else ""
        lines.append(f"  Audio: {info.acodec}{rate}")
    if not info.has_video and not info.has_audio:
        lines.append("  (no streams found)")

    return "\n".join(lines)


def format_json(key: str, info: MediaInfo) -> str:
    """Format MediaInfo as a JSON document."""
    return json.dumps({"file": key, **info.to_dict()}, indent=2)
