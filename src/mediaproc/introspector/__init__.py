"""Media introspection from ffmpeg diagnostic output."""

from mediaproc.introspector.formatters import format_human, format_json
from mediaproc.introspector.parsers import parse_media_info
from mediaproc.introspector.probe import MediaProber
from mediaproc.introspector.types import MediaInfo

__all__ = [
    "MediaInfo",
    "MediaProber",
    "format_human",
    "format_json",
    "parse_media_info",
]
