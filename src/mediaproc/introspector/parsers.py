"""Pure parsing functions for ffmpeg diagnostic output.

ffmpeg prints stream information to stderr when asked to read a file.
This module scrapes that free-form text into a MediaInfo record. All
patterns live here so they can be tested against fixed sample text.

Scraping is best-effort: each extraction is independent and a missing
or malformed piece leaves only its own fields unset.
"""

import logging
import re

from mediaproc.introspector.types import MediaInfo

logger = logging.getLogger(__name__)

# Duration: 00:33:42.64, start: 0.000000, bitrate: 152 kb/s
DURATION_PATTERN = re.compile(r"Duration: (.*?), start: (.*?), bitrate: (\d*) kb/s")

# Stream #0:1: Video: rv20 (RV20 / 0x30325652), yuv420p, 352x288, 117 kb/s, ...
# Parenthesised pixel format details such as "yuv420p(tv, bt709)" are
# consumed whole so the resolution token stays in third position.
VIDEO_PATTERN = re.compile(r"Video: (.*?), ((?:[^,(\n]|\([^)\n]*\))*), (.*?)[,\s]")

# Stream #0:0: Audio: cook (cook / 0x6B6F6F63), 22050 Hz, stereo, fltp, 32 kb/s
AUDIO_PATTERN = re.compile(r"Audio: (.*), (\d*) Hz")


def parse_timestamp_seconds(value: str) -> int | None:
    """Convert an ``HH:MM:SS[.ff]`` token to whole seconds.

    Fractional seconds are truncated.

    Args:
        value: Timestamp such as "00:01:30.50".

    Returns:
        H*3600 + M*60 + S, or None if the token is not three numeric parts.
    """
    parts = value.strip().split(":")
    if len(parts) != 3:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2].split(".")[0])
    except ValueError:
        return None
    return hours * 3600 + minutes * 60 + seconds


def parse_resolution(token: str) -> tuple[int, int]:
    """Split a ``WIDTHxHEIGHT`` token.

    Returns:
        (width, height), or (0, 0) if the token is not exactly two
        x-separated integers.
    """
    parts = token.split("x")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        return 0, 0
    return int(parts[0]), int(parts[1])


def _to_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def _to_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def parse_media_info(text: str) -> MediaInfo:
    """Extract media facts from ffmpeg diagnostic text.

    Args:
        text: Combined stdout/stderr of ``ffmpeg -i <file>``.

    Returns:
        MediaInfo with whichever fields could be extracted.
    """
    fields: dict = {}

    if match := DURATION_PATTERN.search(text):
        fields["duration"] = match.group(1)
        fields["seconds"] = parse_timestamp_seconds(match.group(1))
        fields["start"] = _to_float(match.group(2))
        fields["bitrate"] = _to_int(match.group(3))

    if match := VIDEO_PATTERN.search(text):
        fields["vcodec"] = match.group(1)
        fields["vformat"] = match.group(2)
        fields["resolution"] = match.group(3)
        width, height = parse_resolution(match.group(3))
        if (width, height) == (0, 0):
            logger.debug("Malformed resolution token: %r", match.group(3))
        fields["width"] = width
        fields["height"] = height

    if match := AUDIO_PATTERN.search(text):
        fields["acodec"] = match.group(1)
        fields["asamplerate"] = _to_int(match.group(2))

    seconds = fields.get("seconds")
    start = fields.get("start")
    if seconds is not None and start is not None:
        fields["play_time"] = seconds + start

    return MediaInfo(**fields)
