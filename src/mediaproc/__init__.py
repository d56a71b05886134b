"""mediaproc - ffmpeg command orchestration and media pipelines."""

__version__ = "0.1.0"
