"""Tests for JSONFormatter."""

import json
import logging

from mediaproc.logging.context import OperationContextFilter, operation_context
from mediaproc.logging.handlers import JSONFormatter


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        "mediaproc.executor.step",
        logging.INFO,
        "",
        0,
        "Running ffmpeg for %s",
        ("out.mp4",),
        None,
    )


class TestJSONFormatter:
    def test_basic_fields(self) -> None:
        entry = json.loads(JSONFormatter().format(_record()))

        assert entry["level"] == "INFO"
        assert entry["message"] == "Running ffmpeg for out.mp4"
        assert entry["logger"] == "mediaproc.executor.step"
        assert "timestamp" in entry

    def test_extra_and_operation_context(self) -> None:
        record = _record()
        record.returncode = 1
        with operation_context("overlay", "duet.mp4"):
            OperationContextFilter().filter(record)

        entry = json.loads(JSONFormatter().format(record))

        assert entry["context"] == {
            "returncode": 1,
            "operation": "overlay",
            "output": "duet.mp4",
        }
