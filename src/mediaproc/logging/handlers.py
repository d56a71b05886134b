"""JSON log formatting for mediaproc."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries, plus the ones the formatting layer
# and OperationContextFilter add. Anything else came in through extra=.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "operation", "output", "operation_tag"}


class JSONFormatter(logging.Formatter):
    """Format each record as one JSON object per line.

    Keys: ``timestamp`` (UTC ISO-8601), ``level``, ``message``, ``logger``,
    and ``context`` holding ``extra=`` values and the current operation.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        for key in ("operation", "output"):
            if value := getattr(record, key, None):
                context[key] = value
        if context:
            entry["context"] = context

        return json.dumps(entry, default=str)
