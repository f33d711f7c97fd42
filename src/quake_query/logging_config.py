"""Structured JSON logging for the query client and CLI.

Outputs one JSON object per line, with optional fields for the query URL,
status_code, feature_count and duration_ms when a record carries them.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

STRUCTURED_FIELDS = ("query", "status_code", "feature_count", "duration_ms")


class StructuredFormatter(logging.Formatter):
    """Outputs log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Fields passed through `extra=`
        for name in STRUCTURED_FIELDS:
            val = getattr(record, name, None)
            if val is not None:
                log_entry[name] = val

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def configure_logging(level: int | str = logging.INFO, stream=None) -> None:
    """Replace root handlers with a single structured JSON handler.

    Logs go to stdout unless another stream is given.

    Only entry points call this; the library itself never configures logging.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
