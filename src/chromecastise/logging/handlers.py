"""JSON log output.

One object per line. Batch fields are top-level keys, so the records for one
file can be pulled out of a run with ``jq 'select(.file_id == "F03")'``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Set by FileContextFilter while a file is being processed
FILE_FIELDS: tuple[str, ...] = ("file_id", "file_path")

# Passed as ``extra`` when an external tool is run
COMMAND_FIELDS: tuple[str, ...] = (
    "command",
    "arg_count",
    "returncode",
    "elapsed_seconds",
)


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object.

    Always present: ``time`` (UTC, millisecond precision), ``level`` (lower
    case, as in the config file), ``logger`` and ``message``. ``file_id`` and
    ``file_path`` are added while a file is in progress, the command fields
    when the record describes a tool run, and ``exception`` when the record
    carries a traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "time": created.isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in (*FILE_FIELDS, *COMMAND_FIELDS):
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
