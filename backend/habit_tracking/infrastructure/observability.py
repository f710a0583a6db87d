"""Structured Logging — one JSON object per log line, habit fields lifted to the top level.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Habit extras (habit_id, habit_kind, day_key, operation, status) and error
      extras (error_code, path) appear only when the caller passed them
    - setup_logging is idempotent: calling it twice leaves a single handler

Design Decisions:
    - JSONFormatter on stdlib logging, configured once from the FastAPI lifespan
    - "text" format for local runs and tests, "json" for deployed containers
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "habit_id", "habit_kind", "day_key", "operation", "status",
    "error_code", "path",
)
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_HANDLER_NAME = "habit_tracking"


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in _EXTRA_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
