"""Structured Logging — JSON lines for the invoicing service.

Invariants:
    - Every line carries timestamp (record creation time, UTC), level, logger, message
    - Invoice context (invoice_id, line_id, line_count) and error context
      (error_code, path) appear only when the caller passed them via extra=
    - UUID values rendered as strings
    - setup_logging is idempotent: the handler it installs replaces its own previous one

Design Decisions:
    - Stdlib logging with a small formatter instead of a logging library
    - Text format for local runs (LOG_FORMAT=text), JSON everywhere else
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS: tuple[str, ...] = (
    "invoice_id", "line_id", "line_count", "error_code", "path",
)

_HANDLER_NAME = "invoicing"


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
        for key in EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is None:
                continue
            entry[key] = str(value) if key.endswith("_id") else value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the service handler on the root logger."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
