"""Structured Logging — one JSON object per log line, configured at startup.

Invariants:
    - Every line has timestamp, level, logger and message
    - Only whitelisted extras (EXTRA_FIELDS) are copied into the output
    - Calling setup_logging again swaps the handler instead of adding a second one

Design Decisions:
    - stdlib logging plus a small formatter; "text" format for local runs and scripts
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("user_id", "error_code", "path", "method", "fixture")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_installed_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, record.__dict__[key])
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    global _installed_handler
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root = logging.getLogger()
    if _installed_handler is not None:
        root.removeHandler(_installed_handler)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed_handler = handler
