"""
Structured logging setup for the solar potential API.

Installs a single stderr handler on the root logger. By default every record
is rendered as one JSON object per line (``ts``, ``level``, ``logger``,
``msg`` and, when present, ``exception``); a plain text format is available
for local development.

CHANGELOG:
- 2026-10-16: Add plain text mode for local development (STORY-010)
- 2026-10-12: Initial creation, JSON formatter from the daemon setup (STORY-001)

TODO:
- None
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from urllib.parse import urlsplit, urlunsplit

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Minimal JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure root logging for the API process.

    Args:
        level: Log level name applied to the root logger.
        json_output: Use :class:`JsonFormatter` when true, plain text otherwise.
    """
    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def masked_url(url: str | None) -> str:
    """Return *url* with any password replaced by ``***`` for log output."""
    if not url:
        return "unset"
    parts = urlsplit(url)
    if parts.password is None:
        return url
    netloc = parts.netloc.replace(f":{parts.password}@", ":***@", 1)
    return urlunsplit(parts._replace(netloc=netloc))
