"""Structured logging configuration.

Log records are emitted as one JSON object per line on stderr; anything passed
via ``extra=`` ends up under the ``context`` key. Credential-like context keys
are masked so account secrets never reach the log stream.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"asctime", "message"}

_SECRET_KEY_MARKERS = ("password", "secret", "token", "authorization")

REDACTED = "***"


def _context(record: logging.LogRecord) -> dict[str, Any]:
    context: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_RECORD_ATTRS or key.startswith("_"):
            continue
        lowered = key.lower()
        context[key] = REDACTED if any(m in lowered for m in _SECRET_KEY_MARKERS) else value
    return context


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.levelno >= logging.WARNING:
            entry["source"] = f"{record.module}:{record.lineno}"

        context = _context(record)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Values such as enums or paths fall back to their str() form.
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(level: str) -> None:
    """Configure root logging with structured JSON output on stderr."""

    root = logging.getLogger()
    root.handlers.clear()

    # stdout carries the CLI's JSON result.
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())

    # urllib3 logs every connection at DEBUG.
    for name in ("urllib3", "requests"):
        logging.getLogger(name).setLevel(max(root.level, logging.INFO))
