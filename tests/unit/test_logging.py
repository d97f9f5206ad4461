"""Unit tests for structured JSON logging."""

from __future__ import annotations

import json
import logging

from jira_notifier.logging import REDACTED, JsonFormatter


def _record(level: int = logging.WARNING, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="jira_notifier.jira.account",
        level=level,
        pathname=__file__,
        lineno=12,
        msg="Jira issue creation failed",
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(account="ops", status=403)))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "jira_notifier.jira.account"
    assert payload["message"] == "Jira issue creation failed"
    assert payload["source"] == "test_logging:12"
    assert payload["context"] == {"account": "ops", "status": 403}
    assert "exception" not in payload


def test_json_formatter_masks_credential_context() -> None:
    rendered = JsonFormatter().format(
        _record(logging.INFO, account="ops", password="s3cret", api_token="t0ken")
    )
    payload = json.loads(rendered)

    assert payload["context"] == {"account": "ops", "password": REDACTED, "api_token": REDACTED}
    assert "s3cret" not in rendered
    assert "t0ken" not in rendered
    assert "source" not in payload
