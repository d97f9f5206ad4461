"""Unit tests for notifier settings loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from jira_notifier.config import NotifierSettings

_ENV_VARS = ("NOTIFICATION_SETTINGS_FILE", "LOG_LEVEL", "HTTP_TIMEOUT_SECONDS")


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_settings_defaults() -> None:
    settings = NotifierSettings()

    assert settings.settings_file == Path("notification.json")
    assert settings.log_level == "INFO"
    assert settings.http_timeout_seconds == 30.0


def test_settings_loads_from_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "NOTIFICATION_SETTINGS_FILE=conf/jira.json",
                "LOG_LEVEL=DEBUG",
                "HTTP_TIMEOUT_SECONDS=5",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = NotifierSettings()

    assert settings.settings_file == Path("conf/jira.json")
    assert settings.log_level == "DEBUG"
    assert settings.http_timeout_seconds == 5.0


def test_timeout_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValidationError):
        NotifierSettings()


def test_load_account_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "accounts.json"
    path.write_text(
        json.dumps({"notification": {"jira": {"account": {"ops": {"user": "bot"}}}}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("NOTIFICATION_SETTINGS_FILE", str(path))

    account_settings = NotifierSettings().load_account_settings()

    assert account_settings.get("notification.jira.account.ops.user") == "bot"
