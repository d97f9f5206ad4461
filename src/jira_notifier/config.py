"""Process-level configuration for the Jira notifier.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Account definitions (URLs, credentials, issue defaults) live in a separate JSON
settings file so several accounts can be described with nested structure.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from jira_notifier.settings import Settings


class NotifierSettings(BaseSettings):
    """Settings for the notifier process.

    Environment variables:
    - NOTIFICATION_SETTINGS_FILE  (optional)
    - LOG_LEVEL                   (optional)
    - HTTP_TIMEOUT_SECONDS        (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `NotifierSettings(_env_file=path_to_env)`.
    """

    settings_file: Path = Field(
        default=Path("notification.json"),
        validation_alias="NOTIFICATION_SETTINGS_FILE",
        description="JSON file holding the notification account settings",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="HTTP_TIMEOUT_SECONDS",
        description="Timeout applied to each outbound HTTP request",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    def load_account_settings(self) -> Settings:
        """Read and flatten the account settings file."""

        return Settings.from_json_file(self.settings_file)
