"""Test configuration and fixtures."""

from unittest.mock import Mock

import pytest

from jira_notifier.http.client import HttpClient, HttpResponse
from jira_notifier.settings import Settings

JIRA_URL = "https://internal-jira.elastic.co:443"


@pytest.fixture
def http_client() -> Mock:
    """Provide a mocked HTTP client that answers 201 Created."""
    client = Mock(spec=HttpClient)
    client.execute.return_value = HttpResponse(201)
    return client


@pytest.fixture
def account_settings() -> Settings:
    """Provide minimal valid settings for a single account."""
    return Settings.from_mapping({"url": JIRA_URL, "user": "foo", "password": "bar"})


@pytest.fixture
def service_settings() -> Settings:
    """Provide registry settings with two accounts, the second being the default."""
    return Settings.from_mapping(
        {
            "notification": {
                "jira": {
                    "default_account": "ops",
                    "account": {
                        "dev": {"url": JIRA_URL, "user": "dev-user", "password": "dev-pass"},
                        "ops": {
                            "url": "https://ops-jira.example.com/jira/rest/api/2/issue",
                            "user": "ops-user",
                            "password": "ops-pass",
                            "issue_defaults": {
                                "project": {"key": "OPS"},
                                "issuetype": {"name": "Bug"},
                                "labels": ["alert", "watcher"],
                            },
                        },
                    },
                }
            }
        }
    )
