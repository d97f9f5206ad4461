"""Jira notifier.

Provides:
- validated Jira accounts built from dotted-key settings
- issue creation over the Jira REST API with status-based failure reasons
- a small CLI for creating issues from a JSON settings file
"""

__version__ = "0.1.0"

from jira_notifier.jira import JiraAccount, JiraIssue, JiraService
from jira_notifier.settings import Settings, SettingsError

__all__ = [
    "__version__",
    "JiraAccount",
    "JiraIssue",
    "JiraService",
    "Settings",
    "SettingsError",
]
