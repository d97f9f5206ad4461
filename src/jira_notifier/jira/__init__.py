"""Jira notification accounts: validation, issue creation and the account registry."""

from jira_notifier.jira.account import DEFAULT_PATH, JiraAccount
from jira_notifier.jira.issue import FAILURE_REASONS, JiraIssue
from jira_notifier.jira.service import JiraService

__all__ = [
    "DEFAULT_PATH",
    "FAILURE_REASONS",
    "JiraAccount",
    "JiraIssue",
    "JiraService",
]
