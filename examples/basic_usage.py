#!/usr/bin/env python3
"""Programmatic issue creation example.

This demonstrates using the notifier components directly:

* load process settings from `.env`
* build the Jira account registry from the JSON settings file
* create an issue on one account and print the result record

The account is passed as an argument (the configured default is used otherwise).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from jira_notifier.config import NotifierSettings
from jira_notifier.http.client import HttpClient
from jira_notifier.jira.service import JiraService
from jira_notifier.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Jira issue (programmatic example).")
    parser.add_argument("--account", default=None, help="Account name (optional)")
    parser.add_argument("--summary", required=True, help="Issue summary")
    parser.add_argument("--description", default="", help="Issue description")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = NotifierSettings()
    configure_logging(settings.log_level)

    http_client = HttpClient(timeout_seconds=settings.http_timeout_seconds)
    service = JiraService(settings.load_account_settings(), http_client)
    account = service.get_account(args.account)

    fields = {"summary": args.summary}
    if args.description:
        fields["description"] = args.description

    issue = account.create_issue(fields)
    print(issue.to_json())
    return 0 if issue.successful() else 1


if __name__ == "__main__":
    raise SystemExit(main())
