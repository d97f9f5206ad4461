"""CLI entrypoint for the Jira notifier."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

import requests
from pydantic import ValidationError

from jira_notifier import __version__
from jira_notifier.config import NotifierSettings
from jira_notifier.http.client import HttpClient, HttpProxy
from jira_notifier.jira.service import JiraService
from jira_notifier.logging import configure_logging
from jira_notifier.settings import Settings, SettingsError

logger = logging.getLogger(__name__)


def _parse_fields(pairs: list[str], fields_json: str | None) -> dict[str, Any]:
    """Combine ``--fields-json`` with ``--field key=value`` pairs.

    Dotted keys (``project.key=OPS``) become nested objects; pairs win over JSON.
    """

    fields: dict[str, Any] = {}
    if fields_json:
        loaded = json.loads(fields_json)
        if not isinstance(loaded, dict):
            raise ValueError("--fields-json must be a JSON object")
        fields.update(loaded)

    flat: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"invalid --field value {pair!r}; expected key=value")
        flat[key.strip()] = value

    fields.update(Settings(flat).as_nested_dict())
    return fields


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jira-notify",
        description="Create Jira issues using configured notification accounts",
    )
    parser.add_argument("--version", action="version", version=f"jira-notifier {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("accounts", help="List configured Jira accounts")

    create_issue = subparsers.add_parser("create-issue", help="Create a Jira issue")
    create_issue.add_argument(
        "--account",
        default=None,
        help="Account name (defaults to the configured default account)",
    )
    create_issue.add_argument(
        "--field",
        dest="fields",
        action="append",
        default=[],
        help="Issue field as key=value; dotted keys nest, e.g. 'project.key=OPS'",
    )
    create_issue.add_argument(
        "--fields-json",
        default=None,
        help="Issue fields as a JSON object",
    )
    create_issue.add_argument(
        "--no-proxy",
        action="store_true",
        help="Bypass any configured or environment proxy",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = NotifierSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    http_client = HttpClient(timeout_seconds=settings.http_timeout_seconds)
    try:
        try:
            service = JiraService(settings.load_account_settings(), http_client)
        except SettingsError as e:
            logger.error("Invalid account settings", extra={"error": str(e)})
            print(f"Configuration error: {e}", file=sys.stderr)
            return 2

        if args.command == "accounts":
            default = service.default_account_name
            for name in service.account_names():
                marker = " (default)" if name == default else ""
                print(f"{name}{marker}")
            return 0

        if args.command == "create-issue":
            try:
                fields = _parse_fields(args.fields, args.fields_json)
                account = service.get_account(args.account)
            except ValueError as e:
                parser.error(str(e))

            proxy = HttpProxy.NO_PROXY if args.no_proxy else None
            try:
                issue = account.create_issue(fields, proxy)
            except requests.RequestException:
                logger.exception("Jira request failed", extra={"account": account.name})
                return 1

            print(issue.to_json())
            return 0 if issue.successful() else 1

        parser.error(f"Unknown command: {args.command}")
        return 2
    finally:
        http_client.close()


if __name__ == "__main__":
    raise SystemExit(main())
