"""Registry of configured Jira accounts."""

from __future__ import annotations

import logging
import threading

from jira_notifier.http.client import HttpClient
from jira_notifier.jira.account import JiraAccount
from jira_notifier.settings import Settings, SettingsError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PREFIX = "notification.jira"


class JiraService:
    """Builds and holds `JiraAccount` instances keyed by account name.

    Accounts are read from ``<prefix>.account.<name>.*``; the default account is
    ``<prefix>.default_account`` or, when unset, the first configured account.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: HttpClient,
        *,
        prefix: str = DEFAULT_SETTINGS_PREFIX,
    ) -> None:
        self._http_client = http_client
        self._prefix = prefix.rstrip(".")
        self._lock = threading.Lock()
        self._accounts: dict[str, JiraAccount] = {}
        self._default_account: JiraAccount | None = None
        self.reload(settings)

    def _build(self, settings: Settings) -> tuple[dict[str, JiraAccount], JiraAccount | None]:
        accounts = {
            name: JiraAccount(name, account_settings, self._http_client)
            for name, account_settings in settings.get_groups(f"{self._prefix}.account").items()
        }

        default_name = settings.get(f"{self._prefix}.default_account")
        if isinstance(default_name, str) and default_name.strip():
            default = accounts.get(default_name.strip())
            if default is None:
                raise SettingsError(f"could not find default account [{default_name.strip()}]")
            return accounts, default

        return accounts, next(iter(accounts.values()), None)

    def reload(self, settings: Settings) -> None:
        """Rebuild all accounts from ``settings``.

        The previous accounts stay in place if any new account is invalid.
        """

        accounts, default = self._build(settings)
        with self._lock:
            self._accounts = accounts
            self._default_account = default

        logger.info(
            "Jira accounts loaded",
            extra={
                "accounts": sorted(accounts),
                "default_account": default.name if default is not None else None,
            },
        )

    def account_names(self) -> list[str]:
        with self._lock:
            return list(self._accounts)

    @property
    def default_account_name(self) -> str | None:
        with self._lock:
            return self._default_account.name if self._default_account is not None else None

    def get_account(self, name: str | None = None) -> JiraAccount:
        with self._lock:
            account = self._default_account if name is None else self._accounts.get(name)
        if account is None:
            raise ValueError(f"no account found for name: [{name}]")
        return account
