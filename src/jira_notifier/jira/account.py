"""A single, validated Jira account."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

from jira_notifier.http.client import (
    BasicAuth,
    HttpClient,
    HttpMethod,
    HttpProxy,
    HttpRequest,
    Scheme,
)
from jira_notifier.jira.issue import JiraIssue
from jira_notifier.settings import Settings, SettingsError

logger = logging.getLogger(__name__)

# Jira REST API endpoint used when the account URL carries no path of its own.
DEFAULT_PATH = "/rest/api/2/issue"

URL_SETTING = "url"
USER_SETTING = "user"
PASSWORD_SETTING = "password"
ALLOW_HTTP_SETTING = "allow_http"
ISSUE_DEFAULTS_SETTING = "issue_defaults"
PROXY_SETTING = "proxy"


def _account_error(name: str | None, reason: str) -> SettingsError:
    label = name if name is not None else "null"
    return SettingsError(f"invalid jira [{label}] account settings. {reason}")


def _required(settings: Settings, key: str, *, allow_blank: bool = True) -> str | None:
    value = settings.get(key)
    if not isinstance(value, str) or not value:
        return None
    if not allow_blank and not value.strip():
        return None
    return value


class JiraAccount:
    """A named Jira destination.

    All settings are validated on construction (first violation wins) and the
    account is immutable afterwards, so one instance can be shared by callers
    issuing independent requests.

    Pass ``http_client`` to share one client (and its connection pool) across
    accounts; the caller then owns it. Without one, the account creates its
    own client and `close()` releases it.
    """

    __slots__ = (
        "_name",
        "_scheme",
        "_host",
        "_port",
        "_path",
        "_user",
        "_password",
        "_issue_defaults",
        "_proxy",
        "_http_client",
        "_owns_http_client",
    )

    def __init__(
        self,
        name: str | None,
        settings: Settings,
        http_client: HttpClient | None = None,
    ) -> None:
        url = _required(settings, URL_SETTING, allow_blank=False)
        if url is None:
            raise _account_error(name, f"missing required [{URL_SETTING}] setting")

        user = _required(settings, USER_SETTING)
        if user is None:
            raise _account_error(name, f"missing required [{USER_SETTING}] setting")

        password = _required(settings, PASSWORD_SETTING)
        if password is None:
            raise _account_error(name, f"missing required [{PASSWORD_SETTING}] setting")

        parsed = urlparse(url.strip())
        try:
            scheme = Scheme.parse(parsed.scheme)
            port = parsed.port
        except ValueError as e:
            raise _account_error(name, f"invalid [{URL_SETTING}] setting [{url}]") from e
        if not parsed.hostname:
            raise _account_error(name, f"invalid [{URL_SETTING}] setting [{url}]")

        try:
            allow_http = settings.get_as_bool(ALLOW_HTTP_SETTING, False)
        except SettingsError as e:
            raise _account_error(name, str(e)) from e
        if scheme is not Scheme.HTTPS and not allow_http:
            raise _account_error(name, f"unsecure scheme [{scheme.name}]")

        self._name = name
        self._scheme = scheme
        self._host = parsed.hostname
        self._port = port if port is not None else scheme.default_port
        self._path = parsed.path if parsed.path and parsed.path != "/" else DEFAULT_PATH
        self._user = user
        self._password = password
        self._issue_defaults = settings.get_by_prefix(ISSUE_DEFAULTS_SETTING).as_nested_dict()
        self._proxy = _parse_proxy(name, settings.get_by_prefix(PROXY_SETTING))
        # A client created here belongs to the account and is released by close().
        self._owns_http_client = http_client is None
        self._http_client = http_client if http_client is not None else HttpClient()

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def scheme(self) -> Scheme:
        return self._scheme

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def path(self) -> str:
        return self._path

    @property
    def user(self) -> str:
        return self._user

    @property
    def proxy(self) -> HttpProxy | None:
        return self._proxy

    @property
    def issue_defaults(self) -> dict[str, Any]:
        """A copy of the default fields merged into every created issue."""

        return copy.deepcopy(self._issue_defaults)

    def __repr__(self) -> str:
        return (
            f"JiraAccount(name={self._name!r}, url='{self._scheme.value}://"
            f"{self._host}:{self._port}{self._path}', user={self._user!r})"
        )

    def close(self) -> None:
        """Close the HTTP client if the account created it.

        An injected client is owned by the caller and left open.
        """

        if self._owns_http_client:
            self._http_client.close()

    def merge_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Shallow merge: caller-supplied top-level keys replace defaults wholesale."""

        merged = self.issue_defaults
        merged.update(fields)
        return merged

    def build_request(
        self, fields: Mapping[str, Any], proxy: HttpProxy | None = None
    ) -> HttpRequest:
        return HttpRequest(
            method=HttpMethod.POST,
            scheme=self._scheme,
            host=self._host,
            port=self._port,
            path=self._path,
            headers={"Content-Type": "application/json"},
            body=json.dumps({"fields": dict(fields)}),
            auth=BasicAuth(self._user, self._password),
            proxy=proxy if proxy is not None else self._proxy,
        )

    def create_issue(
        self, fields: Mapping[str, Any], proxy: HttpProxy | None = None
    ) -> JiraIssue:
        """Create a Jira issue with the account defaults plus ``fields``.

        Args:
            fields: Issue fields; these override the account's default fields
                on top-level key collisions.
            proxy: Proxy for this call. Falls back to the account proxy, then to
                the HTTP client's defaults.

        Returns:
            A JiraIssue. Non-201 responses yield an unsuccessful result with a
            failure reason rather than an exception.

        Raises:
            requests.RequestException: If the request could not be completed.
            TypeError: If the fields cannot be serialized to JSON.
        """

        merged = self.merge_fields(fields)
        request = self.build_request(merged, proxy)

        logger.debug(
            "Creating Jira issue",
            extra={"account": self._name, "url": request.url, "field_names": sorted(merged)},
        )
        response = self._http_client.execute(request)
        issue = JiraIssue.from_response(
            account=self._name or "",
            fields=merged,
            request=request,
            response=response,
        )

        if issue.successful():
            logger.info(
                "Jira issue created",
                extra={"account": self._name, "status": issue.status},
            )
        else:
            logger.warning(
                "Jira issue creation failed",
                extra={
                    "account": self._name,
                    "status": issue.status,
                    "reason": issue.failure_reason,
                },
            )
        return issue


def _parse_proxy(name: str | None, settings: Settings) -> HttpProxy | None:
    host = settings.get("host")
    if host is None:
        return None
    if not isinstance(host, str) or not host.strip():
        raise _account_error(name, f"invalid [{PROXY_SETTING}.host] setting")

    try:
        port = settings.get_as_int("port")
        scheme = Scheme.parse(str(settings.get("scheme", Scheme.HTTP.value)))
    except (SettingsError, ValueError) as e:
        raise _account_error(name, f"invalid [{PROXY_SETTING}] settings: {e}") from e
    if port is None or not 0 < port < 65536:
        raise _account_error(name, f"invalid [{PROXY_SETTING}.port] setting")
    return HttpProxy(host=host.strip(), port=port, scheme=scheme)
