"""Minimal HTTP client used by notification accounts.

Requests are described as immutable values so callers (and tests) can inspect
exactly what would be sent; `HttpClient` turns them into `requests` calls.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

import requests
from requests.auth import HTTPBasicAuth

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class Scheme(Enum):
    HTTP = "http"
    HTTPS = "https"

    @property
    def default_port(self) -> int:
        return 443 if self is Scheme.HTTPS else 80

    @classmethod
    def parse(cls, value: str) -> Scheme:
        normalized = (value or "").strip().lower()
        for scheme in cls:
            if scheme.value == normalized:
                return scheme
        raise ValueError(f"unsupported http scheme [{value}]")


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True, slots=True)
class BasicAuth:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class HttpProxy:
    """Proxy to route a request through.

    `HttpProxy.NO_PROXY` explicitly disables proxying, including proxies
    picked up from the environment.
    """

    host: str
    port: int
    scheme: Scheme = Scheme.HTTP

    NO_PROXY: ClassVar[HttpProxy]

    @property
    def is_no_proxy(self) -> bool:
        return self is HttpProxy.NO_PROXY

    @property
    def url(self) -> str:
        return f"{self.scheme.value}://{self.host}:{self.port}"


HttpProxy.NO_PROXY = HttpProxy(host="", port=0)


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """A fully-resolved outbound HTTP request."""

    method: HttpMethod
    scheme: Scheme
    host: str
    port: int
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None
    auth: BasicAuth | None = None
    proxy: HttpProxy | None = None

    @property
    def url(self) -> str:
        return f"{self.scheme.value}://{self.host}:{self.port}{self.path}"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    def has_content(self) -> bool:
        return bool(self.body)

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)


class HttpClient:
    """Executes `HttpRequest` values over a `requests.Session`.

    No retries are attempted; transport failures (`requests.RequestException`)
    propagate to the caller.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    @staticmethod
    def _proxies(proxy: HttpProxy | None) -> dict[str, str | None] | None:
        if proxy is None:
            return None
        if proxy.is_no_proxy:
            # None entries stop requests from merging in environment proxies.
            return {"http": None, "https": None}
        return {"http": proxy.url, "https": proxy.url}

    def execute(self, request: HttpRequest) -> HttpResponse:
        auth = None
        if request.auth is not None:
            auth = HTTPBasicAuth(request.auth.username, request.auth.password)

        logger.debug(
            "Sending HTTP request",
            extra={
                "method": request.method.value,
                "url": request.url,
                "proxied": request.proxy is not None and not request.proxy.is_no_proxy,
            },
        )

        resp = self._session.request(
            request.method.value,
            request.url,
            headers=dict(request.headers),
            data=request.body.encode("utf-8") if request.body is not None else None,
            auth=auth,
            proxies=self._proxies(request.proxy),
            timeout=self._timeout_seconds,
        )

        logger.debug(
            "Received HTTP response",
            extra={"url": request.url, "status": resp.status_code},
        )
        return HttpResponse(
            status=resp.status_code,
            body=resp.content or b"",
            headers=dict(resp.headers),
        )

    def close(self) -> None:
        self._session.close()
