"""HTTP request values and the `requests`-backed client that executes them."""

from jira_notifier.http.client import (
    BasicAuth,
    HttpClient,
    HttpMethod,
    HttpProxy,
    HttpRequest,
    HttpResponse,
    Scheme,
)

__all__ = [
    "BasicAuth",
    "HttpClient",
    "HttpMethod",
    "HttpProxy",
    "HttpRequest",
    "HttpResponse",
    "Scheme",
]
