"""Result of a Jira issue creation attempt."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from jira_notifier.http.client import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

HTTP_CREATED = 201

UNKNOWN_ERROR = "Unknown Error"

FAILURE_REASONS: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized (authentication credentials are invalid)",
    403: "Forbidden (account doesn't have permission to create this issue)",
    404: "Not Found (account uses invalid JIRA REST APIs)",
    408: "Request Timeout (request took too long to process)",
    500: "JIRA Server Error (internal error occurred while processing request)",
}


def _error_details(response: HttpResponse) -> list[str]:
    """Extract Jira's ``errorMessages`` / ``errors`` from a JSON error body."""

    try:
        payload = response.json()
    except (ValueError, UnicodeDecodeError):
        logger.debug("Jira error response body is not JSON", extra={"status": response.status})
        return []

    if not isinstance(payload, dict):
        return []

    details: list[str] = []
    messages = payload.get("errorMessages")
    if isinstance(messages, list):
        details.extend(str(m) for m in messages if str(m).strip())

    errors = payload.get("errors")
    if isinstance(errors, dict):
        details.extend(f"{key}: {value}" for key, value in errors.items())
    return details


def resolve_failure_reason(response: HttpResponse) -> str | None:
    """Map a Jira response to a failure reason, or None when the issue was created."""

    if response.status == HTTP_CREATED:
        return None

    reason = FAILURE_REASONS.get(response.status, UNKNOWN_ERROR)
    if response.has_content():
        details = _error_details(response)
        if details:
            reason = f"{reason} : {', '.join(details)}"
    return reason


@dataclass(frozen=True, slots=True, eq=False)
class JiraIssue:
    """Outcome of a single create-issue call.

    HTTP-level failures are represented here rather than raised.
    """

    account: str
    fields: dict[str, Any]
    request: HttpRequest
    response: HttpResponse
    failure_reason: str | None

    @classmethod
    def from_response(
        cls,
        *,
        account: str,
        fields: dict[str, Any],
        request: HttpRequest,
        response: HttpResponse,
    ) -> JiraIssue:
        return cls(
            account=account,
            fields=fields,
            request=request,
            response=response,
            failure_reason=resolve_failure_reason(response),
        )

    @property
    def status(self) -> int:
        return self.response.status

    def successful(self) -> bool:
        return self.failure_reason is None

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly record of the attempt; credentials are never included."""

        record: dict[str, Any] = {
            "account": self.account,
            "result": "success" if self.successful() else "failure",
            "status": self.status,
            "fields": self.fields,
            "request": {
                "method": self.request.method.value,
                "url": self.request.url,
                "auth": {"username": self.request.auth.username} if self.request.auth else None,
            },
            "response": {
                "status": self.response.status,
                "body": self.response.text() if self.response.has_content() else None,
            },
        }
        if self.failure_reason is not None:
            record["reason"] = self.failure_reason
        return record

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
