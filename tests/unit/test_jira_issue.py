"""Unit tests for issue results and failure reason resolution."""

from __future__ import annotations

import json

from jira_notifier.http.client import BasicAuth, HttpMethod, HttpRequest, HttpResponse, Scheme
from jira_notifier.jira.issue import FAILURE_REASONS, JiraIssue, resolve_failure_reason


def _request() -> HttpRequest:
    return HttpRequest(
        method=HttpMethod.POST,
        scheme=Scheme.HTTPS,
        host="jira.example.com",
        port=443,
        path="/rest/api/2/issue",
        body='{"fields": {}}',
        auth=BasicAuth("alice", "s3cret"),
    )


def test_created_has_no_failure_reason() -> None:
    assert resolve_failure_reason(HttpResponse(201)) is None


def test_every_table_entry_is_used_verbatim_without_body() -> None:
    for status, message in FAILURE_REASONS.items():
        assert resolve_failure_reason(HttpResponse(status)) == message


def test_other_statuses_are_unknown_errors() -> None:
    assert resolve_failure_reason(HttpResponse(200)) == "Unknown Error"
    assert resolve_failure_reason(HttpResponse(502)) == "Unknown Error"


def test_jira_error_details_are_appended() -> None:
    body = json.dumps(
        {
            "errorMessages": ["Field 'priority' is required"],
            "errors": {"project": "project is required"},
        }
    ).encode("utf-8")

    reason = resolve_failure_reason(HttpResponse(400, body=body))

    assert reason == (
        "Bad Request : Field 'priority' is required, project: project is required"
    )


def test_non_json_error_body_keeps_table_message() -> None:
    reason = resolve_failure_reason(HttpResponse(500, body=b"<html>oops</html>"))
    assert reason == "JIRA Server Error (internal error occurred while processing request)"


def test_to_dict_success_record() -> None:
    issue = JiraIssue.from_response(
        account="ops",
        fields={"summary": "disk full"},
        request=_request(),
        response=HttpResponse(201, body=b'{"key": "OPS-1"}'),
    )

    record = issue.to_dict()

    assert issue.successful() is True
    assert record["account"] == "ops"
    assert record["result"] == "success"
    assert record["status"] == 201
    assert record["fields"] == {"summary": "disk full"}
    assert record["request"] == {
        "method": "POST",
        "url": "https://jira.example.com:443/rest/api/2/issue",
        "auth": {"username": "alice"},
    }
    assert record["response"] == {"status": 201, "body": '{"key": "OPS-1"}'}
    assert "reason" not in record


def test_to_json_failure_record_never_leaks_password() -> None:
    issue = JiraIssue.from_response(
        account="ops",
        fields={},
        request=_request(),
        response=HttpResponse(401),
    )

    rendered = issue.to_json()
    record = json.loads(rendered)

    assert record["result"] == "failure"
    assert record["reason"] == "Unauthorized (authentication credentials are invalid)"
    assert record["response"]["body"] is None
    assert "s3cret" not in rendered
    assert "s3cret" not in repr(issue)


def test_results_are_hashable_and_compared_by_identity() -> None:
    first = JiraIssue.from_response(
        account="ops", fields={"summary": "x"}, request=_request(), response=HttpResponse(201)
    )
    second = JiraIssue.from_response(
        account="ops", fields={"summary": "x"}, request=_request(), response=HttpResponse(201)
    )

    assert {first, second} == {first, second}
    assert len({first, second}) == 2
    assert first != second
