"""Tests for fetching and decoding JIRA search results."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from jira_report.digest import (
    DEFAULT_PR_FIELD,
    DEFAULT_QA_CONTACT_FIELD,
    JiraFields,
    JiraRequestError,
    ResponseDecodeError,
    extract_prs,
    fetch_jira_issues,
    parse_issue_node,
    parse_issue_nodes,
)

JIRA_URL = "https://issues.example.com"
FIELDS = JiraFields().search_fields()


def _response(payload: object, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


def _page(start_at: int, total: int, keys: list[str]) -> dict[str, object]:
    return {
        "total": total,
        "startAt": start_at,
        "maxResults": 2,
        "issues": [{"key": key, "fields": {}} for key in keys],
    }


class TestFetchJiraIssues:
    def test_paginates_until_total_reached(self):
        with patch("jira_report.digest.requests.post") as mock_post:
            mock_post.side_effect = [
                _response(_page(0, 3, ["MTV-1", "MTV-2"])),
                _response(_page(2, 3, ["MTV-3"])),
            ]
            nodes = fetch_jira_issues(JIRA_URL, "token", "project = MTV", fields=FIELDS, page_size=2)

        assert [node["key"] for node in nodes] == ["MTV-1", "MTV-2", "MTV-3"]
        assert mock_post.call_count == 2
        bodies = [call.kwargs["json"] for call in mock_post.call_args_list]
        assert [body["startAt"] for body in bodies] == [0, 2]
        assert all(body["maxResults"] == 2 for body in bodies)
        assert bodies[0]["jql"] == "project = MTV"
        assert bodies[0]["fields"] == FIELDS

    def test_request_shape(self):
        with patch("jira_report.digest.requests.post") as mock_post:
            mock_post.return_value = _response(_page(0, 0, []))
            fetch_jira_issues(JIRA_URL + "/", "secret", "project = MTV", fields=FIELDS)

        args, kwargs = mock_post.call_args
        assert args[0] == f"{JIRA_URL}/rest/api/2/search"
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["timeout"] == 30

    def test_single_page(self):
        with patch("jira_report.digest.requests.post") as mock_post:
            mock_post.return_value = _response(_page(0, 1, ["MTV-1"]))
            nodes = fetch_jira_issues(JIRA_URL, "token", "jql", fields=FIELDS)
        assert len(nodes) == 1
        mock_post.assert_called_once()

    def test_empty_page_stops_even_if_total_is_higher(self):
        with patch("jira_report.digest.requests.post") as mock_post:
            mock_post.side_effect = [
                _response(_page(0, 5, ["MTV-1", "MTV-2"])),
                _response(_page(2, 5, [])),
            ]
            nodes = fetch_jira_issues(JIRA_URL, "token", "jql", fields=FIELDS, page_size=2)
        assert len(nodes) == 2
        assert mock_post.call_count == 2

    def test_non_success_status_raises(self):
        with patch("jira_report.digest.requests.post") as mock_post:
            mock_post.return_value = _response({"errorMessages": ["bad"]}, status_code=401)
            with pytest.raises(JiraRequestError, match="401"):
                fetch_jira_issues(JIRA_URL, "token", "jql", fields=FIELDS)

    def test_failure_on_later_page_discards_results(self):
        with patch("jira_report.digest.requests.post") as mock_post:
            mock_post.side_effect = [
                _response(_page(0, 3, ["MTV-1", "MTV-2"])),
                requests.ConnectionError("boom"),
            ]
            with pytest.raises(requests.ConnectionError):
                fetch_jira_issues(JIRA_URL, "token", "jql", fields=FIELDS, page_size=2)

    def test_malformed_payload_raises(self):
        with patch("jira_report.digest.requests.post") as mock_post:
            mock_post.return_value = _response({"issues": []})
            with pytest.raises(ResponseDecodeError, match="total"):
                fetch_jira_issues(JIRA_URL, "token", "jql", fields=FIELDS)

    def test_invalid_json_raises(self):
        with patch("jira_report.digest.requests.post") as mock_post:
            response = _response(None)
            response.json.side_effect = ValueError("not json")
            mock_post.return_value = response
            with pytest.raises(ResponseDecodeError):
                fetch_jira_issues(JIRA_URL, "token", "jql", fields=FIELDS)

    def test_refetching_unchanged_results_is_identical(self, make_node):
        payload = {"total": 2, "startAt": 0, "issues": [make_node("MTV-1"), make_node("MTV-2")]}
        with patch("jira_report.digest.requests.post") as mock_post:
            mock_post.return_value = _response(payload)
            first = parse_issue_nodes(fetch_jira_issues(JIRA_URL, "t", "jql", fields=FIELDS), JiraFields())
            second = parse_issue_nodes(fetch_jira_issues(JIRA_URL, "t", "jql", fields=FIELDS), JiraFields())
        assert first == second


class TestExtractPrs:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, []),
            ("", []),
            ("https://github.com/o/r/pull/1", ["https://github.com/o/r/pull/1"]),
            ([], []),
            (["a", "", "b"], ["a", "b"]),
            (["a", 3, None, {"url": "x"}, "b"], ["a", "b"]),
            (42, []),
            ({"url": "a"}, []),
        ],
    )
    def test_shapes(self, value, expected):
        assert extract_prs(value) == expected

    def test_preserves_order(self):
        assert extract_prs(["z", "a", "m"]) == ["z", "a", "m"]


class TestParseIssueNode:
    def test_parses_all_fields(self, make_node):
        node = make_node(
            "MTV-7",
            summary="Fix <copy> & move",
            status="MODIFIED",
            issue_type="Epic",
            assignee="Jane Doe",
            qa_contact="John Smith",
            components=("Storage",),
            labels=("triaged",),
            prs=["https://github.com/o/r/pull/7"],
        )
        issue = parse_issue_node(node, JiraFields())

        assert issue.key == "MTV-7"
        assert issue.summary == "Fix <copy> & move"
        assert issue.status == "MODIFIED"
        assert issue.issue_type == "Epic"
        assert issue.assignee == "Jane Doe"
        assert issue.qa_contact == "John Smith"
        assert issue.components == ["Storage"]
        assert issue.labels == ["triaged"]
        assert issue.pull_requests == ["https://github.com/o/r/pull/7"]

    def test_missing_people_are_none(self, make_node):
        issue = parse_issue_node(make_node("MTV-1", assignee=None), JiraFields())
        assert issue.assignee is None
        assert issue.qa_contact is None

    def test_custom_field_ids(self):
        node = {
            "key": "MTV-2",
            "fields": {
                "summary": "s",
                "status": {"name": "POST"},
                "issuetype": {"name": "Bug"},
                "customfield_1": {"displayName": "QA Person"},
                "customfield_2": "https://github.com/o/r/pull/2",
            },
        }
        issue = parse_issue_node(node, JiraFields(qa_contact="customfield_1", pull_requests="customfield_2"))
        assert issue.qa_contact == "QA Person"
        assert issue.pull_requests == ["https://github.com/o/r/pull/2"]

    def test_search_fields_include_custom_fields(self):
        fields = JiraFields().search_fields()
        assert DEFAULT_QA_CONTACT_FIELD in fields
        assert DEFAULT_PR_FIELD in fields

    def test_missing_fields_object_raises(self):
        with pytest.raises(ResponseDecodeError, match="fields"):
            parse_issue_node({"key": "MTV-1"}, JiraFields())
