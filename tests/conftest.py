"""Shared test fixtures."""
from __future__ import annotations

from collections.abc import Callable

import pytest

from jira_report.digest import (
    DEFAULT_PR_FIELD,
    DEFAULT_QA_CONTACT_FIELD,
    JiraIssue,
    Settings,
)

JIRA_URL = "https://issues.example.com"


def _user(name: str | None) -> dict[str, str] | None:
    return {"displayName": name} if name else None


@pytest.fixture
def make_node() -> Callable[..., dict[str, object]]:
    def factory(
        key: str,
        *,
        summary: str = "Some summary",
        status: str = "POST",
        issue_type: str = "Bug",
        assignee: str | None = "Jane Doe",
        qa_contact: str | None = None,
        components: tuple[str, ...] = (),
        labels: tuple[str, ...] = (),
        prs: object = None,
    ) -> dict[str, object]:
        return {
            "key": key,
            "fields": {
                "summary": summary,
                "status": {"name": status},
                "issuetype": {"name": issue_type},
                "assignee": _user(assignee),
                DEFAULT_QA_CONTACT_FIELD: _user(qa_contact),
                "components": [{"name": name} for name in components],
                "labels": list(labels),
                DEFAULT_PR_FIELD: prs,
            },
        }

    return factory


@pytest.fixture
def make_issue() -> Callable[..., JiraIssue]:
    def factory(key: str, **overrides: object) -> JiraIssue:
        values: dict[str, object] = {
            "key": key,
            "summary": "Some summary",
            "status": "POST",
            "issue_type": "Bug",
            "assignee": "Jane Doe",
        }
        values.update(overrides)
        return JiraIssue.model_validate(values)

    return factory


@pytest.fixture
def settings() -> Settings:
    return Settings.model_validate(
        {
            "JIRA_URL": JIRA_URL,
            "JIRA_TOKEN": "jira-token",
            "SLACK_BOT_TOKEN": "xoxb-test",
            "SLACK_CHANNEL": "C123",
            "SLACK_REPLY_DELAY_SECONDS": 0,
            "SLACK_WEBHOOK_URL": None,
            "SLACK_SIGNING_SECRET": None,
        },
    )
