"""Tests for Jira models."""

from collections.abc import Callable
from typing import Any

import pytest
from pydantic import ValidationError

from jira_issue_bot.jira_client.models import Issue, JiraSession


class TestJiraSession:
    """Test JiraSession model."""

    def test_cookie(self) -> None:
        """Test cookie header value."""
        session = JiraSession(name="JSESSIONID", value="abc123")
        assert session.cookie == "JSESSIONID=abc123"


class TestIssue:
    """Test Issue model."""

    def test_from_raw_full_record(
        self, raw_issue: Callable[..., dict[str, Any]]
    ) -> None:
        """Test conversion of a complete record."""
        raw = raw_issue(
            "PROJ-1",
            priority="P0",
            version="2.0",
            labels=["backend", "crash"],
            versions=[{"name": "2.0"}, {"name": "1.9"}],
        )

        issue = Issue.from_raw(raw)

        assert issue.key == "PROJ-1"
        assert issue.summary == "Summary of PROJ-1"
        assert issue.description == "Description of PROJ-1"
        assert issue.assignee == "Alice"
        assert issue.reporter == "Bob"
        assert issue.status == "Open"
        assert issue.priority == "P0"
        assert issue.labels == ("backend", "crash")
        assert issue.affected_version == "2.0"

    def test_from_raw_missing_optional_fields(self) -> None:
        """Test defaults for absent assignee, reporter, labels and versions."""
        raw = {
            "key": "PROJ-2",
            "fields": {
                "summary": "Crash on start",
                "description": None,
                "assignee": None,
                "reporter": None,
                "status": {"name": "New"},
                "priority": {"name": "P1"},
                "labels": None,
            },
        }

        issue = Issue.from_raw(raw)

        assert issue.description == ""
        assert issue.assignee == ""
        assert issue.reporter == ""
        assert issue.labels == ()
        assert issue.affected_version == ""

    def test_from_raw_empty_versions(
        self, raw_issue: Callable[..., dict[str, Any]]
    ) -> None:
        """Test that an empty versions list gives an empty affected version."""
        issue = Issue.from_raw(raw_issue("PROJ-3", versions=[]))
        assert issue.affected_version == ""

    def test_from_raw_without_key(self) -> None:
        """Test that a record without key is rejected."""
        with pytest.raises(ValidationError):
            Issue.from_raw({"fields": {"summary": "No key"}})

    def test_to_summary(self, raw_issue: Callable[..., dict[str, Any]]) -> None:
        """Test one-line summary."""
        issue = Issue.from_raw(raw_issue("PROJ-4", summary="Login broken"))
        assert issue.to_summary() == "PROJ-4: Login broken"

    def test_issue_is_immutable(
        self, raw_issue: Callable[..., dict[str, Any]]
    ) -> None:
        """Test that issues can't be changed after construction."""
        issue = Issue.from_raw(raw_issue("PROJ-5"))
        with pytest.raises(ValidationError):
            issue.priority = "P0"  # type: ignore[misc]
