"""Test configuration and fixtures."""

from collections.abc import Callable
from typing import Any

import pytest
from pydantic import SecretStr

from jira_issue_bot.config import BotConfig, JiraConfig, PollConfig
from jira_issue_bot.slack.config import SlackConfig

RawIssueFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def jira_config() -> JiraConfig:
    """Jira settings pointing at a fake host."""
    return JiraConfig(
        domain="https://jira.example.com",
        internal_domain="https://jira.internal.example.com",
        username="bot",
        password=SecretStr("secret"),
    )


@pytest.fixture
def bot_config(jira_config: JiraConfig) -> BotConfig:
    """Complete bot configuration with short intervals."""
    return BotConfig(
        jira=jira_config,
        issues_poll=PollConfig(
            name="New issues", query={"jql": "created >= -1d"}, interval_seconds=300
        ),
        report_poll=PollConfig(
            name="P0/P1 report",
            query={"jql": "priority in (P0, P1)"},
            interval_seconds=86400,
        ),
        slack=SlackConfig(bot_token="xoxb-test", channel="C123"),
    )


@pytest.fixture
def raw_issue() -> RawIssueFactory:
    """Factory for raw Jira issue records as returned by /rest/api/2/search."""

    def make(
        key: str,
        priority: str = "P1",
        version: str = "",
        summary: str | None = None,
        **fields: Any,
    ) -> dict[str, Any]:
        record_fields: dict[str, Any] = {
            "summary": summary if summary is not None else f"Summary of {key}",
            "description": f"Description of {key}",
            "assignee": {"displayName": "Alice"},
            "reporter": {"displayName": "Bob"},
            "status": {"name": "Open"},
            "priority": {"name": priority},
            "labels": ["backend"],
            "versions": [{"name": version}] if version else [],
        }
        record_fields.update(fields)
        return {"key": key, "fields": record_fields}

    return make
