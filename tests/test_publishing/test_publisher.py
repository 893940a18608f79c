"""Tests for the publisher."""

import asyncio
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from jira_issue_bot.errors import PublishError
from jira_issue_bot.jira_client.models import Issue
from jira_issue_bot.publishing.formatters import IssueLinks
from jira_issue_bot.publishing.publisher import Publisher
from jira_issue_bot.report.aggregator import build_report
from jira_issue_bot.slack.client import ChatAck, TextItem


@pytest.fixture
def chat() -> AsyncMock:
    client = AsyncMock()

    async def add_text_item(conversation_id: str, item: TextItem) -> ChatAck:
        return ChatAck(channel=conversation_id, ts=item.subject)

    client.add_text_item.side_effect = add_text_item
    return client


@pytest.fixture
def publisher(chat: AsyncMock) -> Publisher:
    links = IssueLinks(
        internal_domain="https://jira.internal.example.com",
        public_domain="https://jira.example.com",
    )
    return Publisher(chat, conversation_id="C123", links=links)


def make_issues(
    raw_issue: Callable[..., dict[str, Any]], *keys: str
) -> list[Issue]:
    return [Issue.from_raw(raw_issue(key, summary=key)) for key in keys]


class TestPublisher:
    """Test Publisher class."""

    @pytest.mark.asyncio
    async def test_publish_new_issues(
        self,
        publisher: Publisher,
        chat: AsyncMock,
        raw_issue: Callable[..., dict[str, Any]],
    ) -> None:
        """Test one message per issue, acks in issue order."""
        issues = make_issues(raw_issue, "A", "B", "C")

        acks = await publisher.publish_new_issues(issues)

        assert [ack.ts for ack in acks] == ["A", "B", "C"]
        assert chat.add_text_item.await_count == 3
        for call in chat.add_text_item.await_args_list:
            assert call.args[0] == "C123"

    @pytest.mark.asyncio
    async def test_publish_new_issues_runs_concurrently(
        self,
        publisher: Publisher,
        chat: AsyncMock,
        raw_issue: Callable[..., dict[str, Any]],
    ) -> None:
        """Test that all posts are in flight at the same time."""
        in_flight = 0
        max_in_flight = 0

        async def slow_post(conversation_id: str, item: TextItem) -> ChatAck:
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return ChatAck(channel=conversation_id, ts=item.subject)

        chat.add_text_item.side_effect = slow_post

        await publisher.publish_new_issues(make_issues(raw_issue, "A", "B", "C"))

        assert max_in_flight == 3

    @pytest.mark.asyncio
    async def test_publish_new_issues_failure_fails_batch(
        self,
        publisher: Publisher,
        chat: AsyncMock,
        raw_issue: Callable[..., dict[str, Any]],
    ) -> None:
        """Test that one failed post fails the batch after all were attempted."""
        completed: list[str] = []

        async def post(conversation_id: str, item: TextItem) -> ChatAck:
            if item.subject == "B":
                raise PublishError("channel_not_found")
            await asyncio.sleep(0.01)
            completed.append(item.subject)
            return ChatAck(channel=conversation_id, ts=item.subject)

        chat.add_text_item.side_effect = post

        with pytest.raises(PublishError, match="channel_not_found"):
            await publisher.publish_new_issues(make_issues(raw_issue, "A", "B", "C"))

        assert completed == ["A", "C"]

    @pytest.mark.asyncio
    async def test_publish_new_issues_wraps_other_errors(
        self,
        publisher: Publisher,
        chat: AsyncMock,
        raw_issue: Callable[..., dict[str, Any]],
    ) -> None:
        """Test that unexpected errors are reported as PublishError."""
        chat.add_text_item.side_effect = RuntimeError("boom")

        with pytest.raises(PublishError, match="Failed to post A: boom"):
            await publisher.publish_new_issues(make_issues(raw_issue, "A"))

    @pytest.mark.asyncio
    async def test_publish_new_issues_empty(
        self, publisher: Publisher, chat: AsyncMock
    ) -> None:
        """Test that no issues means no messages."""
        assert await publisher.publish_new_issues([]) == []
        chat.add_text_item.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_publish_report_single_message(
        self,
        publisher: Publisher,
        chat: AsyncMock,
        raw_issue: Callable[..., dict[str, Any]],
    ) -> None:
        """Test that the digest is posted as exactly one message."""
        buckets = build_report(
            [
                raw_issue("A", priority="P0", version="1.0"),
                raw_issue("B", priority="P1"),
            ]
        )

        ack = await publisher.publish_report(buckets, "Daily report")

        assert ack.ts == "Daily report"
        chat.add_text_item.assert_awaited_once()
        conversation_id, item = chat.add_text_item.await_args.args
        assert conversation_id == "C123"
        assert item.content.startswith("*1 P0's* and *1 P1's*")
