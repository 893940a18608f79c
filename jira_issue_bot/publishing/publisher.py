"""Publishes issues and digest reports to the chat conversation."""

import asyncio
import logging

from ..errors import PublishError
from ..jira_client.models import Issue
from ..report.aggregator import ReportBuckets
from ..slack.client import ChatAck, SlackChatClient
from .formatters import IssueLinks, build_issue_item, build_report_item

logger = logging.getLogger(__name__)


class Publisher:
    """Turns issues and reports into messages and posts them."""

    def __init__(
        self, chat: SlackChatClient, conversation_id: str, links: IssueLinks
    ):
        """Initialize the publisher.

        Args:
            chat: Chat client used to post messages
            conversation_id: Conversation all messages go to
            links: URL builder for issue links
        """
        self.chat = chat
        self.conversation_id = conversation_id
        self.links = links

    async def publish_new_issues(self, issues: list[Issue]) -> list[ChatAck]:
        """Post one message per issue, all concurrently.

        Waits for every post to finish. If any failed, the first failure is
        raised; messages that did get posted stay posted.

        Args:
            issues: Issues to announce

        Returns:
            Acknowledgements in the order of ``issues``

        Raises:
            PublishError: If at least one post failed
        """
        tasks = []
        for issue in issues:
            logger.info(f"Posting {issue.key}")
            item = build_issue_item(issue, self.links)
            tasks.append(
                asyncio.create_task(self.chat.add_text_item(self.conversation_id, item))
            )

        results = await asyncio.gather(*tasks, return_exceptions=True)

        acks = []
        for issue, result in zip(issues, results):
            if isinstance(result, BaseException):
                if isinstance(result, PublishError):
                    raise result
                raise PublishError(f"Failed to post {issue.key}: {result}") from result
            acks.append(result)

        return acks

    async def publish_report(self, buckets: ReportBuckets, subject: str) -> ChatAck:
        """Post the digest as a single message.

        Args:
            buckets: Digest buckets
            subject: Message subject

        Returns:
            Acknowledgement of the posted message
        """
        logger.info(
            f"Posting report with {len(buckets.p0)} P0 and {len(buckets.p1)} P1 issues"
        )
        item = build_report_item(buckets, subject, self.links)
        return await self.chat.add_text_item(self.conversation_id, item)
