"""Slack client used as the bot's chat conversation."""

import logging
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import BaseModel, Field
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from ..errors import AuthError, PublishError
from .config import SlackConfig

logger = logging.getLogger(__name__)

# Slack Block Kit limits
HEADER_MAX_CHARS = 150
SECTION_MAX_CHARS = 3000
MAX_BLOCKS = 50


class ChatUser(BaseModel):
    """Identity the bot is logged on as."""

    user_id: str = Field(..., description="Slack user id of the bot")
    user: str = Field(..., description="Slack user name of the bot")
    team: str = Field("", description="Workspace name")
    url: str = Field("", description="Workspace URL")


class TextItem(BaseModel):
    """A message to add to a conversation."""

    subject: str = Field(..., description="Message title")
    content: str = Field(..., description="Message body")
    content_type: str = Field("mrkdwn", description="Markup of the body")


class ChatAck(BaseModel):
    """Acknowledgement of a posted message."""

    channel: str
    ts: str = Field(..., description="Slack message timestamp (message id)")


class SlackChatClient:
    """Posts text items to Slack conversations."""

    def __init__(
        self,
        config: Optional[SlackConfig] = None,
        web_client: Optional[AsyncWebClient] = None,
    ) -> None:
        """Initialize Slack client with configuration.

        Args:
            config: Slack configuration. Defaults to environment-based config.
            web_client: Preconfigured web client, created lazily if None.
        """
        self.config = config or SlackConfig()
        self._web_client = web_client

    @property
    def web_client(self) -> AsyncWebClient:
        """Get or create the Slack AsyncWebClient for the bot token."""
        if self._web_client is None:
            self.config.validate()
            self._web_client = AsyncWebClient(
                token=self.config.bot_token, timeout=self.config.timeout_seconds
            )
        return self._web_client

    async def logon(self) -> ChatUser:
        """Verify the bot token and return the bot identity.

        Raises:
            AuthError: If Slack rejects the token or cannot be reached
        """
        try:
            response = await self.web_client.auth_test()
        except SlackApiError as e:
            raise AuthError(f"Slack logon failed: {e.response['error']}") from e
        except (aiohttp.ClientError, OSError) as e:
            raise AuthError(f"Slack logon failed: {e}") from e

        user = ChatUser(
            user_id=str(response["user_id"]),
            user=str(response["user"]),
            team=str(response.get("team", "")),
            url=str(response.get("url", "")),
        )
        logger.info(f"Logged on to {user.url or user.team} as {user.user}")
        return user

    async def add_text_item(self, conversation_id: str, item: TextItem) -> ChatAck:
        """Post a text item to a conversation.

        Args:
            conversation_id: Slack channel id
            item: Message to post

        Returns:
            ChatAck with the message timestamp

        Raises:
            PublishError: If Slack rejects the message or cannot be reached
        """
        try:
            response = await self.web_client.chat_postMessage(
                channel=conversation_id,
                text=item.subject,
                blocks=self._format_blocks(item),
            )
        except SlackApiError as e:
            logger.error(f"Error posting message to Slack: {e}")
            raise PublishError(
                f"Slack rejected message '{item.subject}': {e.response['error']}"
            ) from e
        except (aiohttp.ClientError, OSError) as e:
            logger.error(f"Unexpected error posting message to Slack: {e}")
            raise PublishError(f"Failed to post message '{item.subject}': {e}") from e

        return ChatAck(channel=str(response["channel"]), ts=str(response["ts"]))

    def _format_blocks(self, item: TextItem) -> List[Dict[str, Any]]:
        """Format a text item into Slack Block Kit blocks.

        Args:
            item: Message to format

        Returns:
            A header block with the subject (left out when the subject is
            blank) followed by section blocks with the content, at most
            MAX_BLOCKS blocks in total. Content that does not fit is replaced
            by a note saying how many lines were left out.
        """
        blocks: List[Dict[str, Any]] = []
        if item.subject.strip():
            blocks.append(
                {
                    "type": "header",
                    "text": {
                        "type": "plain_text",
                        "text": item.subject[:HEADER_MAX_CHARS],
                    },
                }
            )

        chunks = split_content(item.content, SECTION_MAX_CHARS)
        max_sections = MAX_BLOCKS - len(blocks)
        if len(chunks) > max_sections:
            dropped = chunks[max_sections - 1 :]
            omitted = sum(chunk.count("\n") + 1 for chunk in dropped)
            logger.warning(
                f"Message '{item.subject}' exceeds {MAX_BLOCKS} blocks, "
                f"leaving out {omitted} lines"
            )
            chunks = chunks[: max_sections - 1]
            chunks.append(f"_... {omitted} more lines not shown_")

        for chunk in chunks:
            blocks.append(
                {
                    "type": "section",
                    "text": {"type": item.content_type, "text": chunk},
                }
            )

        return blocks


def split_content(content: str, limit: int) -> List[str]:
    """Split content at line boundaries into chunks of at most ``limit`` chars.

    A single line longer than the limit is cut hard.
    """
    chunks: List[str] = []
    current = ""

    for line in content.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]

        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate

    if current.strip():
        chunks.append(current)

    return chunks or [" "]
