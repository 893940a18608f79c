"""Configuration for Slack integration."""

import os
from typing import Optional


class SlackConfig:
    """Configuration class for Slack API integration."""

    def __init__(
        self,
        bot_token: Optional[str] = None,
        channel: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
    ) -> None:
        """Initialize Slack configuration, falling back to environment variables.

        Args:
            bot_token: Bot token (xoxb-...). Defaults to SLACK_BOT_TOKEN.
            channel: Conversation id messages are posted to. Defaults to
                SLACK_CHANNEL.
            timeout_seconds: Web API timeout. Defaults to SLACK_TIMEOUT_SECONDS
                or 30.
        """
        self.bot_token: Optional[str] = bot_token or os.getenv("SLACK_BOT_TOKEN")
        self.channel: Optional[str] = channel or os.getenv("SLACK_CHANNEL")
        self.timeout_seconds: int = timeout_seconds or int(
            os.getenv("SLACK_TIMEOUT_SECONDS", "30")
        )

    def is_configured(self) -> bool:
        """Check if Slack is properly configured."""
        return bool(self.bot_token and self.channel)

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        if not self.bot_token:
            raise ValueError(
                "SLACK_BOT_TOKEN environment variable is required to post messages"
            )
        if not self.channel:
            raise ValueError(
                "SLACK_CHANNEL environment variable is required "
                "(id of the conversation to post to)"
            )
