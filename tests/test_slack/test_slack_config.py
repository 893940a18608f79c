"""Tests for Slack configuration."""

import os
from unittest.mock import patch

import pytest

from jira_issue_bot.slack.config import SlackConfig


class TestSlackConfig:
    """Test SlackConfig class."""

    @patch.dict(
        os.environ,
        {"SLACK_BOT_TOKEN": "xoxb-env", "SLACK_CHANNEL": "C42"},
        clear=True,
    )
    def test_from_environment(self) -> None:
        """Test that values default to environment variables."""
        config = SlackConfig()

        assert config.bot_token == "xoxb-env"
        assert config.channel == "C42"
        assert config.timeout_seconds == 30
        assert config.is_configured()

    @patch.dict(os.environ, {"SLACK_BOT_TOKEN": "xoxb-env"}, clear=True)
    def test_explicit_values_win(self) -> None:
        """Test that constructor arguments override the environment."""
        config = SlackConfig(bot_token="xoxb-arg", channel="C1", timeout_seconds=5)

        assert config.bot_token == "xoxb-arg"
        assert config.channel == "C1"
        assert config.timeout_seconds == 5

    @patch.dict(os.environ, {"SLACK_CHANNEL": "C42"}, clear=True)
    def test_validate_missing_token(self) -> None:
        """Test validation without token."""
        config = SlackConfig()

        assert not config.is_configured()
        with pytest.raises(ValueError, match="SLACK_BOT_TOKEN"):
            config.validate()

    @patch.dict(os.environ, {"SLACK_BOT_TOKEN": "xoxb-env"}, clear=True)
    def test_validate_missing_channel(self) -> None:
        """Test validation without channel."""
        with pytest.raises(ValueError, match="SLACK_CHANNEL"):
            SlackConfig().validate()
