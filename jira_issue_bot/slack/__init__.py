"""Slack integration: the chat conversation issues are published to."""

from .client import ChatAck, ChatUser, SlackChatClient, TextItem
from .config import SlackConfig

__all__ = ["ChatAck", "ChatUser", "SlackChatClient", "SlackConfig", "TextItem"]
