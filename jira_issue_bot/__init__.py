"""Jira issue bot: republishes Jira issues and a P0/P1 digest to Slack."""

__version__ = "0.1.0"
