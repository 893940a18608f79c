"""Text helpers for Slack mrkdwn messages."""


def truncate(value: str, length: int) -> str:
    """Cut a string to ``length`` characters, appending '...' if it was cut.

    Args:
        value: Text to truncate
        length: Maximum number of characters kept from ``value``

    Returns:
        The truncated text
    """
    if len(value) > length:
        return value[:length] + "..."
    return value


def escape(value: str) -> str:
    """Escape the characters Slack treats as control characters in mrkdwn."""
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def link(url: str, text: str) -> str:
    """Slack link ``<url|text>``."""
    return f"<{url}|{escape(text)}>"


def bold(text: str) -> str:
    """Slack bold ``*text*``, or '' for empty text."""
    return f"*{escape(text)}*" if text else ""
