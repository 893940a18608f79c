"""Logging configuration for the bot process."""

import logging

from rich.logging import RichHandler

APP_LOGGER = "jira_issue_bot"
SDK_LOGGERS = ("slack_sdk", "httpx", "httpcore")


def setup_logging(level: str = "INFO", sdk_level: str = "WARNING") -> None:
    """Configure console logging.

    Installs a single RichHandler on the root logger (calling this again does
    not add another one). The bot's own loggers use ``level``; all other
    loggers, the SDK ones included, use ``sdk_level``.

    Args:
        level: Level name for the bot's loggers
        sdk_level: Level name for the root logger and the SDK loggers
    """
    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
        root.addHandler(handler)
    root.setLevel(sdk_level.upper())

    logging.getLogger(APP_LOGGER).setLevel(level.upper())
    for name in SDK_LOGGERS:
        logging.getLogger(name).setLevel(sdk_level.upper())
