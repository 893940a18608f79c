"""Exception hierarchy for the bot.

Library exceptions (httpx, slack_sdk) are translated into these at the
boundary where they are raised, so the scheduler only has to know about
``BotError`` subclasses.
"""


class BotError(Exception):
    """Base class for all bot errors."""


class AuthError(BotError):
    """Jira login was rejected or could not be completed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class QueryError(BotError):
    """A Jira REST request failed (non-200 status or transport error)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SessionExpiredError(QueryError):
    """Jira answered 401 and the session was renewed, but the request was not
    re-issued. Callers have to send it again."""

    def __init__(self, message: str = "Jira session expired; re-authorized"):
        super().__init__(message, status_code=401)


class PublishError(BotError):
    """Posting a message to the chat conversation failed."""


class FatalError(BotError):
    """Unrecoverable condition; the process has to exit."""
