"""Jira session (cookie) management."""

import logging

import httpx

from ..config import JiraConfig
from ..errors import AuthError
from .models import JiraSession

logger = logging.getLogger(__name__)

SESSION_PATH = "/rest/auth/1/session"


class SessionManager:
    """Owns the Jira session cookie used to authorize REST requests.

    There is no expiry tracking: the query client detects an expired session
    from a 401 response and calls ``login()`` again.
    """

    def __init__(self, config: JiraConfig, http: httpx.AsyncClient):
        """Initialize the session manager.

        Args:
            config: Jira connection settings
            http: Shared async HTTP client
        """
        self.config = config
        self.http = http
        self._session: JiraSession | None = None

    @property
    def session(self) -> JiraSession | None:
        """The current session, or None if not logged in."""
        return self._session

    @property
    def is_valid(self) -> bool:
        """Whether a session is currently held."""
        return self._session is not None

    @property
    def cookie(self) -> str | None:
        """Cookie header value for the current session."""
        return self._session.cookie if self._session else None

    async def login(self) -> JiraSession:
        """Log in to Jira and replace the held session.

        Returns:
            The new session

        Raises:
            AuthError: If Jira rejects the credentials or cannot be reached
        """
        url = self.config.domain + SESSION_PATH
        credentials = {
            "username": self.config.username,
            "password": self.config.password.get_secret_value(),
        }

        logger.debug(f"Login request to Jira as {self.config.username} on {url}")

        try:
            response = await self.http.post(url, json=credentials)
        except httpx.HTTPError as e:
            self._session = None
            logger.error(f"Error logging in to Jira at {url}: {e}")
            raise AuthError(f"Jira login request failed: {e}") from e

        if not response.is_success:
            self._session = None
            logger.error(
                f"Error logging in to Jira at {url} as {self.config.username}: "
                f"{response.status_code}"
            )
            raise AuthError(
                f"Jira login rejected with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            session = JiraSession.model_validate(response.json()["session"])
        except (ValueError, KeyError, TypeError) as e:
            self._session = None
            raise AuthError(
                f"Unexpected Jira login response: {e}",
                status_code=response.status_code,
            ) from e

        # Concurrent requests see either the old or the new session
        self._session = session
        logger.info(f"Successfully logged in to Jira as {self.config.username}")
        return session
