"""Jira REST API client using httpx."""

import logging
from typing import Any

import httpx

from ..config import JiraConfig
from ..errors import AuthError, QueryError, SessionExpiredError
from .session import SessionManager

logger = logging.getLogger(__name__)

API_PATH = "/rest/api/2/"


class JiraClient:
    """Executes authenticated Jira REST queries.

    A 401 response is treated as an expired session: the client logs in again
    once, inline. The original request is only re-issued when
    ``JiraConfig.retry_after_reauth`` is enabled; otherwise the call fails with
    SessionExpiredError and the caller has to send it again.
    """

    def __init__(
        self,
        config: JiraConfig,
        session_manager: SessionManager,
        http: httpx.AsyncClient,
    ):
        """Initialize the Jira client.

        Args:
            config: Jira connection settings
            session_manager: Holder of the session cookie
            http: Shared async HTTP client
        """
        self.config = config
        self.session_manager = session_manager
        self.http = http

    async def execute(self, path: str, params: dict[str, Any]) -> Any:
        """POST a query to ``/rest/api/2/<path>``.

        Args:
            path: API path below /rest/api/2/, e.g. 'search'
            params: JSON request body, e.g. {'jql': 'type = Bug'}

        Returns:
            Parsed JSON response body

        Raises:
            QueryError: On non-200 status, transport failure or timeout
            SessionExpiredError: On 401 after a successful re-login
            AuthError: On 401 when the re-login itself fails
        """
        return await self._execute(path, params, allow_retry=True)

    async def _execute(
        self, path: str, params: dict[str, Any], allow_retry: bool
    ) -> Any:
        url = self.config.domain + API_PATH + path
        headers = {}
        cookie = self.session_manager.cookie
        if cookie:
            headers["cookie"] = cookie

        logger.debug(f"Query Jira: url: {url}, body: {params}")

        try:
            response = await self.http.post(url, json=params, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Jira request to {url} timed out: {e}")
            raise QueryError("Jira request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Jira request to {url} failed: {e}")
            raise QueryError(f"Jira request failed: {e}") from e

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as e:
                raise QueryError(
                    f"Jira returned invalid JSON for {path}: {e}", status_code=200
                ) from e

        if response.status_code == 401:
            logger.info("401 Unauthorized. Trying to re-authorize.")
            try:
                await self.session_manager.login()
            except AuthError as e:
                logger.error(f"Failed to re-authorize. Giving up. {e}")
                raise

            logger.info("Successfully re-authorized.")
            if self.config.retry_after_reauth and allow_retry:
                logger.info(f"Re-issuing Jira request to {url}")
                return await self._execute(path, params, allow_retry=False)
            raise SessionExpiredError(
                f"Jira session expired during request to {path}; re-authorized"
            )

        logger.error(f"{response.status_code} {response.reason_phrase}")
        raise QueryError(
            f"Jira request to {path} failed: {response.status_code} "
            f"{response.reason_phrase}",
            status_code=response.status_code,
        )

    async def search(self, query: dict[str, Any]) -> list[dict[str, Any]]:
        """Run a search and return its raw issue records.

        Args:
            query: Body for /rest/api/2/search ('jql', 'maxResults', 'fields', ...)

        Returns:
            The 'issues' list of the response, empty if missing
        """
        data = await self.execute("search", query)
        issues = data.get("issues") if isinstance(data, dict) else None
        return list(issues) if issues else []
