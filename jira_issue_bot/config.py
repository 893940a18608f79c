"""Bot configuration loaded from environment variables.

The CLI calls ``load_dotenv()`` first, so every variable can also come from a
``.env`` file in the working directory.
"""

import json
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .slack.config import SlackConfig

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class JiraConfig(BaseModel):
    """Jira connection settings."""

    domain: str = Field(..., description="Public base URL, used for API calls")
    internal_domain: str = Field(..., description="Base URL for primary links")
    username: str
    password: SecretStr
    verify_ssl: bool = True
    timeout_seconds: float = Field(30.0, gt=0)
    retry_after_reauth: bool = Field(
        False,
        description="Re-issue a request once after a 401 triggered a re-login",
    )

    @field_validator("domain", "internal_domain")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended with '/'."""
        return v.rstrip("/")


class PollConfig(BaseModel):
    """A named saved search that is run periodically."""

    name: str
    query: dict[str, Any] = Field(..., description="Body for POST /rest/api/2/search")
    interval_seconds: float = Field(..., gt=0)


class BotConfig(BaseModel):
    """Complete bot configuration."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    jira: JiraConfig
    issues_poll: PollConfig
    report_poll: PollConfig
    slack: SlackConfig
    log_level: str = "INFO"
    sdk_log_level: str = "WARNING"

    @field_validator("log_level", "sdk_log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard logging level names, case-insensitively."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Expected one of: "
                f"{', '.join(sorted(LOG_LEVELS))}"
            )
        return level

    def summary(self) -> dict[str, str]:
        """Return a display-safe view of the configuration (secrets masked)."""
        return {
            "Jira domain": self.jira.domain,
            "Jira internal domain": self.jira.internal_domain,
            "Jira username": self.jira.username,
            "Jira password": "********",
            "Verify SSL": str(self.jira.verify_ssl),
            "Retry after re-auth": str(self.jira.retry_after_reauth),
            "Issues poll": (
                f"{self.issues_poll.name} every {self.issues_poll.interval_seconds:g}s"
            ),
            "Issues query": json.dumps(self.issues_poll.query),
            "Report poll": (
                f"{self.report_poll.name} every {self.report_poll.interval_seconds:g}s"
            ),
            "Report query": json.dumps(self.report_poll.query),
            "Slack channel": self.slack.channel or "",
            "Slack token": "********" if self.slack.bot_token else "(not set)",
            "Log level": f"{self.log_level} (SDK: {self.sdk_log_level})",
        }


def _env_required(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} environment variable is required")
    return value


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def parse_query(value: str) -> dict[str, Any]:
    """Parse a poll query from its environment representation.

    Args:
        value: Either a JSON object (the full search request body) or a bare
            JQL string

    Returns:
        Search request body, e.g. ``{"jql": "priority = P0"}``
    """
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return {"jql": value}

    if isinstance(parsed, dict):
        return parsed
    return {"jql": str(parsed)}


def load_config() -> BotConfig:
    """Load the bot configuration from the environment.

    Returns:
        Validated BotConfig

    Raises:
        ValueError: If a required variable is missing or a value is invalid
    """
    domain = _env_required("JIRA_DOMAIN")

    jira = JiraConfig(
        domain=domain,
        internal_domain=os.getenv("JIRA_INTERNAL_DOMAIN") or domain,
        username=_env_required("JIRA_USERNAME"),
        password=SecretStr(_env_required("JIRA_PASSWORD")),
        verify_ssl=_env_bool("JIRA_VERIFY_SSL", True),
        timeout_seconds=float(os.getenv("JIRA_TIMEOUT_SECONDS", "30")),
        retry_after_reauth=_env_bool("JIRA_RETRY_AFTER_REAUTH", False),
    )

    issues_poll = PollConfig(
        name=os.getenv("ISSUES_POLL_NAME", "New issues"),
        query=parse_query(_env_required("ISSUES_POLL_QUERY")),
        interval_seconds=float(os.getenv("ISSUES_POLL_INTERVAL_MINUTES", "5")) * 60,
    )

    report_poll = PollConfig(
        name=os.getenv("REPORT_POLL_NAME", "P0/P1 report"),
        query=parse_query(_env_required("REPORT_POLL_QUERY")),
        interval_seconds=float(os.getenv("REPORT_POLL_INTERVAL_HOURS", "24"))
        * 60
        * 60,
    )

    slack = SlackConfig()
    slack.validate()

    return BotConfig(
        jira=jira,
        issues_poll=issues_poll,
        report_poll=report_poll,
        slack=slack,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        sdk_log_level=os.getenv("SDK_LOG_LEVEL", "WARNING"),
    )
