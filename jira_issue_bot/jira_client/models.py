"""Pydantic models for Jira data structures.

The raw models map the parts of Jira's REST API v2 issue representation the
bot reads. API Reference:
https://docs.atlassian.com/software/jira/docs/api/REST/latest/#api/2/search
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JiraSession(BaseModel):
    """Session cookie returned by ``POST /rest/auth/1/session``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Cookie name, usually JSESSIONID")
    value: str = Field(..., description="Opaque session token")

    @property
    def cookie(self) -> str:
        """Value for the ``cookie`` request header."""
        return f"{self.name}={self.value}"


class JiraUser(BaseModel):
    """Jira user reference (assignee, reporter)."""

    display_name: str = Field("", alias="displayName")


class JiraNamedValue(BaseModel):
    """Any Jira object identified by a name (status, priority, version)."""

    name: str = ""


class JiraIssueFields(BaseModel):
    """The ``fields`` object of a Jira issue record."""

    summary: str = ""
    description: str | None = None
    assignee: JiraUser | None = None
    reporter: JiraUser | None = None
    status: JiraNamedValue | None = None
    priority: JiraNamedValue | None = None
    labels: list[str] | None = None
    versions: list[JiraNamedValue] | None = None


class JiraIssueRecord(BaseModel):
    """A raw issue as it appears in the ``issues`` list of a search result."""

    key: str
    fields: JiraIssueFields = Field(default_factory=JiraIssueFields)


class Issue(BaseModel):
    """Flattened, immutable view of a Jira issue used for publishing."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Issue key, e.g. 'PROJ-123'")
    summary: str = Field("", description="Issue title")
    description: str = Field("", description="Issue description (Jira markup)")
    assignee: str = Field("", description="Assignee display name, '' if none")
    reporter: str = Field("", description="Reporter display name, '' if none")
    status: str = Field("", description="Status name")
    priority: str = Field("", description="Priority name, e.g. 'P0'")
    labels: tuple[str, ...] = Field(default=(), description="Labels in Jira order")
    affected_version: str = Field(
        "", description="Name of the first affected version, '' if none"
    )

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "Issue":
        """Build an Issue from a raw Jira issue record.

        Args:
            raw: Issue dict with ``key`` and ``fields``

        Returns:
            Issue instance

        Raises:
            pydantic.ValidationError: If the record has no usable key
        """
        record = JiraIssueRecord.model_validate(raw)
        fields = record.fields

        return cls(
            key=record.key,
            summary=fields.summary,
            description=fields.description or "",
            assignee=fields.assignee.display_name if fields.assignee else "",
            reporter=fields.reporter.display_name if fields.reporter else "",
            status=fields.status.name if fields.status else "",
            priority=fields.priority.name if fields.priority else "",
            labels=tuple(fields.labels or ()),
            affected_version=fields.versions[0].name if fields.versions else "",
        )

    def to_summary(self) -> str:
        """One-line ``KEY: summary`` representation."""
        return f"{self.key}: {self.summary}"
