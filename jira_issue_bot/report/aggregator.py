"""Classification and ordering of issues for the P0/P1 digest."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from ..jira_client.models import Issue

P0 = "P0"
P1 = "P1"


class ReportBuckets(BaseModel):
    """Issues of one digest run, split by priority."""

    p0: list[Issue] = Field(
        default_factory=list, description="P0 issues sorted by affected version"
    )
    p1: list[Issue] = Field(
        default_factory=list, description="P1 issues in Jira order"
    )

    @property
    def total(self) -> int:
        """Number of issues in both buckets."""
        return len(self.p0) + len(self.p1)


def build_report(raw_issues: Iterable[dict[str, Any]]) -> ReportBuckets:
    """Build the digest buckets from raw Jira issue records.

    The digest does not consult the issue cache, so issues already published
    by the new-issue poll are listed again. Priorities other than P0 and P1
    are left out.

    Args:
        raw_issues: Raw Jira issue records

    Returns:
        ReportBuckets with P0 sorted by affected version (stable, '' first)
        and P1 in the order Jira returned them
    """
    issues = [Issue.from_raw(raw) for raw in raw_issues]

    p0 = [issue for issue in issues if issue.priority == P0]
    p1 = [issue for issue in issues if issue.priority == P1]

    # Stable: Jira order is kept within one version
    p0.sort(key=lambda issue: issue.affected_version)

    return ReportBuckets(p0=p0, p1=p1)
