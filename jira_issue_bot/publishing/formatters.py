"""Formatting of issues and digest reports into Slack text items."""

from dataclasses import dataclass

from ..jira_client.models import Issue
from ..report.aggregator import ReportBuckets
from ..slack.client import TextItem
from ..utils.text import bold, escape, link, truncate

SUBJECT_MAX_CHARS = 100
DESCRIPTION_MAX_CHARS = 400
REPORT_SUMMARY_MAX_CHARS = 78
SEPARATOR = "----------"


@dataclass
class IssueLinks:
    """Builds browse URLs for the internal and the public Jira host."""

    internal_domain: str
    public_domain: str

    def internal(self, key: str) -> str:
        return f"{self.internal_domain}/browse/{key}"

    def public(self, key: str) -> str:
        return f"{self.public_domain}/browse/{key}"


def build_issue_item(issue: Issue, links: IssueLinks) -> TextItem:
    """Format a newly found issue as a standalone message.

    Args:
        issue: Issue to announce
        links: URL builder for issue links

    Returns:
        TextItem with the summary as subject and the issue details as content
    """
    lines = [
        f"Version: {bold(issue.affected_version)}",
        f"Priority: {bold(issue.priority)}",
        f"Reporter: {bold(issue.reporter)}",
        f"Assignee: {bold(issue.assignee)}",
        f"Labels: {bold(', '.join(issue.labels))}",
        f"{link(links.internal(issue.key), issue.key)} "
        f"({link(links.public(issue.key), 'public url')})",
        SEPARATOR,
        escape(truncate(issue.description, DESCRIPTION_MAX_CHARS)),
    ]

    return TextItem(
        subject=truncate(issue.summary or issue.key, SUBJECT_MAX_CHARS),
        content="\n".join(lines),
    )


def _report_entry(issue: Issue, links: IssueLinks) -> list[str]:
    owner = f" with {bold(issue.assignee)}" if issue.assignee else " unassigned"
    return [
        f"{link(links.internal(issue.key), issue.key)} "
        f"({link(links.public(issue.key), 'p')}){owner}",
        escape(truncate(issue.summary, REPORT_SUMMARY_MAX_CHARS)),
    ]


def _version_heading(version: str) -> str:
    if version:
        return bold(f"P0 for version {version}:")
    return bold("P0 for unassigned version:")


def build_report_item(
    buckets: ReportBuckets, subject: str, links: IssueLinks
) -> TextItem:
    """Format the digest as a single message.

    P0 issues are grouped under a version heading, inserted every time the
    affected version differs from the previous P0 entry. P1 issues follow
    under one heading.

    Args:
        buckets: Digest buckets, P0 already sorted by version
        subject: Message subject (the report poll name)
        links: URL builder for issue links

    Returns:
        TextItem for the whole digest
    """
    lines = [f"*{len(buckets.p0)} P0's* and *{len(buckets.p1)} P1's*"]

    previous: Issue | None = None
    for issue in buckets.p0:
        if previous is None or previous.affected_version != issue.affected_version:
            lines.append("")
            lines.append(_version_heading(issue.affected_version))
        lines.extend(_report_entry(issue, links))
        previous = issue

    lines.append("")
    lines.append(bold("P1:"))
    for issue in buckets.p1:
        lines.extend(_report_entry(issue, links))

    return TextItem(subject=subject, content="\n".join(lines))
