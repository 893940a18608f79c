"""Message formatting and publishing."""

from .formatters import IssueLinks, build_issue_item, build_report_item
from .publisher import Publisher

__all__ = ["IssueLinks", "Publisher", "build_issue_item", "build_report_item"]
