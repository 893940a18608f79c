"""In-process storage for issues already seen."""

from .cache import IssueCache

__all__ = ["IssueCache"]
