"""Deduplication cache for issues published by the new-issue poll."""

import logging
from collections.abc import Iterable
from typing import Any

from ..jira_client.models import Issue

logger = logging.getLogger(__name__)


class IssueCache:
    """Maps issue keys to the last-seen Issue for the lifetime of the process.

    Entries are never evicted, so an issue is published at most once per
    process. The cache is not persisted; a restart starts with an empty cache.
    """

    def __init__(self) -> None:
        self._issues: dict[str, Issue] = {}

    def __len__(self) -> int:
        return len(self._issues)

    def __contains__(self, key: object) -> bool:
        return key in self._issues

    def get(self, key: str) -> Issue | None:
        """Get a cached issue by key."""
        return self._issues.get(key)

    def filter_new(self, raw_issues: Iterable[dict[str, Any]]) -> list[Issue]:
        """Register unseen issues and return them.

        Args:
            raw_issues: Raw Jira issue records in the order Jira returned them

        Returns:
            Issues whose keys were not cached before this call, in arrival order
        """
        new_issues = []
        for raw in raw_issues:
            if raw.get("key") in self._issues:
                continue

            issue = Issue.from_raw(raw)
            self._issues[issue.key] = issue
            new_issues.append(issue)

        logger.debug(
            f"{len(new_issues)} new issues, {len(self._issues)} issues cached in total"
        )
        return new_issues
