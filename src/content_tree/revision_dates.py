"""Derive creation and update dates of a file from its commit history.

The commits endpoint returns history most recent first. The newest commit
is always on the first page; the oldest one is on the last page, which the
Link header points to when history spans several pages. This needs at most
two requests regardless of history length.
"""

import logging
from typing import Any, Dict, List, Optional

from ..github_client.api_wrapper import APIWrapper, COMMITS_PER_PAGE
from .models import RevisionPair

logger = logging.getLogger(__name__)


class RevisionDateResolver:
    """Resolves RevisionPair values from paginated commit history."""

    def __init__(self, api: APIWrapper, per_page: int = COMMITS_PER_PAGE):
        self._api = api
        self._per_page = per_page

    def resolve(self, path: str) -> RevisionPair:
        """Return created/updated timestamps for the file at path.

        Args:
            path: Full repository path of the file

        Returns:
            RevisionPair; both fields are None when the path has no history
        """
        first_page = self._api.get_commits(path, page=1, per_page=self._per_page)
        commits: List[Dict[str, Any]] = first_page.get('commits') or []

        if not commits:
            logger.debug(f"No commit history for {path}")
            return RevisionPair()

        updated = _commit_date(commits[0])
        created = _commit_date(commits[-1])

        last_page = first_page.get('last_page')
        if last_page and last_page > 1:
            logger.debug(f"History of {path} spans {last_page} pages, fetching last page")
            last = self._api.get_commits(path, page=last_page, per_page=self._per_page)
            last_commits = last.get('commits') or []
            if last_commits:
                created = _commit_date(last_commits[-1])

        return RevisionPair(created=created, updated=updated)


def _commit_date(commit: Dict[str, Any]) -> Optional[str]:
    """Author date of a commit object, or None if absent."""
    author = (commit.get('commit') or {}).get('author') or {}
    return author.get('date')
