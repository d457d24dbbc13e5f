"""Typed exception hierarchy for GitHub-related errors.

This module defines all custom exceptions used by the GitHub client library.
All exceptions inherit from GitHubError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class GitCMSError(Exception):
    """Base exception for all gitcms errors.

    Use this to catch any application-level error from the content tool.
    """
    pass


class GitHubError(GitCMSError):
    """Base exception for all GitHub API errors."""
    pass


class InvalidCredentialsError(GitHubError):
    """Raised when API credentials are missing, invalid or rejected."""

    def __init__(self, owner: str, repo: str, missing: Optional[list] = None):
        if missing:
            message = (
                f"Missing GitHub credentials ({', '.join(missing)}) "
                f"for repository {owner}/{repo}"
            )
        else:
            message = f"GitHub token is invalid (repository: {owner}/{repo})"
        super().__init__(message)
        self.owner = owner
        self.repo = repo
        self.missing = missing or []


class ResourceNotFoundError(GitHubError):
    """Raised when a requested tree, blob or path does not exist."""

    def __init__(self, resource: str):
        super().__init__(f"Resource {resource} not found")
        self.resource = resource


class APIUnreachableError(GitHubError):
    """Raised when the GitHub API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(GitHubError):
    """Raised when API access fails due to access restrictions or server errors."""

    def __init__(self, message: str = "GitHub API failure", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
