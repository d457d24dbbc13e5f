"""Authentication module for loading GitHub credentials.

This module handles loading GitHub credentials from environment variables
using python-dotenv. It validates that all required credentials are present and
raises appropriate errors if any are missing.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """GitHub API credentials and repository coordinates."""
    token: str
    owner: str
    repo: str


class Authenticator:
    """Loads and validates GitHub credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged to prevent security risks. Values passed to the
    constructor take precedence over the environment.

    Required environment variables:
        GITHUB_TOKEN: Personal access token with read access to the repository
        GITHUB_OWNER: Owner (user or organisation) of the repository
        GITHUB_REPO: Repository name

    Raises:
        InvalidCredentialsError: If any required credential is missing

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Reading from {creds.owner}/{creds.repo}")
    """

    def __init__(
        self,
        token: Optional[str] = None,
        owner: Optional[str] = None,
        repo: Optional[str] = None,
    ):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            token: Optional explicit API token
            owner: Optional explicit repository owner
            repo: Optional explicit repository name
        """
        load_dotenv()
        self._token = token
        self._owner = owner
        self._repo = repo

    def get_credentials(self) -> Credentials:
        """Get GitHub credentials from constructor arguments or environment.

        Returns:
            Credentials: A named tuple containing token, owner and repo

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        token = self._token or os.getenv('GITHUB_TOKEN')
        owner = self._owner or os.getenv('GITHUB_OWNER')
        repo = self._repo or os.getenv('GITHUB_REPO')

        missing = []
        if not token:
            missing.append('GITHUB_TOKEN')
        if not owner:
            missing.append('GITHUB_OWNER')
        if not repo:
            missing.append('GITHUB_REPO')

        if missing:
            raise InvalidCredentialsError(
                owner=owner if owner else "unknown",
                repo=repo if repo else "unknown",
                missing=missing,
            )

        # Type checker: these are guaranteed to be str due to validation above
        return Credentials(token=token, owner=owner, repo=repo)  # type: ignore[arg-type]
