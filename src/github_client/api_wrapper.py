"""API wrapper for the GitHub REST API (git database and contents endpoints).

This module wraps a requests session configured for the GitHub REST API and
provides error translation from HTTP exceptions to our typed exception
hierarchy. Only the read-only endpoints needed to list repository content
are exposed.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Union
from urllib.parse import parse_qs, quote, urlparse

import requests
from requests.exceptions import ConnectionError, ConnectTimeout, ReadTimeout, Timeout

from .auth import Authenticator
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

# Page size used for commit history requests
COMMITS_PER_PAGE = 100


class APIWrapper:
    """Wrapper around a requests session for the GitHub REST API.

    This class provides a thin wrapper over the GitHub API that:
    1. Handles authentication using the Authenticator
    2. Translates HTTP errors to typed exceptions
    3. Parses pagination metadata from the Link header
    4. Provides a clean interface for the read operations the core needs

    Example:
        >>> auth = Authenticator()
        >>> api = APIWrapper(auth)
        >>> tree = api.get_tree("main")
    """

    def __init__(self, authenticator: Authenticator, timeout: int = 30, api_url: str = API_URL):
        """Initialize the API wrapper with authentication credentials.

        Args:
            authenticator: Authenticator instance for loading credentials
            timeout: Request timeout in seconds
            api_url: Base URL of the GitHub REST API
        """
        self._authenticator = authenticator
        self._timeout = timeout
        self._api_url = api_url.rstrip('/')
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session.

        This method lazily initializes the session on first use and
        validates credentials.

        Returns:
            requests.Session with GitHub headers applied

        Raises:
            InvalidCredentialsError: If credentials are missing
        """
        if self._session is None:
            creds = self._authenticator.get_credentials()
            session = requests.Session()
            session.headers.update({
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {creds.token}",
                "X-GitHub-Api-Version": API_VERSION,
            })
            self._session = session
        return self._session

    def _repo_url(self, suffix: str) -> str:
        """Build an endpoint URL under /repos/{owner}/{repo}."""
        creds = self._authenticator.get_credentials()
        return f"{self._api_url}/repos/{creds.owner}/{creds.repo}/{suffix}"

    def _validate_ref(self, value: str, kind: str) -> None:
        """Validate a sha or ref before it is interpolated into a URL.

        Args:
            value: The sha or ref to validate
            kind: Name of the value for error messages

        Raises:
            ValueError: If the value is empty or contains unsafe characters
        """
        if not value or not str(value).strip():
            raise ValueError(f"{kind} cannot be empty")

        if re.search(r'\s', value) or '..' in value:
            raise ValueError(
                f"Invalid {kind} format: '{value}'. "
                f"Refs must not contain whitespace or '..'."
            )

    def _sanitize_credentials(self, text: str) -> str:
        """Sanitize error messages to prevent credential leakage.

        Args:
            text: The error message or log text to sanitize

        Returns:
            str: Sanitized text with credentials masked

        Example:
            >>> api._sanitize_credentials("Bearer ghp_abc123xyz987 rejected")
            'Bearer ***REDACTED*** rejected'
        """
        if not text:
            return text

        sanitized = text

        # Mask passwords in URLs (user:pass@host)
        sanitized = re.sub(r'://([\w.-]+):([\w.-]+)@', r'://***:***@', sanitized)

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )

        sanitized = re.sub(
            r'(Bearer|token)\s+[^\s\n\r]+',
            r'\1 ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )

        # Raw download URLs carry a token query parameter for private repositories
        sanitized = re.sub(
            r'([?&]token=)[^&\s]+',
            r'\1***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )

        # GitHub token formats (ghp_, gho_, ghs_, github_pat_)
        sanitized = re.sub(
            r'\b(gh[pousr]_[A-Za-z0-9]{8,}|github_pat_[A-Za-z0-9_]{8,})\b',
            '***REDACTED***',
            sanitized
        )

        return sanitized

    def _translate_error(self, exception: Exception, operation: str) -> Exception:
        """Translate HTTP exceptions to typed GitHub exceptions.

        Args:
            exception: The original exception from requests
            operation: Description of the operation that failed (for logging)

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, (Timeout, ConnectTimeout, ReadTimeout, ConnectionError)):
            return APIUnreachableError(endpoint=self._api_url)

        response = getattr(exception, 'response', None)
        status_code = getattr(response, 'status_code', None)

        if status_code == 401:
            creds = self._authenticator.get_credentials()
            return InvalidCredentialsError(owner=creds.owner, repo=creds.repo)

        if status_code == 404:
            # Extract the resource from the operation string (e.g., "get_blob(abc123)")
            resource = "unknown"
            match = re.search(r'\(([^)]+)\)', operation)
            if match:
                resource = match.group(1)
            return ResourceNotFoundError(resource=resource)

        if status_code == 403 and response is not None:
            remaining = response.headers.get('X-RateLimit-Remaining')
            if remaining == '0':
                logger.error(f"API rate limit exhausted during {operation}")
                return APIAccessError(
                    f"GitHub API rate limit exceeded during {operation}",
                    status_code=status_code,
                )

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        return APIAccessError(
            f"GitHub API failure during {operation}",
            status_code=status_code,
        )

    def _get(
        self,
        url: str,
        operation: str,
        params: Optional[Dict[str, Any]] = None
    ) -> requests.Response:
        """Perform a GET request and translate any failure.

        Args:
            url: Absolute URL to fetch
            operation: Operation description used in errors and logs
            params: Optional query parameters

        Returns:
            The successful response

        Raises:
            InvalidCredentialsError: If credentials are invalid
            ResourceNotFoundError: If the resource doesn't exist
            APIUnreachableError: If API is unreachable
            APIAccessError: For any other failure
        """
        session = self._get_session()
        logger.debug(f"GitHub API: GET {url} params={params}")
        try:
            response = session.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
            return response
        except Exception as e:
            raise self._translate_error(e, operation) from e

    def get_tree(self, tree_sha: str) -> Dict[str, Any]:
        """Fetch one level of a git tree (no recursion).

        Args:
            tree_sha: Tree sha, or a branch/tag name resolving to a tree

        Returns:
            Dict with 'sha', 'url' and 'tree' (entries with path, sha, type, size, url)

        Raises:
            ResourceNotFoundError: If the tree doesn't exist
            APIUnreachableError: If API is unreachable
            APIAccessError: If API access fails
        """
        self._validate_ref(tree_sha, "tree_sha")
        url = self._repo_url(f"git/trees/{quote(tree_sha, safe='')}")
        return self._get(url, f"get_tree({tree_sha})").json()

    def get_blob(self, blob_sha: str) -> Dict[str, Any]:
        """Fetch a blob by sha.

        Args:
            blob_sha: Blob sha

        Returns:
            Dict with 'content', 'encoding', 'size', 'sha' and 'url'

        Raises:
            ResourceNotFoundError: If the blob doesn't exist
            APIUnreachableError: If API is unreachable
            APIAccessError: If API access fails
        """
        self._validate_ref(blob_sha, "blob_sha")
        url = self._repo_url(f"git/blobs/{quote(blob_sha, safe='')}")
        return self._get(url, f"get_blob({blob_sha})").json()

    def get_commits(
        self,
        path: str,
        page: int = 1,
        per_page: int = COMMITS_PER_PAGE
    ) -> Dict[str, Any]:
        """Fetch one page of commits touching a path, most recent first.

        Args:
            path: Repository path of the file
            page: 1-based page number
            per_page: Page size (GitHub allows at most 100)

        Returns:
            Dict containing:
            - commits: List of commit objects for this page
            - last_page: Page number of the last page, or None when the
              response carries no 'last' pagination link

        Raises:
            APIUnreachableError: If API is unreachable
            APIAccessError: If API access fails
        """
        url = self._repo_url("commits")
        response = self._get(
            url,
            f"get_commits({path}, page={page})",
            params={"path": path, "page": page, "per_page": per_page},
        )
        return {
            "commits": response.json(),
            "last_page": self._parse_last_page(response),
        }

    def get_content(self, path: str) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """Fetch a file or directory through the contents endpoint.

        Args:
            path: Repository path

        Returns:
            Dict for a file (content, encoding, download_url, sha, size, path, url)
            or a list of entries when the path is a directory

        Raises:
            ResourceNotFoundError: If the path doesn't exist
            APIUnreachableError: If API is unreachable
            APIAccessError: If API access fails
        """
        clean_path = path.strip('/')
        url = self._repo_url(f"contents/{quote(clean_path)}")
        return self._get(url, f"get_content({clean_path})").json()

    def download(self, url: str) -> str:
        """Fetch a raw download URL as text.

        Args:
            url: Download URL returned by the contents endpoint

        Returns:
            Response body decoded as text

        Raises:
            ResourceNotFoundError: If the URL returns 404
            APIUnreachableError: If the host is unreachable
            APIAccessError: If the download fails
        """
        response = self._get(url, f"download({urlparse(url).path})")
        response.encoding = response.encoding or 'utf-8'
        return response.text

    @staticmethod
    def _parse_last_page(response: requests.Response) -> Optional[int]:
        """Extract the page number of the 'last' Link relation, if any."""
        last = response.links.get('last')
        if not last or not last.get('url'):
            return None

        query = parse_qs(urlparse(last['url']).query)
        values = query.get('page')
        if not values:
            return None
        try:
            return int(values[0])
        except ValueError:
            logger.warning(f"Unparseable last page in Link header: {last['url']}")
            return None
