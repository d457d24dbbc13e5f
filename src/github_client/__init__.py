"""GitHub client library for reading repository content.

This package provides Python abstractions over the GitHub REST API git
database and contents endpoints, enabling clean and typed read access
to trees, blobs and commit history.
"""

from .api_wrapper import APIWrapper
from .auth import Authenticator, Credentials
from .errors import (
    GitCMSError,
    GitHubError,
    InvalidCredentialsError,
    ResourceNotFoundError,
    APIUnreachableError,
    APIAccessError,
)

__all__ = [
    "APIWrapper",
    "Authenticator",
    "Credentials",
    "GitCMSError",
    "GitHubError",
    "InvalidCredentialsError",
    "ResourceNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
]
