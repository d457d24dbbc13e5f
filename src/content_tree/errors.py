"""Typed exception hierarchy for content tree errors.

This module defines all custom exceptions raised by the content pipeline.
All exceptions inherit from ContentTreeError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import List, Optional

from src.github_client.errors import GitCMSError

from .models import FieldViolation


class ContentTreeError(GitCMSError):
    """Base exception for all content tree errors."""
    pass


class PathNotFoundError(ContentTreeError):
    """Raised when a path segment does not resolve to a directory."""

    def __init__(self, path: str, segment: str):
        super().__init__(
            f"Path '{path}' not found: no directory named '{segment}'"
        )
        self.path = path
        self.segment = segment


class UnexpectedResponseShapeError(ContentTreeError):
    """Raised when a single-file fetch returns something other than a readable file."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Unexpected response for {path}: {reason}")
        self.path = path
        self.reason = reason


class ContentDecodingError(ContentTreeError):
    """Raised when blob content uses an unsupported transport encoding."""

    def __init__(self, encoding: Optional[str], reason: Optional[str] = None):
        message = f"Cannot decode content with encoding '{encoding}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.encoding = encoding
        self.reason = reason


class ConfigError(ContentTreeError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class FilesystemError(ContentTreeError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class FrontmatterError(ContentTreeError):
    """Raised when YAML frontmatter parsing fails."""

    def __init__(self, source: str, message: str):
        super().__init__(
            f"Frontmatter error in {source}: {message}"
        )
        self.source = source
        self.message = message


class FrontmatterValidationError(FrontmatterError):
    """Raised when frontmatter does not satisfy the caller's schema.

    Carries every violation found, not just the first one.
    """

    def __init__(self, source: str, violations: List[FieldViolation]):
        summary = "; ".join(
            f"{v.location or '<root>'}: {v.message}" for v in violations
        )
        super().__init__(
            source,
            f"{len(violations)} schema violation(s): {summary}"
        )
        self.violations = violations
