"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI.
All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from src.github_client.errors import GitCMSError


class CLIError(GitCMSError):
    """Base exception for all CLI-related errors."""
    pass


class SchemaImportError(CLIError):
    """Raised when a --schema reference cannot be imported."""

    def __init__(self, reference: str, reason: str):
        super().__init__(
            f"Cannot load schema '{reference}': {reason}"
        )
        self.reference = reference
        self.reason = reason
