"""Command-line interface for browsing repository content.

This package provides the `gitcms` CLI tool that lists, shows and prints
markdown documents stored in a GitHub repository, with rich terminal output
and JSON output for scripting.
"""

from .models import ExitCode, CLIContext
from .errors import CLIError, SchemaImportError
from .output import OutputHandler

__all__ = [
    'ExitCode',
    'CLIContext',
    'CLIError',
    'SchemaImportError',
    'OutputHandler',
]
