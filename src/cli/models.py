"""Data models for CLI operations.

This module defines all data models used by the CLI module.
All models use dataclasses for clean, type-safe data structures,
following the patterns established in src/content_tree/models.py.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    These exit codes provide meaningful feedback about the operation result:
    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, bad options)
    - NOT_FOUND (2): Path, blob or file does not exist
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues
    - VALIDATION_ERROR (5): Frontmatter could not be parsed or violates the schema

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    NOT_FOUND = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    VALIDATION_ERROR = 5


@dataclass
class CLIContext:
    """Options shared by every command, set by the app callback.

    Attributes:
        config_path: Path to the YAML repository configuration (None to use defaults)
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files
        no_color: Whether colored output is disabled
    """
    config_path: Optional[str] = None
    verbosity: int = 0
    logdir: Optional[str] = None
    no_color: bool = False
