"""Test fixtures for the content tree and GitHub client tests.

This module provides canned GitHub API responses for a small documentation
repository and a builder for a mock APIWrapper serving them.
"""

from .github_responses import (
    BLOBS,
    COMMITS,
    FIRST_POST_TEXT,
    INSTALL_TEXT,
    README_TEXT,
    TREES,
    blob,
    commit,
    create_mock_api,
    tree_entry,
)

__all__ = [
    'BLOBS',
    'COMMITS',
    'FIRST_POST_TEXT',
    'INSTALL_TEXT',
    'README_TEXT',
    'TREES',
    'blob',
    'commit',
    'create_mock_api',
    'tree_entry',
]
