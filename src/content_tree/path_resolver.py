"""Resolve repository paths to git tree shas.

The git trees API has no direct path to sha lookup, so a path is resolved
one segment at a time by listing each parent tree.
"""

import logging

from ..github_client.api_wrapper import APIWrapper
from .errors import PathNotFoundError
from .helpers import split_path
from .models import NodeKind

logger = logging.getLogger(__name__)


class PathResolver:
    """Walks a slash-delimited path down the repository tree.

    Example:
        >>> resolver = PathResolver(api)
        >>> sha = resolver.resolve("docs/guides")
    """

    def __init__(self, api: APIWrapper, default_ref: str = "main"):
        """Initialize the resolver.

        Args:
            api: APIWrapper used to list trees
            default_ref: Tree-ish the walk starts from when no start sha is given
        """
        self._api = api
        self._default_ref = default_ref

    def resolve(self, path: str, start_sha: str = "") -> str:
        """Return the tree sha for path.

        Each step depends on the previous one, so segments are resolved
        sequentially with one request per segment.

        Args:
            path: Slash-delimited directory path ('' or '/' for the start tree)
            start_sha: Tree sha or ref to start from (defaults to the configured ref)

        Returns:
            Tree sha of the directory at path

        Raises:
            PathNotFoundError: If a segment is not a directory at its level
        """
        sha = start_sha or self._default_ref

        for segment in split_path(path):
            listing = self._api.get_tree(sha)
            directories = [
                entry for entry in listing.get('tree', [])
                if entry.get('type') == NodeKind.DIRECTORY.value
            ]
            match = next(
                (entry for entry in directories if entry.get('path') == segment),
                None
            )
            if match is None or not match.get('sha'):
                logger.debug(f"Segment '{segment}' of '{path}' not found under {sha}")
                raise PathNotFoundError(path=path, segment=segment)

            sha = match['sha']
            logger.debug(f"Resolved segment '{segment}' to tree {sha}")

        return sha
