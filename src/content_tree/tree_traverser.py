"""Tree traverser for building filtered repository trees.

This module fetches git trees level by level and assembles them into a
TreeNode structure. Only files with an accepted extension are kept, and
subdirectories are kept (and descended into) only when recursion is
enabled. Sibling subtrees at a level are fetched concurrently.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, Tuple

from ..github_client.api_wrapper import APIWrapper
from .models import NodeKind, TreeNode

logger = logging.getLogger(__name__)

# Maximum parallel threads for sibling subtree fetches
MAX_WORKERS = 10


class TreeTraverser:
    """Builds TreeNode trees from git tree listings.

    Each call returns a newly constructed subtree; parents compose the
    subtrees returned for their directory children.

    Example:
        >>> traverser = TreeTraverser(api)
        >>> root = traverser.traverse("a1b2c3", extensions=(".md",), recursive=True)
        >>> print(f"Root has {len(root.children)} entries")
    """

    def __init__(self, api: APIWrapper, max_workers: int = MAX_WORKERS):
        """Initialize the traverser.

        Args:
            api: APIWrapper used to list trees
            max_workers: Maximum concurrent subtree fetches per level
        """
        self._api = api
        self._max_workers = max_workers

    def traverse(
        self,
        tree_sha: str,
        extensions: Iterable[str] = ('.md',),
        recursive: bool = False,
        name: str = ""
    ) -> TreeNode:
        """Fetch and assemble the tree rooted at tree_sha.

        Args:
            tree_sha: Sha of the tree to start from
            extensions: Accepted file extensions (e.g., ".md", ".mdx")
            recursive: Whether to keep and descend into subdirectories
            name: Name given to the returned node (root is synthetic and unnamed)

        Returns:
            TreeNode of kind directory with populated children

        Raises:
            Any error raised by the API wrapper, unmodified. A failure in any
            sibling fails the whole traversal.
        """
        accepted = tuple(extensions)
        listing = self._api.get_tree(tree_sha)

        children: Dict[str, TreeNode] = {}
        for entry in listing.get('tree', []):
            if self._is_wanted(entry, accepted, recursive):
                node = self._create_tree_node(entry)
                children[node.name] = node

        logger.debug(
            f"Tree {tree_sha}: kept {len(children)} of "
            f"{len(listing.get('tree', []))} entries"
        )

        directories = [child for child in children.values() if child.is_directory and child.id]
        if recursive and directories:
            subtrees = self._traverse_siblings(directories, accepted)
            for subtree in subtrees:
                children[subtree.name] = subtree

        return TreeNode(
            id=listing.get('sha', tree_sha),
            name=name,
            kind=NodeKind.DIRECTORY,
            url=listing.get('url', ''),
            children=children,
        )

    def _traverse_siblings(
        self,
        directories: list,
        extensions: Tuple[str, ...]
    ) -> list:
        """Traverse sibling directories concurrently.

        Every sibling is submitted before any result is awaited; the level
        completes only after all siblings have settled. Results keep the
        order of the input directories.
        """
        workers = min(self._max_workers, len(directories))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self.traverse, child.id, extensions, True, child.name)
                for child in directories
            ]
            # result() re-raises the first sibling failure in input order
            return [future.result() for future in futures]

    @staticmethod
    def _is_wanted(entry: Dict[str, Any], extensions: Tuple[str, ...], recursive: bool) -> bool:
        """Decide whether a tree entry is kept."""
        path = entry.get('path')
        if not path:
            return False

        kind = entry.get('type')
        if kind == NodeKind.FILE.value:
            return any(path.endswith(ext) for ext in extensions)
        if kind == NodeKind.DIRECTORY.value:
            return recursive
        # Submodules ('commit' entries) are never content
        return False

    @staticmethod
    def _create_tree_node(entry: Dict[str, Any]) -> TreeNode:
        """Create an untraversed TreeNode from a tree listing entry."""
        return TreeNode(
            id=entry.get('sha', ''),
            name=entry['path'],
            kind=NodeKind(entry['type']),
            byte_size=entry.get('size', 0) or 0,
            url=entry.get('url', ''),
        )
