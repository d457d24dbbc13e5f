"""Flatten a TreeNode tree into an ordered list of file descriptors."""

from typing import List

from .helpers import join_path, split_path
from .models import FileDescriptor, TreeNode


def flatten_tree(tree: TreeNode, path_prefix: str = "") -> List[FileDescriptor]:
    """Convert a tree into one FileDescriptor per file leaf.

    Leaves are appended in traversal order (children dict insertion order,
    depth first). Directories that were never traversed contribute nothing.

    Args:
        tree: Root of the tree (its own name is not part of the paths)
        path_prefix: Repository path of the root, e.g. "docs/guides"

    Returns:
        Ordered list of descriptors with unique full paths
    """
    prefix = "/".join(split_path(path_prefix))
    descriptors: List[FileDescriptor] = []
    _collect(tree, prefix, descriptors)
    return descriptors


def _collect(node: TreeNode, prefix: str, descriptors: List[FileDescriptor]) -> None:
    for child in (node.children or {}).values():
        full_path = join_path(prefix, child.name)
        if child.is_directory:
            _collect(child, full_path, descriptors)
        else:
            descriptors.append(FileDescriptor(
                full_path=full_path,
                filename=child.name,
                id=child.id,
                byte_size=child.byte_size,
                content_url=child.url,
            ))
