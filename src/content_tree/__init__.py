"""Content tree library for listing repository documents.

This package turns a folder of a GitHub repository into a list of enriched
document records: frontmatter, created/updated dates from commit history,
a table of contents and an estimated reading time.
"""

from .content_repository import ContentRepository
from .config_loader import ConfigLoader
from .models import (
    ContentRecord,
    FieldViolation,
    FileDescriptor,
    FrontmatterResult,
    NodeKind,
    PathParts,
    RepositoryConfig,
    RevisionPair,
    TocEntry,
    TreeNode,
)
from .errors import (
    ContentTreeError,
    PathNotFoundError,
    UnexpectedResponseShapeError,
    ContentDecodingError,
    ConfigError,
    FilesystemError,
    FrontmatterError,
    FrontmatterValidationError,
)
from .frontmatter_handler import FrontmatterProcessor
from .path_resolver import PathResolver
from .record_assembler import assemble_record, sort_records
from .revision_dates import RevisionDateResolver
from .toc_extractor import TableOfContentsExtractor
from .tree_flattener import flatten_tree
from .tree_traverser import TreeTraverser

__all__ = [
    'ContentRepository',
    'ConfigLoader',
    'ContentRecord',
    'FieldViolation',
    'FileDescriptor',
    'FrontmatterResult',
    'NodeKind',
    'PathParts',
    'RepositoryConfig',
    'RevisionPair',
    'TocEntry',
    'TreeNode',
    'ContentTreeError',
    'PathNotFoundError',
    'UnexpectedResponseShapeError',
    'ContentDecodingError',
    'ConfigError',
    'FilesystemError',
    'FrontmatterError',
    'FrontmatterValidationError',
    'FrontmatterProcessor',
    'PathResolver',
    'assemble_record',
    'sort_records',
    'RevisionDateResolver',
    'TableOfContentsExtractor',
    'flatten_tree',
    'TreeTraverser',
]
