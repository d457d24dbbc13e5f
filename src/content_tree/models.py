"""Data models for the content tree pipeline.

This module defines all data models used by the content tree library.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import TypeAdapter

FM = TypeVar('FM')

# Converts YAML scalars such as dates into JSON-compatible values
_JSON_VALUES = TypeAdapter(Any)


class NodeKind(str, Enum):
    """Kind of a tree entry, using GitHub's git object type names."""
    FILE = "blob"
    DIRECTORY = "tree"


@dataclass
class TreeNode:
    """Represents a node in the repository tree.

    The root node is synthetic (empty name). Child names are unique within
    a node because children are keyed by name.

    Attributes:
        id: Git sha of the blob or tree
        name: Entry name within its parent (no slashes)
        kind: File or directory
        byte_size: Blob size in bytes (0 for directories)
        url: API URL of the object
        children: Child nodes keyed by name; None unless this is a
                  directory that has been traversed
    """
    id: str
    name: str
    kind: NodeKind
    byte_size: int = 0
    url: str = ""
    children: Optional[Dict[str, 'TreeNode']] = None

    @property
    def is_directory(self) -> bool:
        return self.kind == NodeKind.DIRECTORY


@dataclass
class FileDescriptor:
    """One matched leaf file produced by flattening a tree.

    Attributes:
        full_path: Slash-joined path prefix, ancestor names and file name
        filename: File name (last path segment)
        id: Blob sha
        byte_size: Blob size in bytes
        content_url: API URL of the blob
    """
    full_path: str
    filename: str
    id: str
    byte_size: int
    content_url: str = ""


@dataclass
class RevisionPair:
    """Creation and last update timestamps of a file.

    Attributes:
        created: ISO 8601 author date of the oldest commit touching the path
        updated: ISO 8601 author date of the newest commit touching the path
    """
    created: Optional[str] = None
    updated: Optional[str] = None


@dataclass
class FrontmatterResult:
    """Frontmatter split from a document.

    Attributes:
        metadata: Parsed YAML mapping ({} when the document has no block)
        body: Document text after the block, byte-for-byte
        validated: Schema instance built from metadata (None without a schema)
    """
    metadata: Dict[str, Any] = field(default_factory=dict)
    body: str = ""
    validated: Any = None


@dataclass
class FieldViolation:
    """A single schema violation found in frontmatter.

    Attributes:
        location: Dotted path of the offending field ('' for the whole mapping)
        message: Human readable description
        error_type: Machine readable error code from the validator
    """
    location: str
    message: str
    error_type: str = ""


@dataclass
class TocEntry:
    """A table of contents entry.

    Attributes:
        title: Heading text
        anchor: Link target for the heading (e.g., '#getting-started')
        children: Nested entries in document order
    """
    title: str
    anchor: str
    children: List['TocEntry'] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "anchor": self.anchor,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class PathParts:
    """Posix split of a full path.

    Attributes:
        dir: Directory part ('' for files at the repository root)
        name: Base name without extension
        ext: Extension including the dot ('' if none)
    """
    dir: str = ""
    name: str = ""
    ext: str = ""


@dataclass
class ContentRecord(Generic[FM]):
    """Final enriched record for one document.

    Attributes:
        path: Directory, base name and extension of full_path
        full_path: Repository path of the file ('' when fetched by id only)
        filename: File name ('' when fetched by id only)
        id: Blob sha
        byte_size: Blob size in bytes
        url: API URL of the blob
        title: Title of the first top-level ToC entry, or None
        reading_time: Estimated reading time in minutes
        created: ISO 8601 creation timestamp, or None
        updated: ISO 8601 last update timestamp, or None
        frontmatter: Validated schema instance, or the raw metadata dict
        toc: Table of contents
        content: Document body without frontmatter (None when not requested)
    """
    path: PathParts
    full_path: str
    filename: str
    id: str
    byte_size: int
    url: str
    title: Optional[str]
    reading_time: int
    created: Optional[str]
    updated: Optional[str]
    frontmatter: FM
    toc: List[TocEntry] = field(default_factory=list)
    content: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render a JSON-ready mapping; 'content' is omitted when not loaded."""
        frontmatter: Any = self.frontmatter
        if hasattr(frontmatter, 'model_dump'):
            frontmatter = frontmatter.model_dump(mode='json')
        else:
            frontmatter = _JSON_VALUES.dump_python(frontmatter, mode='json')

        data: Dict[str, Any] = {
            "title": self.title,
            "reading_time": self.reading_time,
            "created": self.created,
            "updated": self.updated,
            "path": {"dir": self.path.dir, "name": self.path.name, "ext": self.path.ext},
            "full_path": self.full_path,
            "filename": self.filename,
            "id": self.id,
            "byte_size": self.byte_size,
            "url": self.url,
            "frontmatter": frontmatter,
            "toc": [entry.to_dict() for entry in self.toc],
        }
        if self.content is not None:
            data["content"] = self.content
        return data


@dataclass
class RepositoryConfig:
    """Settings for reading content from one repository.

    Attributes:
        src_path: Folder to start sourcing content from ('' for the repository root)
        ref: Branch, tag or tree sha the path is resolved against
        extensions: File extensions included in listings
        recursive: Whether listings descend into subdirectories by default
        max_workers: Maximum concurrent requests per worker pool
        timeout: HTTP request timeout in seconds
    """
    src_path: str = ""
    ref: str = "main"
    extensions: Tuple[str, ...] = ('.md',)
    recursive: bool = False
    max_workers: int = 10
    timeout: int = 30
