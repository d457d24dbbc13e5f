"""Main orchestration class for listing and enriching repository content.

This module provides the ContentRepository class which resolves a folder,
traverses its tree, flattens it into files and enriches each file with
frontmatter, commit dates, a table of contents and a reading time estimate.
"""

import logging
import posixpath
from concurrent.futures import ThreadPoolExecutor
from typing import Generic, Iterable, List, Optional, Type

from pydantic import BaseModel

from ..github_client.api_wrapper import APIWrapper
from ..github_client.auth import Authenticator
from .errors import UnexpectedResponseShapeError
from .frontmatter_handler import FrontmatterProcessor
from .helpers import decode_content, split_path
from .models import FM, ContentRecord, FileDescriptor, RepositoryConfig, RevisionPair
from .path_resolver import PathResolver
from .record_assembler import SORT_FIELDS, assemble_record, sort_records
from .revision_dates import RevisionDateResolver
from .toc_extractor import TableOfContentsExtractor
from .tree_flattener import flatten_tree
from .tree_traverser import TreeTraverser

logger = logging.getLogger(__name__)


class ContentRepository(Generic[FM]):
    """Read-only view of a GitHub repository folder as enriched documents.

    The ContentRepository uses:
    - PathResolver: To turn the source folder into a tree sha
    - TreeTraverser: To build the filtered tree below it
    - RevisionDateResolver: For created/updated dates from commit history
    - FrontmatterProcessor: For splitting and validating YAML frontmatter
    - TableOfContentsExtractor: For nested heading outlines

    Nothing is cached between calls; every call fetches fresh data.

    Example:
        >>> class PostMeta(BaseModel):
        ...     desc: str = ""
        >>> repo = ContentRepository(Authenticator(), RepositoryConfig(src_path="docs"), PostMeta)
        >>> for record in repo.list_items(recursive=True, include_content=False):
        ...     print(record.full_path, record.updated, record.frontmatter.desc)
    """

    def __init__(
        self,
        authenticator: Optional[Authenticator] = None,
        config: Optional[RepositoryConfig] = None,
        schema: Optional[Type[BaseModel]] = None,
        api: Optional[APIWrapper] = None
    ):
        """Initialize the repository view.

        Args:
            authenticator: Optional Authenticator instance. If not provided,
                          a new one will be created from the environment.
            config: Repository settings (defaults to RepositoryConfig())
            schema: Optional pydantic model every document's frontmatter must satisfy
            api: Optional preconfigured APIWrapper (built from authenticator otherwise)
        """
        self._config = config or RepositoryConfig()

        if api is None:
            api = APIWrapper(authenticator or Authenticator(), timeout=self._config.timeout)

        self._api = api
        self._resolver = PathResolver(api, default_ref=self._config.ref)
        self._traverser = TreeTraverser(api, max_workers=self._config.max_workers)
        self._dates = RevisionDateResolver(api)
        self._frontmatter = FrontmatterProcessor(schema)
        self._toc = TableOfContentsExtractor()

    @property
    def config(self) -> RepositoryConfig:
        return self._config

    def list_items(
        self,
        extensions: Optional[Iterable[str]] = None,
        path: Optional[str] = None,
        recursive: Optional[bool] = None,
        include_content: bool = True,
        ascending: bool = False,
        sort_by: str = 'created'
    ) -> List[ContentRecord[FM]]:
        """List enriched records for the files below a folder.

        Args:
            extensions: File extensions to include (defaults to the configured ones)
            path: Folder to start from (defaults to the configured src_path)
            recursive: Whether to descend into subdirectories (defaults to config)
            include_content: Whether records carry the document body
            ascending: Sort oldest first instead of newest first
            sort_by: 'created' or 'updated'

        Returns:
            Records sorted by the chosen date; records without that date come
            last when descending

        Raises:
            ValueError: If sort_by is not a date field
            PathNotFoundError: If the folder does not exist
            FrontmatterError: If a document's frontmatter cannot be parsed
            FrontmatterValidationError: If a document violates the schema
            GitHubError: Any API failure, unmodified
        """
        if sort_by not in SORT_FIELDS:
            raise ValueError(f"sort_by must be one of {SORT_FIELDS}, got '{sort_by}'")

        accepted = tuple(extensions) if extensions is not None else self._config.extensions
        folder = self._config.src_path if path is None else path
        descend = self._config.recursive if recursive is None else recursive

        logger.info(
            f"Listing {', '.join(accepted)} files under '{folder or '/'}' "
            f"(recursive={descend})"
        )

        tree_sha = self._resolver.resolve(folder)
        tree = self._traverser.traverse(tree_sha, accepted, descend)
        descriptors = flatten_tree(tree, folder)
        logger.info(f"Found {len(descriptors)} matching files")

        records = self._enrich_all(descriptors, include_content)
        return sort_records(records, sort_by=sort_by, ascending=ascending)

    def get_item_by_id(self, item_id: str) -> ContentRecord[FM]:
        """Fetch one record by blob sha, bypassing traversal.

        A blob carries no path, so path fields are empty and dates are None.

        Args:
            item_id: Blob sha

        Returns:
            Enriched record including the document body
        """
        blob = self._api.get_blob(item_id)
        text = decode_content(blob.get('content', ''), blob.get('encoding'))
        descriptor = FileDescriptor(
            full_path="",
            filename="",
            id=blob.get('sha') or item_id,
            byte_size=blob.get('size', 0) or 0,
            content_url=blob.get('url', ''),
        )
        return self._build_record(descriptor, text, True, self._frontmatter)

    def get_item_by_path(
        self,
        path: str,
        schema: Optional[Type[BaseModel]] = None
    ) -> ContentRecord[FM]:
        """Fetch one record by repository path through the contents endpoint.

        Args:
            path: Repository path of the file
            schema: Optional pydantic model overriding the repository schema

        Returns:
            Enriched record including the document body and commit dates

        Raises:
            UnexpectedResponseShapeError: If the path is a directory or the file
                                          has neither inline content nor a download URL
            ResourceNotFoundError: If the path does not exist
        """
        data = self._api.get_content(path)

        if isinstance(data, list):
            raise UnexpectedResponseShapeError(path, "path is a directory")

        if data.get('type', 'file') != 'file':
            raise UnexpectedResponseShapeError(path, f"expected a file, got '{data.get('type')}'")

        content = data.get('content')
        encoding = data.get('encoding')
        download_url = data.get('download_url')

        if content and encoding != 'none':
            text = decode_content(content, encoding)
        elif download_url:
            # Files above the inline size limit only carry a download URL
            logger.debug(f"Content of {path} not inlined, downloading")
            text = self._api.download(download_url)
        else:
            raise UnexpectedResponseShapeError(path, "file has neither content nor a download URL")

        resolved_path = data.get('path') or "/".join(split_path(path))
        descriptor = FileDescriptor(
            full_path=resolved_path,
            filename=data.get('name') or posixpath.basename(resolved_path),
            id=data.get('sha', ''),
            byte_size=data.get('size', 0) or 0,
            content_url=data.get('url', ''),
        )

        processor = FrontmatterProcessor(schema) if schema is not None else self._frontmatter
        return self._build_record(descriptor, text, True, processor)

    def get_raw_content(self, item_id: str) -> str:
        """Return the decoded text of a blob without enrichment.

        Args:
            item_id: Blob sha

        Returns:
            Full document text, frontmatter included
        """
        blob = self._api.get_blob(item_id)
        return decode_content(blob.get('content', ''), blob.get('encoding'))

    def _enrich_all(
        self,
        descriptors: List[FileDescriptor],
        include_content: bool
    ) -> List[ContentRecord[FM]]:
        """Enrich every descriptor concurrently, keeping input order.

        The first failure aborts the whole listing.
        """
        if not descriptors:
            return []

        workers = min(self._config.max_workers, len(descriptors))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._enrich, descriptor, include_content)
                for descriptor in descriptors
            ]
            return [future.result() for future in futures]

    def _enrich(self, descriptor: FileDescriptor, include_content: bool) -> ContentRecord[FM]:
        logger.debug(f"Enriching {descriptor.full_path} ({descriptor.id})")
        blob = self._api.get_blob(descriptor.id)
        text = decode_content(blob.get('content', ''), blob.get('encoding'))
        return self._build_record(descriptor, text, include_content, self._frontmatter)

    def _build_record(
        self,
        descriptor: FileDescriptor,
        text: str,
        include_content: bool,
        processor: FrontmatterProcessor
    ) -> ContentRecord[FM]:
        """Derive frontmatter, dates and ToC for one document and assemble its record."""
        source = descriptor.full_path or descriptor.id
        frontmatter = processor.process(text, source=source)

        if descriptor.full_path:
            revisions = self._dates.resolve(descriptor.full_path)
        else:
            revisions = RevisionPair()

        toc = self._toc.extract(frontmatter.body)
        return assemble_record(descriptor, frontmatter, revisions, toc, include_content)
