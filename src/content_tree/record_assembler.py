"""Assemble enriched ContentRecord values and order them by date."""

from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence, Tuple

from .helpers import calc_reading_time, path_parts
from .models import ContentRecord, FileDescriptor, FrontmatterResult, RevisionPair, TocEntry

SORT_FIELDS = ('created', 'updated')


def assemble_record(
    descriptor: FileDescriptor,
    frontmatter: FrontmatterResult,
    revisions: RevisionPair,
    toc: List[TocEntry],
    include_content: bool = True
) -> ContentRecord:
    """Merge the values derived for one file into a ContentRecord.

    Args:
        descriptor: Flattened file descriptor (empty full_path for id-only fetches)
        frontmatter: Split and validated frontmatter
        revisions: Creation and update dates
        toc: Table of contents of the body
        include_content: Whether to keep the body on the record

    Returns:
        ContentRecord whose frontmatter is the validated schema instance when
        one exists, otherwise the raw metadata dict
    """
    payload: Any = frontmatter.validated if frontmatter.validated is not None else frontmatter.metadata

    return ContentRecord(
        path=path_parts(descriptor.full_path),
        full_path=descriptor.full_path,
        filename=descriptor.filename,
        id=descriptor.id,
        byte_size=descriptor.byte_size,
        url=descriptor.content_url,
        title=(toc[0].title or None) if toc else None,
        reading_time=calc_reading_time(descriptor.byte_size),
        created=revisions.created,
        updated=revisions.updated,
        frontmatter=payload,
        toc=toc,
        content=frontmatter.body if include_content else None,
    )


def parse_timestamp(value: Optional[str]) -> Optional[float]:
    """Parse an ISO 8601 timestamp into POSIX seconds.

    A trailing 'Z' is accepted. Naive values are treated as UTC.
    Returns None for a missing or empty value.

    Raises:
        ValueError: If the value is not ISO 8601
    """
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def _sort_key(record: ContentRecord, sort_by: str) -> Tuple[int, float]:
    timestamp = parse_timestamp(getattr(record, sort_by))
    if timestamp is None:
        # Missing dates compare as infinitely old
        return (0, 0.0)
    return (1, timestamp)


def sort_records(
    records: Sequence[ContentRecord],
    sort_by: str = 'created',
    ascending: bool = False
) -> List[ContentRecord]:
    """Return records ordered by a date field.

    The sort is stable: records with equal keys keep their input order in
    both directions. Records without a date come last when descending and
    first when ascending.

    Raises:
        ValueError: If sort_by is not 'created' or 'updated'
    """
    if sort_by not in SORT_FIELDS:
        raise ValueError(f"sort_by must be one of {SORT_FIELDS}, got '{sort_by}'")

    return sorted(records, key=lambda record: _sort_key(record, sort_by), reverse=not ascending)
