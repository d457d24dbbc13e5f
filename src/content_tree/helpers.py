"""Small pure helpers shared by the content pipeline."""

import base64
import binascii
import math
import posixpath
from typing import List, Optional

from .errors import ContentDecodingError
from .models import PathParts

AVERAGE_WORD_LENGTH = 5
AVERAGE_WORDS_PER_MINUTE = 200


def split_path(path: str) -> List[str]:
    """Split a slash-delimited path into its non-empty segments.

    >>> split_path('/docs//guides/')
    ['docs', 'guides']
    """
    return [segment for segment in path.split('/') if segment]


def join_path(prefix: str, name: str) -> str:
    """Join a normalized prefix and an entry name with '/'."""
    return f"{prefix}/{name}" if prefix else name


def path_parts(full_path: str) -> PathParts:
    """Split a full path into directory, base name and extension."""
    directory, filename = posixpath.split(full_path)
    name, ext = posixpath.splitext(filename)
    return PathParts(dir=directory, name=name, ext=ext)


def calc_reading_time(byte_size: int) -> int:
    """Estimated reading time in minutes for a document of byte_size bytes."""
    return math.ceil(byte_size / AVERAGE_WORD_LENGTH / AVERAGE_WORDS_PER_MINUTE)


def decode_content(content: str, encoding: Optional[str]) -> str:
    """Decode blob content from its transport encoding into text.

    Args:
        content: Encoded content as returned by the API
        encoding: 'base64' or 'utf-8' (None is treated as 'utf-8')

    Returns:
        Decoded UTF-8 text

    Raises:
        ContentDecodingError: If the encoding is unsupported or the payload is invalid
    """
    normalized = (encoding or 'utf-8').lower()

    if normalized in ('utf-8', 'utf8'):
        return content

    if normalized != 'base64':
        raise ContentDecodingError(encoding)

    try:
        raw = base64.b64decode(content or '')
        return raw.decode('utf-8')
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ContentDecodingError(encoding, str(e)) from e
