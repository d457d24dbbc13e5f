"""YAML frontmatter splitting and schema validation for markdown documents.

This module separates a leading YAML frontmatter block from the document
body and, when the caller supplies a schema, validates the parsed metadata
against it. The schema is a pydantic model class; all violations are
collected before failing.

Frontmatter format:
    ---
    title: Getting Started
    tags: [intro]
    ---
    # Body starts here
"""

import re
from typing import Any, Dict, List, Optional, Tuple, Type

import yaml
from pydantic import BaseModel, ValidationError

from .errors import FrontmatterError, FrontmatterValidationError
from .models import FieldViolation, FrontmatterResult


class FrontmatterProcessor:
    """Splits and validates YAML frontmatter.

    A processor holds only its (read-only) schema, so one instance can be
    shared by concurrent callers or a new one constructed per call.

    Example:
        >>> class PostMeta(BaseModel):
        ...     desc: str
        >>> result = FrontmatterProcessor(PostMeta).process(text, source="posts/a.md")
        >>> result.validated.desc
    """

    # Leading block between --- delimiter lines; the closing delimiter may end the file
    FRONTMATTER_PATTERN = re.compile(
        r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)',
        re.DOTALL | re.MULTILINE
    )

    def __init__(self, schema: Optional[Type[BaseModel]] = None):
        """Initialize the processor.

        Args:
            schema: Optional pydantic model class the metadata must satisfy
        """
        self.schema = schema

    @classmethod
    def split(cls, content: str, source: str = "<document>") -> Tuple[Dict[str, Any], str]:
        """Extract the frontmatter dict and body separately.

        Args:
            content: Full document text
            source: Name of the document for error messages

        Returns:
            Tuple of (metadata, body). Returns ({}, content) if no block is found.

        Raises:
            FrontmatterError: If the block is not valid YAML or not a mapping
        """
        match = cls.FRONTMATTER_PATTERN.match(content)
        if not match:
            return {}, content

        frontmatter_str = match.group(1)
        body = content[match.end():]

        try:
            metadata = yaml.safe_load(frontmatter_str)
        except yaml.YAMLError as e:
            raise FrontmatterError(source, f"Invalid YAML syntax: {str(e)}") from e

        if metadata is None:
            return {}, body

        if not isinstance(metadata, dict):
            raise FrontmatterError(
                source,
                f"Frontmatter must be a YAML dictionary, got {type(metadata).__name__}"
            )

        return metadata, body

    @classmethod
    def compose(cls, metadata: Dict[str, Any], body: str) -> str:
        """Reassemble a document from metadata and body.

        Returns the body unchanged when metadata is empty.
        """
        if not metadata:
            return body

        yaml_str = yaml.safe_dump(
            metadata,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )
        return f"---\n{yaml_str}---\n{body}"

    def validate(self, metadata: Dict[str, Any], source: str = "<document>") -> Optional[BaseModel]:
        """Validate metadata against the schema.

        Args:
            metadata: Parsed frontmatter mapping
            source: Name of the document for error messages

        Returns:
            Schema instance, or None when the processor has no schema

        Raises:
            FrontmatterValidationError: With every violation found
        """
        if self.schema is None:
            return None

        try:
            return self.schema.model_validate(metadata)
        except ValidationError as e:
            violations: List[FieldViolation] = [
                FieldViolation(
                    location=".".join(str(part) for part in error['loc']),
                    message=error['msg'],
                    error_type=error['type'],
                )
                for error in e.errors()
            ]
            raise FrontmatterValidationError(source, violations) from e

    def process(self, content: str, source: str = "<document>") -> FrontmatterResult:
        """Split content and validate its metadata.

        Args:
            content: Full document text
            source: Name of the document for error messages

        Returns:
            FrontmatterResult with metadata, body and, when a schema is set,
            the validated instance

        Raises:
            FrontmatterError: If the block cannot be parsed
            FrontmatterValidationError: If the metadata violates the schema
        """
        metadata, body = self.split(content, source)
        validated = self.validate(metadata, source)
        return FrontmatterResult(metadata=metadata, body=body, validated=validated)
