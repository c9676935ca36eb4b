"""
Front matter parsing for Markdown article files.

An article file looks like:

    ---
    title: "Article title"
    tags: [Python, CMS]
    id: abcdefg12345
    ---
    # Markdown body

The raw content is split on the `---` delimiter line into at most three
parts (preamble, front matter, body); the front matter is decoded as YAML
into ArticleMetadata.
"""

from __future__ import annotations

from typing import Any

import yaml

from ..core.types import ArticleMetadata
from ..errors import InvalidFrontMatterFormat, InvalidMetadataFormat, MissingRequiredField


DELIMITER = "---\n"


def extract_front_matter(raw: bytes) -> tuple[str, str]:
    """Split raw file content into front matter text and body text.

    Args:
        raw: File content as read from disk

    Returns:
        A (front_matter, body) tuple

    Raises:
        InvalidFrontMatterFormat: If the content is not UTF-8 or does not
            contain both delimiters
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidFrontMatterFormat(f"invalid front matter format: {exc}") from exc

    parts = text.split(DELIMITER, 2)
    if len(parts) < 3:
        raise InvalidFrontMatterFormat("invalid front matter format")
    return parts[1], parts[2]


def validate_metadata(front_matter: str) -> ArticleMetadata:
    """Decode front matter YAML and enforce required fields.

    Raises:
        InvalidMetadataFormat: On YAML syntax errors or type mismatches
        MissingRequiredField: If `title` or `id` is empty after decoding
    """
    try:
        data = yaml.safe_load(front_matter)
    except yaml.YAMLError as exc:
        raise InvalidMetadataFormat(f"invalid metadata format: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidMetadataFormat(
            f"invalid metadata format: expected a mapping, got {type(data).__name__}"
        )

    title = _string_field(data, "title")
    external_id = _string_field(data, "id")
    tags = _tags_field(data)

    missing = [name for name, value in (("title", title), ("id", external_id)) if not value]
    if missing:
        raise MissingRequiredField(missing)

    return ArticleMetadata(title=title, external_id=external_id, tags=tags)


def _string_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidMetadataFormat(
            f"invalid metadata format: '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def _tags_field(data: dict[str, Any]) -> list[str]:
    value = data.get("tags")
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidMetadataFormat(
            f"invalid metadata format: 'tags' must be a list, got {type(value).__name__}"
        )
    for tag in value:
        if not isinstance(tag, str):
            raise InvalidMetadataFormat(
                f"invalid metadata format: tag {tag!r} must be a string"
            )
    return list(value)
