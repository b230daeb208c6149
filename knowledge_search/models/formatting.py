"""Display helpers for agent answers.

Source records returned by the agent have no fixed shape, so every field is
read through an explicit fallback chain instead of ad-hoc lookups in the page.
"""

import json
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel

TITLE_FIELDS = ("document_name", "file_name")
EXCERPT_FIELDS = ("excerpt", "content", "text")


class SourceView(BaseModel):
    """Normalized view of a loosely-typed source record.

    Attributes:
        title: Document name, or a positional label like "Source 2".
        page_number: Page reference when the record carries one.
        excerpt: Quoted passage, or the serialized record as a last resort.
    """

    title: str
    page_number: Any | None = None
    excerpt: str


def _first_present(record: Mapping[str, Any], fields: tuple[str, ...]) -> Any | None:
    for field in fields:
        value = record.get(field)
        if value:
            return value
    return None


def describe_source(raw: Any, index: int) -> SourceView:
    """Extract display fields from a source record.

    Args:
        raw: Source record as returned by the agent (normally a dict).
        index: Zero-based position of the source in the answer.

    Returns:
        SourceView with title, optional page number and excerpt.
    """
    fallback_title = f"Source {index + 1}"

    if not isinstance(raw, Mapping):
        excerpt = raw if isinstance(raw, str) and raw else json.dumps(raw, default=str)
        return SourceView(title=fallback_title, excerpt=excerpt)

    title = _first_present(raw, TITLE_FIELDS)
    excerpt = _first_present(raw, EXCERPT_FIELDS)
    page_number = raw.get("page_number") or None

    return SourceView(
        title=str(title) if title else fallback_title,
        page_number=page_number,
        excerpt=str(excerpt) if excerpt else json.dumps(raw, default=str),
    )


def describe_sources(sources: list[Any]) -> list[SourceView]:
    """Describe every source of an answer, preserving order."""
    return [describe_source(raw, i) for i, raw in enumerate(sources)]


def format_confidence(confidence: float) -> str:
    """Render a 0-1 confidence as a whole percentage, e.g. 0.82 -> "82%"."""
    return f"{confidence * 100:.0f}%"


def confidence_level(confidence: float) -> Literal["high", "medium", "low"]:
    """Bucket a confidence score for badge coloring."""
    if confidence > 0.7:
        return "high"
    if confidence > 0.4:
        return "medium"
    return "low"
