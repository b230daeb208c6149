"""Unit tests for source extraction and confidence formatting."""

import json

import pytest

from knowledge_search.models.formatting import (
    confidence_level,
    describe_source,
    describe_sources,
    format_confidence,
)


class TestDescribeSource:
    """Tests for the source fallback chains."""

    def test_prefers_document_name_and_excerpt(self) -> None:
        """document_name and excerpt win over the other fields."""
        view = describe_source(
            {
                "document_name": "a.pdf",
                "file_name": "b.pdf",
                "excerpt": "quoted",
                "content": "full content",
                "page_number": 4,
            },
            0,
        )

        assert view.title == "a.pdf"
        assert view.excerpt == "quoted"
        assert view.page_number == 4

    def test_falls_back_to_file_name_and_content(self) -> None:
        """file_name and content are used when the preferred fields are absent."""
        view = describe_source({"file_name": "b.pdf", "content": "body"}, 0)

        assert view.title == "b.pdf"
        assert view.excerpt == "body"
        assert view.page_number is None

    def test_falls_back_to_text(self) -> None:
        """text is the last named excerpt field."""
        view = describe_source({"text": "plain"}, 0)

        assert view.excerpt == "plain"

    def test_empty_values_fall_through(self) -> None:
        """Empty strings do not count as present."""
        view = describe_source({"document_name": "", "file_name": "c.pdf", "excerpt": ""}, 0)

        assert view.title == "c.pdf"
        assert json.loads(view.excerpt) == {
            "document_name": "",
            "file_name": "c.pdf",
            "excerpt": "",
        }

    def test_positional_title_and_serialized_excerpt(self) -> None:
        """Unknown records get a positional title and a JSON excerpt."""
        raw = {"score": 0.9, "chunk_id": "c-1"}

        view = describe_source(raw, 2)

        assert view.title == "Source 3"
        assert json.loads(view.excerpt) == raw

    def test_zero_page_number_is_dropped(self) -> None:
        """A falsy page number is not shown."""
        view = describe_source({"document_name": "a.pdf", "page_number": 0, "text": "t"}, 0)

        assert view.page_number is None

    def test_non_mapping_source(self) -> None:
        """Plain strings become the excerpt; other values are serialized."""
        assert describe_source("raw passage", 0).excerpt == "raw passage"
        assert describe_source(["x", 1], 1).excerpt == '["x", 1]'
        assert describe_source(["x", 1], 1).title == "Source 2"

    def test_describe_sources_preserves_order(self) -> None:
        """Positional titles follow the order of the sources."""
        views = describe_sources([{"text": "a"}, {"document_name": "b.pdf"}, {}])

        assert [v.title for v in views] == ["Source 1", "b.pdf", "Source 3"]


class TestConfidence:
    """Tests for confidence display helpers."""

    @pytest.mark.parametrize(
        ("confidence", "expected"),
        [(0.82, "82%"), (0.0, "0%"), (1.0, "100%"), (0.456, "46%")],
    )
    def test_format_confidence(self, confidence: float, expected: str) -> None:
        """Confidence renders as a whole percentage."""
        assert format_confidence(confidence) == expected

    @pytest.mark.parametrize(
        ("confidence", "expected"),
        [(0.82, "high"), (0.7, "medium"), (0.41, "medium"), (0.4, "low"), (0.0, "low")],
    )
    def test_confidence_level(self, confidence: float, expected: str) -> None:
        """Levels split strictly above 0.7 and 0.4."""
        assert confidence_level(confidence) == expected
