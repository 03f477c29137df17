"""
Unit tests for HyperRead data models.
"""

import dataclasses

import pytest

from hyperread.models import Analysis, Chunk, Document, MapItem, MapItemType, ReadingMode


@pytest.fixture
def document() -> Document:
    return Document(
        title="Paper",
        total_pages=3,
        chunks=[Chunk("Results", 1), Chunk("Figure 2", 2)],
        raw_text="Results Figure 2",
        skim_map=[
            MapItem(MapItemType.HEADING, "1 Introduction", 1),
            MapItem(MapItemType.FIGURE, "Figure 2: Setup", 2),
        ],
        figure_index={"2": 2},
        processing_log=["built"],
    )


class TestReadingMode:
    """Test mode coercion."""

    def test_coerce_string(self):
        assert ReadingMode.coerce("technical") is ReadingMode.TECHNICAL

    def test_coerce_passthrough(self):
        assert ReadingMode.coerce(ReadingMode.NORMAL) is ReadingMode.NORMAL

    def test_coerce_unknown(self):
        """Unknown strings raise ValueError."""
        with pytest.raises(ValueError):
            ReadingMode.coerce("speedy")


class TestDocument:
    """Test the Document record."""

    def test_fields_frozen(self, document):
        """Lists passed in are stored as tuples, the index as a read-only mapping."""
        assert isinstance(document.chunks, tuple)
        assert isinstance(document.skim_map, tuple)
        assert isinstance(document.processing_log, tuple)
        with pytest.raises(TypeError):
            document.figure_index["3"] = 3  # type: ignore[index]

    def test_cannot_reassign(self, document):
        with pytest.raises(dataclasses.FrozenInstanceError):
            document.title = "Other"  # type: ignore[misc]

    def test_input_not_aliased(self):
        """Mutating the caller's dict afterwards doesn't leak in."""
        index = {"1": 1}
        doc = Document("t", 1, [Chunk("a", 1)], "a", figure_index=index)
        index["2"] = 5
        assert "2" not in doc.figure_index

    def test_page_for_label(self, document):
        assert document.page_for_label("2") == 2
        assert document.page_for_label("9") is None

    def test_headings(self, document):
        """Only heading entries are returned."""
        assert [h.text for h in document.headings()] == ["1 Introduction"]

    def test_is_empty(self, document):
        assert not document.is_empty
        assert Document("t", 1, [], "").is_empty

    def test_to_dict(self, document):
        """Serializable view with enum values flattened."""
        data = document.to_dict()
        assert data["title"] == "Paper"
        assert data["total_pages"] == 3
        assert data["chunks"][1] == {"text": "Figure 2", "page": 2}
        assert data["skim_map"][0]["type"] == "heading"
        assert data["figure_index"] == {"2": 2}
        assert "processing_log" not in data

    def test_processing_log_ignored_in_equality(self, document):
        """Diagnostics don't affect equality."""
        other = dataclasses.replace(document, processing_log=["different"])
        assert other == document


class TestAnalysis:
    """Test Analysis construction."""

    def test_from_dict(self):
        """camelCase keys map onto fields; blank points are dropped."""
        analysis = Analysis.from_dict(
            {
                "summary": "  A study of things. ",
                "keyPoints": ["Hypothesis", " ", "Method"],
                "estimatedReadingTime": "4 minutes",
            }
        )
        assert analysis.summary == "A study of things."
        assert analysis.key_points == ("Hypothesis", "Method")
        assert analysis.estimated_reading_time == "4 minutes"
        assert not analysis.is_placeholder

    def test_from_dict_missing_keys(self):
        """Missing fields fall back to empty/N/A."""
        analysis = Analysis.from_dict({})
        assert analysis.summary == ""
        assert analysis.key_points == ()
        assert analysis.estimated_reading_time == "N/A"

    def test_placeholder(self):
        analysis = Analysis.placeholder("Service down")
        assert analysis.is_placeholder
        assert analysis.summary == "Service down"
        assert analysis.estimated_reading_time == "N/A"
