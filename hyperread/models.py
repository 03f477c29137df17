"""
Data models for HyperRead.

These models represent the output of document extraction and the
result of document analysis. Chunks, map items and documents are
immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ReadingMode(Enum):
    """Pacing profile for playback."""

    NORMAL = "normal"
    TECHNICAL = "technical"

    @classmethod
    def coerce(cls, value: ReadingMode | str) -> ReadingMode:
        """Accept either a ReadingMode or its string value."""
        if isinstance(value, cls):
            return value
        return cls(value)


class MapItemType(Enum):
    """Kind of skim-map entry."""

    HEADING = "heading"
    FIGURE = "figure"
    TABLE = "table"


@dataclass(frozen=True)
class Chunk:
    """One RSVP display unit and the 1-based page it came from."""

    text: str
    page: int


@dataclass(frozen=True)
class MapItem:
    """A heading, figure or table line found during extraction."""

    type: MapItemType
    text: str
    page: int


@dataclass(frozen=True)
class Document:
    """
    The main output of extraction.

    Holds the chunk sequence in playback order, the whitespace-normalized
    raw text (for summarization/chat only), the skim-map and the
    figure/table label index.

    Example:
        >>> doc = hyperread.load_pdf("paper.pdf")
        >>> print(doc.total_pages, len(doc.chunks))
        >>> for item in doc.skim_map:
        ...     print(item.type.value, item.page, item.text)
    """

    title: str
    total_pages: int
    chunks: tuple[Chunk, ...]
    raw_text: str
    skim_map: tuple[MapItem, ...] = ()
    figure_index: Mapping[str, int] = field(default_factory=dict)

    # Diagnostics
    processing_log: tuple[str, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self):
        # Freeze mutable inputs so the record can be shared safely
        object.__setattr__(self, "chunks", tuple(self.chunks))
        object.__setattr__(self, "skim_map", tuple(self.skim_map))
        object.__setattr__(self, "figure_index", MappingProxyType(dict(self.figure_index)))
        object.__setattr__(self, "processing_log", tuple(self.processing_log))

    @property
    def is_empty(self) -> bool:
        """Whether there is nothing to play."""
        return not self.chunks

    def page_for_label(self, label: str) -> int | None:
        """Page where a figure/table label first appeared, if indexed."""
        return self.figure_index.get(label)

    def headings(self) -> list[MapItem]:
        """Skim-map entries that are headings."""
        return [item for item in self.skim_map if item.type is MapItemType.HEADING]

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the document
        """
        return {
            "title": self.title,
            "total_pages": self.total_pages,
            "chunks": [{"text": c.text, "page": c.page} for c in self.chunks],
            "raw_text": self.raw_text,
            "skim_map": [
                {"type": item.type.value, "text": item.text, "page": item.page}
                for item in self.skim_map
            ],
            "figure_index": dict(self.figure_index),
        }


@dataclass(frozen=True)
class Analysis:
    """Summary returned by the analysis service."""

    summary: str
    key_points: tuple[str, ...] = ()
    estimated_reading_time: str = "N/A"
    is_placeholder: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Analysis:
        """Build from the service's JSON object (camelCase keys)."""
        points = data.get("keyPoints") or []
        return cls(
            summary=str(data.get("summary") or "").strip(),
            key_points=tuple(str(p).strip() for p in points if str(p).strip()),
            estimated_reading_time=str(data.get("estimatedReadingTime") or "N/A").strip(),
        )

    @classmethod
    def placeholder(cls, message: str) -> Analysis:
        """Explanatory stand-in used when the service fails."""
        return cls(summary=message, is_placeholder=True)
