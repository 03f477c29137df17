"""
PDF Reader using PyMuPDF (fitz).

Extracts positioned text fragments from each page's embedded text layer.
Scanned/image-only pages have no fragments; a document where every page
is like that is rejected with ExtractionError.

This module provides raw extraction - line grouping, classification and
tokenization are handled by the extractors module.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import fitz  # PyMuPDF

from hyperread.exceptions import ExtractionError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class TextFragment:
    """A run of text at a position on the page.

    ``y`` is a baseline measured from the bottom of the page, so larger
    values are nearer the top. ``height`` is the glyph height (font size).
    """

    text: str
    x: float
    y: float
    height: float


@dataclass
class PageData:
    """Raw data extracted from a single PDF page."""

    number: int  # 1-based page number
    width: float
    height: float
    fragments: list[TextFragment] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Fragments joined with spaces in stream order, whitespace-collapsed."""
        joined = " ".join(f.text for f in self.fragments)
        return _WHITESPACE.sub(" ", joined).strip()

    @property
    def fragment_heights(self) -> list[float]:
        """Positive fragment heights, sorted ascending."""
        return sorted(f.height for f in self.fragments if f.height and f.height > 0)


@dataclass
class RawDocument:
    """Raw extracted data from a PDF, before structure detection."""

    title: str
    page_count: int
    pages: list[PageData]
    metadata: dict[str, str | None] = field(default_factory=dict)

    @property
    def has_text_layer(self) -> bool:
        """Whether any page carries extractable text."""
        return any(page.fragments for page in self.pages)


class PDFReader:
    """Extracts raw fragment data from PDFs using PyMuPDF.

    Usage:
        reader = PDFReader()
        raw = reader.read("/path/to/file.pdf")
        # raw.pages[0].fragments, raw.page_count, etc.
    """

    def read(self, source: str | Path | bytes, *, title: str | None = None) -> RawDocument:
        """Read a PDF file (or in-memory PDF bytes) and extract raw data.

        Args:
            source: Path to a PDF file, or the PDF's bytes.
            title: Title override. Defaults to the file stem, then the
                PDF metadata title.

        Returns:
            RawDocument with one PageData per page.

        Raises:
            FileNotFoundError: If a path is given and doesn't exist.
            ExtractionError: If the PDF is corrupted, encrypted, or has
                no text layer.
        """
        if isinstance(source, (bytes, bytearray)):
            label = "<bytes>"
            default_title = None
            open_args = {"stream": bytes(source), "filetype": "pdf"}
        else:
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"PDF not found: {path}")
            label = str(path)
            default_title = path.stem
            open_args = {"filename": str(path)}

        try:
            doc = fitz.open(**open_args)
        except Exception as e:
            raise ExtractionError(f"Failed to open PDF {label}: {e}") from e

        try:
            if doc.needs_pass:
                raise ExtractionError(f"PDF is encrypted: {label}")

            try:
                pages = list(self._extract_pages(doc))
            except Exception as e:
                raise ExtractionError(f"Failed to read text layer of {label}: {e}") from e

            metadata = self._extract_metadata(doc)
            raw = RawDocument(
                title=title or default_title or metadata.get("title") or "Untitled",
                page_count=len(doc),
                pages=pages,
                metadata=metadata,
            )
        finally:
            doc.close()

        if raw.page_count == 0 or not raw.has_text_layer:
            raise ExtractionError(f"PDF has no text layer: {label}")

        logger.debug("Read %d pages from %s", raw.page_count, label)
        return raw

    def _extract_pages(self, doc: fitz.Document) -> Iterator[PageData]:
        """Extract data from each page, in order."""
        for page_idx in range(len(doc)):
            page = doc[page_idx]
            rect = page.rect
            yield PageData(
                number=page_idx + 1,
                width=rect.width,
                height=rect.height,
                fragments=self._extract_fragments(page),
            )

    def _extract_fragments(self, page: fitz.Page) -> list[TextFragment]:
        """Extract text spans with baseline position and size."""
        fragments = []
        page_height = page.rect.height

        page_dict = page.get_text("dict", flags=fitz.TEXT_PRESERVE_WHITESPACE)

        for block in page_dict.get("blocks", []):
            # Skip image blocks
            if block.get("type") != 0:
                continue

            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text.strip():
                        continue

                    origin_x, origin_y = span.get("origin", (0.0, 0.0))
                    fragments.append(
                        TextFragment(
                            text=text,
                            x=origin_x,
                            # PyMuPDF measures y downward; flip to a bottom-up baseline
                            y=page_height - origin_y,
                            height=span.get("size", 0.0),
                        )
                    )

        return fragments

    def _extract_metadata(self, doc: fitz.Document) -> dict[str, str | None]:
        """Extract PDF metadata."""
        meta = doc.metadata or {}
        return {
            "title": meta.get("title") or None,
            "author": meta.get("author") or None,
            "subject": meta.get("subject") or None,
            "creator": meta.get("creator") or None,
            "producer": meta.get("producer") or None,
        }
