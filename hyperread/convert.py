"""
Document extraction orchestrator.

This module provides the loaders that turn a source into a Document by
wiring together, page by page and strictly in page order:
- PDFReader (raw fragments)
- reconstruct_lines + StructureClassifier (skim-map, figure index)
- tokenize_page (reading chunks)

Pages are never processed concurrently: the figure index keeps the first
page a label appears on, which depends on page order. Any failure aborts
the whole load; no partial Document is returned.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from hyperread.config import ReaderConfig
from hyperread.exceptions import EmptyInputError, ExtractionError, UnsupportedFormatError
from hyperread.extractors.classifier import HeightStats, StructureClassifier
from hyperread.extractors.lines import reconstruct_lines
from hyperread.extractors.tokenizer import tokenize_page, tokenize_plain_text
from hyperread.models import Chunk, Document, MapItem
from hyperread.readers.pdf_reader import PageData, PDFReader, RawDocument

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


# ═══════════════════════════════════════════════════════════════════════════════
# Document Builder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class BuilderContext:
    """State accumulated while walking the pages of one document."""

    raw_doc: RawDocument
    processing_log: list[str] = field(default_factory=list)

    chunks: list[Chunk] = field(default_factory=list)
    raw_parts: list[str] = field(default_factory=list)
    skim_map: list[MapItem] = field(default_factory=list)
    figure_index: dict[str, int] = field(default_factory=dict)


class DocumentBuilder:
    """
    Builds a Document from a RawDocument.

    Each page goes through line reconstruction, classification and
    tokenization before the next page is looked at.
    """

    def __init__(self, config: ReaderConfig | None = None) -> None:
        """Initialize the builder."""
        self.config = config or ReaderConfig()
        self.classifier = StructureClassifier(thresholds=self.config.heading)

    def build(self, raw_doc: RawDocument) -> Document:
        """
        Build a Document from a RawDocument.

        Args:
            raw_doc: The raw extracted PDF data

        Returns:
            A fully populated, immutable Document

        Raises:
            EmptyInputError: If no page yields a chunk
        """
        ctx = BuilderContext(raw_doc=raw_doc)
        ctx.processing_log.append(f"Starting build of {raw_doc.title!r}")

        for page in raw_doc.pages:
            self._process_page(ctx, page)

        if not ctx.chunks:
            raise EmptyInputError(f"No readable text in {raw_doc.title!r}")

        raw_text = _WHITESPACE.sub(" ", " ".join(ctx.raw_parts)).strip()
        ctx.processing_log.append(
            f"Build complete: {len(ctx.chunks)} chunks, {raw_doc.page_count} pages, "
            f"{len(ctx.skim_map)} map items, {len(ctx.figure_index)} indexed labels"
        )

        return Document(
            title=raw_doc.title,
            total_pages=raw_doc.page_count,
            chunks=ctx.chunks,
            raw_text=raw_text,
            skim_map=ctx.skim_map,
            figure_index=ctx.figure_index,
            processing_log=ctx.processing_log,
        )

    def _process_page(self, ctx: BuilderContext, page: PageData) -> None:
        """Classify lines, then tokenize the page text."""
        stats = HeightStats.from_heights(page.fragment_heights)
        lines = reconstruct_lines(page.fragments, tolerance=self.config.line_tolerance)

        for result in self.classifier.classify_page(lines, stats, page.number):
            ctx.skim_map.append(result.item)
            # First occurrence wins
            if result.label is not None and result.label not in ctx.figure_index:
                ctx.figure_index[result.label] = page.number

        page_text = page.text
        page_chunks = tokenize_page(page_text, page.number)
        ctx.chunks.extend(page_chunks)
        ctx.raw_parts.append(page_text)

        logger.debug(
            "Page %d: %d fragments, %d lines, %d chunks (median height %.1f)",
            page.number,
            len(page.fragments),
            len(lines),
            len(page_chunks),
            stats.median,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════════


def load_pdf(
    source: str | Path | bytes,
    config: ReaderConfig | None = None,
    *,
    title: str | None = None,
) -> Document:
    """
    Extract a Document from a PDF.

    Args:
        source: Path to a PDF file, or the PDF's bytes
        config: Reader configuration (uses defaults if None)
        title: Title override (defaults to the file stem)

    Returns:
        Document with chunks, skim-map, figure index and raw text

    Raises:
        FileNotFoundError: If source path doesn't exist
        ExtractionError: If the PDF is corrupted, encrypted or has no text layer
        EmptyInputError: If the text layer yields no chunks

    Example:
        >>> doc = load_pdf("paper.pdf")
        >>> doc.figure_index.get("2")
        4
    """
    config = config or ReaderConfig()
    raw_doc = PDFReader().read(source, title=title)

    try:
        doc = DocumentBuilder(config).build(raw_doc)
    except (EmptyInputError, ExtractionError):
        raise
    except Exception as e:
        raise ExtractionError(f"Failed to extract {raw_doc.title!r}: {e}") from e

    logger.info(
        "Loaded %r: %d pages, %d chunks", doc.title, doc.total_pages, len(doc.chunks)
    )
    return doc


def load_text(text: str, title: str = "Pasted text") -> Document:
    """
    Build a Document from plain text.

    Skips line reconstruction and classification: every whitespace
    delimited word becomes a page-1 chunk.

    Raises:
        EmptyInputError: If the text has no words
    """
    chunks = tokenize_plain_text(text)
    if not chunks:
        raise EmptyInputError("Text input is empty")

    return Document(
        title=title,
        total_pages=1,
        chunks=chunks,
        raw_text=_WHITESPACE.sub(" ", text).strip(),
        processing_log=[f"Plain text: {len(chunks)} chunks"],
    )


def load(source: str | Path, config: ReaderConfig | None = None) -> Document:
    """
    Load a document from a file, dispatching on its format.

    Raises:
        FileNotFoundError: If source doesn't exist
        UnsupportedFormatError: If format not supported
    """
    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"Source file not found: {source}")

    if detect_format(source) == "pdf":
        return load_pdf(source, config)

    try:
        text = source.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ExtractionError(f"{source} is not valid UTF-8 text: {e}") from e
    return load_text(text, title=source.stem)


def detect_format(path: str | Path) -> str:
    """
    Detect document format from file extension and magic bytes.

    Args:
        path: Path to document file

    Returns:
        Format string: "pdf" or "text"

    Raises:
        UnsupportedFormatError: If format cannot be detected
    """
    path = Path(path)

    ext_map = {
        ".pdf": "pdf",
        ".txt": "text",
        ".text": "text",
        ".md": "text",
        ".markdown": "text",
    }

    ext = path.suffix.lower()
    if ext in ext_map:
        return ext_map[ext]

    # Try magic bytes for PDF
    try:
        with open(path, "rb") as f:
            header = f.read(8)
            if header.startswith(b"%PDF"):
                return "pdf"
    except OSError:
        pass

    raise UnsupportedFormatError(
        f"Cannot detect format for: {path}. Supported: {', '.join(supported_formats())}"
    )


def supported_formats() -> list[str]:
    """Return list of currently supported input formats."""
    return ["pdf", "text"]
