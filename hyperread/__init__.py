"""
HyperRead: adaptive RSVP speed reading for documents.

This library turns a PDF's text layer (or plain text) into a stream of
reading chunks, a skim-map of headings/figures/tables and a figure
index, then plays the chunks back at an adaptive pace that slows down
for dense technical content.

Example:
    >>> import hyperread
    >>> doc = hyperread.load_pdf("paper.pdf")
    >>> print(len(doc.chunks), doc.figure_index)

    >>> # Inside a running asyncio loop
    >>> session = hyperread.ReaderSession()
    >>> session.load_pdf("paper.pdf")
    >>> session.timeline.play()
"""

from hyperread.config import AnalysisConfig, HeadingThresholds, ReaderConfig
from hyperread.convert import (
    DocumentBuilder,
    detect_format,
    load,
    load_pdf,
    load_text,
    supported_formats,
)
from hyperread.exceptions import (
    AnalysisServiceError,
    ConfigurationError,
    EmptyInputError,
    ExtractionError,
    HyperReadError,
    UnsupportedFormatError,
)
from hyperread.models import (
    Analysis,
    Chunk,
    Document,
    MapItem,
    MapItemType,
    ReadingMode,
)
from hyperread.pacing import PacingEngine, calculate_delay, score_difficulty
from hyperread.playback import PlaybackState, PlaybackStatus, PlaybackTimeline, ReaderView
from hyperread.session import PageView, ReaderSession

__version__ = "0.1.0"
__all__ = [
    # Main API
    "load",
    "load_pdf",
    "load_text",
    "detect_format",
    "supported_formats",
    "DocumentBuilder",
    "ReaderSession",
    "PageView",
    # Configuration
    "ReaderConfig",
    "HeadingThresholds",
    "AnalysisConfig",
    # Models
    "Chunk",
    "Document",
    "MapItem",
    "MapItemType",
    "ReadingMode",
    "Analysis",
    # Pacing
    "PacingEngine",
    "calculate_delay",
    "score_difficulty",
    # Playback
    "PlaybackTimeline",
    "PlaybackState",
    "PlaybackStatus",
    "ReaderView",
    # Exceptions
    "HyperReadError",
    "UnsupportedFormatError",
    "ExtractionError",
    "EmptyInputError",
    "AnalysisServiceError",
    "ConfigurationError",
]
