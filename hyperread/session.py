"""
Reading session: one in-memory Document plus its playback timeline.

Loads are all-or-nothing. The new Document is fully built before it
replaces the current one, so a failed load leaves the session exactly
as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from hyperread.analysis.service import AnalysisService
from hyperread.config import ReaderConfig
from hyperread.convert import detect_format, load, load_pdf, load_text
from hyperread.exceptions import HyperReadError
from hyperread.models import Analysis, Document, ReadingMode
from hyperread.pacing.engine import PacingEngine
from hyperread.playback.timeline import PlaybackTimeline, Scheduler

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "Welcome to HyperRead AI. Upload a PDF or paste text to begin speed reading. "
    "Switch to Technical Mode for adaptive pacing and visual context syncing."
)


@dataclass(frozen=True)
class PageView:
    """What the page-viewer collaborator needs: a page and a zoom hint."""

    page: int
    scale: float | Literal["fit"]


class ReaderSession:
    """Owns the active Document, the timeline and the analysis client.

    Usage:
        session = ReaderSession()
        session.load_pdf("paper.pdf")
        session.timeline.play()
        print(session.page_view().page)
    """

    def __init__(
        self,
        config: ReaderConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
        analysis: AnalysisService | None = None,
    ):
        self.config = config or ReaderConfig()
        self.analysis = analysis or AnalysisService(self.config.analysis)
        self.timeline = PlaybackTimeline(
            load_text(WELCOME_TEXT, title="Welcome"),
            wpm=self.config.wpm,
            mode=self.config.mode,
            scheduler=scheduler,
            pacing=PacingEngine(self.config.min_delay_ms),
        )

    @property
    def document(self) -> Document:
        return self.timeline.document

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_pdf(self, source: str | Path | bytes, *, title: str | None = None) -> Document:
        """Extract a PDF and make it the active document."""
        doc = self._attempt(lambda: load_pdf(source, self.config, title=title))
        self._activate(doc, technical=self.config.technical_on_pdf_load)
        return doc

    def load_text(self, text: str, title: str = "Pasted text") -> Document:
        """Make pasted text the active document."""
        doc = self._attempt(lambda: load_text(text, title=title))
        self._activate(doc, technical=False)
        return doc

    def load_file(self, path: str | Path) -> Document:
        """Load a PDF or text file, detecting its format."""
        doc = self._attempt(lambda: load(path, self.config))
        is_pdf = detect_format(path) == "pdf"
        self._activate(doc, technical=self.config.technical_on_pdf_load and is_pdf)
        return doc

    def unload(self) -> None:
        """Revert to the welcome text, cancelling any pending playback tick."""
        self.timeline.load(load_text(WELCOME_TEXT, title="Welcome"))

    def _attempt(self, build) -> Document:
        try:
            return build()
        except (HyperReadError, FileNotFoundError) as e:
            logger.warning("Load failed, keeping %r: %s", self.document.title, e)
            raise

    def _activate(self, doc: Document, *, technical: bool) -> None:
        self.timeline.load(doc)
        if technical:
            self.timeline.set_mode(ReadingMode.TECHNICAL)
        logger.info("Active document: %r (%d chunks)", doc.title, len(doc.chunks))

    # ------------------------------------------------------------------
    # Collaborator outputs
    # ------------------------------------------------------------------

    def page_view(self) -> PageView:
        """Current page, clamped to the document, plus the zoom hint."""
        page = min(max(self.timeline.current_page, 1), max(self.document.total_pages, 1))
        return PageView(page=page, scale=self.config.page_scale)

    def summarize(self) -> Analysis:
        return self.analysis.summarize(self.document.raw_text, self.timeline.state.mode)

    def ask(self, question: str) -> str:
        return self.analysis.ask(self.document.raw_text, question, self.timeline.state.mode)
