"""
Pytest configuration and fixtures for HyperRead tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import fitz  # PyMuPDF
import pytest


@dataclass
class FakeTimer:
    """Handle returned by FakeScheduler.call_later."""

    when: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeScheduler:
    """Manual clock with asyncio-style call_later, in seconds."""

    now: float = 0.0
    timers: list[FakeTimer] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(when=self.now + delay, callback=callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def _fire_next(self, until: float | None = None) -> bool:
        due = [t for t in self.pending if until is None or t.when <= until]
        if not due:
            return False
        timer = min(due, key=lambda t: t.when)
        self.now = max(self.now, timer.when)
        timer.fired = True
        timer.callback()
        return True

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every timer that comes due."""
        target = self.now + seconds
        while self._fire_next(until=target):
            pass
        self.now = target

    def run_all(self, limit: int = 10_000) -> int:
        """Fire timers until none are pending. Returns the number fired."""
        fired = 0
        while self._fire_next():
            fired += 1
            if fired > limit:
                raise RuntimeError("Scheduler did not go idle")
        return fired


@pytest.fixture
def scheduler() -> FakeScheduler:
    """Deterministic scheduler for timeline tests."""
    return FakeScheduler()


# Page layout: (text, x, baseline y from top, font size)
PageSpec = list[tuple[str, float, float, float]]


def build_pdf(pages: list[PageSpec], **save_options) -> bytes:
    """Build a PDF in memory, one insert_text call per fragment."""
    doc = fitz.open()
    for fragments in pages:
        page = doc.new_page(width=595, height=842)
        for text, x, y, size in fragments:
            page.insert_text((x, y), text, fontsize=size)
    data = doc.tobytes(**save_options)
    doc.close()
    return data


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Factory for generated PDFs (no binary fixtures checked in)."""
    return build_pdf


def _body_page(*lines: str, size: float = 11, top: float = 100) -> PageSpec:
    return [(line, 72, top + i * 20, size) for i, line in enumerate(lines)]


@pytest.fixture
def body_page() -> Callable[..., PageSpec]:
    """Lines of body text spaced 20pt apart, as a page spec for make_pdf."""
    return _body_page
