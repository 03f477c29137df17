"""
End-to-end playback over extracted documents.

Most tests use the FakeScheduler; TestAsyncioLoop runs on a real event loop.
"""

import asyncio

import pytest

from hyperread import (
    PlaybackStatus,
    PlaybackTimeline,
    ReaderSession,
    ReadingMode,
    calculate_delay,
    load_text,
)

PAGE_ONE = [
    "we tested every configuration across the whole range of loads and",
    "the final numbers below summarize the main experimental results.",
]
PAGE_TWO = [
    "Table 1 lists the parameters used for every run in this section",
    "and the remaining runs follow the same protocol with no exceptions",
]


@pytest.fixture
def two_pages(make_pdf, body_page) -> bytes:
    return make_pdf([body_page(*PAGE_ONE), body_page(*PAGE_TWO)])


@pytest.fixture
def session(scheduler, two_pages) -> ReaderSession:
    session = ReaderSession(scheduler=scheduler)
    session.load_pdf(two_pages, title="Two pages")
    return session


class TestPlaythrough:
    """Run a document to the end."""

    def test_every_chunk_once_in_order(self, session, scheduler):
        """The cursor visits 0..n-1 once each and finishes on the last chunk."""
        visits = []
        session.timeline.subscribe(lambda state: visits.append(state.cursor))

        session.timeline.play()
        scheduler.run_all()

        n = len(session.document.chunks)
        assert list(dict.fromkeys(visits)) == list(range(n))
        assert session.timeline.state.status is PlaybackStatus.FINISHED
        assert session.timeline.state.cursor == n - 1
        assert scheduler.pending == []

    def test_sentence_end_lingers(self, session, scheduler):
        """In technical mode 'results.' is held longer than the word before it."""
        shown_at = {}
        timeline = session.timeline
        timeline.subscribe(
            lambda state: shown_at.setdefault(state.cursor, scheduler.now)
        )
        timeline.play()
        scheduler.run_all()

        texts = [c.text for c in session.document.chunks]
        end = texts.index("results.")
        held = shown_at[end + 1] - shown_at[end]
        before = shown_at[end] - shown_at[end - 1]
        assert session.timeline.state.mode is ReadingMode.TECHNICAL
        assert held == pytest.approx(calculate_delay("results.", 300, "technical") / 1000)
        assert held > before

    def test_page_follows_cursor(self, session, scheduler):
        """The viewer moves to page 2 when the table reference is shown."""
        pages = {}
        timeline = session.timeline
        timeline.subscribe(
            lambda state: pages.setdefault(timeline.current_chunk.text, session.page_view().page)
        )
        timeline.play()
        scheduler.run_all()

        assert pages["results."] == 1
        assert pages["Table 1"] == 2
        assert session.document.figure_index["1"] == 2

    def test_table_chunk_page(self, session):
        chunk = next(c for c in session.document.chunks if c.text == "Table 1")
        assert chunk.page == 2

    def test_pause_and_resume(self, session, scheduler):
        """Pausing freezes the cursor; play resumes from it."""
        timeline = session.timeline
        timeline.play()
        scheduler.advance(1.0)
        timeline.pause()
        paused_at = timeline.state.cursor
        assert paused_at > 0

        scheduler.advance(5.0)
        assert timeline.state.cursor == paused_at

        timeline.play()
        scheduler.run_all()
        assert timeline.state.status is PlaybackStatus.FINISHED


class TestAsyncioLoop:
    """The default scheduler is the running asyncio loop."""

    def test_plays_to_finish(self):
        async def run():
            timeline = PlaybackTimeline(load_text("one two three four five"), wpm=1000)
            finished = asyncio.Event()
            timeline.subscribe(
                lambda state: finished.set() if state.status is PlaybackStatus.FINISHED else None
            )
            timeline.play()
            await asyncio.wait_for(finished.wait(), timeout=5)
            return timeline.state

        state = asyncio.run(run())
        assert state.status is PlaybackStatus.FINISHED
        assert state.cursor == 4

    def test_reset_stops_loop_callbacks(self):
        async def run():
            timeline = PlaybackTimeline(load_text("one two three four five"), wpm=1000)
            timeline.play()
            timeline.reset()
            await asyncio.sleep(0.3)
            return timeline

        timeline = asyncio.run(run())
        assert timeline.state.cursor == 0
        assert not timeline.has_pending_tick
