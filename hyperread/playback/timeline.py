"""
Playback timeline.

A cancellable, variable-tick scheduler that walks a cursor through a
document's chunks. At most one delayed callback is pending at any time;
every transition replaces or cancels it through a single owned handle.

Scheduling is delegated to anything with an asyncio-style
``call_later(delay_seconds, callback)`` returning a handle with
``cancel()``. By default the running asyncio event loop is used.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable, Protocol

from hyperread.config import validate_wpm
from hyperread.exceptions import ConfigurationError
from hyperread.extractors.classifier import REFERENCE_LINE
from hyperread.models import Chunk, Document, ReadingMode
from hyperread.pacing.engine import PacingEngine

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class PlaybackStatus(Enum):
    """Playback state machine states."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class PlaybackState:
    """Snapshot of the timeline's mutable state.

    Replaced wholesale on every transition, never mutated in place.
    """

    status: PlaybackStatus
    cursor: int
    base_wpm: float
    mode: ReadingMode
    manual_page_override: int | None = None

    @property
    def is_playing(self) -> bool:
        return self.status is PlaybackStatus.PLAYING


@dataclass(frozen=True)
class ReaderView:
    """What the rendering collaborator needs to draw one frame."""

    text: str
    previous_text: str
    next_text: str
    page: int
    progress: float  # 0..100
    mode: ReadingMode
    difficulty: float
    status: PlaybackStatus
    cursor: int
    total: int
    minutes_left: int
    seconds_left: int


Listener = Callable[[PlaybackState], None]


class PlaybackTimeline:
    """Drives RSVP playback over a Document.

    Usage:
        timeline = PlaybackTimeline(doc, wpm=300)
        timeline.subscribe(lambda state: render(timeline.view()))
        timeline.play()       # inside a running asyncio loop
        ...
        timeline.pause()
    """

    def __init__(
        self,
        document: Document,
        *,
        wpm: float = 300,
        mode: ReadingMode | str = ReadingMode.NORMAL,
        scheduler: Scheduler | None = None,
        pacing: PacingEngine | None = None,
    ):
        """Initialize the timeline in the Idle state with cursor 0.

        Args:
            document: Document to play.
            wpm: Base words-per-minute rate.
            mode: Reading mode.
            scheduler: Timer source (default: running asyncio loop).
            pacing: Delay calculator.
        """
        self._document = document
        self._scheduler = scheduler
        self.pacing = pacing or PacingEngine()
        self._state = PlaybackState(
            status=PlaybackStatus.IDLE,
            cursor=0,
            base_wpm=validate_wpm(wpm),
            mode=ReadingMode.coerce(mode),
        )
        self._pending: TimerHandle | None = None
        self._token: object | None = None
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def document(self) -> Document:
        return self._document

    @property
    def chunks(self) -> Sequence[Chunk]:
        return self._document.chunks

    @property
    def has_pending_tick(self) -> bool:
        """Whether a delayed advance is scheduled."""
        return self._pending is not None

    @property
    def current_chunk(self) -> Chunk | None:
        cursor = self._state.cursor
        if 0 <= cursor < len(self.chunks):
            return self.chunks[cursor]
        return None

    @property
    def progress(self) -> float:
        """Percentage of the chunk sequence before the cursor."""
        total = len(self.chunks)
        return self._state.cursor / total * 100 if total else 0.0

    @property
    def current_page(self) -> int:
        """Page to show: manual override, then a referenced figure's page, then the chunk's page."""
        if self._state.manual_page_override is not None:
            return self._state.manual_page_override

        chunk = self.current_chunk
        if chunk is None:
            return 1

        match = REFERENCE_LINE.search(chunk.text)
        if match:
            indexed = self._document.page_for_label(match.group(2))
            if indexed is not None:
                return indexed
        return chunk.page

    def remaining_time(self) -> tuple[int, int]:
        """(minutes, seconds) left at the base rate, ignoring adaptive pacing."""
        left = max(len(self.chunks) - self._state.cursor, 0)
        wpm = self._state.base_wpm
        return int(left // wpm), math.floor((left % wpm) / wpm * 60)

    def view(self) -> ReaderView:
        """Frame data for the rendering collaborator."""
        cursor = self._state.cursor
        chunks = self.chunks
        chunk = self.current_chunk
        text = chunk.text if chunk else ""
        minutes, seconds = self.remaining_time()
        return ReaderView(
            text=text,
            previous_text=chunks[cursor - 1].text if 0 < cursor <= len(chunks) else "",
            next_text=chunks[cursor + 1].text if cursor + 1 < len(chunks) else "",
            page=self.current_page,
            progress=self.progress,
            mode=self._state.mode,
            difficulty=self.pacing.difficulty(text, self._state.mode),
            status=self._state.status,
            cursor=cursor,
            total=len(chunks),
            minutes_left=minutes,
            seconds_left=seconds,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Transport controls
    # ------------------------------------------------------------------

    def play(self) -> None:
        """Start playback; a cursor past the last chunk restarts from the top.

        From Finished the cursor is on the last chunk, so play shows it once
        more and finishes again.

        Raises:
            RuntimeError: If no scheduler was given and no asyncio loop is
                running. The state is left unchanged.
        """
        if not self.chunks:
            logger.debug("play() ignored: document has no chunks")
            return

        previous = self._state
        cursor = previous.cursor
        if cursor >= len(self.chunks):
            cursor = 0

        needs_tick = not previous.is_playing or cursor != previous.cursor
        if needs_tick:
            self._get_scheduler()

        try:
            self._set_state(
                status=PlaybackStatus.PLAYING, cursor=cursor, manual_page_override=None
            )
        finally:
            if needs_tick and self._state.is_playing:
                self._arm()

    def pause(self) -> None:
        """Stop playback, cancelling any pending advance."""
        self._disarm()
        if self._state.status is not PlaybackStatus.PAUSED:
            self._set_state(status=PlaybackStatus.PAUSED)

    def reset(self) -> None:
        """Pause and rewind to the first chunk."""
        self.pause()
        if self._state.cursor != 0:
            self._set_state(cursor=0)

    def toggle_play(self) -> None:
        if self._state.is_playing:
            self.pause()
        else:
            self.play()

    def seek(self, fraction: float) -> None:
        """Move the cursor to ``fraction`` percent of the way through.

        Out-of-range or non-finite fractions are clamped. Playback state
        is unchanged; while playing, the current chunk gets a fresh delay.
        """
        if not isinstance(fraction, (int, float)) or not math.isfinite(fraction):
            fraction = 0.0
        fraction = min(max(fraction, 0.0), 100.0)

        cursor = math.floor(fraction / 100 * len(self.chunks))
        if self._state.status is PlaybackStatus.FINISHED:
            # Leaving the end: a later play() resumes from here, not from the top
            self._set_state(status=PlaybackStatus.PAUSED, cursor=cursor)
        else:
            self._set_state(cursor=cursor)
        if self._state.is_playing:
            self._arm()

    def set_wpm(self, wpm: float) -> None:
        """Change the base rate; applies from the next scheduled chunk."""
        self._set_state(base_wpm=validate_wpm(wpm))

    def set_mode(self, mode: ReadingMode | str) -> None:
        """Change the reading mode; applies from the next scheduled chunk."""
        try:
            mode = ReadingMode.coerce(mode)
        except ValueError as e:
            raise ConfigurationError(f"Unknown reading mode: {mode!r}") from e
        self._set_state(mode=mode)

    def request_page(self, page: int) -> None:
        """Pin the page viewer to ``page`` (clamped) until playback restarts."""
        page = min(max(int(page), 1), max(self._document.total_pages, 1))
        self._set_state(manual_page_override=page)

    def clear_page_override(self) -> None:
        self._set_state(manual_page_override=None)

    def load(self, document: Document) -> None:
        """Swap in a new document: cancel any tick, rewind, go Idle."""
        self._disarm()
        self._document = document
        self._set_state(status=PlaybackStatus.IDLE, cursor=0, manual_page_override=None)

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def _arm(self) -> None:
        """Replace any pending tick with one timed for the current chunk."""
        self._disarm()

        chunk = self.current_chunk
        delay_ms = self.pacing.delay_ms(
            chunk if chunk is not None else "", self._state.base_wpm, self._state.mode
        )

        token = object()
        scheduler = self._get_scheduler()
        self._pending = scheduler.call_later(delay_ms / 1000, lambda: self._on_tick(token))
        self._token = token
        logger.debug("Scheduled advance from chunk %d in %.1f ms", self._state.cursor, delay_ms)

    def _get_scheduler(self) -> Scheduler:
        return self._scheduler or asyncio.get_running_loop()

    def _disarm(self) -> None:
        self._token = None
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _on_tick(self, token: object) -> None:
        # A tick belonging to a replaced or cancelled handle must not move the cursor
        if token is not self._token or not self._state.is_playing:
            return
        self._pending = None
        self._token = None

        last = len(self.chunks) - 1
        if self._state.cursor >= last:
            self._set_state(status=PlaybackStatus.FINISHED, cursor=max(last, 0))
            logger.info("Playback finished at chunk %d", self._state.cursor)
            return

        try:
            self._set_state(cursor=self._state.cursor + 1)
        finally:
            # Listeners may pause, replace the document or raise
            if self._state.is_playing and self._pending is None:
                self._arm()

    def _set_state(self, **changes) -> None:
        new_state = replace(self._state, **changes)
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
