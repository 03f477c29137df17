"""Playback timeline: play/pause/seek/reset over a Document's chunks."""

from hyperread.playback.timeline import (
    PlaybackState,
    PlaybackStatus,
    PlaybackTimeline,
    ReaderView,
    Scheduler,
    TimerHandle,
)

__all__ = [
    "PlaybackTimeline",
    "PlaybackState",
    "PlaybackStatus",
    "ReaderView",
    "Scheduler",
    "TimerHandle",
]
