"""
Display duration for a chunk.

Two stages:
1. Technical mode only: discrete multipliers for long words, digits,
   units, references and trailing punctuation (they stack).
2. Both modes: stretch by the difficulty score, strongly in technical
   mode and mildly in normal mode.

Every delay is floored at a small positive minimum.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable

from hyperread.config import validate_wpm
from hyperread.models import Chunk, ReadingMode
from hyperread.pacing.difficulty import DIGIT_PATTERN, score_difficulty

DEFAULT_MIN_DELAY_MS = 10.0

DIFFICULTY_STRETCH = {
    ReadingMode.TECHNICAL: 1.1,
    ReadingMode.NORMAL: 0.4,
}

UNIT_OR_CURRENCY = re.compile(r"%|\$|€|kg|mg|cm")
REFERENCE_ABBREVIATION = re.compile(r"Fig\.|Tab\.|Eq\.")
SENTENCE_END = re.compile(r"[.;:!?]$")
CLAUSE_END = re.compile(r",$")


@dataclass(frozen=True)
class PacingRule:
    """A predicate on chunk text and the delay multiplier it applies."""

    name: str
    matches: Callable[[str], bool]
    factor: float


TECHNICAL_RULES: tuple[PacingRule, ...] = (
    PacingRule("long", lambda t: len(t) > 8, 1.3),
    PacingRule("very_long", lambda t: len(t) > 13, 1.6),
    PacingRule("digit", lambda t: bool(DIGIT_PATTERN.search(t)), 1.4),
    PacingRule("unit", lambda t: bool(UNIT_OR_CURRENCY.search(t)), 1.2),
    PacingRule("reference", lambda t: bool(REFERENCE_ABBREVIATION.search(t)), 1.5),
    PacingRule("sentence_end", lambda t: bool(SENTENCE_END.search(t)), 2.2),
    PacingRule("clause_end", lambda t: bool(CLAUSE_END.search(t)), 1.5),
)


def calculate_delay(
    chunk: Chunk | str,
    wpm: float,
    mode: ReadingMode | str,
    *,
    min_delay_ms: float = DEFAULT_MIN_DELAY_MS,
) -> float:
    """Milliseconds to show ``chunk`` at ``wpm`` in ``mode``.

    Raises:
        ConfigurationError: If wpm is outside the supported range.
    """
    wpm = validate_wpm(wpm)
    mode = ReadingMode.coerce(mode)
    text = chunk.text if isinstance(chunk, Chunk) else chunk

    delay = 60000 / wpm

    if mode is ReadingMode.TECHNICAL and text:
        for rule in TECHNICAL_RULES:
            if rule.matches(text):
                delay *= rule.factor

    difficulty = score_difficulty(text, mode)
    delay *= 1 + difficulty * DIFFICULTY_STRETCH[mode]

    if not math.isfinite(delay):
        return min_delay_ms
    return max(min_delay_ms, delay)


class PacingEngine:
    """Computes per-chunk delays with a fixed floor.

    Usage:
        engine = PacingEngine(min_delay_ms=10)
        engine.delay_ms(Chunk("results.", 1), 300, ReadingMode.TECHNICAL)
    """

    def __init__(self, min_delay_ms: float = DEFAULT_MIN_DELAY_MS):
        self.min_delay_ms = min_delay_ms

    def delay_ms(self, chunk: Chunk | str, wpm: float, mode: ReadingMode | str) -> float:
        return calculate_delay(chunk, wpm, mode, min_delay_ms=self.min_delay_ms)

    def difficulty(self, chunk: Chunk | str, mode: ReadingMode | str) -> float:
        text = chunk.text if isinstance(chunk, Chunk) else chunk
        return score_difficulty(text, mode)
