"""
Difficulty scoring for chunks.

Each rule adds its weight when it matches; the sum is scaled down in
normal mode and clamped to 1.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from hyperread.models import ReadingMode

NORMAL_MODE_SCALE = 0.6

UNIT_PATTERN = re.compile(r"%|\$|kg|mg|cm|mm|hz|khz|mhz|ghz", re.IGNORECASE)
COMPARISON_PATTERN = re.compile(r"[<>=]")
REFERENCE_PATTERN = re.compile(r"Fig\.|Figure|Table|Tab\.|Eq\.")
PUNCTUATION_PATTERN = re.compile(r"[();:]")
DIGIT_PATTERN = re.compile(r"[0-9]")


@dataclass(frozen=True)
class DifficultyRule:
    """A predicate on chunk text and the weight it contributes."""

    name: str
    matches: Callable[[str], bool]
    weight: float


DIFFICULTY_RULES: tuple[DifficultyRule, ...] = (
    DifficultyRule("long", lambda t: len(t) > 8, 0.15),
    DifficultyRule("very_long", lambda t: len(t) > 13, 0.20),
    DifficultyRule("digit", lambda t: bool(DIGIT_PATTERN.search(t)), 0.20),
    DifficultyRule("unit", lambda t: bool(UNIT_PATTERN.search(t)), 0.15),
    DifficultyRule("comparison", lambda t: bool(COMPARISON_PATTERN.search(t)), 0.20),
    DifficultyRule("reference", lambda t: bool(REFERENCE_PATTERN.search(t)), 0.20),
    DifficultyRule("punctuation", lambda t: bool(PUNCTUATION_PATTERN.search(t)), 0.10),
)


def score_difficulty(
    text: str,
    mode: ReadingMode | str,
    rules: tuple[DifficultyRule, ...] = DIFFICULTY_RULES,
) -> float:
    """Score a chunk's cognitive difficulty in [0, 1].

    Example:
        >>> score_difficulty("p<0.05", "technical")
        0.4
    """
    if not text:
        return 0.0

    score = sum(rule.weight for rule in rules if rule.matches(text))
    if ReadingMode.coerce(mode) is ReadingMode.NORMAL:
        score *= NORMAL_MODE_SCALE
    return min(1.0, score)
