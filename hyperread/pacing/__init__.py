"""
Adaptive pacing.

- score_difficulty: 0..1 difficulty for a chunk in a reading mode
- calculate_delay / PacingEngine: display duration in milliseconds
"""

from hyperread.pacing.difficulty import DIFFICULTY_RULES, DifficultyRule, score_difficulty
from hyperread.pacing.engine import (
    DEFAULT_MIN_DELAY_MS,
    TECHNICAL_RULES,
    PacingEngine,
    PacingRule,
    calculate_delay,
)

__all__ = [
    "score_difficulty",
    "DifficultyRule",
    "DIFFICULTY_RULES",
    "calculate_delay",
    "PacingEngine",
    "PacingRule",
    "TECHNICAL_RULES",
    "DEFAULT_MIN_DELAY_MS",
]
