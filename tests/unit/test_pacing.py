"""
Unit tests for difficulty scoring and the pacing engine.
"""

import pytest

from hyperread.exceptions import ConfigurationError
from hyperread.models import Chunk, ReadingMode
from hyperread.pacing import PacingEngine, calculate_delay, score_difficulty

TECHNICAL = ReadingMode.TECHNICAL
NORMAL = ReadingMode.NORMAL


class TestScoreDifficulty:
    """Test the additive difficulty score."""

    def test_empty_scores_zero(self):
        """Empty input scores 0 in both modes."""
        assert score_difficulty("", TECHNICAL) == 0.0
        assert score_difficulty("", NORMAL) == 0.0

    def test_plain_word_scores_zero(self):
        """Short plain words carry no difficulty."""
        assert score_difficulty("the", TECHNICAL) == 0.0

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("wonderful", 0.15),  # length > 8
            ("extraordinarily", 0.35),  # length > 8 and > 13
            ("42", 0.20),  # digit
            ("GHz", 0.15),  # unit, case-insensitive
            ("a<b", 0.20),  # comparison
            ("Tab.", 0.20),  # reference
            ("(see", 0.10),  # punctuation
        ],
    )
    def test_individual_rules(self, text, expected):
        """Each rule contributes its own weight."""
        assert score_difficulty(text, TECHNICAL) == pytest.approx(expected)

    def test_rules_stack(self):
        """Weights add up across matching rules."""
        # digit + comparison
        assert score_difficulty("p<0.05", TECHNICAL) == pytest.approx(0.4)

    def test_normal_mode_scaled(self):
        """Normal mode multiplies the raw sum by 0.6."""
        assert score_difficulty("p<0.05", NORMAL) == pytest.approx(0.24)

    def test_clamped_to_one(self):
        """Heavy chunks cap at 1."""
        text = "Figure(12)=45mg;ratio>3"
        assert score_difficulty(text, TECHNICAL) == 1.0

    def test_normal_scales_before_clamping(self):
        """A raw sum of 1.2 becomes 0.72 in normal mode, not 0.6."""
        text = "Figure(12)=45mg;ratio>3"  # 0.15+0.2+0.2+0.15+0.2+0.2+0.1 = 1.2
        assert score_difficulty(text, NORMAL) == pytest.approx(0.72)

    def test_accepts_string_mode(self):
        """Mode may be given by value."""
        assert score_difficulty("42", "normal") == pytest.approx(0.12)


class TestCalculateDelay:
    """Test delay computation."""

    def test_base_delay(self):
        """A plain word in normal mode takes 60000 / wpm."""
        assert calculate_delay(Chunk("the", 1), 300, NORMAL) == pytest.approx(200)

    def test_normal_mode_ignores_discrete_multipliers(self):
        """Trailing punctuation doesn't slow normal mode."""
        assert calculate_delay("results.", 300, NORMAL) == pytest.approx(200)

    def test_sentence_end_in_technical(self):
        """A period stretches technical mode by 2.2."""
        assert calculate_delay("results.", 300, TECHNICAL) == pytest.approx(440)

    def test_comma_in_technical(self):
        """A trailing comma stretches technical mode by 1.5."""
        assert calculate_delay("however,", 300, TECHNICAL) == pytest.approx(300)

    def test_multipliers_and_difficulty_stack(self):
        """Digit and period multiply, then difficulty stretches."""
        # 200 * 1.4 * 2.2, then difficulty 0.2 * 1.1
        expected = 200 * 1.4 * 2.2 * (1 + 0.2 * 1.1)
        assert calculate_delay("2024.", 300, TECHNICAL) == pytest.approx(expected)

    def test_normal_difficulty_stretch(self):
        """Normal mode still stretches mildly with difficulty."""
        expected = 200 * (1 + 0.12 * 0.4)
        assert calculate_delay("2024.", 300, NORMAL) == pytest.approx(expected)

    def test_technical_slower_than_normal_for_numeric_sentence_end(self):
        """Technical delay exceeds normal delay for a digit ending in a period."""
        for wpm in (60, 300, 1000):
            assert calculate_delay("5.2%.", wpm, TECHNICAL) > calculate_delay(
                "5.2%.", wpm, NORMAL
            )

    @pytest.mark.parametrize("mode", [NORMAL, TECHNICAL])
    @pytest.mark.parametrize("text", ["the", "results.", "Fig. 3", "p<0.05;"])
    def test_faster_rate_is_shorter(self, mode, text):
        """Increasing wpm strictly decreases the delay."""
        delays = [calculate_delay(text, wpm, mode) for wpm in (60, 120, 300, 600, 1000)]
        assert all(a > b for a, b in zip(delays, delays[1:]))

    def test_fractional_rate_is_kept(self):
        """A fractional wpm is not truncated to the whole number below it."""
        assert calculate_delay("the", 300.9, NORMAL) < calculate_delay("the", 300, NORMAL)
        assert calculate_delay("the", 300.5, NORMAL) == pytest.approx(60000 / 300.5)

    def test_delay_is_positive_and_floored(self):
        """No delay drops below the floor."""
        assert calculate_delay("a", 1000, NORMAL, min_delay_ms=100) == 100

    @pytest.mark.parametrize("wpm", [0, -5, float("nan"), 5000])
    def test_invalid_wpm_rejected(self, wpm):
        """Unusable rates never reach the arithmetic."""
        with pytest.raises(ConfigurationError):
            calculate_delay("word", wpm, NORMAL)


class TestPacingEngine:
    """Test the engine wrapper."""

    def test_delay_and_difficulty(self):
        """Engine delegates to the module functions with its floor."""
        engine = PacingEngine(min_delay_ms=10)
        assert engine.delay_ms(Chunk("the", 1), 300, NORMAL) == pytest.approx(200)
        assert engine.difficulty(Chunk("42", 1), TECHNICAL) == pytest.approx(0.2)
