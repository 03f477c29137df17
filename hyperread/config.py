"""
Configuration for HyperRead extraction, pacing and analysis.

The heading thresholds are empirically tuned; the defaults are kept
literal so classification stays compatible across versions.
"""

import math
import os
from dataclasses import dataclass, field
from typing import Literal

from hyperread.exceptions import ConfigurationError

MIN_WPM = 60
MAX_WPM = 1000


@dataclass(frozen=True)
class HeadingThresholds:
    """
    Tunable constants for the heading heuristic.

    Example:
        >>> config = ReaderConfig(
        ...     heading=HeadingThresholds(median_ratio=1.5)
        ... )
    """

    min_length: int = 4
    max_length: int = 90
    max_words: int = 12

    # Height ratio against the page median once the line is at/above p75
    p75_median_ratio: float = 1.1
    # Height ratio against the page median without the percentile boost
    median_ratio: float = 1.35
    # Share of uppercase letters among alphabetic characters
    uppercase_ratio: float = 0.6

    def __post_init__(self):
        """Validate thresholds."""
        if self.min_length < 0 or self.max_length < self.min_length:
            raise ConfigurationError(
                f"heading length bounds are inconsistent: "
                f"min_length={self.min_length}, max_length={self.max_length}"
            )
        if self.max_words < 1:
            raise ConfigurationError(f"max_words must be >= 1, got {self.max_words}")
        if not 0.0 <= self.uppercase_ratio <= 1.0:
            raise ConfigurationError(
                f"uppercase_ratio must be between 0.0 and 1.0, got {self.uppercase_ratio}"
            )


@dataclass(frozen=True)
class AnalysisConfig:
    """Connection settings for the summarization/chat service."""

    base_url: str = "http://localhost:11434"
    model: str = "llama3.1:latest"
    max_chars: int = 20000  # Leading slice of the raw text sent for analysis
    timeout: int = 120
    temperature: float = 0.2
    output_tokens: int = 512

    def __post_init__(self):
        """Validate configuration."""
        if self.max_chars < 1:
            raise ConfigurationError(f"max_chars must be >= 1, got {self.max_chars}")
        if self.timeout < 1:
            raise ConfigurationError(f"timeout must be >= 1, got {self.timeout}")

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        return cls(
            base_url=os.environ.get("HYPERREAD_ANALYSIS_URL", cls.base_url),
            model=os.environ.get("HYPERREAD_ANALYSIS_MODEL", cls.model),
            max_chars=_int("HYPERREAD_ANALYSIS_MAX_CHARS", cls.max_chars),
            timeout=_int("HYPERREAD_ANALYSIS_TIMEOUT", cls.timeout),
        )


@dataclass
class ReaderConfig:
    """
    Configuration for a reading session.

    All options have sensible defaults. Create a config only
    if you need to customize behavior.

    Example:
        >>> config = ReaderConfig(wpm=450, mode="technical")
        >>> session = hyperread.ReaderSession(config)
    """

    # Pacing
    wpm: float = 300
    mode: Literal["normal", "technical"] = "normal"
    min_delay_ms: float = 10.0  # Floor for every scheduled delay

    # Extraction
    line_tolerance: float = 2.0
    heading: HeadingThresholds = field(default_factory=HeadingThresholds)

    # Session behavior
    technical_on_pdf_load: bool = True
    page_scale: float | Literal["fit"] = "fit"

    # Summarization/chat service
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)

    def __post_init__(self):
        """Validate configuration."""
        validate_wpm(self.wpm)

        valid_modes = ("normal", "technical")
        if self.mode not in valid_modes:
            raise ConfigurationError(f"mode must be one of {valid_modes}, got {self.mode!r}")

        if not math.isfinite(self.min_delay_ms) or self.min_delay_ms <= 0:
            raise ConfigurationError(f"min_delay_ms must be positive, got {self.min_delay_ms}")

        if self.line_tolerance < 0:
            raise ConfigurationError(
                f"line_tolerance must be >= 0, got {self.line_tolerance}"
            )

        if self.page_scale != "fit" and not (
            isinstance(self.page_scale, (int, float)) and self.page_scale > 0
        ):
            raise ConfigurationError(
                f"page_scale must be 'fit' or a positive number, got {self.page_scale!r}"
            )


def validate_wpm(wpm: float) -> float:
    """Return wpm unchanged, or raise ConfigurationError if it is unusable.

    Fractional rates are kept as given.
    """
    if isinstance(wpm, bool) or not isinstance(wpm, (int, float)) or not math.isfinite(wpm):
        raise ConfigurationError(f"wpm must be a finite number, got {wpm!r}")
    if not MIN_WPM <= wpm <= MAX_WPM:
        raise ConfigurationError(f"wpm must be between {MIN_WPM} and {MAX_WPM}, got {wpm}")
    return wpm
