"""
Document analysis via an external chat service.

Not required for playback: failures surface as placeholder results.
"""

from hyperread.analysis.service import (
    ANALYSIS_PLACEHOLDER,
    ANSWER_PLACEHOLDER,
    AnalysisService,
)

__all__ = [
    "AnalysisService",
    "ANALYSIS_PLACEHOLDER",
    "ANSWER_PLACEHOLDER",
]
