"""
Structure extraction module.

Per page, the pipeline is:
- reconstruct_lines: fragments -> visual lines
- StructureClassifier: lines -> skim-map entries and figure/table labels
- tokenize_page: page text -> reading chunks
"""

from hyperread.extractors.classifier import (
    REFERENCE_LINE,
    Classification,
    ClassificationRule,
    HeadingRule,
    HeightStats,
    ReferenceLineRule,
    StructureClassifier,
)
from hyperread.extractors.lines import LINE_TOLERANCE, Line, reconstruct_lines
from hyperread.extractors.tokenizer import (
    parses_as_number,
    should_merge,
    tokenize_page,
    tokenize_plain_text,
)

__all__ = [
    # Lines
    "Line",
    "LINE_TOLERANCE",
    "reconstruct_lines",
    # Classification
    "StructureClassifier",
    "ClassificationRule",
    "ReferenceLineRule",
    "HeadingRule",
    "Classification",
    "HeightStats",
    "REFERENCE_LINE",
    # Tokenization
    "tokenize_page",
    "tokenize_plain_text",
    "should_merge",
    "parses_as_number",
]
