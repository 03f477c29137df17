"""
Chunk tokenization.

Splits page text on whitespace and merges adjacent tokens that read as a
single unit during RSVP display: "50 mg", "Fig. 3", "$ 100".

The merge unit whitelist is narrower than the unit pattern used for
pacing (no Hz, V, A, ...).
"""

from __future__ import annotations

import re

from hyperread.models import Chunk

MERGE_UNITS = re.compile(r"^(mg|kg|cm|%|mm|s)$", re.IGNORECASE)
REFERENCE_KEYWORD = re.compile(r"^(Fig\.|Figure|Table|Tab\.|Eq\.|Equation)$", re.IGNORECASE)
CURRENCY_SYMBOL = re.compile(r"^[$€£]$")

# Leading numeric prefix, the way a lenient float parse reads "3.5", "10,000" or "12mg"
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)")


def parses_as_number(token: str) -> bool:
    """Whether the token starts with a number once thousands separators are dropped."""
    return bool(_NUMBER_PREFIX.match(token.replace(",", "")))


def should_merge(current: str, following: str) -> bool:
    """Whether ``current`` and ``following`` form one display unit."""
    if parses_as_number(current) and MERGE_UNITS.match(following):
        return True
    if REFERENCE_KEYWORD.match(current):
        return True
    return bool(CURRENCY_SYMBOL.match(current))


def tokenize_page(text: str, page: int) -> list[Chunk]:
    """Split one page's text into chunks tagged with ``page``.

    Example:
        >>> [c.text for c in tokenize_page("Fig. 3 shows 10 mg of X", 1)]
        ['Fig. 3', 'shows', '10 mg', 'of', 'X']
    """
    tokens = text.split()
    chunks = []

    i = 0
    while i < len(tokens):
        current = tokens[i]
        if i + 1 < len(tokens) and should_merge(current, tokens[i + 1]):
            chunks.append(Chunk(f"{current} {tokens[i + 1]}", page))
            i += 2
        else:
            chunks.append(Chunk(current, page))
            i += 1

    return chunks


def tokenize_plain_text(text: str) -> list[Chunk]:
    """Simplified path for pasted text: one page-1 chunk per word."""
    return [Chunk(word, 1) for word in text.split()]
