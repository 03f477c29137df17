"""
Line reconstruction from positioned text fragments.

Fragments on the same visual row can sit on slightly different baselines
because of font metrics; a small y tolerance absorbs that without merging
distinct rows.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hyperread.readers.pdf_reader import TextFragment

LINE_TOLERANCE = 2.0

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Line:
    """A reconstructed visual line."""

    text: str
    height: float


@dataclass
class _OpenLine:
    y: float
    height: float
    fragments: list[TextFragment] = field(default_factory=list)


def reconstruct_lines(
    fragments: Iterable[TextFragment],
    tolerance: float = LINE_TOLERANCE,
) -> list[Line]:
    """Group a page's fragments into lines, top of page first.

    A fragment joins the first existing line whose y is within
    ``tolerance`` of its own; otherwise it opens a new line. A line keeps
    the y of the fragment that opened it and the largest fragment height
    seen.

    Args:
        fragments: Unordered fragments for one page.
        tolerance: Maximum baseline difference for the same line.

    Returns:
        Lines in reading order. Lines whose text is empty are kept so
        callers see every row; the classifier ignores them.
    """
    ordered = sorted(fragments, key=lambda f: (-f.y, f.x))

    lines: list[_OpenLine] = []
    for fragment in ordered:
        height = fragment.height or 0.0
        existing = next((line for line in lines if abs(line.y - fragment.y) <= tolerance), None)
        if existing is not None:
            existing.fragments.append(fragment)
            existing.height = max(existing.height, height)
        else:
            lines.append(_OpenLine(y=fragment.y, height=height, fragments=[fragment]))

    result = []
    for line in lines:
        parts = sorted(line.fragments, key=lambda f: f.x)
        text = _WHITESPACE.sub(" ", " ".join(f.text for f in parts)).strip()
        result.append(Line(text=text, height=line.height))
    return result
