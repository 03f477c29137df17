"""
Structure classification for reconstructed lines.

Rules are evaluated in a fixed order and the first one that returns a
classification wins:

1. ReferenceLineRule: "Figure N" / "Fig. N" / "Table N" / "Tab. N"
2. HeadingRule: short line that is visually larger or distinctly styled
3. Anything else is body text (no skim-map entry)

The heading constants come from HeadingThresholds and are empirically
tuned, not derived.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hyperread.config import HeadingThresholds
from hyperread.models import MapItem, MapItemType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hyperread.extractors.lines import Line

# Searched anywhere in a line; group 2 is the label ("3", "1a")
REFERENCE_LINE = re.compile(r"(Figure|Fig\.|Table|Tab\.)\s*([0-9]+[a-z]?)", re.IGNORECASE)

_TITLE_CUE = re.compile(r"^[A-Z][A-Za-z0-9]")


@dataclass(frozen=True)
class HeightStats:
    """Fragment-height distribution for one page."""

    median: float = 0.0
    p75: float = 0.0
    p90: float = 0.0

    @classmethod
    def from_heights(cls, heights: Sequence[float]) -> HeightStats:
        """Nearest-rank percentiles over positive heights.

        Uses the element at floor(n * q) of the sorted heights, so the
        median of an even-sized page is the upper middle value.
        """
        values = sorted(h for h in heights if h and h > 0)
        if not values:
            return cls()
        n = len(values)
        return cls(
            median=values[n // 2],
            p75=values[int(n * 0.75)],
            p90=values[int(n * 0.9)],
        )


@dataclass(frozen=True)
class Classification:
    """A skim-map entry plus the figure/table label it introduces, if any."""

    item: MapItem
    label: str | None = None


class ClassificationRule(ABC):
    """Abstract base for line classification rules."""

    name: str = "base"

    @abstractmethod
    def classify(self, line: Line, stats: HeightStats, page: int) -> Classification | None:
        """Return a classification, or None to let the next rule decide."""
        pass


class ReferenceLineRule(ClassificationRule):
    """Lines mentioning a figure or table become figure/table entries."""

    name = "reference"

    def classify(self, line: Line, stats: HeightStats, page: int) -> Classification | None:
        match = REFERENCE_LINE.search(line.text)
        if not match:
            return None

        keyword, label = match.groups()
        item_type = MapItemType.TABLE if keyword.lower().startswith("tab") else MapItemType.FIGURE
        return Classification(item=MapItem(item_type, line.text, page), label=label)


class HeadingRule(ClassificationRule):
    """Short lines that stand out by size, capitalization or title case.

    A line must pass the length/word gate, then any one of the size or
    style cues in ``cues()`` is enough.
    """

    name = "heading"

    def __init__(self, thresholds: HeadingThresholds | None = None):
        """Initialize heading rule.

        Args:
            thresholds: Tunable constants (defaults reproduce the
                literal values).
        """
        self.thresholds = thresholds or HeadingThresholds()

    def classify(self, line: Line, stats: HeightStats, page: int) -> Classification | None:
        if not self.is_heading(line, stats):
            return None
        return Classification(item=MapItem(MapItemType.HEADING, line.text, page))

    def is_heading(self, line: Line, stats: HeightStats) -> bool:
        """Apply the length gate, then the cue predicates in order."""
        t = self.thresholds
        text = line.text
        if not t.min_length <= len(text) <= t.max_length:
            return False
        if len(text.split()) > t.max_words:
            return False
        return any(cue(line, stats) for _, cue in self.cues())

    def cues(self):
        """Ordered (name, predicate) pairs; any match makes a heading."""
        t = self.thresholds
        return (
            ("at_p90", lambda line, s: line.height >= s.p90),
            (
                "at_p75_and_larger",
                lambda line, s: line.height >= s.p75
                and line.height >= s.median * t.p75_median_ratio,
            ),
            (
                "much_larger",
                lambda line, s: line.height >= s.median
                and line.height >= s.median * t.median_ratio,
            ),
            (
                "uppercase",
                lambda line, s: _uppercase_ratio(line.text) > t.uppercase_ratio
                and line.height >= s.median,
            ),
            ("title_cue", lambda line, s: bool(_TITLE_CUE.match(line.text))),
        )


def _uppercase_ratio(text: str) -> float:
    letters = [c for c in text if "A" <= c <= "Z" or "a" <= c <= "z"]
    upper = sum(1 for c in letters if c.isupper())
    return upper / max(len(letters), 1)


class StructureClassifier:
    """Runs the ordered rules over a page's lines.

    Usage:
        classifier = StructureClassifier()
        for result in classifier.classify_page(lines, stats, page=3):
            print(result.item.type, result.item.text, result.label)
    """

    def __init__(
        self,
        *,
        rules: Sequence[ClassificationRule] | None = None,
        thresholds: HeadingThresholds | None = None,
    ):
        """Initialize the classifier.

        Args:
            rules: Ordered rules (default: reference, then heading).
            thresholds: Heading thresholds for the default HeadingRule.
        """
        if rules is None:
            rules = (ReferenceLineRule(), HeadingRule(thresholds))
        self.rules = tuple(rules)

    def classify_line(self, line: Line, stats: HeightStats, page: int) -> Classification | None:
        """First matching rule wins; None means body text."""
        if not line.text:
            return None
        for rule in self.rules:
            result = rule.classify(line, stats, page)
            if result is not None:
                return result
        return None

    def classify_page(
        self, lines: Sequence[Line], stats: HeightStats, page: int
    ) -> list[Classification]:
        """Classify every line of a page, in line order."""
        results = []
        for line in lines:
            result = self.classify_line(line, stats, page)
            if result is not None:
                results.append(result)
        return results
