"""Ordered fallback lookup of a single field.

A field is located by trying a list of strategies in priority order and
taking the first non-empty result. Structural (CSS) lookups go before
whole-text pattern scans because they are anchored to a known location
on the page and misfire far less often.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Pattern, Union

from .document import PageDocument


@dataclass(frozen=True)
class SelectorStrategy:
    """Structural lookup: text of the first element matching a CSS selector."""
    selector: str

    def apply(self, document: PageDocument) -> Optional[str]:
        return document.select_text(self.selector)


@dataclass(frozen=True)
class PatternStrategy:
    """Whole-text scan: a regex group from the page's visible text.

    Matches are considered in order; the first whose group is non-empty
    and passes ``accept`` wins.
    """
    pattern: Pattern[str]
    group: int = 1
    accept: Optional[Callable[[str], bool]] = None

    def apply(self, document: PageDocument) -> Optional[str]:
        for match in self.pattern.finditer(document.text):
            value = (match.group(self.group) or "").strip()
            if not value:
                continue
            if self.accept is None or self.accept(value):
                return value
        return None


Strategy = Union[SelectorStrategy, PatternStrategy]


def selectors(css: Iterable[str]) -> List[SelectorStrategy]:
    """Build selector strategies from a list of CSS selectors."""
    return [SelectorStrategy(selector) for selector in css]


def pattern(
    regex: str,
    group: int = 1,
    flags: int = re.IGNORECASE,
    accept: Optional[Callable[[str], bool]] = None,
) -> PatternStrategy:
    """Build a pattern strategy; case-insensitive by default."""
    return PatternStrategy(re.compile(regex, flags), group=group, accept=accept)


def locate(document: PageDocument, strategies: Iterable[Strategy]) -> Optional[str]:
    """Return the first non-empty result of the strategies, in order."""
    for strategy in strategies:
        value = strategy.apply(document)
        if value and value.strip():
            return value.strip()
    return None
