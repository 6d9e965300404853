"""Read-only view over a captured page."""

import logging
import re
from functools import cached_property
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Comment, Doctype

from .base import PageSnapshot

logger = logging.getLogger(__name__)

# Elements whose text never shows up in the rendered page
_HIDDEN_TAGS = {"script", "style", "noscript", "template", "head", "title"}


def _clean(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


class PageDocument:
    """Parsed page snapshot supporting CSS lookups and whole-text scans.

    The snapshot itself is never modified; lookups only read the parsed tree.
    """

    def __init__(self, snapshot: PageSnapshot):
        self.snapshot = snapshot
        self._soup = BeautifulSoup(snapshot.html or "", "html.parser")

    @property
    def url(self) -> str:
        return self.snapshot.url

    @cached_property
    def text(self) -> str:
        """Visible text, one line per text node."""
        if self.snapshot.text is not None:
            return self.snapshot.text

        root = self._soup.body or self._soup
        lines = []
        for node in root.find_all(string=True):
            if isinstance(node, (Comment, Doctype)):
                continue
            if any(parent.name in _HIDDEN_TAGS for parent in node.parents):
                continue
            line = _clean(str(node))
            if line:
                lines.append(line)
        return "\n".join(lines)

    def _select(self, selector: str, limit: Optional[int] = None) -> list:
        try:
            if limit == 1:
                found = self._soup.select_one(selector)
                return [found] if found is not None else []
            return self._soup.select(selector)
        except Exception as e:
            # soupsieve raises on selectors it cannot compile
            logger.warning(f"Skipping invalid selector {selector!r}: {e}")
            return []

    def select_text(self, selector: str) -> Optional[str]:
        """Text of the first element matching the selector, if non-empty."""
        for element in self._select(selector, limit=1):
            text = _clean(element.get_text(" "))
            if text:
                return text
        return None

    def select_all_text(self, selectors: List[str]) -> List[str]:
        """Texts of every element matching any selector, in document order."""
        matched = {}
        for selector in selectors or []:
            for element in self._select(selector):
                matched.setdefault(id(element), element)
        if not matched:
            return []

        # an element matched by several selectors is read once, in page order
        order = {id(element): i for i, element in enumerate(self._soup.find_all(True))}
        texts = []
        for element in sorted(matched.values(), key=lambda el: order[id(el)]):
            text = _clean(element.get_text(" "))
            if text:
                texts.append(text)
        return texts
