from __future__ import annotations

import logging
from collections.abc import Iterable

from bs4 import BeautifulSoup, NavigableString, Tag

logger = logging.getLogger(__name__)


def _is_blank(node: object) -> bool:
    return isinstance(node, NavigableString) and not node.strip()


def _remove(el: Tag) -> None:
    # Drop one of the blank strings around the element so the gap does not
    # serialize as a doubled separator that a reparse would collapse
    if _is_blank(el.previous_sibling) and _is_blank(el.next_sibling):
        el.next_sibling.extract()
    el.decompose()


def strip_non_content(soup: BeautifulSoup, selectors: Iterable[str]) -> int:
    """Remove edit-section markers, print-only blocks and similar non-content.

    Returns the number of elements removed. An invalid selector is logged and
    skipped.
    """

    removed = 0
    for selector in selectors:
        try:
            matches = soup.select(selector)
        except Exception as exc:
            logger.warning("Skipping invalid strip selector %r: %s", selector, exc)
            continue
        for el in matches:
            # Nested matches are already gone with their ancestor
            if el.decomposed:
                continue
            _remove(el)
            removed += 1
    if removed:
        soup.smooth()
    return removed
