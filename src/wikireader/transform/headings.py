from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from wikireader.ids import collect_ids, slugify, unique_id
from wikireader.types import Section

logger = logging.getLogger(__name__)

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
TOC_HEADING_TAGS = ["h2", "h3", "h4", "h5", "h6"]

FALLBACK_SLUG = "section"


def assign_heading_ids(soup: BeautifulSoup) -> int:
    """Give every heading without an id a slug of its text.

    Ids already present are authoritative and left alone. New slugs are made
    unique against every id in the tree. Returns the number of ids assigned.
    """

    used = collect_ids(el.get("id") for el in soup.find_all(id=True))
    assigned = 0
    for heading in soup.find_all(HEADING_TAGS):
        if heading.get("id"):
            continue
        try:
            base = slugify(heading.get_text()) or FALLBACK_SLUG
            heading["id"] = unique_id(base, used)
        except Exception as exc:
            logger.warning("Leaving <%s> without id: %s", heading.name, exc)
            continue
        assigned += 1
    logger.debug("Assigned %d heading ids", assigned)
    return assigned


def _level(heading: Tag) -> int:
    return int(heading.name[1]) - 1


def collect_sections(soup: BeautifulSoup) -> list[Section]:
    """Table of contents from h2-h6, in document order; headings without ids are skipped."""

    sections: list[Section] = []
    for heading in soup.find_all(TOC_HEADING_TAGS):
        hid = heading.get("id")
        if not isinstance(hid, str) or not hid:
            continue
        title = " ".join(heading.get_text().split())
        sections.append(Section(id=hid, title=title, level=_level(heading)))
    return sections
