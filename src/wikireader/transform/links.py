"""Hyperlink classification and rewriting.

Decision table, first match wins:

1. ``<prefix>:...`` with a special namespace prefix -> special, opened on the
   source site under the article path
2. ``#...`` -> in-page anchor, unchanged
3. ``//host/...`` -> external (protocol-relative, resolved with https)
4. ``/wiki/<title>``, ``./<title>`` or ``/<title>`` without a colon -> internal
5. ``/...:...`` -> special, opened on the source site
6. no scheme and a colon -> special, opened under the article path
7. no scheme, no colon -> internal, the href is the title
8. anything else (http, https, mailto, ...) -> external
"""

from __future__ import annotations

import logging
import re
from urllib.parse import unquote

from bs4 import BeautifulSoup, Tag

from wikireader.model.reader_options import ReaderOptions
from wikireader.types import LinkKind, LinkRecord

from .dom import add_class, remove_class

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*:", re.IGNORECASE)

# Schemes that make an href absolute; "File:x.png" must not count as one
_URI_SCHEMES = frozenset(
    {"http", "https", "ftp", "ftps", "sftp", "mailto", "tel", "news", "irc", "ircs", "geo", "data"}
)

INTERNAL_LINK_CLASS = "wiki-internal-link"
NEW_CONTEXT_REL = "noopener noreferrer"


def has_scheme(href: str) -> bool:
    m = _SCHEME_RE.match(href)
    if not m:
        return False
    return m.group(0)[:-1].lower() in _URI_SCHEMES


def _title_from(remainder: str) -> str:
    # "Cat#Diet" -> "Cat"; "Caf%C3%A9" -> "Café"
    path = re.split(r"[#?]", remainder, maxsplit=1)[0]
    return unquote(path)


def _internal(remainder: str, options: ReaderOptions) -> LinkRecord | None:
    title = _title_from(remainder)
    if not title:
        return None
    return LinkRecord(
        href=f"{options.article_path}{remainder}",
        kind=LinkKind.INTERNAL_ARTICLE,
        article_title=title,
    )


def classify_href(href: str, options: ReaderOptions | None = None) -> LinkRecord:
    """Classify an href and compute its rewritten target."""

    options = options or ReaderOptions()
    article_path = options.article_path

    if ":" in href:
        prefix = href[: href.index(":")].lower()
        if prefix in options.special_prefixes:
            return LinkRecord(href=f"{options.article_origin}{href}", kind=LinkKind.SPECIAL_EXTERNAL)

    if href.startswith("#"):
        return LinkRecord(href=href, kind=LinkKind.IN_PAGE_ANCHOR)

    if href.startswith("//"):
        return LinkRecord(href=f"https:{href}", kind=LinkKind.EXTERNAL)

    if href.startswith(article_path):
        return _internal(href[len(article_path) :], options) or LinkRecord(href=href, kind=LinkKind.EXTERNAL)

    if href.startswith("./"):
        return _internal(href[2:], options) or LinkRecord(href=href, kind=LinkKind.EXTERNAL)

    if href.startswith("/"):
        if ":" in href:
            return LinkRecord(href=f"{options.site_origin}{href}", kind=LinkKind.SPECIAL_EXTERNAL)
        return _internal(href[1:], options) or LinkRecord(href=href, kind=LinkKind.EXTERNAL)

    if not has_scheme(href):
        if ":" in href:
            return LinkRecord(href=f"{options.article_origin}{href}", kind=LinkKind.SPECIAL_EXTERNAL)
        return _internal(href, options) or LinkRecord(href=href, kind=LinkKind.EXTERNAL)

    return LinkRecord(href=href, kind=LinkKind.EXTERNAL)


def _open_in_new_context(link: Tag, href: str) -> None:
    link["href"] = href
    link["target"] = "_blank"
    link["rel"] = NEW_CONTEXT_REL


def apply_link_record(link: Tag, original_href: str, record: LinkRecord) -> None:
    """Write the classification of one anchor back onto the element."""

    if record.kind is LinkKind.IN_PAGE_ANCHOR:
        return

    if record.kind is LinkKind.INTERNAL_ARTICLE:
        if "data-original-href" not in link.attrs:
            link["data-original-href"] = original_href
        link["href"] = record.href
        link["data-wiki-link"] = "true"
        link["data-article-title"] = record.article_title or ""
        for attr in ("target", "rel"):
            if attr in link.attrs:
                del link[attr]
        add_class(link, INTERNAL_LINK_CLASS)
        return

    if record.kind is LinkKind.SPECIAL_EXTERNAL and "data-original-href" not in link.attrs:
        link["data-original-href"] = original_href

    # Special and external targets leave the reading surface
    for attr in ("data-wiki-link", "data-article-title"):
        if attr in link.attrs:
            del link[attr]
    remove_class(link, INTERNAL_LINK_CLASS)
    _open_in_new_context(link, record.href)


def rewrite_links(soup: BeautifulSoup, options: ReaderOptions | None = None) -> list[LinkRecord]:
    """Classify and rewrite every anchor with an href, in document order."""

    options = options or ReaderOptions()
    records: list[LinkRecord] = []
    for link in soup.find_all("a"):
        href = link.get("href")
        if not isinstance(href, str) or not href.strip():
            continue
        href = href.strip()
        try:
            record = classify_href(href, options)
        except Exception as exc:
            logger.warning("Unclassifiable link %r treated as external: %s", href, exc)
            record = LinkRecord(href=href, kind=LinkKind.EXTERNAL)
        try:
            apply_link_record(link, href, record)
        except Exception as exc:
            logger.warning("Leaving link %r unmodified: %s", href, exc)
            continue
        records.append(record)
    logger.debug("Rewrote %d links", len(records))
    return records
