"""Source URL helpers.

Accepted article URLs look like ``https://<lang>.wikipedia.org/wiki/<Title>``
or ``https://<lang>.wikipedia.org/w/index.php?title=<Title>``.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, quote, unquote, urlparse

from wikireader.model.reader_options import ReaderOptions

SOURCE_HOST_SUFFIX = "wikipedia.org"


@dataclass(frozen=True)
class WikiUrl:
    lang_code: str | None
    title: str | None
    is_valid: bool
    original_url: str


def is_valid_source_url(url: str, host_suffix: str = SOURCE_HOST_SUFFIX) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return False
    if not parsed.hostname.endswith(host_suffix):
        return False
    return parsed.path.startswith("/wiki/") or "/w/index.php" in parsed.path


def extract_title(url: str, host_suffix: str = SOURCE_HOST_SUFFIX) -> str | None:
    """Return the decoded article title of a source URL, or None."""

    if not is_valid_source_url(url, host_suffix):
        return None
    parsed = urlparse(url)
    if parsed.path.startswith("/wiki/"):
        # Titles may contain slashes ("AC/DC")
        title = unquote(parsed.path[len("/wiki/") :])
        return title or None
    if "/w/index.php" in parsed.path:
        values = parse_qs(parsed.query).get("title")
        return values[0] if values and values[0] else None
    return None


def parse_wiki_url(url: str) -> WikiUrl:
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return WikiUrl(lang_code=None, title=None, is_valid=False, original_url=url)
    labels = hostname.split(".")
    lang_code = None
    if hostname:
        lang_code = labels[0] if labels[0] not in ("www", "m") else "en"
    title = extract_title(url)
    return WikiUrl(lang_code=lang_code, title=title, is_valid=bool(title), original_url=url)


def build_article_url(title: str, options: ReaderOptions | None = None) -> str:
    options = options or ReaderOptions()
    return f"{options.article_origin}{quote(title.replace(' ', '_'), safe='')}"


__all__ = [
    "WikiUrl",
    "build_article_url",
    "extract_title",
    "is_valid_source_url",
    "parse_wiki_url",
]
