"""Reader configuration.

Defaults target the English Wikipedia REST surface. Everything the
transformation passes and the fetch client need to know about the content
provider lives here so that no pass hard-codes a site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

DEFAULT_SITE_ORIGIN = "https://en.wikipedia.org"
DEFAULT_ARTICLE_PATH = "/wiki/"
DEFAULT_HISTORY_KEY = "articleHistory"

DEFAULT_STRIP_SELECTORS: tuple[str, ...] = (".mw-editsection", ".noprint")

DEFAULT_STRUCTURAL_TABLE_CLASSES: frozenset[str] = frozenset(
    {"infobox", "vertical-navbox", "navbox", "sidebar", "metadata"}
)

DEFAULT_SPECIAL_PREFIXES: frozenset[str] = frozenset(
    {"file", "category", "image", "special", "help", "template", "wikipedia"}
)


@dataclass
class ReaderOptions:
    """Configuration shared by the transformer, the fetch client and the session."""

    # Canonical site origin, no trailing slash
    site_origin: str = DEFAULT_SITE_ORIGIN

    # Path prefix of article pages, with leading and trailing slash
    article_path: str = DEFAULT_ARTICLE_PATH

    # CSS selectors removed before any other pass
    strip_selectors: tuple[str, ...] = DEFAULT_STRIP_SELECTORS

    # Tables carrying any of these classes are never collapsed
    structural_table_classes: frozenset[str] = field(
        default_factory=lambda: DEFAULT_STRUCTURAL_TABLE_CLASSES
    )

    # Namespace prefixes ("File:", "Category:", ...) that open on the source site
    special_prefixes: frozenset[str] = field(default_factory=lambda: DEFAULT_SPECIAL_PREFIXES)

    # Session store key for the navigation history
    history_key: str = DEFAULT_HISTORY_KEY

    # HTTP settings for the fetch client
    request_timeout: float = 10.0
    user_agent: str = "wikireader/0.1 (article reader)"

    @property
    def article_origin(self) -> str:
        return f"{self.site_origin}{self.article_path}"

    @classmethod
    def from_cli(
        cls,
        *,
        site: str = DEFAULT_SITE_ORIGIN,
        timeout: float = 10.0,
        history_key: str = DEFAULT_HISTORY_KEY,
    ) -> ReaderOptions:
        """Build ReaderOptions from CLI argument values.

        Raises:
            ValueError: If the site is not an absolute http(s) origin, the
                timeout is not positive, or the history key is empty
        """
        parsed = urlparse(site)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid site origin '{site}'. Expected e.g. {DEFAULT_SITE_ORIGIN}")
        if parsed.path not in ("", "/") or parsed.query or parsed.fragment:
            raise ValueError(f"Invalid site origin '{site}'. Origins carry no path or query")
        if timeout <= 0:
            raise ValueError(f"Invalid timeout {timeout}. Must be positive")
        if not history_key:
            raise ValueError("History key must not be empty")

        return cls(
            site_origin=f"{parsed.scheme}://{parsed.netloc}",
            request_timeout=timeout,
            history_key=history_key,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization/logging."""
        return {
            "site_origin": self.site_origin,
            "article_path": self.article_path,
            "strip_selectors": list(self.strip_selectors),
            "structural_table_classes": sorted(self.structural_table_classes),
            "special_prefixes": sorted(self.special_prefixes),
            "history_key": self.history_key,
            "request_timeout": self.request_timeout,
            "user_agent": self.user_agent,
        }


__all__ = [
    "DEFAULT_SITE_ORIGIN",
    "ReaderOptions",
]
