from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover - typing
    from wikireader.model.article import Article


class SessionStore(Protocol):
    """Minimal protocol for the session-scoped key/value store."""

    def get(self, key: str) -> str | None:  # pragma: no cover - typing
        ...

    def set(self, key: str, value: str) -> None:  # pragma: no cover - typing
        ...


class ArticleFetcher(Protocol):
    def fetch_article(self, source_url: str) -> Article:  # pragma: no cover - typing
        ...


class LinkKind(Enum):
    INTERNAL_ARTICLE = "internal-article"
    SPECIAL_EXTERNAL = "special-external"
    IN_PAGE_ANCHOR = "in-page-anchor"
    EXTERNAL = "external"


@dataclass(frozen=True)
class ImageRecord:
    """One rewritten image.

    - id: positional id ("img-<n>") unless the markup already carried one
    - original_src: src before normalization
    - resolved_src: absolute src written back to the element
    - can_open_modal: always False from the transformer; the display layer
      flips it once the image has loaded
    """

    id: str
    original_src: str
    resolved_src: str
    can_open_modal: bool = False


@dataclass(frozen=True)
class LinkRecord:
    href: str
    kind: LinkKind
    article_title: str | None = None


@dataclass(frozen=True)
class TableRecord:
    id: str
    is_open: bool
    caption: str


@dataclass(frozen=True)
class Section:
    """Table of contents entry; level is the heading rank minus one (h2 -> 1)."""

    id: str
    title: str
    level: int


@dataclass(frozen=True)
class TransformResult:
    html: str
    images: list[ImageRecord] = field(default_factory=list)
    links: list[LinkRecord] = field(default_factory=list)
    tables: list[TableRecord] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
