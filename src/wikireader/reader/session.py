"""Headless reading session.

Owns the state the transformer is stateless about: which tables are open,
which images have loaded, the current article, the navigation history and
the error shown when a fetch fails. Clicks on transformed markup are routed
through ``dispatch_click`` by their data attributes, the same way a single
delegated listener would.

Fetches cannot be cancelled. Each request takes a sequence number and a
response is applied only if its number is still the latest issued.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

from wikireader.fetch.urls import build_article_url
from wikireader.fetch.wiki_api import ArticleFetchError
from wikireader.model.article import Article
from wikireader.model.reader_options import ReaderOptions
from wikireader.navigation.history import NavigationHistory, NoHistoryError
from wikireader.transform.html_transformer import HtmlTransformer
from wikireader.types import ArticleFetcher, SessionStore

logger = logging.getLogger(__name__)

# Attributes of the clicked element and its ancestors, innermost first
ClickPath = Sequence[Mapping[str, str]]


class ClickAction(Enum):
    NONE = "none"
    REFRESH_IMAGE = "refresh-image"
    OPEN_IMAGE = "open-image"
    NAVIGATE = "navigate"
    TOGGLE_TABLE = "toggle-table"


@dataclass(frozen=True)
class ClickOutcome:
    action: ClickAction
    target: str | None = None


class RecoveryAction(Enum):
    GO_BACK = "go-back"
    VIEW_SOURCE = "view-source"
    RESET = "reset"


@dataclass(frozen=True)
class ErrorState:
    message: str
    article_title: str | None = None
    source_url: str | None = None
    can_go_back: bool = False

    @property
    def actions(self) -> list[RecoveryAction]:
        actions: list[RecoveryAction] = []
        if self.can_go_back:
            actions.append(RecoveryAction.GO_BACK)
        if self.source_url:
            actions.append(RecoveryAction.VIEW_SOURCE)
        actions.append(RecoveryAction.RESET)
        return actions


@dataclass
class ImageState:
    loaded: bool = False
    failed: bool = False
    refreshes: int = 0


def _flag(attrs: Mapping[str, str], name: str) -> bool:
    return attrs.get(name) == "true"


@dataclass
class _State:
    article: Article | None = None
    error: ErrorState | None = None
    open_table_ids: set[str] = field(default_factory=set)
    images: dict[str, ImageState] = field(default_factory=dict)


class ReadingSession:
    def __init__(
        self,
        fetcher: ArticleFetcher,
        store: SessionStore,
        options: ReaderOptions | None = None,
        transformer: HtmlTransformer | None = None,
    ) -> None:
        self.options = options or ReaderOptions()
        self.fetcher = fetcher
        self.store = store
        self.transformer = transformer or HtmlTransformer(self.options)
        self.history: NavigationHistory | None = None
        self._state = _State()
        self._sequence = itertools.count(1)
        self._latest = 0

    # -- state -----------------------------------------------------------

    @property
    def article(self) -> Article | None:
        return self._state.article

    @property
    def error(self) -> ErrorState | None:
        return self._state.error

    @property
    def open_table_ids(self) -> frozenset[str]:
        return frozenset(self._state.open_table_ids)

    def can_go_back(self) -> bool:
        return self.history is not None and self.history.can_go_back()

    def render(self) -> str:
        """Transformed markup of the current article with the current open tables."""

        if self._state.article is None:
            return ""
        return self.transformer.transform(
            self._state.article.html_content, self._state.open_table_ids
        )

    # -- delegated click handling ---------------------------------------

    def dispatch_click(self, path: ClickPath) -> ClickOutcome:
        """Route a click by the data attributes along the clicked element's path."""

        for attrs in path:
            if _flag(attrs, "data-refresh-image"):
                target = attrs.get("data-target-id")
                if target:
                    self.refresh_image(target)
                    return ClickOutcome(ClickAction.REFRESH_IMAGE, target)
                return ClickOutcome(ClickAction.NONE)

        image_id = next((a["data-image-id"] for a in path if a.get("data-image-id")), None)
        in_image_link = any(_flag(a, "data-image-link") for a in path)
        if image_id is not None or in_image_link:
            if image_id is not None and self.can_open_modal(image_id):
                return ClickOutcome(ClickAction.OPEN_IMAGE, image_id)
            # Image links never navigate, even before the image has loaded
            if in_image_link:
                return ClickOutcome(ClickAction.NONE)

        for attrs in path:
            if _flag(attrs, "data-wiki-link") and attrs.get("data-article-title"):
                return ClickOutcome(ClickAction.NAVIGATE, attrs["data-article-title"])

        for attrs in path:
            table_id = attrs.get("data-table-id")
            if table_id:
                self.toggle_table(table_id)
                return ClickOutcome(ClickAction.TOGGLE_TABLE, table_id)

        return ClickOutcome(ClickAction.NONE)

    def toggle_table(self, table_id: str) -> bool:
        """Flip a table's open state; returns the new state."""

        open_ids = self._state.open_table_ids
        if table_id in open_ids:
            open_ids.discard(table_id)
            return False
        open_ids.add(table_id)
        return True

    # -- image state -----------------------------------------------------

    def _image(self, image_id: str) -> ImageState:
        return self._state.images.setdefault(image_id, ImageState())

    def mark_image_loaded(self, image_id: str) -> None:
        state = self._image(image_id)
        state.loaded = True
        state.failed = False

    def mark_image_failed(self, image_id: str) -> None:
        state = self._image(image_id)
        state.loaded = False
        state.failed = True

    def can_open_modal(self, image_id: str) -> bool:
        state = self._state.images.get(image_id)
        return state is not None and state.loaded

    def show_refresh(self, image_id: str) -> bool:
        state = self._state.images.get(image_id)
        return state is not None and state.failed

    def refresh_image(self, image_id: str, src: str | None = None) -> str | None:
        """Record a reload request; returns a cache-busting src when one is given."""

        state = self._image(image_id)
        state.refreshes += 1
        state.failed = False
        if src is None:
            return None
        sep = "&" if "?" in src else "?"
        return f"{src}{sep}refresh={state.refreshes}"

    # -- navigation --------------------------------------------------------

    def _begin_request(self) -> int:
        self._latest = next(self._sequence)
        return self._latest

    def _is_stale(self, sequence: int) -> bool:
        if sequence != self._latest:
            logger.info("Discarding stale response %d (latest is %d)", sequence, self._latest)
            return True
        return False

    def _apply_article(self, sequence: int, article: Article) -> Article | None:
        if self._is_stale(sequence):
            return None
        self._state = _State(article=article)
        if self.history is None:
            self.history = NavigationHistory.load(
                self.store, article.title, key=self.options.history_key
            )
        else:
            self.history.visit(article.title)
        return article

    def _apply_error(self, sequence: int, exc: Exception, title: str | None) -> None:
        if self._is_stale(sequence):
            return
        if isinstance(exc, ArticleFetchError) and exc.title:
            title = exc.title
        logger.warning("Article load failed: %s", exc)
        self._state.error = ErrorState(
            message=str(exc) or "Failed to fetch article",
            article_title=title,
            source_url=build_article_url(title, self.options) if title else None,
            can_go_back=self.can_go_back(),
        )

    def load_article(self, source_url: str, title: str | None = None) -> Article | None:
        """Fetch and show an article; returns None when it failed or was superseded."""

        sequence = self._begin_request()
        self._state.error = None
        try:
            article = self.fetcher.fetch_article(source_url)
        except ArticleFetchError as exc:
            self._apply_error(sequence, exc, title)
            return None
        return self._apply_article(sequence, article)

    async def navigate(self, title: str) -> Article | None:
        """Fetch an article by title off the event loop thread."""

        source_url = build_article_url(title, self.options)
        sequence = self._begin_request()
        self._state.error = None
        try:
            article = await asyncio.to_thread(self.fetcher.fetch_article, source_url)
        except ArticleFetchError as exc:
            self._apply_error(sequence, exc, title)
            return None
        return self._apply_article(sequence, article)

    def go_back(self) -> Article | None:
        """Return to the previous article; callers gate on ``can_go_back()``."""

        if self.history is None:
            raise NoHistoryError("No navigation history yet")
        title = self.history.go_back()
        return self.load_article(build_article_url(title, self.options), title)

    def reset(self) -> None:
        """Back to the empty state; history is kept for the session."""

        self._begin_request()
        self._state = _State()


__all__ = [
    "ClickAction",
    "ClickOutcome",
    "ErrorState",
    "ImageState",
    "ReadingSession",
    "RecoveryAction",
]
