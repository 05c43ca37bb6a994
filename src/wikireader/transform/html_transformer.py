"""Article markup transformation.

One parse, five passes in a fixed order, one serialization:

1. strip non-content (edit-section links, print-only blocks)
2. links (before images: image links are special-cased by the image pass)
3. images
4. heading ids (before tables)
5. collapsible tables

The transformer keeps no state between calls; open tables are supplied per
call, so re-running on its own output with the same open set yields the same
markup.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection
from contextlib import suppress

from wikireader.model.reader_options import ReaderOptions
from wikireader.types import TransformResult

from .cleanup import strip_non_content
from .dom import parse, serialize
from .headings import assign_heading_ids, collect_sections
from .images import rewrite_images
from .links import rewrite_links
from .tables import collapse_tables

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, dict[str, int | str]], None] | None


def _safe_emit(on_progress: ProgressCallback, event: str, payload: dict[str, int | str]) -> None:
    if on_progress is None:
        return
    with suppress(Exception):
        on_progress(event, payload)


class HtmlTransformer:
    def __init__(
        self,
        options: ReaderOptions | None = None,
        on_progress: ProgressCallback = None,
    ) -> None:
        self.options = options or ReaderOptions()
        self.on_progress = on_progress

    def transform(self, document: str | None, open_table_ids: Collection[str] = frozenset()) -> str:
        return self.transform_with_report(document, open_table_ids).html

    def transform_with_report(
        self, document: str | None, open_table_ids: Collection[str] = frozenset()
    ) -> TransformResult:
        """Transform markup and return it with the records derived along the way."""

        options = self.options
        _safe_emit(self.on_progress, "transform:start", {"length": len(document or "")})
        soup = parse(document or "")

        removed = strip_non_content(soup, options.strip_selectors)
        self._emit_pass("strip", removed)

        links = rewrite_links(soup, options)
        self._emit_pass("links", len(links))

        images = rewrite_images(soup, options)
        self._emit_pass("images", len(images))

        headings = assign_heading_ids(soup)
        self._emit_pass("headings", headings)

        tables = collapse_tables(soup, open_table_ids, options)
        self._emit_pass("tables", len(tables))

        sections = collect_sections(soup)
        html = serialize(soup)
        logger.debug(
            "Transformed document: %d links, %d images, %d tables, %d sections",
            len(links),
            len(images),
            len(tables),
            len(sections),
        )
        _safe_emit(self.on_progress, "transform:done", {"length": len(html)})
        return TransformResult(
            html=html, images=images, links=links, tables=tables, sections=sections
        )

    def _emit_pass(self, name: str, count: int) -> None:
        _safe_emit(self.on_progress, "transform:pass", {"name": name, "count": count})


def transform_html(
    document: str | None,
    open_table_ids: Collection[str] = frozenset(),
    options: ReaderOptions | None = None,
) -> str:
    """Convenience wrapper around ``HtmlTransformer(options).transform``."""

    return HtmlTransformer(options).transform(document, open_table_ids)
