"""Collapsible tables.

Content tables are wrapped in a disclosure widget::

    <div class="collapsible-table-wrapper" id="wrapper-<id>">
      <div class="collapsible-table-header" data-table-id="<id>" ...>
        <span class="collapsible-table-tab">Caption</span>
        <span class="collapsible-table-toggle [closed]">svg</span>
      </div>
      <div class="collapsible-table-content [hidden]" data-table-content="<id>">
        <table id="<id>">...</table>
      </div>
    </div>

Open state comes only from the caller's open-table ids. Clicking the header is
handled by the display layer's delegated listener through ``data-table-id``.
"""

from __future__ import annotations

import logging
from collections.abc import Collection

from bs4 import BeautifulSoup, Tag

from wikireader.ids import collect_ids, table_id, unique_id
from wikireader.model.reader_options import ReaderOptions
from wikireader.types import TableRecord

from .dom import classes, fragment, has_class, toggle_class

logger = logging.getLogger(__name__)

WRAPPER_CLASS = "collapsible-table-wrapper"
HEADER_CLASS = "collapsible-table-header"
TAB_CLASS = "collapsible-table-tab"
TOGGLE_CLASS = "collapsible-table-toggle"
CONTENT_CLASS = "collapsible-table-content"

DEFAULT_CAPTION = "Table"

CHEVRON_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="16" height="16" viewBox="0 0 20 20" '
    'fill="currentColor" class="collapse-table-svg">'
    '<path fill-rule="evenodd" d="M5.293 7.293a1 1 0 011.414 0L10 10.586l3.293-3.293a1 1 0 '
    '111.414 1.414l-4 4a1 1 0 01-1.414 0l-4-4a1 1 0 010-1.414z" clip-rule="evenodd"></path>'
    "</svg>"
)


def is_structural(table: Tag, options: ReaderOptions) -> bool:
    return any(c in options.structural_table_classes for c in classes(table))


def _apply_open_state(header: Tag, content: Tag, is_open: bool) -> None:
    header["aria-expanded"] = "true" if is_open else "false"
    toggle = header.find(class_=TOGGLE_CLASS)
    if isinstance(toggle, Tag):
        toggle_class(toggle, "closed", not is_open)
    toggle_class(content, "hidden", not is_open)


def _lift_caption(table: Tag) -> str:
    caption = table.find("caption", recursive=False)
    if not isinstance(caption, Tag):
        return DEFAULT_CAPTION
    text = " ".join(caption.get_text().split()) or DEFAULT_CAPTION
    caption.decompose()
    return text


def _build_header(soup: BeautifulSoup, tid: str, label: str) -> Tag:
    header = soup.new_tag(
        "div",
        attrs={
            "class": HEADER_CLASS,
            "data-table-id": tid,
            "role": "button",
            "aria-controls": f"content-{tid}",
        },
    )
    tab = soup.new_tag("span", attrs={"class": TAB_CLASS})
    tab.string = label
    toggle = soup.new_tag("span", attrs={"class": TOGGLE_CLASS, "aria-hidden": "true"})
    toggle.append(fragment(CHEVRON_SVG))
    header.append(tab)
    header.append(toggle)
    return header


def _wrap(soup: BeautifulSoup, table: Tag, tid: str, is_open: bool) -> str:
    label = _lift_caption(table)
    wrapper = soup.new_tag("div", attrs={"class": WRAPPER_CLASS, "id": f"wrapper-{tid}"})
    header = _build_header(soup, tid, label)
    content = soup.new_tag(
        "div",
        attrs={"class": CONTENT_CLASS, "id": f"content-{tid}", "data-table-content": tid},
    )
    table.replace_with(wrapper)
    content.append(table)
    wrapper.append(header)
    wrapper.append(content)
    _apply_open_state(header, content, is_open)
    return label


def _refresh(content: Tag, is_open: bool) -> str:
    """Re-apply open state to an already wrapped table; returns its label."""

    wrapper = content.parent
    header = wrapper.find(class_=HEADER_CLASS, recursive=False) if isinstance(wrapper, Tag) else None
    if not isinstance(header, Tag):
        toggle_class(content, "hidden", not is_open)
        return DEFAULT_CAPTION
    _apply_open_state(header, content, is_open)
    tab = header.find(class_=TAB_CLASS)
    label = " ".join(tab.get_text().split()) if isinstance(tab, Tag) else ""
    return label or DEFAULT_CAPTION


def collapse_tables(
    soup: BeautifulSoup,
    open_table_ids: Collection[str],
    options: ReaderOptions | None = None,
) -> list[TableRecord]:
    """Wrap every non-structural table in a disclosure widget."""

    options = options or ReaderOptions()
    records: list[TableRecord] = []
    # Positional ids never reuse an id already in the tree
    used = collect_ids(el.get("id") for el in soup.find_all(id=True))
    for index, table in enumerate(soup.find_all("table")):
        if is_structural(table, options):
            continue
        try:
            existing = table.get("id")
            if isinstance(existing, str) and existing:
                tid = existing
            else:
                tid = unique_id(table_id(index), used)
                table["id"] = tid
            used.update((f"wrapper-{tid}", f"content-{tid}"))
            is_open = tid in open_table_ids
            if has_class(table.parent, CONTENT_CLASS):
                label = _refresh(table.parent, is_open)
            else:
                label = _wrap(soup, table, tid, is_open)
        except Exception as exc:
            logger.warning("Leaving table %d unwrapped: %s", index, exc)
            continue
        records.append(TableRecord(id=tid, is_open=is_open, caption=label))
    logger.debug(
        "Collapsed %d tables (%d open)", len(records), sum(1 for r in records if r.is_open)
    )
    return records
