from __future__ import annotations

import pytest

from wikireader.transform.dom import classes, parse
from wikireader.transform.tables import collapse_tables


def _content(soup, table_id: str):  # type: ignore[no-untyped-def]
    return soup.find(attrs={"data-table-content": table_id})


def _header(soup, table_id: str):  # type: ignore[no-untyped-def]
    return soup.find(attrs={"data-table-id": table_id})


@pytest.mark.parametrize("marker", ["infobox", "sidebar", "navbox", "vertical-navbox", "metadata"])
def test_structural_tables_are_never_wrapped(marker: str) -> None:
    soup = parse(f'<table class="wikitable {marker}"><tr><td>x</td></tr></table>')
    records = collapse_tables(soup, {"table-0"})
    assert records == []
    assert soup.find(class_="collapsible-table-wrapper") is None
    assert "id" not in soup.table.attrs


def test_closed_table_by_default() -> None:
    soup = parse("<table><tr><td>x</td></tr></table>")
    (record,) = collapse_tables(soup, set())

    assert record.id == "table-0"
    assert record.is_open is False
    assert record.caption == "Table"
    content = _content(soup, "table-0")
    assert "hidden" in classes(content)
    header = _header(soup, "table-0")
    assert header["aria-expanded"] == "false"
    assert "closed" in classes(header.find(class_="collapsible-table-toggle"))
    assert content.table["id"] == "table-0"


def test_open_state_follows_membership_only() -> None:
    soup = parse(
        '<table id="a"><tr><td>1</td></tr></table><table id="b"><tr><td>2</td></tr></table>'
    )
    records = collapse_tables(soup, {"b"})
    assert {r.id: r.is_open for r in records} == {"a": False, "b": True}
    assert "hidden" in classes(_content(soup, "a"))
    assert "hidden" not in classes(_content(soup, "b"))
    assert _header(soup, "b")["aria-expanded"] == "true"


def test_caption_is_lifted_into_header() -> None:
    soup = parse("<table><caption> Cat  weights </caption><tr><td>4 kg</td></tr></table>")
    (record,) = collapse_tables(soup, set())
    assert record.caption == "Cat weights"
    assert soup.find("caption") is None
    assert _header(soup, "table-0").find(class_="collapsible-table-tab").get_text() == "Cat weights"


def test_positional_ids_count_all_tables() -> None:
    soup = parse(
        '<table class="infobox"><tr><td>i</td></tr></table>'
        "<table><tr><td>content</td></tr></table>"
    )
    (record,) = collapse_tables(soup, set())
    assert record.id == "table-1"


def test_header_carries_no_inline_behavior() -> None:
    soup = parse("<table><tr><td>x</td></tr></table>")
    collapse_tables(soup, set())
    header = _header(soup, "table-0")
    assert not any(attr.lower().startswith("on") for attr in header.attrs)
    assert header["role"] == "button"
    assert header["aria-controls"] == "content-table-0"


def test_rerun_updates_state_without_rewrapping() -> None:
    soup = parse("<table><caption>Stats</caption><tr><td>x</td></tr></table>")
    collapse_tables(soup, set())
    again = parse(str(soup))
    (record,) = collapse_tables(again, {"table-0"})

    assert record.is_open is True
    assert record.caption == "Stats"
    assert len(again.find_all(class_="collapsible-table-wrapper")) == 1
    assert "hidden" not in classes(_content(again, "table-0"))


def test_positional_id_skips_authored_table_id() -> None:
    soup = parse(
        '<table id="table-1"><tr><td>a</td></tr></table>'
        "<table><tr><td>b</td></tr></table>"
    )
    records = collapse_tables(soup, {"table-1"})
    assert [r.id for r in records] == ["table-1", "table-1-2"]
    assert [r.is_open for r in records] == [True, False]
    assert len(soup.find_all(attrs={"data-table-id": "table-1"})) == 1


def test_positional_id_skips_heading_id() -> None:
    soup = parse('<h2 id="table-0">Table 0</h2><table><tr><td>a</td></tr></table>')
    records = collapse_tables(soup, set())
    assert records[0].id == "table-0-2"
    ids = [el["id"] for el in soup.find_all(id=True)]
    assert len(ids) == len(set(ids))
