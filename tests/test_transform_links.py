from __future__ import annotations

import pytest

from wikireader.model.reader_options import ReaderOptions
from wikireader.transform.dom import parse
from wikireader.transform.links import classify_href, has_scheme, rewrite_links
from wikireader.types import LinkKind


class TestClassifyHref:
    def test_wiki_path_is_internal(self) -> None:
        record = classify_href("/wiki/Cat")
        assert record.kind is LinkKind.INTERNAL_ARTICLE
        assert record.article_title == "Cat"
        assert record.href == "/wiki/Cat"

    def test_special_prefix_opens_on_source_site(self) -> None:
        record = classify_href("File:Example.png")
        assert record.kind is LinkKind.SPECIAL_EXTERNAL
        assert record.href == "https://en.wikipedia.org/wiki/File:Example.png"

    def test_special_prefix_is_case_insensitive(self) -> None:
        assert classify_href("CATEGORY:Cats").kind is LinkKind.SPECIAL_EXTERNAL

    def test_anchor_unchanged(self) -> None:
        record = classify_href("#History")
        assert record.kind is LinkKind.IN_PAGE_ANCHOR
        assert record.href == "#History"

    def test_absolute_url_is_external(self) -> None:
        record = classify_href("https://example.com")
        assert record.kind is LinkKind.EXTERNAL
        assert record.href == "https://example.com"

    def test_bare_title_is_internal(self) -> None:
        record = classify_href("Dog")
        assert record.kind is LinkKind.INTERNAL_ARTICLE
        assert record.article_title == "Dog"
        assert record.href == "/wiki/Dog"

    def test_relative_dot_slash_is_internal(self) -> None:
        record = classify_href("./Domestic_cat")
        assert record.kind is LinkKind.INTERNAL_ARTICLE
        assert record.article_title == "Domestic_cat"

    def test_bare_slash_without_colon_is_internal(self) -> None:
        record = classify_href("/Lion")
        assert record.kind is LinkKind.INTERNAL_ARTICLE
        assert record.article_title == "Lion"

    def test_slash_path_with_colon_is_special(self) -> None:
        record = classify_href("/w/index.php?title=Cat:Talk")
        assert record.kind is LinkKind.SPECIAL_EXTERNAL
        assert record.href == "https://en.wikipedia.org/w/index.php?title=Cat:Talk"

    def test_unknown_namespace_without_scheme_is_special(self) -> None:
        record = classify_href("Talk:Cat")
        assert record.kind is LinkKind.SPECIAL_EXTERNAL
        assert record.href == "https://en.wikipedia.org/wiki/Talk:Cat"

    def test_fragment_kept_in_href_not_in_title(self) -> None:
        record = classify_href("/wiki/Cat#Diet")
        assert record.article_title == "Cat"
        assert record.href == "/wiki/Cat#Diet"

    def test_percent_encoded_title_is_decoded(self) -> None:
        assert classify_href("./Caf%C3%A9").article_title == "Café"

    def test_protocol_relative_is_external(self) -> None:
        record = classify_href("//example.org/page")
        assert record.kind is LinkKind.EXTERNAL
        assert record.href == "https://example.org/page"

    def test_empty_title_falls_back_to_external(self) -> None:
        assert classify_href("/wiki/").kind is LinkKind.EXTERNAL

    def test_mailto_is_external(self) -> None:
        assert classify_href("mailto:someone@example.com").kind is LinkKind.EXTERNAL

    def test_custom_site(self) -> None:
        options = ReaderOptions(site_origin="https://de.wikipedia.org")
        assert classify_href("Datei:X.png", options).kind is LinkKind.SPECIAL_EXTERNAL
        assert (
            classify_href("File:X.png", options).href == "https://de.wikipedia.org/wiki/File:X.png"
        )


@pytest.mark.parametrize(
    ("href", "expected"),
    [("https://x.org", True), ("mailto:a@b", True), ("File:Cat.jpg", False), ("Cat", False)],
)
def test_has_scheme(href: str, expected: bool) -> None:
    assert has_scheme(href) is expected


def test_rewrite_links_sets_attribute_contract() -> None:
    soup = parse(
        '<p><a href="/wiki/Cat" target="_blank">cat</a>'
        '<a href="https://example.com">ext</a>'
        '<a href="File:Example.png">file</a>'
        '<a href="#History">anchor</a>'
        "<a>no href</a></p>"
    )
    records = rewrite_links(soup)
    assert [r.kind for r in records] == [
        LinkKind.INTERNAL_ARTICLE,
        LinkKind.EXTERNAL,
        LinkKind.SPECIAL_EXTERNAL,
        LinkKind.IN_PAGE_ANCHOR,
    ]

    internal, external, special, anchor, bare = soup.find_all("a")
    assert internal["data-wiki-link"] == "true"
    assert internal["data-article-title"] == "Cat"
    assert internal["data-original-href"] == "/wiki/Cat"
    assert "target" not in internal.attrs
    assert "wiki-internal-link" in internal["class"]

    assert external["target"] == "_blank"
    assert external["rel"] == "noopener noreferrer"
    assert "data-wiki-link" not in external.attrs

    assert special["href"] == "https://en.wikipedia.org/wiki/File:Example.png"
    assert special["target"] == "_blank"

    assert anchor["href"] == "#History"
    assert "target" not in anchor.attrs
    assert bare.attrs == {}


def test_rewrite_links_keeps_first_original_href() -> None:
    soup = parse('<a href="/wiki/Cat" data-original-href="./Cat">cat</a>')
    rewrite_links(soup)
    assert soup.a["data-original-href"] == "./Cat"
