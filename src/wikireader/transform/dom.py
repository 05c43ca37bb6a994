"""Small helpers over BeautifulSoup tags.

Parsed tags expose ``class`` as a list while tags built with ``new_tag`` keep
whatever was assigned, so class checks go through these helpers.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def parse(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup or "", "html.parser")


def classes(tag: Tag) -> list[str]:
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(v) for v in value]


def has_class(tag: object, name: str) -> bool:
    return isinstance(tag, Tag) and name in classes(tag)


def set_classes(tag: Tag, names: list[str]) -> None:
    if names:
        tag["class"] = names
    elif "class" in tag.attrs:
        del tag["class"]


def add_class(tag: Tag, name: str) -> None:
    current = classes(tag)
    if name not in current:
        set_classes(tag, [*current, name])


def remove_class(tag: Tag, name: str) -> None:
    set_classes(tag, [c for c in classes(tag) if c != name])


def toggle_class(tag: Tag, name: str, present: bool) -> None:
    if present:
        add_class(tag, name)
    else:
        remove_class(tag, name)


def fragment(markup: str) -> Tag:
    """Parse a static markup snippet and return its first element."""

    tag = parse(markup).find()
    if not isinstance(tag, Tag):
        raise ValueError("markup snippet has no element")
    return tag


def serialize(soup: BeautifulSoup) -> str:
    """Return the body's inner markup for full documents, else the whole fragment."""

    body = soup.body
    if isinstance(body, Tag):
        return body.decode_contents()
    return soup.decode()
