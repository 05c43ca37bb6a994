"""Article data returned by the fetch client."""

from __future__ import annotations

from dataclasses import dataclass, field

from wikireader.types import Section


@dataclass(slots=True)
class Article:
    title: str
    extract: str
    # Raw, untransformed REST page HTML
    html_content: str
    canonical_url: str
    sections: list[Section] = field(default_factory=list)
