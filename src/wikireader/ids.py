from __future__ import annotations

import re
from collections.abc import Iterable

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def image_id(index: int) -> str:
    """Positional image id; stable for unchanged input."""

    return f"img-{index}"


def table_id(index: int) -> str:
    return f"table-{index}"


def slugify(text: str) -> str:
    """Lower-case, collapse non-alphanumeric runs to "-", trim hyphens.

    "Hello, World!" -> "hello-world"
    """

    return _NON_ALNUM_RE.sub("-", (text or "").lower()).strip("-")


def unique_id(base: str, used: set[str]) -> str:
    """Return base, or base-2, base-3, ... whichever is not in used; records it."""

    name = base
    n = 1
    while name in used:
        n += 1
        name = f"{base}-{n}"
    used.add(name)
    return name


def collect_ids(values: Iterable[object]) -> set[str]:
    return {v for v in values if isinstance(v, str) and v}
