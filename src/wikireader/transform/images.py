from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag

from wikireader.ids import collect_ids, image_id, unique_id
from wikireader.model.reader_options import ReaderOptions
from wikireader.types import ImageRecord

from .dom import fragment, has_class, remove_class
from .links import INTERNAL_LINK_CLASS

logger = logging.getLogger(__name__)

_ABSOLUTE_RE = re.compile(r"^[a-z][a-z0-9+.\-]*:", re.IGNORECASE)

WRAPPER_CLASS = "image-wrapper"
CONTAINER_CLASS = "image-container"

REFRESH_ICON_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="20" height="20" viewBox="0 0 24 24" '
    'fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" '
    'stroke-linejoin="round">'
    '<path d="M21 2v6h-6"></path>'
    '<path d="M3 12a9 9 0 0 1 15-6.7L21 8"></path>'
    '<path d="M3 22v-6h6"></path>'
    '<path d="M21 12a9 9 0 0 1-15 6.7L3 16"></path>'
    "</svg>"
)


def resolve_image_src(src: str, options: ReaderOptions | None = None) -> str:
    """Normalize an image src against the source site.

    - scheme-qualified (https:, data:, ...) -> unchanged
    - //host/path -> https://host/path
    - /path -> <site-origin>/path
    - ./name -> <site-origin><article-path>name
    - anything else -> <site-origin>/name
    - empty -> unchanged
    """

    options = options or ReaderOptions()
    if not src or _ABSOLUTE_RE.match(src):
        return src
    if src.startswith("//"):
        return f"https:{src}"
    if src.startswith("/"):
        return f"{options.site_origin}{src}"
    if src.startswith("./"):
        return f"{options.article_origin}{src[2:]}"
    return f"{options.site_origin}/{src}"


def _neutralize_image_link(anchor: Tag) -> None:
    # A click on the image opens the zoom view instead of following the link
    anchor["data-image-link"] = "true"
    href = anchor.get("href")
    if isinstance(href, str):
        if "data-original-href" not in anchor.attrs:
            anchor["data-original-href"] = href
        del anchor["href"]
    for attr in ("data-wiki-link", "data-article-title", "target", "rel"):
        if attr in anchor.attrs:
            del anchor[attr]
    remove_class(anchor, INTERNAL_LINK_CLASS)


def _refresh_button(soup: BeautifulSoup, img_id: str) -> Tag:
    button = soup.new_tag(
        "button",
        attrs={
            "type": "button",
            "class": "image-refresh opacity-0",
            "data-refresh-image": "true",
            "data-target-id": img_id,
            "aria-label": "Reload image",
        },
    )
    button.append(fragment(REFRESH_ICON_SVG))
    return button


def _wrap(soup: BeautifulSoup, img: Tag, img_id: str) -> None:
    wrapper = soup.new_tag("div", attrs={"class": WRAPPER_CLASS})
    container = soup.new_tag("div", attrs={"class": CONTAINER_CLASS})
    img.replace_with(wrapper)
    container.append(img)
    wrapper.append(container)
    wrapper.append(_refresh_button(soup, img_id))


def _rewrite_one(
    soup: BeautifulSoup, img: Tag, index: int, used: set[str], options: ReaderOptions
) -> ImageRecord:
    existing_id = img.get("data-image-id")
    if isinstance(existing_id, str) and existing_id:
        img_id = existing_id
    else:
        img_id = unique_id(image_id(index), used)

    # Already-rewritten markup keeps its pre-normalization source
    kept = img.get("data-original-src")
    src = img.get("src")
    original_src = kept if isinstance(kept, str) else (src if isinstance(src, str) else "")

    current = src if isinstance(src, str) else ""
    try:
        resolved = resolve_image_src(current, options)
    except Exception as exc:
        logger.warning("Keeping unparseable image src %r: %s", current, exc)
        resolved = current

    img["data-image-id"] = img_id
    img["data-original-src"] = original_src
    if resolved:
        img["src"] = resolved
    img["data-can-modal"] = "false"

    anchor = img.find_parent("a")
    if isinstance(anchor, Tag):
        _neutralize_image_link(anchor)

    if not has_class(img.parent, CONTAINER_CLASS):
        _wrap(soup, img, img_id)

    return ImageRecord(id=img_id, original_src=original_src, resolved_src=resolved)


def rewrite_images(soup: BeautifulSoup, options: ReaderOptions | None = None) -> list[ImageRecord]:
    """Normalize, tag and wrap every image in document order."""

    options = options or ReaderOptions()
    records: list[ImageRecord] = []
    images = soup.find_all("img")
    # Ids carried by already-tagged images are reserved up front
    used = collect_ids(img.get("data-image-id") for img in images)
    for index, img in enumerate(images):
        try:
            records.append(_rewrite_one(soup, img, index, used, options))
        except Exception as exc:
            logger.warning("Leaving image %d unmodified: %s", index, exc)
    logger.debug("Rewrote %d images", len(records))
    return records
