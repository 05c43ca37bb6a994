from __future__ import annotations

__all__ = [
    "HtmlTransformer",
    "READER_STYLESHEET",
    "assign_heading_ids",
    "classify_href",
    "collapse_tables",
    "collect_sections",
    "resolve_image_src",
    "rewrite_images",
    "rewrite_links",
    "slugify",
    "strip_non_content",
    "transform_html",
]

# Re-export pass entry points (explicit alias marks intent for linters)
from .cleanup import strip_non_content as strip_non_content
from .headings import assign_heading_ids as assign_heading_ids
from .headings import collect_sections as collect_sections
from .headings import slugify as slugify
from .html_transformer import HtmlTransformer as HtmlTransformer
from .html_transformer import transform_html as transform_html
from .images import resolve_image_src as resolve_image_src
from .images import rewrite_images as rewrite_images
from .links import classify_href as classify_href
from .links import rewrite_links as rewrite_links
from .styles import READER_STYLESHEET as READER_STYLESHEET
from .tables import collapse_tables as collapse_tables
