"""REST client for article HTML and summaries."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, urlparse

import requests

from wikireader.model.article import Article
from wikireader.model.reader_options import ReaderOptions
from wikireader.transform.html_transformer import HtmlTransformer
from wikireader.types import Section

from .urls import SOURCE_HOST_SUFFIX, build_article_url, extract_title

logger = logging.getLogger(__name__)


class ArticleFetchError(RuntimeError):
    """Fetching an article failed; ``title`` is set when it could be derived."""

    def __init__(self, message: str, title: str | None = None) -> None:
        super().__init__(message)
        self.title = title


def extract_sections(html_content: str, options: ReaderOptions | None = None) -> list[Section]:
    """Table of contents of raw article HTML, with the ids the transformer assigns."""

    return HtmlTransformer(options).transform_with_report(html_content).sections


class WikiApiClient:
    def __init__(
        self,
        options: ReaderOptions | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.options = options or ReaderOptions()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.options.user_agent})

    @property
    def host_suffix(self) -> str:
        host = urlparse(self.options.site_origin).hostname or ""
        return SOURCE_HOST_SUFFIX if host.endswith(SOURCE_HOST_SUFFIX) else host

    def _rest_url(self, endpoint: str, title: str) -> str:
        return f"{self.options.site_origin}/api/rest_v1/page/{endpoint}/{quote(title, safe='')}"

    def _get(self, url: str, title: str, what: str) -> requests.Response:
        try:
            response = self.session.get(url, timeout=self.options.request_timeout)
        except requests.RequestException as exc:
            raise ArticleFetchError(f"Failed to fetch {what}: {exc}", title=title) from exc
        if not response.ok:
            reason = response.reason or f"HTTP {response.status_code}"
            raise ArticleFetchError(f"Failed to fetch {what}: {reason}", title=title)
        return response

    def fetch_article(self, source_url: str) -> Article:
        """Fetch article HTML and summary for a source URL.

        Raises:
            ArticleFetchError: The URL is not an article URL, a request
                failed, or a response was not successful
        """

        title = extract_title(source_url, self.host_suffix)
        if not title:
            raise ArticleFetchError(
                "Invalid article URL. Please enter a valid Wikipedia article URL."
            )

        logger.info("Fetching article %r", title)
        html_content = self._get(self._rest_url("html", title), title, "article").text
        summary_response = self._get(self._rest_url("summary", title), title, "article summary")
        try:
            summary: Any = summary_response.json()
        except ValueError as exc:
            raise ArticleFetchError(
                f"Failed to fetch article summary: invalid JSON ({exc})", title=title
            ) from exc
        if not isinstance(summary, dict):
            summary = {}

        canonical_url = build_article_url(title, self.options)
        urls = summary.get("content_urls")
        if isinstance(urls, dict):
            desktop = urls.get("desktop")
            if isinstance(desktop, dict) and isinstance(desktop.get("page"), str):
                canonical_url = desktop["page"]

        return Article(
            title=str(summary.get("title") or title),
            extract=str(summary.get("extract") or ""),
            html_content=html_content,
            canonical_url=canonical_url,
            sections=extract_sections(html_content, self.options),
        )


__all__ = [
    "ArticleFetchError",
    "WikiApiClient",
    "extract_sections",
]
