"""Page text extraction.

Strategies are tried in a fixed order until one yields non-empty text:

1. rendered: Firecrawl scrape, which renders JavaScript in a hosted browser
   (only when a Firecrawl API key is configured)
2. dom: fetch the raw HTML and read the document text with BeautifulSoup
3. regex: strip tags from the same HTML with regular expressions
"""

import html as html_lib
import logging
import re
from typing import Optional, Union

import requests
from bs4 import BeautifulSoup
from firecrawl import FirecrawlApp

from .config import Settings
from .exceptions import ExtractionError
from .models import PageCapture, PageMetadata
from .utils import clean_content, extract_domain

logger = logging.getLogger(__name__)

UNTITLED = "Untitled page"

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/123.0 Safari/537.36"
)


def strip_html(html: str) -> str:
    """Regex-based tag stripping: drop the head, scripts and styles, then every tag."""
    text = re.sub(r"<head(?:\s[^>]*)?>[\s\S]*?</head>", "", html, flags=re.IGNORECASE)
    text = re.sub(r"<script[^>]*>[\s\S]*?</script>", "", text, flags=re.IGNORECASE)
    text = re.sub(r"<style[^>]*>[\s\S]*?</style>", "", text, flags=re.IGNORECASE)
    text = re.sub(r"<!--[\s\S]*?-->", "", text)
    text = re.sub(r"<[^>]+>", " ", text)
    text = html_lib.unescape(text).replace("\xa0", " ")
    return clean_content(text)


def _meta_content(soup: BeautifulSoup, *keys: str) -> Optional[str]:
    for key in keys:
        tag = soup.find("meta", attrs={"property": key}) or soup.find(
            "meta", attrs={"name": key}
        )
        if tag and tag.get("content", "").strip():
            return tag["content"].strip()
    return None


def parse_metadata(soup: BeautifulSoup) -> PageMetadata:
    """Read site name, author and published date from meta tags."""
    return PageMetadata(
        site_name=_meta_content(soup, "og:site_name", "application-name"),
        author=_meta_content(soup, "author", "article:author"),
        published_date=_meta_content(
            soup, "article:published_time", "datePublished", "date"
        ),
    )


def _first(metadata: dict, *keys: str) -> Optional[str]:
    for key in keys:
        value = metadata.get(key)
        if isinstance(value, list):
            value = value[0] if value else None
        if value:
            return str(value)
    return None


class PageExtractor:
    """Extracts a PageCapture from a URL or from pasted text."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self._settings = settings
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = USER_AGENT
        self._session = session
        self._html: dict[str, Union[str, ExtractionError]] = {}

    def extract(self, url: str) -> PageCapture:
        """Extract the page at url, trying each strategy in turn."""
        if not url or not url.strip():
            raise ExtractionError("No page URL given")
        url = url.strip()

        attempts = [
            ("rendered", self._extract_rendered),
            ("dom", self._extract_dom),
            ("regex", self._extract_regex),
        ]
        failures = []
        self._html = {}
        try:
            for name, attempt in attempts:
                try:
                    page = attempt(url)
                except ExtractionError as e:
                    logger.info("Extraction strategy %s failed for %s: %s", name, url, e)
                    failures.append(f"{name}: {e}")
                    continue
                if page is None:
                    continue
                if not page.content.strip():
                    logger.info("Extraction strategy %s returned empty content for %s", name, url)
                    failures.append(f"{name}: empty content")
                    continue
                logger.debug("Extracted %d chars from %s via %s", len(page.content), url, name)
                return page
        finally:
            self._html = {}

        detail = "; ".join(failures) or "no strategy available"
        raise ExtractionError(f"Could not extract page content from {url} ({detail})")

    def from_text(self, text: str, url: str, title: str = "") -> PageCapture:
        """Build a capture from text copied by the user (clipboard fallback)."""
        if not text or not text.strip():
            raise ExtractionError("The clipboard is empty, copy the page content first")
        if not url or not url.strip():
            raise ExtractionError("A source URL is required")
        return PageCapture(
            title=title.strip() or UNTITLED,
            url=url.strip(),
            content=clean_content(text),
        )

    def _extract_rendered(self, url: str) -> Optional[PageCapture]:
        if not self._settings.firecrawl_api_key:
            return None

        app = FirecrawlApp(api_key=self._settings.firecrawl_api_key)
        try:
            result = app.scrape(url, formats=["markdown"])
        except Exception as e:
            raise ExtractionError(f"Firecrawl scrape failed: {e}") from e

        if not result:
            raise ExtractionError("empty response from Firecrawl")

        markdown = result.markdown if hasattr(result, "markdown") else result.get("markdown", "")
        metadata_obj = result.metadata if hasattr(result, "metadata") else result.get("metadata", {})

        # Firecrawl returns pydantic models
        if hasattr(metadata_obj, "model_dump"):
            metadata = metadata_obj.model_dump()
        else:
            metadata = metadata_obj if isinstance(metadata_obj, dict) else {}

        return PageCapture(
            title=_first(metadata, "title", "og_title") or extract_domain(url) or UNTITLED,
            url=url,
            content=clean_content(markdown or ""),
            metadata=PageMetadata(
                site_name=_first(metadata, "og_site_name"),
                author=_first(metadata, "author", "dc_creator"),
                published_date=_first(metadata, "published_time", "article_published_time"),
            ),
        )

    def _fetch_html(self, url: str) -> str:
        # One request per extract() call; a failed fetch is remembered too
        if url not in self._html:
            try:
                response = self._session.get(url, timeout=20)
                response.raise_for_status()
                self._html[url] = response.text
            except requests.RequestException as e:
                error = ExtractionError(f"could not fetch page: {e}")
                error.__cause__ = e
                self._html[url] = error
        cached = self._html[url]
        if isinstance(cached, ExtractionError):
            raise cached
        return cached

    def _extract_dom(self, url: str) -> PageCapture:
        soup = BeautifulSoup(self._fetch_html(url), "html.parser")

        title = ""
        if soup.title and soup.title.string:
            title = soup.title.string.strip()
        title = title or _meta_content(soup, "og:title") or extract_domain(url) or UNTITLED

        for tag in soup(["script", "style", "noscript", "template"]):
            tag.decompose()
        root = soup.body or soup
        text = root.get_text(separator="\n")

        return PageCapture(
            title=title,
            url=url,
            content=clean_content(text),
            metadata=parse_metadata(soup),
        )

    def _extract_regex(self, url: str) -> PageCapture:
        html = self._fetch_html(url)
        match = re.search(r"<title[^>]*>([\s\S]*?)</title>", html, re.IGNORECASE)
        title = html_lib.unescape(match.group(1)).strip() if match else ""
        return PageCapture(
            title=title or extract_domain(url) or UNTITLED,
            url=url,
            content=strip_html(html),
        )
