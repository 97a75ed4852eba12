"""Utility functions for pagevault."""

import re
from urllib.parse import urlparse

from .models import PageCapture, TruncatedText

TRUNCATION_MARKER = "\n\n[... content truncated: the page exceeds the character limit ...]"

_ILLEGAL_PATH_CHARS = r'[\\/:*?"<>|]'


def truncate_text(text: str, max_chars: int) -> TruncatedText:
    """Cut text to max_chars, appending TRUNCATION_MARKER when it was cut."""
    if len(text) <= max_chars:
        return TruncatedText(text=text, truncated=False)
    return TruncatedText(text=text[:max_chars] + TRUNCATION_MARKER, truncated=True)


def clean_content(content: str) -> str:
    """Collapse blank-line runs and repeated spaces/tabs."""
    content = re.sub(r"\n{3,}", "\n\n", content)
    content = re.sub(r"[ \t]+", " ", content)
    return content.strip()


def clean_title(title: str, max_length: int = 100) -> str:
    """Make a page title safe to use inside a file name."""
    title = re.sub(_ILLEGAL_PATH_CHARS, "-", title)
    title = re.sub(r"\s+", " ", title).strip()
    return title[:max_length]


def format_file_name(template: str, page: PageCapture) -> str:
    """Fill a file-name template with the page's title, date, time and URL.

    The result always ends in ``.md``.
    """
    captured = page.captured_at
    result = template
    result = result.replace("{{title}}", clean_title(page.title))
    result = result.replace("{{date}}", captured.strftime("%Y-%m-%d"))
    result = result.replace("{{time}}", captured.strftime("%H-%M-%S"))
    result = result.replace("{{url}}", _path_safe_url(page.url))
    result = result.strip()

    if not result or result == ".md":
        result = "untitled"
    if not result.endswith(".md"):
        result += ".md"
    return result


def _path_safe_url(url: str) -> str:
    url = re.sub(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", "", url.strip())
    return re.sub(_ILLEGAL_PATH_CHARS, "-", url).strip("-")


def normalize_folder(folder: str) -> str:
    """Normalize a vault-relative folder path to forward-slash form."""
    parts = [
        part.strip()
        for part in folder.replace("\\", "/").split("/")
        if part.strip() not in ("", ".", "..")
    ]
    return "/".join(parts)


def extract_domain(url: str) -> str:
    """Extract the domain from a URL."""
    parsed = urlparse(url)
    domain = parsed.netloc
    if domain.startswith("www."):
        domain = domain[4:]
    return domain
