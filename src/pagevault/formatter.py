"""YAML frontmatter and note formatting."""

from datetime import datetime
from typing import Iterable, Optional

from .models import ChatMessage, PageCapture

_DISPLAY_TIME = "%Y-%m-%d %H:%M:%S"


def format_frontmatter(page: PageCapture) -> str:
    """Generate YAML frontmatter for a page note."""
    lines = [
        "---",
        "source: web",
        f"url: \"{_escape_yaml(page.url)}\"",
        f"title: \"{_escape_yaml(page.title)}\"",
        f"captured_at: {page.captured_at.isoformat(timespec='seconds')}",
    ]
    if page.metadata.author:
        lines.append(f"author: \"{_escape_yaml(page.metadata.author)}\"")
    if page.metadata.published_date:
        lines.append(f"published_date: \"{_escape_yaml(page.metadata.published_date)}\"")
    lines.extend(["---", ""])
    return "\n".join(lines)


def format_summary_note(page: PageCapture, summary: str, include_frontmatter: bool = True) -> str:
    """Format a complete summary note."""
    parts = []
    if include_frontmatter:
        parts.append(format_frontmatter(page))
    parts.extend([
        f"# {page.title}\n",
        f"**Source**: {page.url}\n",
        f"**Captured**: {page.captured_at.strftime(_DISPLAY_TIME)}\n",
        "---\n",
        summary,
    ])
    return "\n".join(parts)


def format_qa_note(
    page: PageCapture,
    messages: Iterable[ChatMessage],
    include_frontmatter: bool = True,
    created: Optional[datetime] = None,
) -> str:
    """Format a chat transcript as a Q&A note. System turns are left out."""
    created = created or datetime.now()

    parts = []
    if include_frontmatter:
        parts.append(format_frontmatter(page))
    parts.extend([
        f"# Q&A: {page.title}\n",
        f"**Source**: {page.url}\n",
        f"**Created**: {created.strftime(_DISPLAY_TIME)}\n",
        "---\n",
    ])
    for message in messages:
        if message.role == "user":
            parts.append(f"## 🙋 Question\n\n{message.content}\n")
        elif message.role == "assistant":
            parts.append(f"## 🤖 Answer\n\n{message.content}\n")
    return "\n".join(parts)


def _escape_yaml(text: str) -> str:
    """Escape special characters for YAML string values."""
    text = text.replace("\\", "\\\\")
    text = text.replace('"', '\\"')
    text = text.replace("\n", " ")
    return text
