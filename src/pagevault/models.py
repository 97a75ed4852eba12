"""Data models for pagevault."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class PageMetadata:
    """Optional page metadata found while extracting."""

    site_name: Optional[str] = None
    author: Optional[str] = None
    published_date: Optional[str] = None


@dataclass
class PageCapture:
    """One extracted page: title, source URL, cleaned text and capture time."""

    title: str
    url: str
    content: str
    captured_at: datetime = field(default_factory=_now)
    metadata: PageMetadata = field(default_factory=PageMetadata)


@dataclass
class ChatMessage:
    """A single role-tagged chat turn."""

    role: str  # user, assistant, system
    content: str
    timestamp: datetime = field(default_factory=_now)

    def to_api(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass
class TruncatedText:
    text: str
    truncated: bool
