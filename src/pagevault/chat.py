"""Chat session state: the loaded page and its transcript."""

import logging
from pathlib import Path
from typing import Optional

from .assistant import PageAssistant
from .config import Settings
from .exceptions import ChatError
from .extractor import PageExtractor
from .formatter import format_qa_note
from .models import ChatMessage, PageCapture
from .writer import VaultWriter

logger = logging.getLogger(__name__)


class ChatSession:
    """One chat panel: a page capture plus an in-memory transcript.

    At most one send is in flight; the transcript only ever holds turns
    the model actually answered.
    """

    def __init__(self, assistant: PageAssistant, extractor: PageExtractor):
        self._assistant = assistant
        self._extractor = extractor
        self.page: Optional[PageCapture] = None
        self.messages: list[ChatMessage] = []
        self.busy = False

    def load_page(self, url: str) -> PageCapture:
        """Extract url and make it the chat context. Clears the transcript."""
        page = self._extractor.extract(url)
        self.use_page(page)
        return page

    def use_page(self, page: PageCapture) -> None:
        self.page = page
        self.messages = []

    def send(self, text: str) -> Optional[str]:
        """Ask a question about the loaded page and return the answer.

        Blank input is ignored. If the API call fails, the question is
        removed from the transcript again and the error is re-raised.
        """
        text = text.strip()
        if not text:
            return None
        if self.page is None:
            raise ChatError("No page loaded, load a page before chatting")
        if self.busy:
            raise ChatError("Still waiting for the previous answer")

        self.messages.append(ChatMessage(role="user", content=text))
        self.busy = True
        try:
            reply = self._assistant.chat(self.messages, self.page)
        except Exception:
            self.messages.pop()
            logger.debug("Chat reply failed, dropped the unanswered question")
            raise
        finally:
            self.busy = False

        self.messages.append(ChatMessage(role="assistant", content=reply))
        return reply

    def clear(self) -> bool:
        """Empty the transcript. Returns False if it was already empty."""
        if not self.messages:
            return False
        self.messages = []
        return True

    def save_qa_note(self, writer: VaultWriter, settings: Settings) -> Path:
        """Write the transcript as a Q&A note and return its path."""
        if self.page is None:
            raise ChatError("No page loaded")
        if not self.messages:
            raise ChatError("The conversation is empty, nothing to save")
        content = format_qa_note(self.page, self.messages, settings.include_frontmatter)
        return writer.save_note(content, self.page, settings)
