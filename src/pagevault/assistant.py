"""Summaries and page chat on top of an LLM provider."""

import logging
import re

from .config import Settings
from .llm.base import LLMProvider
from .models import ChatMessage, PageCapture
from .prompts import SUMMARY_TEMPLATES, chat_system_prompt, fill_template
from .utils import truncate_text

logger = logging.getLogger(__name__)


class PageAssistant:
    """Builds prompts from a page capture and sends them to the LLM."""

    def __init__(self, llm: LLMProvider, settings: Settings):
        self._llm = llm
        self._settings = settings

    def update_settings(self, settings: Settings) -> None:
        self._settings = settings

    def summarize(self, page: PageCapture) -> str:
        """Summarize a page with the configured template.

        When the page was cut to the character limit, the summary starts
        with a warning callout.
        """
        limit = self._settings.max_characters
        content = truncate_text(page.content, limit)

        if self._settings.summary_template == "custom":
            template = self._settings.custom_prompt
        else:
            template = SUMMARY_TEMPLATES[self._settings.summary_template]["prompt"]
        prompt = fill_template(
            template,
            {"title": page.title, "url": page.url, "content": content.text},
        )

        logger.debug(
            "Summarizing %s with template %s (%d chars, truncated=%s)",
            page.url, self._settings.summary_template, len(content.text), content.truncated,
        )
        summary = _clean_output(self._llm.complete([{"role": "user", "content": prompt}]), page.title)

        if content.truncated:
            return (
                "> [!WARNING]\n"
                f"> The page exceeds the character limit ({limit}) and was truncated. "
                "This summary is based on partial content.\n\n"
                f"{summary}"
            )
        return summary

    def chat(self, messages: list[ChatMessage], page: PageCapture) -> str:
        """Answer the latest turn of a transcript about page."""
        content = truncate_text(page.content, self._settings.max_characters)
        api_messages = [
            {
                "role": "system",
                "content": f"{chat_system_prompt(page.title, page.url)}\n\nPage content:\n{content.text}",
            }
        ]
        api_messages.extend(message.to_api() for message in messages)
        return self._llm.complete(api_messages)


def _clean_output(text: str, title: str) -> str:
    """Strip accidental front matter and a duplicated title heading."""
    text = text.strip()

    # The note writer adds its own front matter
    text = re.sub(r"^---\s*\n.*?\n---\s*\n?", "", text, count=1, flags=re.DOTALL)
    text = text.strip()

    h1_match = re.match(r"^#\s+(.+)", text)
    if h1_match and h1_match.group(1).strip().lower() == title.strip().lower():
        first_line_end = text.find("\n")
        text = text[first_line_end + 1:].strip() if first_line_end != -1 else ""

    text = re.sub(r"\n{4,}", "\n\n\n", text)
    return text
