"""Tests for chat session bookkeeping."""

from unittest.mock import MagicMock

import pytest

from pagevault.assistant import PageAssistant
from pagevault.chat import ChatSession
from pagevault.exceptions import ChatError, LLMError
from pagevault.writer import VaultWriter

from .conftest import FakeLLM


def _session(settings, page=None, llm=None) -> ChatSession:
    extractor = MagicMock()
    extractor.extract.return_value = page
    session = ChatSession(PageAssistant(llm or FakeLLM(), settings), extractor)
    if page is not None:
        session.use_page(page)
    return session


class TestSend:
    def test_successful_turn_appends_question_and_answer(self, settings, page) -> None:
        session = _session(settings, page, FakeLLM(["An aviator."]))

        assert session.send("  Who was she? ") == "An aviator."
        assert [(m.role, m.content) for m in session.messages] == [
            ("user", "Who was she?"),
            ("assistant", "An aviator."),
        ]
        assert session.busy is False

    def test_failed_turn_is_rolled_back(self, settings, page) -> None:
        session = _session(settings, page, FakeLLM(["First answer."]))
        session.send("First question")
        before = len(session.messages)

        session._assistant = PageAssistant(
            FakeLLM(error=LLMError("Rate limited (429)", status_code=429)), settings
        )
        with pytest.raises(LLMError):
            session.send("Second question")

        assert len(session.messages) == before
        assert session.messages[-1].content == "First answer."
        assert session.busy is False

    def test_blank_input_is_ignored(self, settings, page) -> None:
        llm = FakeLLM()
        session = _session(settings, page, llm)
        assert session.send("   ") is None
        assert session.messages == []
        assert llm.calls == []

    def test_requires_page(self, settings) -> None:
        session = _session(settings)
        with pytest.raises(ChatError, match="No page loaded"):
            session.send("hello")
        assert session.messages == []

    def test_rejects_overlapping_send(self, settings, page) -> None:
        session = _session(settings, page)
        session.busy = True
        with pytest.raises(ChatError):
            session.send("hello")
        assert session.messages == []

    def test_model_sees_full_transcript(self, settings, page) -> None:
        llm = FakeLLM(["A1", "A2"])
        session = _session(settings, page, llm)
        session.send("Q1")
        session.send("Q2")
        assert [m["content"] for m in llm.calls[1][1:]] == ["Q1", "A1", "Q2"]


class TestPageAndTranscript:
    def test_load_page_resets_transcript(self, settings, page) -> None:
        session = _session(settings, page)
        session.send("question")

        loaded = session.load_page(page.url)

        assert loaded is page
        assert session.page is page
        assert session.messages == []

    def test_clear(self, settings, page) -> None:
        session = _session(settings, page)
        assert session.clear() is False
        session.send("question")
        assert session.clear() is True
        assert session.messages == []


class TestSaveQANote:
    def test_writes_note(self, settings, page) -> None:
        session = _session(settings, page, FakeLLM(["An aviator."]))
        session.send("Who was she?")

        path = session.save_qa_note(VaultWriter(settings.vault_path), settings)

        text = path.read_text(encoding="utf-8")
        assert "# Q&A: Bessie Coleman" in text
        assert "Who was she?" in text
        assert "An aviator." in text

    def test_empty_transcript_is_rejected(self, settings, page) -> None:
        session = _session(settings, page)
        with pytest.raises(ChatError, match="empty"):
            session.save_qa_note(VaultWriter(settings.vault_path), settings)

    def test_requires_page(self, settings) -> None:
        with pytest.raises(ChatError):
            _session(settings).save_qa_note(VaultWriter(settings.vault_path), settings)
