"""Shared test fixtures."""

from datetime import datetime

import pytest

from pagevault.config import Settings
from pagevault.llm.base import LLMProvider
from pagevault.models import PageCapture, PageMetadata

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "PAGEVAULT_MODEL",
    "FIRECRAWL_API_KEY",
    "OBSIDIAN_VAULT_PATH",
    "PAGEVAULT_SETTINGS",
)


class FakeLLM(LLMProvider):
    """Records every request and answers from a list of canned replies."""

    def __init__(self, replies=None, error=None):
        self.calls = []
        self.replies = list(replies or ["fake reply"])
        self.error = error

    def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(api_key="sk-test-key", vault_path=tmp_path / "vault")


@pytest.fixture
def page() -> PageCapture:
    return PageCapture(
        title="Bessie Coleman",
        url="https://en.wikipedia.org/wiki/Bessie_Coleman",
        content="Bessie Coleman was an early American civil aviator.",
        captured_at=datetime(2024, 5, 1, 9, 30, 15),
        metadata=PageMetadata(author="Wikipedia contributors"),
    )


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()
