"""Abstract base class for LLM providers."""

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """Abstract chat-completion provider interface."""

    @abstractmethod
    def complete(self, messages: list[dict]) -> str:
        """Send a chat transcript and return the reply text.

        Args:
            messages: Ordered ``{"role": ..., "content": ...}`` dicts,
                system prompt first.

        Returns the text content of the first completion choice.
        """
