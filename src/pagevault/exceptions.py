"""Custom exceptions for pagevault."""

from typing import Optional


class PageVaultError(Exception):
    """Base exception for pagevault."""


class ConfigError(PageVaultError):
    """Raised when configuration is missing or invalid."""


class ExtractionError(PageVaultError):
    """Raised when no page text could be extracted."""


class LLMError(PageVaultError):
    """Raised when the chat-completion API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NoteWriteError(PageVaultError):
    """Raised when a note cannot be written to the vault."""


class ChatError(PageVaultError):
    """Raised when a chat action cannot run in the current session state."""
