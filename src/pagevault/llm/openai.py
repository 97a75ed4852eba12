"""OpenAI-compatible chat-completion provider."""

import logging

import openai

from ..exceptions import ConfigError, LLMError
from .base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7


def describe_status_error(status_code: int, body: str = "") -> str:
    """Turn a non-200 HTTP status into a user-facing message."""
    if status_code == 401:
        return "Unauthorized: the API key is invalid or not authorized (401)"
    if status_code == 429:
        return "Rate limited: too many requests, please try again later (429)"
    if status_code == 500:
        return "Server error: the AI service failed internally (500)"
    return f"API request failed ({status_code}): {body}"


class OpenAIProvider(LLMProvider):
    """Client for ``POST {base_url}/chat/completions``.

    One request per call: SDK retries are switched off and nothing is
    streamed.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float = 120.0,
    ):
        if not api_key:
            raise ConfigError("API key is not configured.")
        if not base_url:
            raise ConfigError("API base URL is not configured.")
        self._client = openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            timeout=timeout,
        )
        self._model = model
        self._temperature = temperature

    @property
    def model(self) -> str:
        return self._model

    def complete(self, messages: list[dict]) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
            )
        except openai.APIStatusError as e:
            logger.debug("Chat completion failed with HTTP %s", e.status_code)
            raise LLMError(
                describe_status_error(e.status_code, e.response.text),
                status_code=e.status_code,
            ) from e
        except openai.APIConnectionError as e:
            logger.debug("Chat completion request could not connect: %s", e)
            raise LLMError(
                "Network connection failed, please check your network settings"
            ) from e
        except openai.APIError as e:
            logger.debug("Chat completion failed: %s", e)
            raise LLMError(f"API request failed: {e}") from e

        # A non-JSON body (login page, proxy error) comes back as a plain str
        if isinstance(response, str):
            raise LLMError("Malformed API response: expected JSON, got text")

        choices = getattr(response, "choices", None)
        if not choices:
            raise LLMError("Malformed API response: missing choices")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not content or not content.strip():
            raise LLMError("The API returned empty content")

        return content.strip()
