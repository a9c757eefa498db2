"""LLM providers: Anthropic Claude API and OpenAI-compatible chat completions."""

import os
from typing import Protocol

import anthropic
import httpx

from ..errors import DelegateFailure

DEFAULT_ANTHROPIC_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_CHAT_COMPLETIONS_MODEL = "deepseek-chat"


class ILLMProvider(Protocol):
    """Abstraction for LLM access."""

    async def complete(
        self,
        messages: list[dict],  # [{"role": "user", "content": "..."}]
        system: str | None = None,
        max_tokens: int = 1024,
    ) -> str:
        """Generate completion."""
        ...

    async def close(self) -> None:
        """Release the underlying HTTP client."""
        ...


class LLMProvider:
    """Anthropic Claude API provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float = 30.0,
    ):
        self._api_key = api_key or os.getenv("COMPLETION_API_KEY")
        if not self._api_key:
            raise ValueError("COMPLETION_API_KEY environment variable not set")

        self._model = model or DEFAULT_ANTHROPIC_MODEL
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key, timeout=timeout)

    async def complete(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 1024,
    ) -> str:
        """Generate completion using Claude API."""
        kwargs = {
            "model": self._model,
            "messages": messages,
            "max_tokens": max_tokens,
        }
        if system:
            kwargs["system"] = system

        try:
            response = await self._client.messages.create(**kwargs)
            return response.content[0].text
        except Exception as e:
            # Re-raise for handling by caller
            raise DelegateFailure(f"LLM API error: {e}") from e

    async def close(self) -> None:
        await self._client.close()


class ChatCompletionsProvider:
    """OpenAI-compatible /chat/completions provider (DeepSeek by default)."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = "https://api.deepseek.com/v1",
        model: str | None = None,
        temperature: float = 0.7,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key or os.getenv("COMPLETION_API_KEY")
        if not self._api_key:
            raise ValueError("COMPLETION_API_KEY environment variable not set")

        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._model = model or DEFAULT_CHAT_COMPLETIONS_MODEL
        self._temperature = temperature
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def complete(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 1024,
    ) -> str:
        """Generate completion; the system prompt goes first in the message list."""
        if system:
            messages = [{"role": "system", "content": system}, *messages]

        try:
            response = await self._client.post(
                self._url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={
                    "model": self._model,
                    "messages": messages,
                    "temperature": self._temperature,
                    "max_tokens": max_tokens,
                    "stream": False,
                },
            )
        except httpx.HTTPError as e:
            raise DelegateFailure(f"LLM API error: {e}") from e

        if response.status_code != 200:
            raise DelegateFailure(
                f"LLM API error: status {response.status_code}: {response.text[:200]}"
            )

        try:
            return response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise DelegateFailure(f"Malformed LLM response: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()
