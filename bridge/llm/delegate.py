"""Completion delegate: free text plus transcript in, reply text out."""

from typing import Protocol

from ..logging_config import get_logger
from ..models import TranscriptEntry
from ..result import Result
from .llm_provider import ILLMProvider

logger = get_logger(__name__)

TRAVEL_ASSISTANT_PROMPT = (
    "You are a helpful travel assistant for Philippine Paradise Tours. "
    "You can communicate in multiple languages including English, Tagalog, "
    "and other Philippine languages. Always be friendly and professional. "
    "Provide accurate information about Philippine tourism. If you don't know "
    "something, be honest and offer to connect the user with a human agent."
)


class ICompletionDelegate(Protocol):
    """Generates a reply for free text the menu cannot handle."""

    async def generate(self, text: str, transcript: list[TranscriptEntry]) -> Result[str]:
        """Return generated reply text, or a failure result."""
        ...

    async def close(self) -> None:
        """Release provider resources."""
        ...


class CompletionDelegate:
    """Builds chat context from the transcript and asks an LLM provider."""

    def __init__(
        self,
        provider: ILLMProvider,
        system_prompt: str = TRAVEL_ASSISTANT_PROMPT,
        history_window: int = 20,
        max_tokens: int = 1000,
    ):
        self._provider = provider
        self._system_prompt = system_prompt
        self._history_window = history_window
        self._max_tokens = max_tokens

    async def generate(self, text: str, transcript: list[TranscriptEntry]) -> Result[str]:
        history = transcript[-self._history_window :] if self._history_window > 0 else []
        messages = build_messages(history, text)

        try:
            response_text = await self._provider.complete(
                messages=messages,
                system=self._system_prompt,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            logger.error("Completion failed: %s", e, exc_info=True)
            return Result.failure(str(e), code="delegate_error")

        if not response_text or not response_text.strip():
            logger.warning("Completion returned empty text")
            return Result.failure("Empty completion", code="empty_completion")

        return Result.success(response_text.strip())

    async def close(self) -> None:
        await self._provider.close()


def build_messages(transcript: list[TranscriptEntry], text: str) -> list[dict]:
    """
    Map transcript entries to chat messages and append the current text.

    Button clicks count as user turns. Consecutive turns of the same role are
    merged and the list always starts with a user turn.
    """
    messages: list[dict] = []
    turns = [
        ("assistant" if entry.role == "bot" else "user", _entry_content(entry))
        for entry in transcript
    ]
    turns.append(("user", text))

    for role, content in turns:
        if not messages and role != "user":
            continue
        if messages and messages[-1]["role"] == role:
            messages[-1]["content"] += f"\n{content}"
        else:
            messages.append({"role": role, "content": content})

    return messages


def _entry_content(entry: TranscriptEntry) -> str:
    if entry.role == "postback":
        return f"[selected menu option: {entry.text}]"
    return entry.text
