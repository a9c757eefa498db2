"""LLM module."""

from .delegate import (
    TRAVEL_ASSISTANT_PROMPT,
    CompletionDelegate,
    ICompletionDelegate,
    build_messages,
)
from .llm_provider import ChatCompletionsProvider, ILLMProvider, LLMProvider

__all__ = [
    "ChatCompletionsProvider",
    "CompletionDelegate",
    "ICompletionDelegate",
    "ILLMProvider",
    "LLMProvider",
    "TRAVEL_ASSISTANT_PROMPT",
    "build_messages",
]
