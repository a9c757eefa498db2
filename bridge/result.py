"""Failure-aware return value for calls to external collaborators."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a delegate or delivery call.

    Collaborators that must never abort a conversation turn return this
    instead of raising. ``error_code`` is a short machine-readable tag
    (``"timeout"``, ``"delegate_error"``, ``"delivery_failed"``...) that ends
    up in trace events.
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str, code: str = "unknown") -> "Result[T]":
        return cls(ok=False, error=error, error_code=code)
