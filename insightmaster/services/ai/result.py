"""
Result type returned at the AI boundary.

The AI insight service never substitutes placeholder data on its own. It
returns an AIResult carrying either the parsed value or the failure, and the
caller decides which fallback (if any) to use.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class AIResult(Generic[T]):
    """Outcome of an AI call: a value or an error message."""
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "AIResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "AIResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, fallback: T) -> T:
        return self.value if self.ok else fallback

    def unwrap_or_else(self, fallback: Callable[[str], T]) -> T:
        """Return the value, or compute a fallback from the error message."""
        if self.ok:
            return self.value
        return fallback(self.error)
