"""Result type for store reads.

Reads never raise: a failed query still hands back a usable default, but the
caller can tell it apart from a genuinely empty answer.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Fetched(Generic[T]):
    value: T
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def empty(self) -> bool:
        return self.ok and not self.value

    @classmethod
    def success(cls, value: T) -> "Fetched[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, default: T, error: Exception) -> "Fetched[T]":
        return cls(value=default, error=str(error) or error.__class__.__name__)
