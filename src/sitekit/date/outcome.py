from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """
    A value together with a record of whether a fallback produced it.

    `reason` names the recovered failure when `fallback` is True.
    """

    value: T
    fallback: bool = False
    reason: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> Outcome[T]:
        return cls(value)

    @classmethod
    def recovered(cls, value: T, reason: str) -> Outcome[T]:
        return cls(value, True, reason)
