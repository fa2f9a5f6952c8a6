"""Structured outcome of a roster write."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class MutationResult:
    """``success`` plus either the error message or the written record (if any).

    Business-rule failures and backend failures share this shape and differ
    only by message. ``exception`` keeps the original error for callers that
    need to tell them apart (the HTTP layer maps it to a status code).
    """

    success: bool
    error: str | None = None
    record: Any = None
    exception: Exception | None = field(default=None, compare=False, repr=False)

    @classmethod
    def ok(cls, record: Any = None) -> "MutationResult":
        return cls(success=True, record=record)

    @classmethod
    def fail(cls, error: str | Exception) -> "MutationResult":
        if isinstance(error, Exception):
            return cls(success=False, error=str(error), exception=error)
        return cls(success=False, error=error)
