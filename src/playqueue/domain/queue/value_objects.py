"""Immutable value objects for the play queue."""

from __future__ import annotations

from enum import Enum

from playqueue.domain.shared.exceptions import IndexOutOfRangeError


class AppendOutcome(str, Enum):
    """How an append request was settled."""

    QUEUED = "queued"
    PENDING = "pending"

    @property
    def is_pending(self) -> bool:
        return self == AppendOutcome.PENDING


def normalize_index(index: int, length: int) -> int:
    """Resolve a possibly negative queue index against the current length.

    Negative indexes wrap around the queue as many times as needed, so ``-1``
    is the tail and ``-length - 1`` is the tail again. The result must lie in
    ``[0, length)``; an empty queue rejects every index.

    Raises:
        IndexOutOfRangeError: If the index does not address an entry.
    """
    resolved = index
    if resolved < 0 and length > 0:
        resolved %= length
    if not 0 <= resolved < length:
        raise IndexOutOfRangeError(index=index, length=length)
    return resolved
