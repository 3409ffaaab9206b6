"""Core domain entity for the play queue."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from playqueue.domain.queue.value_objects import normalize_index
from playqueue.domain.shared.types import NonNegativeInt, QueueEntry


class PlayQueue(BaseModel):
    """Aggregate root holding the ordered sequence of queued URLs.

    Index 0 is next to play. Entries are not deduplicated and carry no
    identity beyond their position and value.
    """

    model_config = ConfigDict(strict=True, validate_assignment=True)

    entries: list[QueueEntry] = Field(default_factory=list)

    # Bumped on every mutation; snapshot writes are stamped with it
    version: NonNegativeInt = 0

    @property
    def length(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def _touch(self) -> int:
        self.version += 1
        return self.version

    def snapshot(self) -> list[QueueEntry]:
        """Return a copy of the entries, safe to hand outside the aggregate."""
        return list(self.entries)

    def get_at(self, index: int) -> QueueEntry:
        return self.entries[normalize_index(index, self.length)]

    def replace_all(self, entries: Iterable[QueueEntry]) -> None:
        """Replace the whole queue. Entry contents are not validated."""
        self.entries = list(entries)
        self._touch()

    def replace_at(self, index: int, url: QueueEntry) -> int:
        """Overwrite the entry at ``index`` and return the resolved position."""
        position = normalize_index(index, self.length)
        self.entries[position] = url
        self._touch()
        return position

    def append(self, url: QueueEntry) -> int:
        """Push ``url`` to the tail and return its position."""
        self.entries.append(url)
        self._touch()
        return self.length - 1

    def extend(self, urls: Iterable[QueueEntry]) -> int:
        """Push several URLs to the tail, in order, and return how many were added."""
        added = list(urls)
        if added:
            self.entries.extend(added)
            self._touch()
        return len(added)

    def peek(self) -> QueueEntry | None:
        """Look at the head entry without removing it."""
        return self.entries[0] if self.entries else None

    def rotate(self) -> int:
        """Move the head entry to the tail and return the queue length.

        The queue cycles rather than depletes, so a playback driver can keep
        calling this forever.
        """
        if self.entries:
            self.entries.append(self.entries.pop(0))
            self._touch()
        return self.length
