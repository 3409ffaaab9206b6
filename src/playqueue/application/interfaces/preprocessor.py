"""Port interface for URL preprocessors that may claim an appended URL."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Protocol

from playqueue.domain.shared.types import QueueEntry


class ResolvedQueueSink(Protocol):
    """Where a claiming preprocessor delivers the URLs it resolved."""

    async def enqueue_resolved(self, urls: Iterable[QueueEntry]) -> int: ...


class Preprocessor(ABC):
    """A handler offered every appended URL before it is queued."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def attempt(self, url: QueueEntry) -> bool:
        """Offer ``url`` to this preprocessor.

        Must return promptly; any resolution work is scheduled in the background.

        Returns:
            True if the preprocessor claims the URL and will enqueue its
            results later through a ResolvedQueueSink.
        """
        ...

    async def aclose(self) -> None:
        """Release background work. The default preprocessor holds none."""
        return None
