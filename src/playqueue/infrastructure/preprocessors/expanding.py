"""Base class for preprocessors that expand a claimed URL asynchronously."""

from __future__ import annotations

import asyncio
import logging
from abc import abstractmethod

from playqueue.application.interfaces.preprocessor import Preprocessor, ResolvedQueueSink
from playqueue.domain.shared.messages import LogTemplates
from playqueue.domain.shared.types import QueueEntry

logger = logging.getLogger(__name__)


class ExpandingPreprocessor(Preprocessor):
    """Claims matching URLs and enqueues their expansion once it finishes.

    Subclasses decide which URLs they claim and how to turn one URL into
    zero or more playable URLs (e.g. a playlist into its tracks). Results are
    delivered through the bound sink, which is normally the Queue Store.
    """

    def __init__(self, sink: ResolvedQueueSink | None = None) -> None:
        self._sink = sink
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def bind(self, sink: ResolvedQueueSink) -> None:
        self._sink = sink

    @abstractmethod
    def claims(self, url: QueueEntry) -> bool:
        """Return True if this preprocessor handles ``url``."""
        ...

    @abstractmethod
    async def expand(self, url: QueueEntry) -> list[QueueEntry]:
        """Resolve ``url`` into the URLs that should be queued, in order."""
        ...

    def attempt(self, url: QueueEntry) -> bool:
        if not self.claims(url):
            return False

        task = asyncio.create_task(self._expand_and_enqueue(url))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    async def _expand_and_enqueue(self, url: QueueEntry) -> None:
        try:
            urls = await self.expand(url)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception(LogTemplates.PREPROCESSOR_EXPAND_FAILED, self.name, url)
            return

        logger.info(LogTemplates.PREPROCESSOR_EXPANDED, self.name, url, len(urls))
        if self._sink is None:
            logger.warning(LogTemplates.PREPROCESSOR_UNBOUND, self.name, len(urls))
            return
        await self._sink.enqueue_resolved(urls)

    async def wait_idle(self) -> None:
        """Wait until every scheduled expansion has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        self._tasks.clear()
