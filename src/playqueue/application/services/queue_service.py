"""Queue Store - the authoritative play queue and its durable mirror."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from ...domain.queue.entities import PlayQueue
from ...domain.queue.value_objects import AppendOutcome, normalize_index
from ...domain.shared.exceptions import MissingFieldError, PersistenceWriteError
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import QueueEntry
from .queue_models import AppendResult

if TYPE_CHECKING:
    from ...config.settings import PlayQueueSettings
    from ...domain.queue.repository import QueueSnapshotRepository
    from .resolution_gate import ResolutionGate

logger = logging.getLogger(__name__)


class QueueStore:
    """Owns the play queue and mediates every read and write to it.

    In-memory mutations happen synchronously between awaits, so no caller
    ever observes a half-applied change. Snapshot writes run in the
    background through a single writer; a snapshot that is already stale
    when its turn comes is skipped, so the backing file never moves
    backwards.
    """

    def __init__(
        self,
        *,
        gate: ResolutionGate,
        repository: QueueSnapshotRepository | None = None,
        queue: PlayQueue | None = None,
        persist_on_replace: bool = False,
    ) -> None:
        self._gate = gate
        self._repository = repository
        self._queue = queue or PlayQueue()
        self._persist_on_replace = persist_on_replace

        self._write_lock = asyncio.Lock()
        self._pending_writes: set[asyncio.Task[None]] = set()
        self._scheduled_version = self._queue.version
        self._written_version = self._queue.version

    @classmethod
    def initialize(
        cls,
        settings: PlayQueueSettings,
        *,
        repository: QueueSnapshotRepository,
        gate: ResolutionGate,
    ) -> QueueStore:
        """Build the store, loading the persisted queue when persistence is enabled.

        Raises:
            StartupPersistenceError: If the backing file exists but cannot be loaded.
        """
        if not settings.persist:
            logger.info(LogTemplates.QUEUE_PERSISTENCE_DISABLED)
            return cls(gate=gate)

        entries = repository.load()
        if entries is None:
            logger.info(LogTemplates.QUEUE_FILE_MISSING, repository.location)
            entries = []
        else:
            logger.info(LogTemplates.QUEUE_LOADED, len(entries), repository.location)

        return cls(
            gate=gate,
            repository=repository,
            queue=PlayQueue(entries=entries),
            persist_on_replace=settings.persist_on_replace,
        )

    @property
    def persistent(self) -> bool:
        return self._repository is not None

    @property
    def pending_writes(self) -> int:
        return len(self._pending_writes)

    @property
    def written_version(self) -> int:
        """Version of the last snapshot that reached the backing store."""
        return self._written_version

    # === Reads ===

    async def get_all(self) -> list[QueueEntry]:
        return self._queue.snapshot()

    async def get_at(self, index: int) -> QueueEntry:
        """Return the entry at ``index``; negative indexes count from the tail.

        Raises:
            IndexOutOfRangeError: If the index does not address an entry.
        """
        return self._queue.get_at(index)

    async def peek(self) -> QueueEntry | None:
        return self._queue.peek()

    async def length(self) -> int:
        return self._queue.length

    # === Writes ===

    async def replace_all(self, entries: Sequence[QueueEntry] | None) -> None:
        """Replace the whole queue. Entries are stored exactly as given.

        Raises:
            MissingFieldError: If no queue was supplied.
        """
        if entries is None:
            raise MissingFieldError("queue")

        self._queue.replace_all(entries)
        logger.info(LogTemplates.QUEUE_REPLACED, self._queue.length)
        if self._persist_on_replace:
            self._schedule_snapshot()

    async def replace_at(self, index: int, url: QueueEntry | None) -> None:
        """Overwrite a single entry in place.

        Raises:
            IndexOutOfRangeError: If the index does not address an entry.
            MissingFieldError: If no URL was supplied.
        """
        position = normalize_index(index, self._queue.length)
        if not url:
            raise MissingFieldError("url")

        self._queue.replace_at(position, url)
        logger.info(LogTemplates.QUEUE_ENTRY_REPLACED, position)
        if self._persist_on_replace:
            self._schedule_snapshot()

    async def append(self, url: QueueEntry | None) -> AppendResult:
        """Queue ``url`` at the tail unless a preprocessor claims it.

        A claimed URL is not queued here; the claiming preprocessor delivers
        its results later through :meth:`enqueue_resolved`.

        Raises:
            MissingFieldError: If no URL was supplied.
        """
        if not url:
            raise MissingFieldError("url")

        if self._gate.offer(url):
            logger.info(LogTemplates.QUEUE_APPEND_PENDING, url)
            return AppendResult(
                outcome=AppendOutcome.PENDING,
                url=url,
                queue_length=self._queue.length,
            )

        position = self._queue.append(url)
        self._schedule_snapshot()
        logger.info(LogTemplates.QUEUE_APPENDED, url, position)

        return AppendResult(
            outcome=AppendOutcome.QUEUED,
            url=url,
            queue_length=self._queue.length,
            position=position,
        )

    async def enqueue_resolved(self, urls: Iterable[QueueEntry]) -> int:
        """Append URLs produced by a preprocessor, bypassing the gate."""
        added = self._queue.extend(urls)
        if added:
            self._schedule_snapshot()
            logger.info(LogTemplates.QUEUE_RESOLVED_APPENDED, added)
        return added

    async def rotate(self) -> int:
        """Move the head entry to the tail and return the queue length."""
        head = self._queue.peek()
        length = self._queue.rotate()
        if head is not None:
            logger.debug(LogTemplates.QUEUE_ROTATED, head)
        return length

    # === Persistence ===

    def _schedule_snapshot(self) -> None:
        if self._repository is None:
            return

        version = self._queue.version
        self._scheduled_version = version
        task = asyncio.create_task(self._write_snapshot(version, self._queue.snapshot()))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write_snapshot(self, version: int, entries: list[QueueEntry]) -> None:
        repository = self._repository
        if repository is None:
            return

        async with self._write_lock:
            if version < self._scheduled_version:
                logger.debug(LogTemplates.SNAPSHOT_SUPERSEDED, version, self._scheduled_version)
                return

            try:
                await repository.save(entries)
            except PersistenceWriteError as e:
                logger.error(LogTemplates.SNAPSHOT_WRITE_FAILED, repository.location, e)
                return
            except Exception:
                logger.exception(LogTemplates.SNAPSHOT_WRITE_UNEXPECTED, repository.location)
                return

            self._written_version = version
            logger.debug(
                LogTemplates.SNAPSHOT_WRITTEN, len(entries), repository.location, version
            )

    async def flush(self) -> int:
        """Wait for every in-flight snapshot write and return how many there were."""
        pending = list(self._pending_writes)
        if pending:
            await asyncio.gather(*pending)
            logger.debug(LogTemplates.SNAPSHOTS_FLUSHED, len(pending))
        return len(pending)
