"""
Play Queue Repository Interface

Abstract base class defining the contract for queue persistence.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from playqueue.domain.shared.types import QueueEntry


class QueueSnapshotRepository(ABC):
    """Abstract repository storing the full queue as a single snapshot.

    Every save overwrites the previous snapshot wholesale; nothing is
    appended incrementally.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the backing store, used in log lines."""
        ...

    @abstractmethod
    def load(self) -> list[QueueEntry] | None:
        """Read the persisted queue.

        Called once, synchronously, before the service starts accepting requests.

        Returns:
            The persisted entries in order, or None if nothing has been persisted yet.

        Raises:
            StartupPersistenceError: If a snapshot exists but cannot be read or parsed.
        """
        ...

    @abstractmethod
    async def save(self, entries: list[QueueEntry]) -> None:
        """Overwrite the persisted queue with ``entries``.

        Args:
            entries: The full queue, in order.

        Raises:
            PersistenceWriteError: If the snapshot could not be written.
        """
        ...
