"""
Queue Bounded Context

Domain logic for the ordered play queue and its index-addressing rules.
"""

from playqueue.domain.queue.entities import PlayQueue
from playqueue.domain.queue.repository import QueueSnapshotRepository
from playqueue.domain.queue.value_objects import AppendOutcome, normalize_index

__all__ = [
    # Entities
    "PlayQueue",
    # Value Objects
    "AppendOutcome",
    "normalize_index",
    # Repository
    "QueueSnapshotRepository",
]
