"""Result models returned by the Queue Store."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ...domain.queue.value_objects import AppendOutcome
from ...domain.shared.types import NonNegativeInt, QueueEntry


class AppendResult(BaseModel):
    """Outcome of an append request."""

    model_config = ConfigDict(frozen=True)

    outcome: AppendOutcome
    url: QueueEntry
    queue_length: NonNegativeInt
    position: NonNegativeInt | None = None

    @property
    def queued(self) -> bool:
        return self.outcome == AppendOutcome.QUEUED

    @property
    def pending(self) -> bool:
        return self.outcome.is_pending
