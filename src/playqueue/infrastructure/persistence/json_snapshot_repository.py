"""JSON file implementation of the queue snapshot repository."""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from playqueue.domain.queue.repository import QueueSnapshotRepository
from playqueue.domain.shared.exceptions import PersistenceWriteError, StartupPersistenceError
from playqueue.domain.shared.messages import ErrorMessages
from playqueue.domain.shared.types import QueueEntry

_ENTRIES_ADAPTER: TypeAdapter[list[QueueEntry]] = TypeAdapter(list[QueueEntry])


class JsonQueueSnapshotRepository(QueueSnapshotRepository):
    """Stores the queue as a JSON array of URL strings in a single file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def load(self) -> list[QueueEntry] | None:
        if not self._path.exists():
            return None

        try:
            raw = self._path.read_bytes()
        except OSError as e:
            raise StartupPersistenceError(self.location, e.strerror or repr(e)) from e

        try:
            return _ENTRIES_ADAPTER.validate_json(raw, strict=True)
        except ValidationError as e:
            reason = ErrorMessages.NOT_A_URL_LIST
            if any(err["type"] == "json_invalid" for err in e.errors()):
                reason = e.errors()[0]["msg"]
            raise StartupPersistenceError(self.location, reason) from e

    async def save(self, entries: list[QueueEntry]) -> None:
        try:
            await asyncio.to_thread(self._write_sync, json.dumps(entries))
        except OSError as e:
            raise PersistenceWriteError(self.location, e.strerror or repr(e)) from e

    def _write_sync(self, payload: str) -> None:
        """Write to a sibling temp file, then swap it into place."""
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
