"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the snapshot repository, the preprocessor
pipeline, the Queue Store and the HTTP application. Components are created
on first access and cached for reuse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from fastapi import FastAPI

    from ..application.interfaces.preprocessor import Preprocessor
    from ..application.services.queue_service import QueueStore
    from ..application.services.resolution_gate import ResolutionGate
    from ..domain.queue.repository import QueueSnapshotRepository
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Extra preprocessors passed at construction are registered with the
    Resolution Gate alongside the built-in ones.
    """

    settings: Settings
    extra_preprocessors: list[Preprocessor] = field(default_factory=list)

    # Persistence layer
    _snapshot_repository: QueueSnapshotRepository | None = None

    # Application services
    _resolution_gate: ResolutionGate | None = None
    _queue_store: QueueStore | None = None

    # Resource adapter
    _app: FastAPI | None = None

    # === Repositories ===

    @property
    def snapshot_repository(self) -> QueueSnapshotRepository:
        """Get the queue snapshot repository."""
        if self._snapshot_repository is None:
            from ..infrastructure.persistence.json_snapshot_repository import (
                JsonQueueSnapshotRepository,
            )

            self._snapshot_repository = JsonQueueSnapshotRepository(self.settings.playqueue.path)
        return self._snapshot_repository

    # === Application Services ===

    @property
    def resolution_gate(self) -> ResolutionGate:
        """Get the Resolution Gate with every configured preprocessor registered."""
        if self._resolution_gate is None:
            from ..application.services.resolution_gate import ResolutionGate

            gate = ResolutionGate()
            if self.settings.preprocessors.expand_playlists:
                from ..infrastructure.preprocessors.m3u_playlist import M3UPlaylistPreprocessor

                gate.register(
                    M3UPlaylistPreprocessor(timeout_s=self.settings.preprocessors.fetch_timeout_s)
                )
            for preprocessor in self.extra_preprocessors:
                gate.register(preprocessor)
            self._resolution_gate = gate
        return self._resolution_gate

    @property
    def queue_store(self) -> QueueStore:
        """Get the Queue Store, loading the persisted queue on first access.

        Raises:
            StartupPersistenceError: If the backing file exists but cannot be loaded.
        """
        if self._queue_store is None:
            from ..application.services.queue_service import QueueStore
            from ..infrastructure.preprocessors.expanding import ExpandingPreprocessor

            store = QueueStore.initialize(
                self.settings.playqueue,
                repository=self.snapshot_repository,
                gate=self.resolution_gate,
            )
            # Claiming preprocessors deliver their results back into the store
            for preprocessor in self.resolution_gate.preprocessors:
                if isinstance(preprocessor, ExpandingPreprocessor):
                    preprocessor.bind(store)
            self._queue_store = store
        return self._queue_store

    # === Resource Adapter ===

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application exposing the queue."""
        if self._app is None:
            from ..infrastructure.http.router import create_app

            self._app = create_app(self)
        return self._app

    # === Lifecycle ===

    def initialize(self) -> None:
        """Load the persisted queue before the server starts accepting requests."""
        _ = self.queue_store

    async def shutdown(self) -> None:
        """Stop preprocessors and wait for in-flight snapshot writes."""
        if self._resolution_gate is not None:
            try:
                await self._resolution_gate.aclose()
            except Exception as exc:
                logger.warning("Failed closing preprocessors: %r", exc)

        if self._queue_store is not None:
            await self._queue_store.flush()


def create_container(settings: Settings, preprocessors: list[Preprocessor] | None = None) -> Container:
    """Create a new dependency injection container."""
    return Container(settings, extra_preprocessors=list(preprocessors or []))
