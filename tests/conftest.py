import pytest

from playqueue.application.interfaces.preprocessor import Preprocessor

# ============================================================================
# Preprocessor Doubles
# ============================================================================


class RecordingPreprocessor(Preprocessor):
    """Preprocessor that records every offer and claims according to a flag."""

    def __init__(self, claim: bool = False) -> None:
        self.claim = claim
        self.offered: list[str] = []

    def attempt(self, url: str) -> bool:
        self.offered.append(url)
        return self.claim


@pytest.fixture
def passing_preprocessor():
    return RecordingPreprocessor(claim=False)


@pytest.fixture
def claiming_preprocessor():
    return RecordingPreprocessor(claim=True)


# ============================================================================
# Queue Store Fixtures
# ============================================================================


@pytest.fixture
def gate():
    """Resolution Gate with no preprocessors registered."""
    from playqueue.application.services.resolution_gate import ResolutionGate

    return ResolutionGate()


@pytest.fixture
def queue_path(tmp_path):
    """Backing file location inside a per-test temporary directory."""
    return tmp_path / "queue.json"


@pytest.fixture
def snapshot_repository(queue_path):
    from playqueue.infrastructure.persistence.json_snapshot_repository import (
        JsonQueueSnapshotRepository,
    )

    return JsonQueueSnapshotRepository(queue_path)


@pytest.fixture
def memory_store(gate):
    """Queue Store without persistence, preloaded with three entries."""
    from playqueue.application.services.queue_service import QueueStore
    from playqueue.domain.queue.entities import PlayQueue

    return QueueStore(gate=gate, queue=PlayQueue(entries=["a", "b", "c"]))


@pytest.fixture
def persistent_store(gate, snapshot_repository):
    """Queue Store writing snapshots to a temporary file."""
    from playqueue.application.services.queue_service import QueueStore

    return QueueStore(gate=gate, repository=snapshot_repository)
