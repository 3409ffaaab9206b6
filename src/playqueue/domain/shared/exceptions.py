"""Base exception classes for domain-level errors."""

from __future__ import annotations

from playqueue.domain.shared.messages import ErrorMessages


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class IndexOutOfRangeError(DomainError):
    """Raised when a queue index falls outside the queue after normalization."""

    def __init__(self, index: int, length: int, message: str | None = None) -> None:
        msg = message or ErrorMessages.INDEX_OUT_OF_RANGE.format(index=index, length=length)
        super().__init__(msg, code="INDEX_OUT_OF_RANGE")
        self.index = index
        self.length = length


class MissingFieldError(DomainError):
    """Raised when a mutation request omits a required payload field."""

    def __init__(self, field: str, message: str | None = None) -> None:
        msg = message or ErrorMessages.MISSING_FIELD.format(field=field)
        super().__init__(msg, code="MISSING_FIELD")
        self.field = field


class StartupPersistenceError(DomainError):
    """Raised when the backing file exists but cannot be read or parsed at startup."""

    def __init__(self, path: str, reason: str) -> None:
        msg = ErrorMessages.STARTUP_LOAD_FAILED.format(path=path, reason=reason)
        super().__init__(msg, code="STARTUP_PERSISTENCE_FAILURE")
        self.path = path
        self.reason = reason


class PersistenceWriteError(DomainError):
    """Raised when a queue snapshot cannot be written to the backing file."""

    def __init__(self, path: str, reason: str) -> None:
        msg = ErrorMessages.SNAPSHOT_WRITE_FAILED.format(path=path, reason=reason)
        super().__init__(msg, code="PERSISTENCE_WRITE_FAILURE")
        self.path = path
        self.reason = reason
