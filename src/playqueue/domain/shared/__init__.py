"""
Shared Domain Kernel

Exceptions, messages and constrained types shared across the domain.
"""

from playqueue.domain.shared.exceptions import (
    DomainError,
    IndexOutOfRangeError,
    MissingFieldError,
    PersistenceWriteError,
    StartupPersistenceError,
)

__all__ = [
    "DomainError",
    "IndexOutOfRangeError",
    "MissingFieldError",
    "PersistenceWriteError",
    "StartupPersistenceError",
]
