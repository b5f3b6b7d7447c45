"""
Result types returned by repository write operations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.orm.exc import StaleDataError

from repositories.filters import InvalidFilterError


class RepositoryErrorKind(str, Enum):
    """Classification of repository failures."""

    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    CONCURRENCY_CONFLICT = "concurrency_conflict"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    INVALID_QUERY = "invalid_query"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RepositoryError:
    """What went wrong inside the repository."""

    kind: RepositoryErrorKind
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "RepositoryError":
        return cls(kind=classify_exception(exc), message=str(exc))


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a write operation.

    Truthy when the operation succeeded, so `if await repo.add(x):` reads
    naturally; `error` explains a failure.
    """

    succeeded: bool
    error: Optional[RepositoryError] = None

    def __bool__(self) -> bool:
        return self.succeeded

    @property
    def error_kind(self) -> Optional[RepositoryErrorKind]:
        return self.error.kind if self.error else None

    @classmethod
    def ok(cls) -> "OperationResult":
        return cls(succeeded=True)

    @classmethod
    def fail(cls, kind: RepositoryErrorKind, message: str) -> "OperationResult":
        return cls(succeeded=False, error=RepositoryError(kind=kind, message=message))


def classify_exception(exc: BaseException) -> RepositoryErrorKind:
    """Map a storage-layer exception to a RepositoryErrorKind."""
    if isinstance(exc, InvalidFilterError):
        return RepositoryErrorKind.INVALID_QUERY
    if isinstance(exc, IntegrityError):
        return RepositoryErrorKind.CONSTRAINT_VIOLATION
    if isinstance(exc, StaleDataError):
        return RepositoryErrorKind.CONCURRENCY_CONFLICT
    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError, ConnectionError)):
        return RepositoryErrorKind.STORAGE_UNAVAILABLE
    return RepositoryErrorKind.UNKNOWN
