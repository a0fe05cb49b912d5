"""Result models for tree operations.

Tree operations report a tagged outcome internally and collapse it to a
boolean at the public copy/move/delete boundary.
"""

from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(str, Enum):
    """Status of a tree operation.

    Attributes:
        SUCCESS: The operation completed (or was a collision no-op).
        FAILURE: The operation stopped at the first error.
    """

    SUCCESS = "success"
    FAILURE = "failure"


# Reasons attached to skipped results
DESTINATION_EXISTS = "Destination already exists"
SAME_PATH = "Source and destination are the same path"


@dataclass(frozen=True, slots=True)
class TreeResult:
    """Result of a single copy, move or delete operation.

    Attributes:
        path: Path the result refers to; for failures, where the error occurred.
        status: Whether the operation succeeded.
        error: Error message if the operation failed, None otherwise.
        skipped: True when nothing was done because nothing needed doing.
        note: Why a skipped operation was skipped.
    """

    path: str
    status: OutcomeStatus
    error: str | None = None
    skipped: bool = False
    note: str | None = None

    @property
    def success(self) -> bool:
        """Check if the operation succeeded."""
        return self.status == OutcomeStatus.SUCCESS

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, path: str, *, skipped: bool = False, note: str | None = None) -> "TreeResult":
        """Create a successful result."""
        return cls(path=path, status=OutcomeStatus.SUCCESS, skipped=skipped, note=note)

    @classmethod
    def failed(cls, path: str, error: str) -> "TreeResult":
        """Create a failed result carrying its cause."""
        return cls(path=path, status=OutcomeStatus.FAILURE, error=error)
