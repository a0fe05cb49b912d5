"""Hashing result models and the cooperative cancellation token."""

import threading
from dataclasses import dataclass
from enum import Enum


class HashStatus(str, Enum):
    """Outcome of a digest computation.

    Attributes:
        OK: The whole file was digested.
        CANCELLED: Cancellation was requested before the file was finished.
        UNAVAILABLE: No digest could be produced.
    """

    OK = "ok"
    CANCELLED = "cancelled"
    UNAVAILABLE = "unavailable"


class HashFailure(str, Enum):
    """Reason a digest is unavailable.

    Attributes:
        ALGORITHM_UNSUPPORTED: hashlib does not provide the algorithm.
        OPEN_FAILED: The file could not be opened for reading.
        READ_FAILED: Reading failed after the file was opened.
    """

    ALGORITHM_UNSUPPORTED = "algorithm_unsupported"
    OPEN_FAILED = "open_failed"
    READ_FAILED = "read_failed"


@dataclass(frozen=True, slots=True)
class HashResult:
    """Result of hashing a single file.

    Attributes:
        path: File that was hashed.
        algorithm: hashlib algorithm name.
        status: Whether a digest was produced.
        digest: Lowercase hex digest, only set when status is OK.
        reason: Why the digest is unavailable, None otherwise.
        error: Underlying error message, if any.
    """

    path: str
    algorithm: str
    status: HashStatus
    digest: str | None = None
    reason: HashFailure | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        """Keep digest and status consistent."""
        if (self.status == HashStatus.OK) != (self.digest is not None):
            msg = f"Digest must be set exactly when status is OK, got {self.status.value}"
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        """Check if a complete digest is available."""
        return self.status == HashStatus.OK

    @property
    def cancelled(self) -> bool:
        """Check if hashing was cancelled."""
        return self.status == HashStatus.CANCELLED


class CancellationToken:
    """Externally owned flag polled by long-running operations.

    Any thread may call cancel(); the hashing loop checks the flag once
    per chunk.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    def reset(self) -> None:
        """Clear a previous cancellation request so the token can be reused."""
        self._event.clear()

    @property
    def cancelled(self) -> bool:
        """Check whether cancellation has been requested."""
        return self._event.is_set()
