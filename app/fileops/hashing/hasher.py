"""Cancellable streaming file digests."""

import hashlib
import logging
import os
from pathlib import Path

from fileops.core.settings import DEFAULT_CHUNK_SIZE, FileOpsSettings
from fileops.hashing.models import CancellationToken, HashFailure, HashResult, HashStatus
from fileops.host.base import HostFileSystem
from fileops.host.local import LocalFileSystem

logger = logging.getLogger(__name__)


class ContentHasher:
    """Streams files through a hashlib digest in fixed-size chunks.

    Attributes:
        _fs: Host filesystem used to open files.
        _algorithm: hashlib algorithm name.
        _chunk_size: Bytes read between cancellation checks.
    """

    def __init__(
        self,
        fs: HostFileSystem | None = None,
        *,
        algorithm: str = "md5",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Initialize the ContentHasher.

        Args:
            fs: Host filesystem. Defaults to LocalFileSystem().
            algorithm: hashlib algorithm name (e.g. "md5", "sha256").
            chunk_size: Bytes read per step; cancellation is checked once per step.

        Raises:
            ValueError: If chunk_size is not positive.
        """
        if chunk_size < 1:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)
        self._fs = fs if fs is not None else LocalFileSystem()
        self._algorithm = algorithm.lower()
        self._chunk_size = chunk_size

    @classmethod
    def from_settings(
        cls, settings: FileOpsSettings, fs: HostFileSystem | None = None
    ) -> "ContentHasher":
        """Build a ContentHasher configured from settings."""
        return cls(fs, algorithm=settings.hash_algorithm, chunk_size=settings.chunk_size)

    @property
    def algorithm(self) -> str:
        """The hashlib algorithm name."""
        return self._algorithm

    def digest(
        self,
        path: str | os.PathLike[str],
        cancel: CancellationToken | None = None,
    ) -> HashResult:
        """Compute the digest of a file.

        The token is checked before every chunk, including the first, so a
        cancellation requested up front never yields a digest of zero bytes.
        The file handle is closed on every exit path.

        Args:
            path: File to hash. Callers should check it exists first.
            cancel: Optional cancellation token.

        Returns:
            HashResult with status OK, CANCELLED or UNAVAILABLE.
        """
        target = Path(os.path.abspath(path))

        try:
            accumulator = hashlib.new(self._algorithm)
        except ValueError as e:
            logger.warning("Digest algorithm %s is not supported: %s", self._algorithm, e)
            return self._unavailable(target, HashFailure.ALGORITHM_UNSUPPORTED, str(e))

        # Variable-length digests (shake_*) have no fixed hexdigest
        if accumulator.digest_size == 0:
            return self._unavailable(
                target,
                HashFailure.ALGORITHM_UNSUPPORTED,
                f"Variable-length digest not supported: {self._algorithm}",
            )

        try:
            stream = self._fs.open_read(target)
        except OSError as e:
            logger.warning("Cannot open %s for hashing: %s", target, e)
            return self._unavailable(target, HashFailure.OPEN_FAILED, str(e))

        with stream:
            try:
                while True:
                    if cancel is not None and cancel.cancelled:
                        logger.debug("Hashing of %s cancelled", target)
                        return HashResult(
                            path=str(target),
                            algorithm=self._algorithm,
                            status=HashStatus.CANCELLED,
                        )
                    chunk = stream.read(self._chunk_size)
                    if not chunk:
                        break
                    accumulator.update(chunk)
            except OSError as e:
                logger.warning("Read failed while hashing %s: %s", target, e)
                return self._unavailable(target, HashFailure.READ_FAILED, str(e))

        return HashResult(
            path=str(target),
            algorithm=self._algorithm,
            status=HashStatus.OK,
            digest=accumulator.hexdigest(),
        )

    def _unavailable(self, target: Path, reason: HashFailure, error: str) -> HashResult:
        return HashResult(
            path=str(target),
            algorithm=self._algorithm,
            status=HashStatus.UNAVAILABLE,
            reason=reason,
            error=error,
        )
