"""Content hashing.

This module provides cancellable streaming file digests.
"""

from fileops.hashing.hasher import ContentHasher
from fileops.hashing.models import CancellationToken, HashFailure, HashResult, HashStatus

__all__ = [
    "CancellationToken",
    "ContentHasher",
    "HashFailure",
    "HashResult",
    "HashStatus",
]
