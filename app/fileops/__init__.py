"""fileops - recursive filesystem mutation primitives.

Provides copy, move and delete over directory trees, cancellable content
hashing, storage root enumeration and human-readable size formatting.
"""

from fileops.core.size import format_size
from fileops.hashing import CancellationToken, ContentHasher, HashResult, HashStatus
from fileops.storage import list_roots
from fileops.tree import TreeMutator, TreeResult

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "ContentHasher",
    "HashResult",
    "HashStatus",
    "TreeMutator",
    "TreeResult",
    "__version__",
    "format_size",
    "list_roots",
]
