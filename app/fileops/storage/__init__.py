"""Storage root enumeration."""

from fileops.storage.enumerator import list_roots, volume_root

__all__ = [
    "list_roots",
    "volume_root",
]
