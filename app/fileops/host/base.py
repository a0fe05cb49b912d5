"""Abstract host filesystem capability.

This module defines the HostFileSystem interface through which the tree,
hashing and storage components reach the operating system. Tests and
alternative hosts substitute their own implementation.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO


class HostFileSystem(ABC):
    """Abstract base class for host filesystem access.

    Query methods (exists, is_file, ...) never raise for missing paths.
    Mutating primitives raise OSError on failure; callers convert those
    errors into result objects at the operation boundary.

    Example:
        >>> fs = LocalFileSystem()
        >>> if fs.is_dir(Path("/tmp")):
        ...     for child in fs.list_children(Path("/tmp")):
        ...         print(child)
    """

    # -- queries -----------------------------------------------------------

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check whether anything (including a dangling symlink) is at path."""

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Check whether path is a regular file (symlinks followed)."""

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Check whether path is a directory (symlinks followed)."""

    @abstractmethod
    def is_symlink(self, path: Path) -> bool:
        """Check whether path itself is a symbolic link."""

    @abstractmethod
    def identity(self, path: Path) -> tuple[int, int] | None:
        """Return a (device, inode) pair identifying the target of path.

        Returns:
            The identity pair, or None if the path cannot be stat'ed.
        """

    @abstractmethod
    def real_path(self, path: Path) -> Path:
        """Resolve symbolic links in path; missing trailing parts are kept."""

    @abstractmethod
    def list_children(self, path: Path) -> list[Path]:
        """List the direct children of a directory.

        Raises:
            OSError: If the directory cannot be read.
        """

    # -- mutations ---------------------------------------------------------

    @abstractmethod
    def create_directory(self, path: Path) -> None:
        """Create a single directory (parents must exist).

        Raises:
            OSError: If the directory cannot be created.
        """

    @abstractmethod
    def supports_rename(self) -> bool:
        """Check whether the host offers an atomic rename primitive."""

    @abstractmethod
    def rename(self, src: Path, dst: Path) -> None:
        """Atomically rename src to dst.

        Raises:
            OSError: If the rename fails (e.g. across volumes).
        """

    @abstractmethod
    def copy_bytes_with_attributes(self, src: Path, dst: Path) -> None:
        """Copy a regular file's contents, and attributes where supported.

        Raises:
            OSError: On any read or write failure.
        """

    @abstractmethod
    def open_read(self, path: Path) -> BinaryIO:
        """Open a file for binary reading.

        Raises:
            OSError: If the file cannot be opened.
        """

    @abstractmethod
    def open_write(self, path: Path) -> BinaryIO:
        """Create a new file for binary writing; existing files are refused.

        Raises:
            OSError: If the file exists or cannot be created.
        """

    @abstractmethod
    def unlink(self, path: Path) -> None:
        """Remove a file or symbolic link.

        Raises:
            OSError: If removal fails.
        """

    @abstractmethod
    def remove_directory(self, path: Path) -> None:
        """Remove an empty directory.

        Raises:
            OSError: If removal fails.
        """

    # -- environment -------------------------------------------------------

    @abstractmethod
    def supports_app_external_dirs(self) -> bool:
        """Check whether app-scoped external directories can be enumerated."""

    @abstractmethod
    def query_app_external_dirs(self) -> list[Path | None]:
        """Return app-scoped external directories; unavailable entries are None."""

    @abstractmethod
    def read_env_var(self, name: str) -> str | None:
        """Read a process environment variable, None if unset."""
