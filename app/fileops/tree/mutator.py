"""Recursive copy, move and delete over directory trees.

Every operation re-reads the filesystem on each call, stops at the first
failure and leaves partial work in place. I/O errors never escape: they
are logged and returned as failed TreeResult objects.
"""

import logging
import os
from pathlib import Path

from fileops.host.base import HostFileSystem
from fileops.host.local import LocalFileSystem
from fileops.host.strategies import MoveOutcome, MoveStrategy, select_move_strategy
from fileops.tree.models import DESTINATION_EXISTS, SAME_PATH, TreeResult

logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]


def _normalize(path: StrPath) -> Path:
    """Return the absolute, lexically normalized form of path."""
    return Path(os.path.abspath(path))


class TreeMutator:
    """Copies, moves and deletes files and directory trees.

    A destination that already exists is never overwritten: copy and move
    report success without touching it.

    Attributes:
        _fs: Host filesystem used for every query and mutation.
        _strategy: Atomic move strategy chosen when the mutator was built.

    Example:
        >>> mutator = TreeMutator()
        >>> if not mutator.move("/data/photos", "/backup/photos"):
        ...     print("move failed")
    """

    def __init__(
        self,
        fs: HostFileSystem | None = None,
        *,
        strategy: MoveStrategy | None = None,
    ) -> None:
        """Initialize the TreeMutator.

        Args:
            fs: Host filesystem. Defaults to LocalFileSystem().
            strategy: Move strategy. Defaults to probing fs once.
        """
        self._fs = fs if fs is not None else LocalFileSystem()
        self._strategy = strategy if strategy is not None else select_move_strategy(self._fs)

    @property
    def strategy(self) -> MoveStrategy:
        """The move strategy in use."""
        return self._strategy

    # === Boolean boundary ===

    def copy(self, src: StrPath, dst: StrPath) -> bool:
        """Copy a file or directory tree; see copy_tree."""
        return self.copy_tree(src, dst).success

    def move(self, src: StrPath, dst: StrPath) -> bool:
        """Move a file or directory tree; see move_tree."""
        return self.move_tree(src, dst).success

    def delete(self, path: StrPath) -> bool:
        """Delete a file or directory tree; see delete_tree."""
        return self.delete_tree(path).success

    # === Tagged results ===

    def copy_tree(self, src: StrPath, dst: StrPath) -> TreeResult:
        """Copy src to dst recursively.

        Directories are recreated and their children copied one by one;
        files are copied with their attributes where the host allows.
        The first failing child aborts the copy and leaves the partially
        populated destination in place. Nothing is ever deleted.

        Args:
            src: File or directory to copy.
            dst: Destination path.

        Returns:
            TreeResult; skipped=True if dst already existed.
        """
        source = _normalize(src)
        target = _normalize(dst)

        if self._fs.exists(target):
            logger.info("Destination exists, nothing copied: %s", target)
            return TreeResult.ok(str(target), skipped=True, note=DESTINATION_EXISTS)

        # Resolved, so a symlinked route into the source is caught as well
        if self._fs.is_dir(source) and self._fs.real_path(target).is_relative_to(
            self._fs.real_path(source)
        ):
            return TreeResult.failed(
                str(source),
                f"Cannot copy {source} into its own subtree {target}",
            )

        return self._copy(source, target, frozenset(), set())

    def move_tree(self, src: StrPath, dst: StrPath) -> TreeResult:
        """Move src to dst.

        Tries the atomic move strategy first. If it fails or is
        unsupported, falls back to copy_tree followed by delete_tree.
        When the copy succeeds but the source cannot be fully removed,
        both trees exist and the result is a failure whose error says
        the source cleanup is pending.

        Args:
            src: File or directory to move.
            dst: Destination path.

        Returns:
            TreeResult; skipped=True if src and dst are the same path or
            dst already existed.
        """
        source = _normalize(src)
        target = _normalize(dst)

        if source == target:
            return TreeResult.ok(str(target), skipped=True, note=SAME_PATH)

        if self._fs.exists(target):
            logger.info("Destination exists, nothing moved: %s", target)
            return TreeResult.ok(str(target), skipped=True, note=DESTINATION_EXISTS)

        outcome = self._strategy.attempt(source, target)
        if outcome == MoveOutcome.MOVED:
            logger.debug("Moved %s -> %s via %s", source, target, self._strategy.name)
            return TreeResult.ok(str(target))

        logger.debug("Falling back to copy and delete for %s (%s)", source, outcome.value)
        copied = self.copy_tree(source, target)
        if not copied:
            return copied

        deleted = self.delete_tree(source)
        if not deleted:
            return TreeResult.failed(
                deleted.path,
                f"Copied to {target} but source cleanup is pending: {deleted.error}",
            )
        return TreeResult.ok(str(target))

    def delete_tree(self, path: StrPath) -> TreeResult:
        """Delete path, children before parents.

        Symbolic links are unlinked and never followed. For directories the
        first failing child aborts the deletion, leaving the remaining
        children and the directory itself in place.

        Args:
            path: File or directory to delete.

        Returns:
            TreeResult indicating success or failure.
        """
        return self._delete(_normalize(path))

    # === Private helpers ===

    def _copy(
        self,
        source: Path,
        target: Path,
        ancestors: frozenset[tuple[int, int]],
        created: set[tuple[int, int]],
    ) -> TreeResult:
        if self._fs.exists(target):
            logger.info("Destination exists, nothing copied: %s", target)
            return TreeResult.ok(str(target), skipped=True, note=DESTINATION_EXISTS)

        if self._fs.is_dir(source):
            return self._copy_directory(source, target, ancestors, created)

        if self._fs.is_file(source):
            try:
                self._fs.copy_bytes_with_attributes(source, target)
            except OSError as e:
                logger.warning("Failed to copy %s -> %s: %s", source, target, e)
                return TreeResult.failed(str(source), str(e))
            return TreeResult.ok(str(target))

        return TreeResult.failed(str(source), f"Not a regular file or directory: {source}")

    def _copy_directory(
        self,
        source: Path,
        target: Path,
        ancestors: frozenset[tuple[int, int]],
        created: set[tuple[int, int]],
    ) -> TreeResult:
        identity = self._fs.identity(source)
        if identity is not None and identity in ancestors:
            logger.warning("Symlink loop detected at %s", source)
            return TreeResult.failed(str(source), f"Symlink loop detected: {source}")

        try:
            self._fs.create_directory(target)
            children = self._fs.list_children(source)
        except OSError as e:
            logger.warning("Failed to copy directory %s -> %s: %s", source, target, e)
            return TreeResult.failed(str(source), str(e))

        # Directories made by this copy are never copied into themselves
        made = self._fs.identity(target)
        if made is not None:
            created.add(made)

        descent = ancestors | {identity} if identity is not None else ancestors
        for child in children:
            if self._fs.identity(child) in created:
                logger.debug("Skipping directory created by this copy: %s", child)
                continue
            result = self._copy(child, target / child.name, descent, created)
            if not result:
                return result

        return TreeResult.ok(str(target))

    def _delete(self, path: Path) -> TreeResult:
        if self._fs.is_symlink(path) or self._fs.is_file(path):
            try:
                self._fs.unlink(path)
            except OSError as e:
                logger.warning("Failed to delete %s: %s", path, e)
                return TreeResult.failed(str(path), str(e))
            return TreeResult.ok(str(path))

        if self._fs.is_dir(path):
            try:
                children = self._fs.list_children(path)
            except OSError as e:
                logger.warning("Failed to list %s: %s", path, e)
                return TreeResult.failed(str(path), str(e))

            for child in children:
                result = self._delete(child)
                if not result:
                    return result

            try:
                self._fs.remove_directory(path)
            except OSError as e:
                logger.warning("Failed to remove directory %s: %s", path, e)
                return TreeResult.failed(str(path), str(e))
            return TreeResult.ok(str(path))

        if not self._fs.exists(path):
            return TreeResult.failed(str(path), f"Path does not exist: {path}")
        return TreeResult.failed(str(path), f"Not a regular file or directory: {path}")
