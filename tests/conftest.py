"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from fileops.host.local import LocalFileSystem


class FlakyFileSystem(LocalFileSystem):
    """LocalFileSystem that fails selected primitives for chosen paths."""

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.fail_unlink: set[Path] = set()
        self.fail_copy: set[Path] = set()
        self.fail_rename = False
        self.unlinked: list[Path] = []

    def unlink(self, path: Path) -> None:
        if path in self.fail_unlink:
            raise PermissionError(f"Permission denied: '{path}'")
        super().unlink(path)
        self.unlinked.append(path)

    def copy_bytes_with_attributes(self, src: Path, dst: Path) -> None:
        if src in self.fail_copy:
            raise OSError(f"Input/output error: '{src}'")
        super().copy_bytes_with_attributes(src, dst)

    def rename(self, src: Path, dst: Path) -> None:
        if self.fail_rename:
            raise OSError(18, "Invalid cross-device link")
        super().rename(src, dst)


@pytest.fixture
def flaky_fs() -> FlakyFileSystem:
    """A local filesystem with injectable failures."""
    return FlakyFileSystem()


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, dict[str, str | None]], Path]:
    """Factory building a directory tree from a {relative path: content} mapping.

    A value of None creates a directory instead of a file.
    """

    def _make(name: str, entries: dict[str, str | None]) -> Path:
        root = tmp_path / name
        root.mkdir()
        for relative, content in entries.items():
            target = root / relative
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content)
        return root

    return _make


def snapshot(root: Path) -> dict[str, bytes | None]:
    """Map every entry under root to its bytes (None for directories)."""
    result: dict[str, bytes | None] = {}
    for entry in sorted(root.rglob("*")):
        relative = str(entry.relative_to(root))
        result[relative] = None if entry.is_dir() else entry.read_bytes()
    return result


@pytest.fixture
def tree_snapshot() -> Callable[[Path], dict[str, bytes | None]]:
    """Return a function that captures a tree's structure and contents."""
    return snapshot
