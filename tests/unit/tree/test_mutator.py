"""Unit tests for TreeMutator.

Tests recursive copy, move with atomic and fallback paths, recursive
delete, the collision no-op policy, partial failure handling and
symlink loop protection.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from fileops.host.strategies import CopyDeleteMoveStrategy, RenameMoveStrategy
from fileops.tree.models import DESTINATION_EXISTS, SAME_PATH
from fileops.tree.mutator import TreeMutator

MakeTree = Callable[[str, dict[str, str | None]], Path]
Snapshot = Callable[[Path], dict[str, bytes | None]]


class TestCopy:
    """Tests for TreeMutator.copy / copy_tree."""

    def test_copy_scenario(self, make_tree: MakeTree, tmp_path: Path) -> None:
        """A file and an empty directory are copied."""
        src = make_tree("src", {"a.txt": "hi", "empty": None})
        dst = tmp_path / "dst"

        assert TreeMutator().copy(src, dst) is True

        assert (dst / "a.txt").read_text() == "hi"
        assert (dst / "empty").is_dir()
        assert list((dst / "empty").iterdir()) == []

    def test_copy_round_trip(
        self, make_tree: MakeTree, tree_snapshot: Snapshot, tmp_path: Path
    ) -> None:
        """Copied trees have identical structure and content."""
        src = make_tree(
            "src",
            {
                "zero.bin": "",
                "small.txt": "x",
                "nested/deeper/big.txt": "y" * 50_000,
                "nested/empty": None,
                "nested/deeper/also_empty": None,
            },
        )
        dst = tmp_path / "dst"

        assert TreeMutator().copy(src, dst) is True

        assert tree_snapshot(dst) == tree_snapshot(src)
        assert (src / "zero.bin").exists()

    def test_copy_single_file(self, tmp_path: Path) -> None:
        """A regular file is copied with its bytes."""
        src = tmp_path / "a.bin"
        src.write_bytes(b"\xff\x00data")
        dst = tmp_path / "b.bin"

        result = TreeMutator().copy_tree(src, dst)

        assert result.success is True
        assert result.skipped is False
        assert dst.read_bytes() == b"\xff\x00data"

    def test_copy_existing_destination_is_noop(
        self, make_tree: MakeTree, tree_snapshot: Snapshot
    ) -> None:
        """An existing destination reports success and is not modified."""
        src = make_tree("src", {"a.txt": "new content", "sub/b.txt": "new"})
        dst = make_tree("dst", {"a.txt": "old content"})
        before = tree_snapshot(dst)
        mtime = (dst / "a.txt").stat().st_mtime_ns

        result = TreeMutator().copy_tree(src, dst)

        assert result.success is True
        assert result.skipped is True
        assert tree_snapshot(dst) == before
        assert (dst / "a.txt").stat().st_mtime_ns == mtime

    def test_copy_file_onto_existing_file_is_noop(self, tmp_path: Path) -> None:
        """Copying a file onto an existing file keeps the old bytes."""
        src = tmp_path / "src.txt"
        src.write_text("new")
        dst = tmp_path / "dst.txt"
        dst.write_text("old")

        assert TreeMutator().copy(src, dst) is True
        assert dst.read_text() == "old"

    def test_copy_missing_source_fails(self, tmp_path: Path) -> None:
        """A missing source fails without creating anything."""
        dst = tmp_path / "dst"

        result = TreeMutator().copy_tree(tmp_path / "missing", dst)

        assert result.success is False
        assert result.error is not None
        assert not dst.exists()

    def test_copy_missing_parent_fails(self, make_tree: MakeTree, tmp_path: Path) -> None:
        """Failure to create the destination directory fails the copy."""
        src = make_tree("src", {"a.txt": "hi"})

        result = TreeMutator().copy_tree(src, tmp_path / "no" / "such" / "dst")

        assert result.success is False

    def test_copy_child_failure_aborts(
        self, make_tree: MakeTree, flaky_fs, tmp_path: Path
    ) -> None:
        """The first failing child fails the copy and leaves partial output."""
        src = make_tree("src", {"a.txt": "1", "b.txt": "2", "c.txt": "3"})
        flaky_fs.fail_copy.add(src / "b.txt")
        dst = tmp_path / "dst"

        result = TreeMutator(flaky_fs).copy_tree(src, dst)

        assert result.success is False
        assert result.path == str(src / "b.txt")
        assert "Input/output error" in (result.error or "")
        assert (dst / "a.txt").read_text() == "1"
        assert not (dst / "b.txt").exists()
        assert not (dst / "c.txt").exists()
        # Source untouched
        assert sorted(p.name for p in src.iterdir()) == ["a.txt", "b.txt", "c.txt"]

    def test_copy_into_own_subtree_fails(self, make_tree: MakeTree) -> None:
        """Copying a directory below itself is refused before any mutation."""
        src = make_tree("src", {"a.txt": "hi"})

        result = TreeMutator().copy_tree(src, src / "inner")

        assert result.success is False
        assert "own subtree" in (result.error or "")
        assert not (src / "inner").exists()

    def test_copy_into_own_subtree_through_symlink_fails(
        self, make_tree: MakeTree, tmp_path: Path
    ) -> None:
        """A destination reaching the source through a symlink is refused too."""
        src = make_tree("src", {"a.txt": "hi"})
        alias = tmp_path / "alias"
        alias.symlink_to(src)

        result = TreeMutator().copy_tree(src, alias / "inner")

        assert result.success is False
        assert "own subtree" in (result.error or "")
        assert sorted(p.name for p in src.iterdir()) == ["a.txt"]

    def test_copy_skips_symlink_to_destination(self, make_tree: MakeTree, tmp_path: Path) -> None:
        """A source symlink resolving to the new destination is not copied into it."""
        src = make_tree("src", {"a.txt": "hi"})
        dst = tmp_path / "dst"
        (src / "to_dst").symlink_to(dst)

        result = TreeMutator().copy_tree(src, dst)

        assert result.success is True
        assert (dst / "a.txt").read_text() == "hi"
        assert not (dst / "to_dst").exists()

    def test_copy_follows_directory_symlink(self, make_tree: MakeTree, tmp_path: Path) -> None:
        """Symlinked directories are copied as real directories."""
        target = make_tree("target", {"t.txt": "t"})
        src = make_tree("src", {})
        (src / "link").symlink_to(target)
        dst = tmp_path / "dst"

        assert TreeMutator().copy(src, dst) is True
        assert (dst / "link").is_dir()
        assert not (dst / "link").is_symlink()
        assert (dst / "link" / "t.txt").read_text() == "t"

    def test_copy_symlink_loop_fails(self, make_tree: MakeTree, tmp_path: Path) -> None:
        """A symlink pointing back up the tree is detected."""
        src = make_tree("src", {"sub/a.txt": "a"})
        (src / "sub" / "loop").symlink_to(src)
        dst = tmp_path / "dst"

        result = TreeMutator().copy_tree(src, dst)

        assert result.success is False
        assert "Symlink loop" in (result.error or "")

    def test_copy_dangling_symlink_fails(self, tmp_path: Path) -> None:
        """A source that is neither file nor directory fails."""
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "missing")

        result = TreeMutator().copy_tree(link, tmp_path / "dst")

        assert result.success is False
        assert "Not a regular file or directory" in (result.error or "")

    def test_copy_accepts_relative_paths(
        self, make_tree: MakeTree, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Relative paths are resolved against the working directory."""
        make_tree("src", {"a.txt": "hi"})
        monkeypatch.chdir(tmp_path)

        result = TreeMutator().copy_tree("src", "dst")

        assert result.success is True
        assert result.path == str(tmp_path / "dst")
        assert (tmp_path / "dst" / "a.txt").read_text() == "hi"


class TestMove:
    """Tests for TreeMutator.move / move_tree."""

    def test_move_same_path_is_noop(self, make_tree: MakeTree, tree_snapshot: Snapshot) -> None:
        """Moving a path onto itself succeeds without changes."""
        src = make_tree("src", {"a.txt": "hi"})
        before = tree_snapshot(src)

        assert TreeMutator().move(src, src) is True
        assert TreeMutator().move(str(src) + "/.", src) is True
        assert tree_snapshot(src) == before

    def test_skip_notes_name_the_reason(self, make_tree: MakeTree) -> None:
        """Skipped results say why nothing was done."""
        src = make_tree("src", {"a.txt": "new"})
        dst = make_tree("dst", {})

        same = TreeMutator().move_tree(src, src)
        existing = TreeMutator().move_tree(src, dst)

        assert same.note == SAME_PATH
        assert existing.note == DESTINATION_EXISTS

    def test_move_same_missing_path_is_noop(self, tmp_path: Path) -> None:
        """Moving a missing path onto itself also succeeds."""
        missing = tmp_path / "missing"

        assert TreeMutator().move(missing, missing) is True
        assert not missing.exists()

    def test_move_existing_destination_is_noop(
        self, make_tree: MakeTree, tree_snapshot: Snapshot
    ) -> None:
        """An existing destination is left alone and the source remains."""
        src = make_tree("src", {"a.txt": "new"})
        dst = make_tree("dst", {"a.txt": "old"})
        before = tree_snapshot(dst)

        result = TreeMutator().move_tree(src, dst)

        assert result.success is True
        assert result.skipped is True
        assert tree_snapshot(dst) == before
        assert (src / "a.txt").read_text() == "new"

    def test_move_renames(self, make_tree: MakeTree, tmp_path: Path) -> None:
        """Same-volume moves use the atomic rename."""
        src = make_tree("src", {"a.txt": "hi", "sub/b.txt": "b"})
        dst = tmp_path / "dst"

        mutator = TreeMutator()
        assert isinstance(mutator.strategy, RenameMoveStrategy)
        assert mutator.move(src, dst) is True

        assert not src.exists()
        assert (dst / "sub" / "b.txt").read_text() == "b"

    def test_move_falls_back_when_rename_fails(
        self, make_tree: MakeTree, tree_snapshot: Snapshot, flaky_fs, tmp_path: Path
    ) -> None:
        """A failed rename falls back to copy and delete."""
        src = make_tree("src", {"a.txt": "hi", "empty": None, "sub/b.txt": "b"})
        expected = tree_snapshot(src)
        flaky_fs.fail_rename = True
        dst = tmp_path / "dst"

        assert TreeMutator(flaky_fs).move(src, dst) is True

        assert not src.exists()
        assert tree_snapshot(dst) == expected
        assert src / "a.txt" in flaky_fs.unlinked

    def test_move_without_rename_support(
        self, make_tree: MakeTree, flaky_fs, tmp_path: Path
    ) -> None:
        """Hosts without rename always copy and delete."""
        src = make_tree("src", {"a.txt": "hi"})
        dst = tmp_path / "dst"
        mutator = TreeMutator(flaky_fs, strategy=CopyDeleteMoveStrategy(flaky_fs))

        assert mutator.move(src, dst) is True
        assert not src.exists()
        assert (dst / "a.txt").read_text() == "hi"

    def test_move_copy_failure_keeps_source(
        self, make_tree: MakeTree, flaky_fs, tmp_path: Path
    ) -> None:
        """If the fallback copy fails the source is never deleted."""
        src = make_tree("src", {"a.txt": "1", "b.txt": "2"})
        flaky_fs.fail_rename = True
        flaky_fs.fail_copy.add(src / "b.txt")

        result = TreeMutator(flaky_fs).move_tree(src, tmp_path / "dst")

        assert result.success is False
        assert (src / "a.txt").exists()
        assert (src / "b.txt").exists()
        assert flaky_fs.unlinked == []

    def test_move_delete_failure_reports_pending_cleanup(
        self, make_tree: MakeTree, flaky_fs, tmp_path: Path
    ) -> None:
        """Copy succeeded but delete failed: failure, both trees exist."""
        src = make_tree("src", {"a.txt": "1", "b.txt": "2"})
        flaky_fs.fail_rename = True
        flaky_fs.fail_unlink.add(src / "b.txt")
        dst = tmp_path / "dst"

        result = TreeMutator(flaky_fs).move_tree(src, dst)

        assert result.success is False
        assert "cleanup is pending" in (result.error or "")
        assert (dst / "a.txt").read_text() == "1"
        assert (dst / "b.txt").read_text() == "2"
        assert (src / "b.txt").exists()

    def test_move_missing_source_fails(self, tmp_path: Path) -> None:
        """Moving a missing source fails."""
        assert TreeMutator().move(tmp_path / "missing", tmp_path / "dst") is False
        assert not (tmp_path / "dst").exists()


class TestDelete:
    """Tests for TreeMutator.delete / delete_tree."""

    def test_delete_file(self, tmp_path: Path) -> None:
        """A regular file is unlinked."""
        target = tmp_path / "a.txt"
        target.write_text("hi")

        assert TreeMutator().delete(target) is True
        assert not target.exists()

    def test_delete_tree(self, make_tree: MakeTree) -> None:
        """A directory and all descendants are removed."""
        root = make_tree("root", {"a.txt": "a", "sub/deep/b.txt": "b", "empty": None})

        assert TreeMutator().delete(root) is True
        assert not root.exists()

    def test_delete_missing_fails(self, tmp_path: Path) -> None:
        """Deleting a missing path fails."""
        result = TreeMutator().delete_tree(tmp_path / "missing")

        assert result.success is False
        assert "does not exist" in (result.error or "")

    def test_delete_child_failure_aborts(self, make_tree: MakeTree, flaky_fs) -> None:
        """Children before the failure are gone; the rest and the parent stay."""
        root = make_tree("root", {"a.txt": "a", "b.txt": "b", "c.txt": "c"})
        flaky_fs.fail_unlink.add(root / "b.txt")

        result = TreeMutator(flaky_fs).delete_tree(root)

        assert result.success is False
        assert result.path == str(root / "b.txt")
        assert not (root / "a.txt").exists()
        assert (root / "b.txt").exists()
        assert (root / "c.txt").exists()
        assert root.is_dir()

    def test_delete_nested_failure_keeps_ancestors(self, make_tree: MakeTree, flaky_fs) -> None:
        """A failure deep in the tree keeps every ancestor directory."""
        root = make_tree("root", {"sub/inner/x.txt": "x", "z.txt": "z"})
        flaky_fs.fail_unlink.add(root / "sub" / "inner" / "x.txt")

        assert TreeMutator(flaky_fs).delete(root) is False

        assert (root / "sub" / "inner" / "x.txt").exists()
        assert (root / "z.txt").exists()

    def test_delete_does_not_follow_symlinks(self, make_tree: MakeTree) -> None:
        """Symlinked directories are unlinked, their targets kept."""
        target = make_tree("target", {"keep.txt": "keep"})
        root = make_tree("root", {})
        (root / "link").symlink_to(target)

        assert TreeMutator().delete(root) is True

        assert not root.exists()
        assert (target / "keep.txt").read_text() == "keep"

    def test_delete_dangling_symlink(self, tmp_path: Path) -> None:
        """A dangling symlink itself can be deleted."""
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "missing")

        assert TreeMutator().delete(link) is True
        assert not os.path.lexists(link)

    def test_delete_retry_after_failure(self, make_tree: MakeTree, flaky_fs) -> None:
        """A retry re-reads the filesystem and finishes the job."""
        root = make_tree("root", {"a.txt": "a", "b.txt": "b"})
        flaky_fs.fail_unlink.add(root / "b.txt")
        mutator = TreeMutator(flaky_fs)

        assert mutator.delete(root) is False
        flaky_fs.fail_unlink.clear()
        assert mutator.delete(root) is True
        assert not root.exists()
