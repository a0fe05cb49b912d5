"""Local operating system implementation of HostFileSystem."""

import logging
import os
import shutil
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import BinaryIO

from fileops.core.settings import FileOpsSettings
from fileops.host.base import HostFileSystem

logger = logging.getLogger(__name__)


class LocalFileSystem(HostFileSystem):
    """HostFileSystem backed by os, pathlib and shutil.

    Attributes:
        _chunk_size: Buffer size for streamed copies.
        _preserve_attributes: Copy timestamps and permissions with shutil.copystat.
        _app_external_dirs: App-scoped external directories, None if the
            host cannot report them.
        _environ: Environment mapping consulted by read_env_var.
    """

    def __init__(
        self,
        *,
        chunk_size: int = 1024,
        preserve_attributes: bool = True,
        app_external_dirs: Sequence[str | Path | None] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the LocalFileSystem.

        Args:
            chunk_size: Buffer size for streamed copies.
            preserve_attributes: If True, copy timestamps and permissions.
            app_external_dirs: App-scoped external directories to report.
                None (or empty) marks the capability as unsupported.
            environ: Environment mapping. Defaults to os.environ.
        """
        self._chunk_size = chunk_size
        self._preserve_attributes = preserve_attributes
        self._app_external_dirs = list(app_external_dirs) if app_external_dirs else None
        self._environ = os.environ if environ is None else environ

    @classmethod
    def from_settings(cls, settings: FileOpsSettings) -> "LocalFileSystem":
        """Build a LocalFileSystem configured from settings."""
        return cls(
            chunk_size=settings.chunk_size,
            preserve_attributes=settings.preserve_attributes,
            app_external_dirs=settings.app_external_dirs,
        )

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_symlink(self, path: Path) -> bool:
        return path.is_symlink()

    def identity(self, path: Path) -> tuple[int, int] | None:
        try:
            st = path.stat()
        except OSError:
            return None
        return (st.st_dev, st.st_ino)

    def real_path(self, path: Path) -> Path:
        return Path(os.path.realpath(path))

    def list_children(self, path: Path) -> list[Path]:
        return sorted(path.iterdir())

    def create_directory(self, path: Path) -> None:
        path.mkdir()

    def supports_rename(self) -> bool:
        return hasattr(os, "rename")

    def rename(self, src: Path, dst: Path) -> None:
        os.rename(src, dst)

    def copy_bytes_with_attributes(self, src: Path, dst: Path) -> None:
        with self.open_read(src) as reader, self.open_write(dst) as writer:
            while chunk := reader.read(self._chunk_size):
                writer.write(chunk)

        if self._preserve_attributes:
            shutil.copystat(src, dst)

    def open_read(self, path: Path) -> BinaryIO:
        return open(path, "rb")

    def open_write(self, path: Path) -> BinaryIO:
        # "x" refuses to clobber a file created since the collision check
        return open(path, "xb")

    def unlink(self, path: Path) -> None:
        path.unlink()

    def remove_directory(self, path: Path) -> None:
        path.rmdir()

    def supports_app_external_dirs(self) -> bool:
        return self._app_external_dirs is not None

    def query_app_external_dirs(self) -> list[Path | None]:
        if self._app_external_dirs is None:
            return []

        dirs: list[Path | None] = []
        for entry in self._app_external_dirs:
            if entry is None or not os.access(entry, os.R_OK):
                logger.debug("Skipping inaccessible external directory: %s", entry)
                dirs.append(None)
                continue
            dirs.append(Path(entry))
        return dirs

    def read_env_var(self, name: str) -> str | None:
        return self._environ.get(name)
