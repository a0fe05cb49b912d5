"""Mounted storage root enumeration.

Roots are derived from the host's app-scoped external directories when the
host can report them, by cutting each path at the reserved storage marker
(e.g. /storage/emulated/0/Android/data/app/files -> /storage/emulated/0).
Hosts without that capability fall back to the legacy storage environment
variables.
"""

import logging
import os
from pathlib import Path

from fileops.core.errors import StorageUnavailableError
from fileops.core.settings import FileOpsSettings
from fileops.host.base import HostFileSystem
from fileops.host.local import LocalFileSystem

logger = logging.getLogger(__name__)


def list_roots(
    fs: HostFileSystem | None = None,
    settings: FileOpsSettings | None = None,
) -> list[Path]:
    """List top-level storage roots.

    Computed fresh on every call. Duplicates reported by the host are
    kept in order.

    Args:
        fs: Host filesystem. Defaults to LocalFileSystem built from settings.
        settings: Marker and environment variable names. Defaults apply if None.

    Returns:
        Absolute storage root paths, primary first.

    Raises:
        StorageUnavailableError: If the host cannot enumerate app directories
            and the primary storage variable is unset.
    """
    settings = settings or FileOpsSettings()
    host = fs if fs is not None else LocalFileSystem.from_settings(settings)

    if host.supports_app_external_dirs():
        return _roots_from_app_dirs(host, settings.storage_marker)
    return _roots_from_environment(host, settings)


def volume_root(path: str | os.PathLike[str], marker: str) -> Path:
    """Cut an app-scoped path just before the last occurrence of marker.

    Paths that do not contain the marker are returned unchanged.

    Args:
        path: App-scoped directory path.
        marker: Reserved subpath such as "/Android/".

    Returns:
        Absolute volume root path.
    """
    absolute = os.path.abspath(path)
    # Match a trailing marker segment too ("/x/Android" contains "/Android/")
    index = (absolute + "/").rfind(marker)
    if index < 0:
        logger.debug("No storage marker %s in %s, keeping path", marker, absolute)
        return Path(absolute)
    return Path(os.path.abspath(absolute[: index + 1]))


def _roots_from_app_dirs(host: HostFileSystem, marker: str) -> list[Path]:
    roots: list[Path] = []
    for entry in host.query_app_external_dirs():
        if entry is None:
            continue
        roots.append(volume_root(entry, marker))
    return roots


def _roots_from_environment(host: HostFileSystem, settings: FileOpsSettings) -> list[Path]:
    primary = host.read_env_var(settings.primary_storage_env)
    if primary is None:
        msg = f"Primary storage variable {settings.primary_storage_env} is not set"
        raise StorageUnavailableError(msg)

    roots = [Path(os.path.abspath(primary))]
    secondary = host.read_env_var(settings.secondary_storage_env)
    if secondary:
        for entry in secondary.split(os.pathsep):
            if entry:
                roots.append(Path(os.path.abspath(entry)))
    return roots
