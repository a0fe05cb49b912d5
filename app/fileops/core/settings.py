"""fileops settings.

This module provides the settings model and I/O functions that tune the
tree, hashing and storage components: digest algorithm, chunk size,
attribute preservation and the storage enumeration conventions.

Settings are stored in ~/.config/fileops/settings.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fileops.core.errors import FileOpsError
from fileops.core.paths import get_settings_path

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024
MAX_CHUNK_SIZE = 16 * 1024 * 1024


class FileOpsSettings(BaseModel):
    """Settings for fileops components.

    Attributes:
        hash_algorithm: hashlib algorithm name used by ContentHasher.
        chunk_size: Bytes read per step when hashing or streaming a copy.
        preserve_attributes: Copy timestamps and permission bits with file data.
        storage_marker: Reserved subpath that separates a volume root from
            an app-scoped directory (e.g. "/Android/").
        primary_storage_env: Environment variable naming the primary storage.
        secondary_storage_env: Environment variable naming secondary storages.
        app_external_dirs: App-scoped external directories reported by the host.
    """

    model_config = ConfigDict(extra="forbid")

    hash_algorithm: Annotated[
        str,
        Field(min_length=1, description="hashlib algorithm name"),
    ] = "md5"
    chunk_size: Annotated[
        int,
        Field(ge=1, le=MAX_CHUNK_SIZE, description="Read size in bytes"),
    ] = DEFAULT_CHUNK_SIZE
    preserve_attributes: Annotated[
        bool,
        Field(description="Copy file metadata along with contents"),
    ] = True
    storage_marker: Annotated[
        str,
        Field(description="Reserved subpath marking app-scoped storage"),
    ] = "/Android/"
    primary_storage_env: str = "EXTERNAL_STORAGE"
    secondary_storage_env: str = "SECONDARY_STORAGE"
    app_external_dirs: list[str] = Field(default_factory=list)

    @field_validator("hash_algorithm")
    @classmethod
    def normalize_algorithm(cls, v: str) -> str:
        """Store algorithm names lowercase, as hashlib reports them."""
        return v.strip().lower()

    @field_validator("storage_marker")
    @classmethod
    def validate_marker(cls, v: str) -> str:
        """Require the marker to be a bounded path segment."""
        if not (v.startswith("/") and v.endswith("/") and len(v) > 2):
            msg = f"storage_marker must look like '/name/', got {v!r}"
            raise ValueError(msg)
        return v


class SettingsError(FileOpsError):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> FileOpsSettings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated FileOpsSettings object.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return FileOpsSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def load_settings_or_default(path: Path | None = None) -> FileOpsSettings:
    """Load settings, falling back to defaults when no file exists.

    Parse and validation errors still propagate so a broken file is
    never silently ignored.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Loaded or default FileOpsSettings.
    """
    try:
        return load_settings(path)
    except SettingsNotFoundError:
        logger.debug("No settings file found, using defaults")
        return FileOpsSettings()


def save_settings(
    settings: FileOpsSettings,
    path: Path | None = None,
    *,
    include_defaults: bool = False,
) -> Path:
    """Save settings to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace().

    Args:
        settings: The settings to save.
        path: Path to save to. If None, uses the default path.
        include_defaults: Write every field, not only non-default ones.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_settings_to_dict(settings, include_defaults=include_defaults), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def _settings_to_dict(
    settings: FileOpsSettings, *, include_defaults: bool = False
) -> dict[str, object]:
    """Convert settings to a TOML-serializable dictionary.

    Unless include_defaults is set, only values that differ from the
    defaults are written.
    """
    defaults = FileOpsSettings()
    result: dict[str, object] = {}
    for name, value in settings.model_dump().items():
        if include_defaults or value != getattr(defaults, name):
            result[name] = value
    return result
