"""Shared helpers for CLI commands.

This module provides settings loading and component construction used
across multiple CLI command modules to avoid code duplication.
"""

from pathlib import Path

import typer

from fileops.core.settings import FileOpsSettings, SettingsError, load_settings_or_default
from fileops.host.local import LocalFileSystem
from fileops.utils.formatting import print_error


def get_settings_path(ctx: typer.Context) -> Path | None:
    """Return the --config path stored by the main callback, if any."""
    obj = ctx.find_root().obj or {}
    return obj.get("settings_path")


def load_cli_settings(ctx: typer.Context) -> FileOpsSettings:
    """Load settings for a command, exiting with code 1 if they are invalid.

    Args:
        ctx: Typer context carrying the optional --config path.

    Returns:
        Loaded settings, or defaults if no settings file exists.
    """
    try:
        return load_settings_or_default(get_settings_path(ctx))
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def build_filesystem(settings: FileOpsSettings) -> LocalFileSystem:
    """Create the host filesystem used by CLI commands."""
    return LocalFileSystem.from_settings(settings)
