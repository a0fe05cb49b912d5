"""CLI package for fileops.

This package contains the Typer application and all subcommands.
"""

from fileops.cli.main import app

__all__ = ["app"]
