"""CLI commands for fileops.

This package contains all subcommand implementations.
"""

from fileops.cli.commands import config, info, tree

__all__ = ["config", "info", "tree"]
