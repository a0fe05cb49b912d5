"""Tree mutation commands.

Provides copy, move and delete for files and directory trees.
"""

from pathlib import Path
from typing import Annotated

import typer

from fileops.cli.types import build_filesystem, load_cli_settings
from fileops.tree.models import TreeResult
from fileops.tree.mutator import TreeMutator
from fileops.utils.formatting import (
    console,
    create_result_table,
    format_tree_result,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Copy, move and delete files and directory trees.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _build_mutator(ctx: typer.Context) -> TreeMutator:
    settings = load_cli_settings(ctx)
    return TreeMutator(build_filesystem(settings))


@app.command()
def copy(
    ctx: typer.Context,
    src: Annotated[Path, typer.Argument(help="File or directory to copy.")],
    dst: Annotated[Path, typer.Argument(help="Destination path.")],
) -> None:
    """Copy a file or directory tree. Existing destinations are left untouched."""
    result = _build_mutator(ctx).copy_tree(src, dst)
    _report("Copy", [result])


@app.command()
def move(
    ctx: typer.Context,
    src: Annotated[Path, typer.Argument(help="File or directory to move.")],
    dst: Annotated[Path, typer.Argument(help="Destination path.")],
) -> None:
    """Move a file or directory tree, copying across volumes if needed."""
    result = _build_mutator(ctx).move_tree(src, dst)
    _report("Move", [result])


@app.command()
def delete(
    ctx: typer.Context,
    paths: Annotated[list[Path], typer.Argument(help="Files or directories to delete.")],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete files and directory trees, children before parents."""
    if dry_run:
        for path in paths:
            print_info(f"Dry-run: would delete {path}")
        return

    if not yes:
        confirmed = typer.confirm(
            f"Delete {len(paths)} path(s) and everything below them?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    mutator = _build_mutator(ctx)
    results = [mutator.delete_tree(path) for path in paths]
    _report("Delete", results)


# === Private helper functions ===


def _report(operation: str, results: list[TreeResult]) -> None:
    """Display results and exit with code 1 if any failed."""
    table = create_result_table(f"{operation} Results")
    for result in results:
        table.add_row(*format_tree_result(result))
    console.print(table)

    failed = [r for r in results if not r.success]
    if failed:
        print_warning(f"{len(results) - len(failed)} succeeded, {len(failed)} failed")
        raise typer.Exit(code=1)
    print_success(f"{operation} completed.")
