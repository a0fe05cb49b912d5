"""Inspection commands.

Provides file hashing, size formatting and storage root listing.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from fileops.cli.types import build_filesystem, load_cli_settings
from fileops.core.errors import StorageUnavailableError
from fileops.core.size import format_size
from fileops.hashing.hasher import ContentHasher
from fileops.hashing.models import CancellationToken, HashFailure, HashResult, HashStatus
from fileops.storage.enumerator import list_roots
from fileops.utils.formatting import console, print_error, print_warning

app = typer.Typer(
    help="Hash files, format sizes and list storage roots.",
    invoke_without_command=True,
    no_args_is_help=True,
)

# Exit code conventionally used after SIGINT
EXIT_CANCELLED = 130


@app.command("hash")
def hash_file(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File to hash.")],
    algorithm: Annotated[
        str | None,
        typer.Option("--algorithm", "-a", help="hashlib algorithm (default from settings)."),
    ] = None,
) -> None:
    """Print the digest of a file. Ctrl+C cancels between chunks."""
    settings = load_cli_settings(ctx)
    if algorithm:
        settings = settings.model_copy(update={"hash_algorithm": algorithm.lower()})

    if not path.is_file():
        print_error(f"Not a file: {path}")
        raise typer.Exit(code=1)

    hasher = ContentHasher.from_settings(settings, build_filesystem(settings))
    result = _digest_interruptibly(hasher, path)

    if result.status == HashStatus.OK:
        typer.echo(f"{result.digest}  {path}")
        return

    if result.status == HashStatus.CANCELLED:
        print_warning("Hashing cancelled.")
        raise typer.Exit(code=EXIT_CANCELLED)

    if result.reason == HashFailure.ALGORITHM_UNSUPPORTED:
        print_warning(f"No {result.algorithm} support on this system.")
    else:
        print_error(f"Could not hash {path}: {result.error or 'unknown error'}")
    raise typer.Exit(code=1)


@app.command()
def size(
    byte_counts: Annotated[list[int], typer.Argument(help="Byte counts to format.")],
) -> None:
    """Format byte counts as human-readable sizes."""
    for count in byte_counts:
        typer.echo(f"{count}\t{format_size(count)}")


@app.command()
def roots(ctx: typer.Context) -> None:
    """List top-level storage roots."""
    settings = load_cli_settings(ctx)
    try:
        found = list_roots(build_filesystem(settings), settings)
    except StorageUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(title="Storage Roots", show_lines=False)
    table.add_column("#", justify="right", width=3)
    table.add_column("Path", style="bold")
    for index, root in enumerate(found, start=1):
        table.add_row(str(index), str(root))
    console.print(table)


# === Private helper functions ===


def _digest_interruptibly(hasher: ContentHasher, path: Path) -> HashResult:
    """Hash on a worker thread so Ctrl+C can signal cancellation."""
    token = CancellationToken()
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(hasher.digest, path, token)
        try:
            return future.result()
        except KeyboardInterrupt:
            token.cancel()
            return future.result()
