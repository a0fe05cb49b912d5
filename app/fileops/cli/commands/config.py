"""Settings commands.

Provides commands to show the effective settings and to write a
settings file populated with the defaults.
"""

from typing import Annotated

import typer

from fileops.cli.types import get_settings_path, load_cli_settings
from fileops.core.paths import get_settings_path as default_settings_path
from fileops.core.settings import FileOpsSettings, SettingsError, save_settings
from fileops.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize fileops settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective settings as JSON."""
    settings = load_cli_settings(ctx)
    path = get_settings_path(ctx) or default_settings_path()
    source = str(path) if path.exists() else "defaults"
    print_info(f"Settings source: {source}")
    console.print_json(settings.model_dump_json())


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file containing every default value."""
    path = get_settings_path(ctx) or default_settings_path()
    if path.exists() and not force:
        print_error(f"Settings already exist: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(FileOpsSettings(), path, include_defaults=True)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Settings written to {saved}")
