#!/usr/bin/env python3
import logging
from typing import Optional

import typer

from commands.remove_command import handle_remove
from omnifocus_removal.data_models import ItemType
from utils.config import get_log_level, load_env_vars
from utils.logger import configure_logging

__version__ = "1.0.0"

# Load environment variables
load_env_vars()


# Create app instance
app = typer.Typer(
    name="ofremove",
    help="ofremove - Remove a single OmniFocus task or project via AppleScript.",
    no_args_is_help=True,
)


def _version_callback(value: bool):
    if value:
        typer.echo(f"ofremove {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log AppleScript diagnostics."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
):
    """ofremove - Remove a single OmniFocus task or project via AppleScript."""
    configure_logging(logging.DEBUG if verbose else get_log_level())


@app.command("remove")
def remove_command(
    item_type: ItemType = typer.Option(..., "--type", "-t", help="Type of item to remove."),
    item_id: Optional[str] = typer.Option(None, "--id", help="ID of the task or project to remove."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name to match when no ID is given or the ID is not found."),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the generated AppleScript without running it."),
):
    """Remove a task or project from OmniFocus by ID and/or name."""
    args = type('Args', (), {
        'item_type': item_type.value,
        'id': item_id,
        'name': name,
        'as_json': as_json,
        'dry_run': dry_run,
    })
    outcome = handle_remove(args)
    if outcome is not None and not outcome.success:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
