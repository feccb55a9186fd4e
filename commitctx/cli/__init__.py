"""CLI entry point for commitctx.

This module provides the main CLI application that combines the default
packing command and its subcommands into a single interface.
"""

import typer

from commitctx.cli.history import history_command
from commitctx.cli.main import main_command

# Main application
app = typer.Typer(
    name="commitctx",
    help="commitctx: pack git changes into bounded context for commit messages",
    add_completion=False,
)

app.command("history")(history_command)

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "main_command",
    "history_command",
]
