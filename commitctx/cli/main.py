"""Main CLI command for packing change context."""

import logging
import signal
from pathlib import Path
from typing import Optional

import typer

from commitctx.cancellation import CancellationToken
from commitctx.config import load_settings
from commitctx.exceptions import (
    CommitContextError,
    ConfigError,
    NoChangesError,
    OperationCancelledError,
)
from commitctx.git.repository import GitRepository
from commitctx.git.selection import discover_repository
from commitctx.models import ChangeScope, ContextFragment
from commitctx.pipeline import build_context_fragments
from commitctx.progress import LoggingProgress

DEFAULT_INSTRUCTIONS = "Write a concise commit message that describes the changes above."


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def format_fragment(fragment: ContextFragment) -> str:
    """Render a fragment with a one-line header for terminal output."""
    header = f"===== {fragment.label} {fragment.ordinal}/{fragment.total}"
    if fragment.path:
        header += f" {fragment.path}"
    if fragment.truncated:
        header += " (truncated)"
    return f"{header} =====\n{fragment.body}"


def resolve_instructions(instructions: Optional[str], instructions_file: Optional[Path]) -> str:
    """Pick the instruction text from the CLI options.

    Raises:
        typer.Exit: If both options are given or the file cannot be read.
    """
    if instructions and instructions_file:
        typer.echo("Error: use either --instructions or --instructions-file, not both.", err=True)
        raise typer.Exit(1)
    if instructions_file:
        try:
            return instructions_file.read_text()
        except OSError as e:
            typer.echo(f"Error: cannot read instructions file: {e}", err=True)
            raise typer.Exit(1)
    return instructions or DEFAULT_INSTRUCTIONS


def main_command(
    ctx: typer.Context,
    path: Path = typer.Option(
        Path("."),
        "--repo",
        help="Path inside the repository to inspect",
    ),
    staged: bool = typer.Option(
        False,
        "--staged",
        "-s",
        help="Only include staged changes",
    ),
    working_tree: bool = typer.Option(
        False,
        "--working-tree",
        "-w",
        help="Only include unstaged and untracked changes",
    ),
    instructions: Optional[str] = typer.Option(
        None,
        "--instructions",
        "-i",
        help="Task instructions appended to the last fragment",
    ),
    instructions_file: Optional[Path] = typer.Option(
        None,
        "--instructions-file",
        help="Load task instructions from a file",
    ),
    max_file_chars: Optional[int] = typer.Option(
        None,
        "--max-file-chars",
        help="Maximum characters kept per file excerpt",
    ),
    max_fragment_chars: Optional[int] = typer.Option(
        None,
        "--max-fragment-chars",
        help="Maximum characters per fragment",
    ),
    git_binary: Optional[str] = typer.Option(
        None,
        "--git-binary",
        help="Git executable to run (defaults to git on PATH)",
    ),
    no_history: bool = typer.Option(
        False,
        "--no-history",
        help="Leave out recent commit history",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log progress and skipped files to stderr",
    ),
) -> None:
    """Print the change context fragments for the current repository."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    configure_logging(verbose)

    if staged and working_tree:
        typer.echo("Error: --staged and --working-tree cannot be combined.", err=True)
        raise typer.Exit(1)
    scope = ChangeScope.ALL
    if staged:
        scope = ChangeScope.STAGED
    elif working_tree:
        scope = ChangeScope.WORKING_TREE

    instruction_text = resolve_instructions(instructions, instructions_file)

    token = CancellationToken()
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: token.cancel())
    try:
        repo_root = discover_repository(path, git_binary=git_binary or "git")
        settings = load_settings(
            repo_root,
            git_binary=git_binary,
            max_file_chars=max_file_chars,
            max_fragment_chars=max_fragment_chars,
            include_history=False if no_history else None,
        )
        repo = GitRepository(repo_root, git_binary=settings.git_binary)

        fragments = build_context_fragments(
            repo,
            instruction_text,
            scope=scope,
            settings=settings,
            token=token,
            progress=LoggingProgress() if verbose else None,
        )
    except NoChangesError as e:
        typer.echo(f"{e}", err=True)
        raise typer.Exit(0)
    except OperationCancelledError:
        typer.echo("Cancelled.", err=True)
        raise typer.Exit(130)
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)
    except CommitContextError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    typer.echo("\n\n".join(format_fragment(fragment) for fragment in fragments))
