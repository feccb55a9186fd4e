"""CLI command for showing recent history of files."""

from pathlib import Path
from typing import Optional

import typer

from commitctx.config import load_settings
from commitctx.exceptions import CommitContextError
from commitctx.git.repository import GitRepository
from commitctx.git.selection import discover_repository
from commitctx.history import get_recent_commits_for_files


def history_command(
    files: list[str] = typer.Argument(
        ...,
        help="Repo-relative file paths to look up",
    ),
    path: Path = typer.Option(
        Path("."),
        "--repo",
        help="Path inside the repository to inspect",
    ),
    git_binary: Optional[str] = typer.Option(
        None,
        "--git-binary",
        help="Git executable to run (defaults to git on PATH)",
    ),
) -> None:
    """Show recent commits touching the given files, merged by commit."""
    try:
        repo_root = discover_repository(path, git_binary=git_binary or "git")
        settings = load_settings(repo_root, git_binary=git_binary)
        repo = GitRepository(repo_root, git_binary=settings.git_binary)
        text = get_recent_commits_for_files(
            repo,
            files,
            max_files=settings.history_max_files,
            max_commits_per_file=settings.history_max_commits_per_file,
        )
    except CommitContextError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(text)
