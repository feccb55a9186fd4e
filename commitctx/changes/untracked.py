"""Untracked file discovery.

Contains:
- discover_untracked_files: Find untracked files through a three-step fallback
- LS_FILES_ARGS: Arguments for the git ls-files fallback

Each step runs only when the previous one found nothing:
1. the provider's untracked list
2. the provider's working-tree changes with a new-file status
3. `git ls-files --others --exclude-standard -z` run directly
"""

import logging
from pathlib import Path
from typing import Optional

from commitctx.cancellation import CancellationToken, raise_if_cancelled
from commitctx.exceptions import ProcessExecutionError
from commitctx.git.repository import RepositoryProvider
from commitctx.git.runner import ProcessRunner
from commitctx.git.status import NEW_FILE_STATUSES

logger = logging.getLogger(__name__)

# -z gives NUL-delimited, unquoted paths
LS_FILES_ARGS = ["ls-files", "--others", "--exclude-standard", "-z"]


def _list_with_git(
    repo: RepositoryProvider,
    runner: ProcessRunner,
    token: Optional[CancellationToken],
) -> list[Path]:
    """Ask git directly for untracked, unignored files.

    Failures are logged and treated as no untracked files.
    """
    git_path = repo.git_path
    if not git_path:
        logger.debug("git executable not found; skipping ls-files fallback")
        return []

    raise_if_cancelled(token)
    try:
        stdout = runner.execute([git_path] + LS_FILES_ARGS, repo.root)
    except (ProcessExecutionError, OSError) as e:
        logger.warning("git ls-files failed to list untracked files: %s", e)
        return []

    names = (part.strip() for part in stdout.decode("utf-8", errors="replace").split("\0"))
    return [repo.root / name for name in names if name]


def discover_untracked_files(
    repo: RepositoryProvider,
    runner: ProcessRunner,
    token: Optional[CancellationToken] = None,
) -> list[Path]:
    """Return absolute paths of untracked files, sorted and de-duplicated.

    Args:
        repo: Repository whose status has already been refreshed.
        runner: Process runner used by the ls-files fallback.
        token: Cancellation token.

    Returns:
        Sorted list of absolute file paths.

    Raises:
        OperationCancelledError: If the token is cancelled.
    """
    raise_if_cancelled(token)

    found: dict[str, Path] = {}

    for entry in repo.untracked_changes():
        found.setdefault(str(entry.path), entry.path)

    if not found:
        for entry in repo.working_tree_changes():
            if entry.status in NEW_FILE_STATUSES:
                found.setdefault(str(entry.path), entry.path)

    if not found:
        for path in _list_with_git(repo, runner, token):
            found.setdefault(str(path), path)

    return [found[key] for key in sorted(found)]
