"""Change-set assembly.

Contains:
- assemble_change_set: Collect staged, tracked and untracked changes
- read_file_bytes: Default file reader
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from commitctx.cancellation import CancellationToken, raise_if_cancelled
from commitctx.changes.untracked import discover_untracked_files
from commitctx.config import ContextSettings
from commitctx.diff.parser import UNKNOWN_FILE_PATH, parse_diff_records
from commitctx.diff.synthetic import build_untracked_patch
from commitctx.exceptions import NoChangesError
from commitctx.git.repository import RepositoryProvider
from commitctx.git.runner import ProcessRunner, SubprocessRunner
from commitctx.models import ChangeScope, ChangeSection, ChangeSet
from commitctx.progress import NullProgress, ProgressReporter

logger = logging.getLogger(__name__)

FileReader = Callable[[Path], bytes]


def read_file_bytes(path: Path) -> bytes:
    return Path(path).read_bytes()


def _escapes_root(rel_path: str) -> bool:
    return not rel_path or rel_path == ".." or rel_path.startswith("../")


def to_repo_relative(repo_root: Path, path: Path) -> Optional[str]:
    """Return path relative to repo_root with forward slashes.

    Returns None when no relative path exists (different drive on Windows).
    """
    try:
        rel = os.path.relpath(path, repo_root)
    except ValueError:
        return None
    return Path(rel).as_posix()


def _diff_section(
    repo: RepositoryProvider,
    staged: bool,
    settings: ContextSettings,
    token: Optional[CancellationToken],
) -> ChangeSection:
    """Fetch one diff from the provider and split it into a section."""
    raise_if_cancelled(token)
    unified = repo.diff(staged)
    raise_if_cancelled(token)

    records = parse_diff_records(
        unified or "",
        max_chars_per_file=settings.max_file_chars,
        max_files=None,
    )

    pairs = []
    for record in records:
        file_path = record.file_path.strip()
        if file_path == UNKNOWN_FILE_PATH or _escapes_root(file_path):
            continue
        pairs.append((file_path, record.excerpt))
    return ChangeSection.from_pairs(pairs)


def _untracked_section(
    repo: RepositoryProvider,
    settings: ContextSettings,
    token: Optional[CancellationToken],
    runner: ProcessRunner,
    read_file: FileReader,
) -> ChangeSection:
    """Build synthetic added-file patches for every untracked file."""
    pairs = []
    for path in discover_untracked_files(repo, runner, token):
        raise_if_cancelled(token)

        rel_path = to_repo_relative(repo.root, path)
        if rel_path is None or _escapes_root(rel_path):
            logger.debug("Skipping untracked path outside repository: %s", path)
            continue

        try:
            data = read_file(path)
        except OSError as e:
            logger.warning("Failed to read untracked file %s: %s", path, e)
            continue

        record = build_untracked_patch(rel_path, data, settings.max_file_chars)
        pairs.append((rel_path, record.excerpt))
    return ChangeSection.from_pairs(pairs)


def assemble_change_set(
    repo: RepositoryProvider,
    scope: ChangeScope = ChangeScope.ALL,
    settings: Optional[ContextSettings] = None,
    token: Optional[CancellationToken] = None,
    progress: Optional[ProgressReporter] = None,
    runner: Optional[ProcessRunner] = None,
    read_file: Optional[FileReader] = None,
) -> ChangeSet:
    """Collect the change set of one repository snapshot.

    In STAGED scope only the staged diff is fetched. In WORKING_TREE scope
    the staged diff is never fetched and the staged section stays empty.

    Args:
        repo: Repository to inspect.
        scope: Which change partitions to include.
        settings: Size limits (defaults when omitted).
        token: Cancellation token checked before every external call.
        progress: Receives phase notifications.
        runner: Process runner for the untracked fallback.
        read_file: Reads raw bytes of an untracked file.

    Returns:
        The assembled ChangeSet.

    Raises:
        NoChangesError: If the requested sections are all empty.
        OperationCancelledError: If the token is cancelled.
        GitError: If status or diff cannot be read.
    """
    settings = settings or ContextSettings()
    progress = progress or NullProgress()
    runner = runner or SubprocessRunner()
    read_file = read_file or read_file_bytes

    raise_if_cancelled(token)
    progress.report("Refreshing repository status", 5)
    repo.refresh_status()
    raise_if_cancelled(token)

    staged = ChangeSection.empty()
    if scope is not ChangeScope.WORKING_TREE:
        progress.report("Reading staged changes", 10)
        staged = _diff_section(repo, True, settings, token)

    if scope is ChangeScope.STAGED:
        if staged.is_empty:
            raise NoChangesError(
                "No staged changes found. Stage your changes first with: git add <files>"
            )
        logger.debug("Collected %d staged files", len(staged))
        return ChangeSet(staged=staged)

    progress.report("Reading working tree changes", 10)
    tracked = _diff_section(repo, False, settings, token)

    progress.report("Reading untracked files", 10)
    untracked = _untracked_section(repo, settings, token, runner, read_file)

    logger.debug(
        "Collected %d staged, %d tracked and %d untracked files",
        len(staged), len(tracked), len(untracked),
    )

    change_set = ChangeSet(staged=staged, tracked=tracked, untracked=untracked)

    if change_set.is_empty:
        raise NoChangesError()
    return change_set
