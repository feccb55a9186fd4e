"""Context generation pipeline.

Contains:
- build_history_context: Summarize changed files and their recent history
- build_context_fragments: Assemble, summarize and pack one request
"""

from typing import Optional

from commitctx.cancellation import CancellationToken, raise_if_cancelled
from commitctx.changes.assembler import assemble_change_set
from commitctx.config import ContextSettings
from commitctx.git.repository import RepositoryProvider
from commitctx.git.runner import ProcessRunner
from commitctx.history import get_recent_commits_for_files
from commitctx.models import ChangeScope, ChangeSet, ContextFragment
from commitctx.packer import pack_context
from commitctx.progress import NullProgress, ProgressReporter

NO_FILES_TO_ANALYZE = "No files to analyze"


def _unique(paths) -> list[str]:
    stripped = (path.strip() for path in paths)
    return list(dict.fromkeys(path for path in stripped if path and not path.startswith("..")))


def build_history_context(
    repo: RepositoryProvider,
    change_set: ChangeSet,
    settings: Optional[ContextSettings] = None,
    token: Optional[CancellationToken] = None,
) -> str:
    """Build the history context text for a change set.

    Untracked files have no history, so they are only listed; recent commits
    are fetched for staged and tracked files.

    Args:
        repo: Repository to query.
        change_set: The assembled change set.
        settings: History limits (defaults when omitted).
        token: Cancellation token.

    Returns:
        History context text.

    Raises:
        OperationCancelledError: If the token is cancelled.
    """
    settings = settings or ContextSettings()

    tracked_files = _unique(list(change_set.staged.paths) + list(change_set.tracked.paths))
    untracked_files = _unique(change_set.untracked.paths)

    if not tracked_files and not untracked_files:
        return NO_FILES_TO_ANALYZE

    lines = []
    if tracked_files:
        lines.append("Changed files (tracked):")
        lines.extend(f"- {path}" for path in tracked_files)

    if untracked_files:
        if lines:
            lines.append("")
        lines.append("Untracked new files:")
        lines.extend(f"- {path}" for path in untracked_files)

    if tracked_files:
        history = get_recent_commits_for_files(
            repo,
            tracked_files,
            max_files=settings.history_max_files,
            max_commits_per_file=settings.history_max_commits_per_file,
            token=token,
        )
        lines.append("")
        lines.append("Recent commits (HEAD, tracked files only):")
        lines.append(history)

    return "\n".join(lines).strip()


def build_context_fragments(
    repo: RepositoryProvider,
    instructions: str,
    scope: ChangeScope = ChangeScope.ALL,
    settings: Optional[ContextSettings] = None,
    token: Optional[CancellationToken] = None,
    progress: Optional[ProgressReporter] = None,
    runner: Optional[ProcessRunner] = None,
) -> list[ContextFragment]:
    """Run one context generation request end to end.

    Args:
        repo: Repository to inspect.
        instructions: Task instruction text for the closing fragment.
        scope: Which change partitions to include.
        settings: Limits and switches (defaults when omitted).
        token: Cancellation token.
        progress: Receives phase notifications.
        runner: Process runner for the untracked fallback.

    Returns:
        Ordered list of ContextFragment objects.

    Raises:
        NoChangesError: If there is nothing to describe.
        OperationCancelledError: If the token is cancelled.
        GitError: If status or diff cannot be read.
    """
    settings = settings or ContextSettings()
    progress = progress or NullProgress()

    progress.report("Analyzing changes", 10)
    change_set = assemble_change_set(
        repo,
        scope=scope,
        settings=settings,
        token=token,
        progress=progress,
        runner=runner,
    )
    raise_if_cancelled(token)

    history = ""
    if settings.include_history:
        progress.report("Analyzing history", 10)
        history = build_history_context(repo, change_set, settings, token)
        raise_if_cancelled(token)

    progress.report("Packing context", 10)
    return pack_context(
        change_set,
        history,
        instructions,
        max_chars=settings.max_fragment_chars,
        overhead=settings.fragment_overhead,
    )
