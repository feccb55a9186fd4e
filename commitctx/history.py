"""Commit history aggregation across changed files.

Contains:
- HistorySummary: Merged, ranked history for a set of files
- aggregate_history: Query recent commits per file and merge them by hash
- render_history: Render a HistorySummary as plain text
- get_recent_commits_for_files: aggregate_history followed by render_history

Renamed files often share history with their old path, so one commit may be
returned for several queried files. It is kept once, with every queried path
recorded in its attribution list.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

from commitctx.cancellation import CancellationToken, raise_if_cancelled
from commitctx.exceptions import GitError
from commitctx.git.repository import RepositoryProvider
from commitctx.models import CommitRecord, LogEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILES = 10
DEFAULT_MAX_COMMITS_PER_FILE = 3
MAX_PATHS_SHOWN = 3
NONE_FOUND = "(none found)"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class HistorySummary:
    """Result of aggregate_history."""

    files: tuple[str, ...] = ()  # Queried files, after the cap
    elided_files: int = 0
    commits: tuple[CommitRecord, ...] = ()  # Newest first, after the cap
    elided_commits: int = 0


@dataclass
class _PendingCommit:
    first: LogEntry
    paths: list[str] = field(default_factory=list)


def _unique_paths(paths: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for path in paths:
        path = (path or "").strip()
        if path:
            seen.setdefault(path, None)
    return list(seen)


def _as_utc(date: datetime) -> datetime:
    if date.tzinfo is None:
        return date.replace(tzinfo=timezone.utc)
    return date.astimezone(timezone.utc)


def _sort_key(commit: CommitRecord) -> float:
    # Undated commits rank as oldest
    return _as_utc(commit.author_date or _EPOCH).timestamp()


def aggregate_history(
    repo: RepositoryProvider,
    paths: Iterable[str],
    max_files: int = DEFAULT_MAX_FILES,
    max_commits_per_file: int = DEFAULT_MAX_COMMITS_PER_FILE,
    token: Optional[CancellationToken] = None,
) -> HistorySummary:
    """Fetch recent commits for each path and merge them by hash.

    Args:
        repo: Repository to query.
        paths: Repo-relative file paths (duplicates and blanks are ignored).
        max_files: Maximum number of files to query.
        max_commits_per_file: Maximum commits fetched per file.
        token: Cancellation token checked before each query.

    Returns:
        HistorySummary with commits sorted by author date, newest first.

    Raises:
        OperationCancelledError: If the token is cancelled.
    """
    raise_if_cancelled(token)

    unique = _unique_paths(paths)
    selected = unique[:max_files]

    pending: dict[str, _PendingCommit] = {}
    for path in selected:
        raise_if_cancelled(token)
        try:
            entries = repo.log(path, max_commits_per_file)
        except GitError as e:
            logger.warning("Failed to read history for %s: %s", path, e)
            continue

        for entry in entries:
            existing = pending.get(entry.hash)
            if existing:
                if path not in existing.paths:
                    existing.paths.append(path)
                continue
            pending[entry.hash] = _PendingCommit(first=entry, paths=[path])

    merged = [
        CommitRecord(
            hash=item.first.hash,
            author_date=item.first.author_date,
            author_name=item.first.author_name,
            message=item.first.message,
            attributed_paths=tuple(item.paths),
        )
        for item in pending.values()
    ]
    # Stable sort keeps first-seen order for equal dates
    merged.sort(key=_sort_key, reverse=True)

    max_commits = max_files * max_commits_per_file
    return HistorySummary(
        files=tuple(selected),
        elided_files=len(unique) - len(selected),
        commits=tuple(merged[:max_commits]),
        elided_commits=max(0, len(merged) - max_commits),
    )


def _format_commit(commit: CommitRecord) -> str:
    date = ""
    if commit.author_date:
        date = _as_utc(commit.author_date).date().isoformat()
    author = commit.author_name or ""
    message = (commit.message or "").split("\n", 1)[0].strip()

    paths = list(commit.attributed_paths)
    suffix = ", ".join(paths[:MAX_PATHS_SHOWN])
    if len(paths) > MAX_PATHS_SHOWN:
        suffix += f" (+{len(paths) - MAX_PATHS_SHOWN} more)"

    return f"{commit.short_hash} {date} {author} | {message} [paths: {suffix}]".strip()


def render_history(summary: HistorySummary) -> str:
    """Render a HistorySummary as the history context text.

    Args:
        summary: Output of aggregate_history.

    Returns:
        Multi-line text listing the files and the merged commits.
    """
    lines = []

    if summary.files:
        lines.append("Selected files:")
        lines.extend(f"- {path}" for path in summary.files)
        if summary.elided_files:
            lines.append(f"(and {summary.elided_files} more files...)")
    else:
        lines.append(f"Selected files: {NONE_FOUND}")
    lines.append("")

    if not summary.commits:
        lines.append(f"Recent commits: {NONE_FOUND}")
        return "\n".join(lines)

    lines.append("Recent commits (touching selected files):")
    lines.extend(_format_commit(commit) for commit in summary.commits)
    if summary.elided_commits:
        lines.append(f"(and {summary.elided_commits} more commits...)")

    return "\n".join(lines)


def get_recent_commits_for_files(
    repo: RepositoryProvider,
    paths: Iterable[str],
    max_files: int = DEFAULT_MAX_FILES,
    max_commits_per_file: int = DEFAULT_MAX_COMMITS_PER_FILE,
    token: Optional[CancellationToken] = None,
) -> str:
    """Return rendered recent history for the given files."""
    summary = aggregate_history(repo, paths, max_files, max_commits_per_file, token)
    return render_history(summary)
