"""Repository access used by change-set assembly and history aggregation.

Contains:
- RepositoryProvider: Protocol the core depends on
- GitRepository: RepositoryProvider backed by the git command line
- parse_log_output: Parse the record-delimited output of get_log
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from commitctx.git.runner import _run_git_command
from commitctx.git.status import RepositoryStatus, StatusEntry, get_status_entries
from commitctx.models import LogEntry

logger = logging.getLogger(__name__)

# Unit and record separators keep multi-line messages intact
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"%H{_FIELD_SEP}%an{_FIELD_SEP}%aI{_FIELD_SEP}%B{_RECORD_SEP}"


class RepositoryProvider(Protocol):
    """What the core needs from a version-control working copy."""

    @property
    def root(self) -> Path:
        ...

    @property
    def git_path(self) -> Optional[str]:
        ...

    def refresh_status(self) -> None:
        ...

    def diff(self, staged: bool) -> str:
        ...

    def untracked_changes(self) -> list[StatusEntry]:
        ...

    def working_tree_changes(self) -> list[StatusEntry]:
        ...

    def log(self, path: str, max_entries: int) -> list[LogEntry]:
        ...


def _parse_date(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_log_output(output: str) -> list[LogEntry]:
    """Parse git log output produced with the record-delimited format.

    Args:
        output: Raw stdout of git log.

    Returns:
        List of LogEntry objects, newest first as git printed them.
    """
    entries: list[LogEntry] = []
    for record in output.split(_RECORD_SEP):
        # Separators count as whitespace for str.strip, so only trim newlines
        record = record.strip("\r\n")
        if not record:
            continue
        fields = record.split(_FIELD_SEP, 3)
        if len(fields) < 4:
            continue
        commit_hash, author, date, message = fields
        entries.append(
            LogEntry(
                hash=commit_hash.strip(),
                author_name=author or None,
                author_date=_parse_date(date),
                message=message.strip() or None,
            )
        )
    return entries


class GitRepository:
    """Working copy accessed through the git executable."""

    def __init__(self, root: Path, git_binary: str = "git"):
        self._root = Path(root)
        self._git_binary = git_binary
        self._status: Optional[RepositoryStatus] = None

    def __repr__(self) -> str:
        return f"GitRepository({str(self._root)!r})"

    @property
    def root(self) -> Path:
        return self._root

    @property
    def git_path(self) -> Optional[str]:
        """Resolved path of the git executable, or None if it is not found."""
        return shutil.which(self._git_binary)

    def _git(self, args: list[str], strip: bool = True) -> str:
        return _run_git_command(args, cwd=self._root, git_binary=self._git_binary, strip=strip)

    def refresh_status(self) -> None:
        """Reload git status for the working copy.

        Raises:
            GitError: If git status fails.
        """
        self._status = get_status_entries(self._root, self._git_binary)
        logger.debug(
            "Status for %s: %d working tree, %d untracked",
            self._root,
            len(self._status.working_tree_changes),
            len(self._status.untracked_changes),
        )

    def _current_status(self) -> RepositoryStatus:
        if self._status is None:
            self.refresh_status()
        return self._status

    def diff(self, staged: bool) -> str:
        """Return the index-vs-HEAD diff (staged) or worktree-vs-index diff.

        Raises:
            GitError: If git diff fails.
        """
        args = ["diff", "--cached"] if staged else ["diff"]
        return self._git(args, strip=False)

    def untracked_changes(self) -> list[StatusEntry]:
        return list(self._current_status().untracked_changes)

    def working_tree_changes(self) -> list[StatusEntry]:
        return list(self._current_status().working_tree_changes)

    def log(self, path: str, max_entries: int) -> list[LogEntry]:
        """Return at most max_entries most recent commits touching path.

        Raises:
            GitError: If git log fails (for example on an unborn branch).
        """
        output = self._git(
            ["log", f"-n{max_entries}", f"--format={_LOG_FORMAT}", "--", path],
            strip=False,
        )
        return parse_log_output(output)
