"""Git status parsing.

Contains:
- FileStatus: Worktree status of one changed path
- StatusEntry: A changed path with its status
- parse_porcelain_status: Parse `git status --porcelain=v1 -z` output
- get_status_entries: Run git status and parse it

The porcelain format uses two columns:
- First column: staged status (index)
- Second column: worktree status

Only the worktree column is kept; staged content is read from
`git diff --cached` instead.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from commitctx.git.runner import _run_git_command


class FileStatus(Enum):
    """Worktree status of a changed path."""

    MODIFIED = "modified"
    DELETED = "deleted"
    TYPE_CHANGED = "type-changed"
    UNTRACKED = "untracked"
    INTENT_TO_ADD = "intent-to-add"


# Statuses that mark a path with no committed version yet
NEW_FILE_STATUSES = frozenset({FileStatus.UNTRACKED, FileStatus.INTENT_TO_ADD})

_WORKTREE_STATUS = {
    "M": FileStatus.MODIFIED,
    "D": FileStatus.DELETED,
    "T": FileStatus.TYPE_CHANGED,
    "A": FileStatus.INTENT_TO_ADD,
}

# Unmerged paths show up in git diff; status adds nothing for them
_CONFLICT_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


@dataclass(frozen=True)
class StatusEntry:
    """A changed path reported by git status."""

    path: Path  # Absolute
    status: FileStatus


@dataclass(frozen=True)
class RepositoryStatus:
    """Changed paths grouped the way the untracked lookup consumes them."""

    working_tree_changes: tuple[StatusEntry, ...] = ()
    untracked_changes: tuple[StatusEntry, ...] = ()


def parse_porcelain_status(output: str, repo_root: Path) -> RepositoryStatus:
    """Parse NUL-delimited porcelain v1 status output.

    Untracked files are reported both in untracked_changes and in
    working_tree_changes, where they carry FileStatus.UNTRACKED.

    Args:
        output: Raw stdout of `git status --porcelain=v1 -z`.
        repo_root: Repository root used to make paths absolute.

    Returns:
        RepositoryStatus with entries in git's order.
    """
    working: list[StatusEntry] = []
    untracked: list[StatusEntry] = []

    parts = output.split("\0")
    i = 0
    while i < len(parts):
        item = parts[i]
        i += 1
        # Skip empty trailing items and anything too short to carry a path
        if len(item) < 4:
            continue

        code = item[:2]
        path = repo_root / item[3:]

        if code[0] in "RC":
            # With -z the rename source follows as its own item
            i += 1

        if code == "??":
            entry = StatusEntry(path=path, status=FileStatus.UNTRACKED)
            untracked.append(entry)
            working.append(entry)
            continue
        if code == "!!" or code in _CONFLICT_CODES:
            continue

        if code[1] in _WORKTREE_STATUS:
            working.append(StatusEntry(path=path, status=_WORKTREE_STATUS[code[1]]))

    return RepositoryStatus(
        working_tree_changes=tuple(working),
        untracked_changes=tuple(untracked),
    )


def get_status_entries(repo_root: Path, git_binary: str = "git") -> RepositoryStatus:
    """Run git status in repo_root and parse the result.

    Raises:
        GitError: If git status fails.
    """
    output = _run_git_command(
        ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
        cwd=repo_root,
        git_binary=git_binary,
        strip=False,
    )
    return parse_porcelain_status(output, repo_root)
