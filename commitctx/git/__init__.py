"""Git access for commitctx.

This package provides:
- runner: _run_git_command, ProcessRunner, SubprocessRunner
- status: FileStatus, StatusEntry, RepositoryStatus, parse_porcelain_status,
          get_status_entries
- repository: RepositoryProvider, GitRepository, parse_log_output
- selection: discover_repository, select_repository
"""

# Runner utilities
from commitctx.git.runner import (
    ProcessRunner,
    SubprocessRunner,
    _run_git_command,
)

# Status utilities
from commitctx.git.status import (
    NEW_FILE_STATUSES,
    FileStatus,
    RepositoryStatus,
    StatusEntry,
    get_status_entries,
    parse_porcelain_status,
)

# Repository provider
from commitctx.git.repository import (
    GitRepository,
    RepositoryProvider,
    parse_log_output,
)

# Repository selection
from commitctx.git.selection import (
    discover_repository,
    select_repository,
)


__all__ = [
    # Runner
    "_run_git_command",
    "ProcessRunner",
    "SubprocessRunner",
    # Status
    "FileStatus",
    "StatusEntry",
    "RepositoryStatus",
    "NEW_FILE_STATUSES",
    "parse_porcelain_status",
    "get_status_entries",
    # Repository
    "RepositoryProvider",
    "GitRepository",
    "parse_log_output",
    # Selection
    "discover_repository",
    "select_repository",
]
