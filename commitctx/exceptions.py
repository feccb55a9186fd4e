"""Exception classes for commitctx.

Contains:
- CommitContextError: Base exception for all commitctx errors
- GitError: A git command or repository query failed
- ProcessExecutionError: An external process exited unsuccessfully
- NoChangesError: The requested change sections are all empty
- NoRepositoriesFoundError: No git repository could be found
- NoRepositorySelectedError: Several repositories matched and none could be chosen
- OperationCancelledError: The shared cancellation token was triggered
- ConfigError: The configuration file could not be loaded or validated
"""


class CommitContextError(Exception):
    """Base exception for commitctx errors."""

    pass


class GitError(CommitContextError):
    """Custom exception for git-related errors."""

    pass


class ProcessExecutionError(GitError):
    """Raised when an external process fails or cannot be started."""

    pass


class NoChangesError(CommitContextError):
    """Raised when there are no changes to describe."""

    def __init__(self, message: str = "No changes detected"):
        super().__init__(message)


class NoRepositoriesFoundError(CommitContextError):
    """Raised when no git repository is available."""

    def __init__(self, message: str = "No git repositories found"):
        super().__init__(message)


class NoRepositorySelectedError(CommitContextError):
    """Raised when a repository could not be chosen among several candidates."""

    def __init__(self, message: str = "No repository selected"):
        super().__init__(message)


class OperationCancelledError(CommitContextError):
    """Raised when an operation is aborted through its cancellation token."""

    def __init__(self, message: str = "Operation cancelled"):
        super().__init__(message)


class ConfigError(CommitContextError):
    """Raised when there's an error with the configuration file."""

    pass
