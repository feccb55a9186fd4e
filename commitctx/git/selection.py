"""Repository discovery and selection.

Contains:
- discover_repository: Find the repository root containing a path
- select_repository: Pick one repository root among candidates
"""

from pathlib import Path
from typing import Optional, Sequence, Union

from commitctx.exceptions import (
    GitError,
    NoRepositoriesFoundError,
    NoRepositorySelectedError,
)
from commitctx.git.runner import _run_git_command


def discover_repository(path: Union[str, Path] = ".", git_binary: str = "git") -> Path:
    """Get the root directory of the git repository containing path.

    Returns:
        Path to the repository root.

    Raises:
        NoRepositoriesFoundError: If path is not inside a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=path, git_binary=git_binary)
    except GitError:
        raise NoRepositoriesFoundError(
            "Not in a git repository. Please run this command from within a git repo."
        )
    return Path(root)


def _is_same_or_child(target: Path, root: Path) -> bool:
    return target == root or root in target.parents


def select_repository(roots: Sequence[Path], hint: Optional[Path] = None) -> Path:
    """Choose a repository root without prompting.

    A single candidate is used directly. With several, the deepest root that
    contains hint wins, so nested repositories resolve to the inner one.

    Args:
        roots: Candidate repository roots.
        hint: A path inside the wanted repository (root or changed file).

    Returns:
        The chosen repository root.

    Raises:
        NoRepositoriesFoundError: If roots is empty.
        NoRepositorySelectedError: If no single root can be chosen.
    """
    if not roots:
        raise NoRepositoriesFoundError()
    if len(roots) == 1:
        return roots[0]
    if hint is None:
        raise NoRepositorySelectedError(
            f"Found {len(roots)} repositories; pass a path to choose one"
        )

    target = Path(hint).resolve()
    matches = [root for root in roots if _is_same_or_child(target, Path(root).resolve())]
    if not matches:
        raise NoRepositorySelectedError(f"No repository contains {hint}")
    return max(matches, key=lambda root: len(Path(root).resolve().parts))
