"""Git command runner and process execution.

Contains:
- _run_git_command: Run a git command and return its output
- ProcessRunner: Narrow interface for spawning a process and reading stdout
- SubprocessRunner: ProcessRunner backed by subprocess.run
"""

import subprocess
from pathlib import Path
from typing import Optional, Protocol, Union

from commitctx.exceptions import GitError, ProcessExecutionError


def _run_git_command(
    args: list[str],
    cwd: Optional[Union[str, Path]] = None,
    git_binary: str = "git",
    strip: bool = True,
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in (defaults to the current directory).
        git_binary: Git executable to invoke.
        strip: Whether to strip surrounding whitespace from stdout.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            [git_binary] + args,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
        return result.stdout.strip() if strip else result.stdout
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    except OSError as e:
        raise GitError(f"Could not run git in {cwd}: {e}")


class ProcessRunner(Protocol):
    """Spawns a process and returns its raw stdout."""

    def execute(self, args: list[str], working_dir: Path) -> bytes:
        ...


class SubprocessRunner:
    """ProcessRunner that waits for each process to exit before returning."""

    def execute(self, args: list[str], working_dir: Path) -> bytes:
        """Run args in working_dir and return stdout as bytes.

        Raises:
            ProcessExecutionError: If the process cannot start or exits non-zero.
        """
        try:
            result = subprocess.run(
                args,
                cwd=working_dir,
                capture_output=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
            raise ProcessExecutionError(f"Command failed: {' '.join(args)}\n{stderr}")
        except OSError as e:
            raise ProcessExecutionError(f"Could not run {args[0] if args else '(empty)'}: {e}")
        return result.stdout
