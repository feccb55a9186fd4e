"""Change-set assembly for commitctx.

This package provides:
- assembler: assemble_change_set, to_repo_relative, read_file_bytes
- untracked: discover_untracked_files
"""

from commitctx.changes.assembler import (
    assemble_change_set,
    read_file_bytes,
    to_repo_relative,
)
from commitctx.changes.untracked import (
    LS_FILES_ARGS,
    discover_untracked_files,
)


__all__ = [
    "assemble_change_set",
    "read_file_bytes",
    "to_repo_relative",
    "discover_untracked_files",
    "LS_FILES_ARGS",
]
