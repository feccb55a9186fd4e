"""Synthetic patches for content git has no diff for.

Contains:
- looks_binary: Heuristic binary detection
- build_new_file_patch: Build an added-file unified diff from text
- build_binary_patch: Build the header-only patch git emits for binary files
- build_untracked_patch: Build a truncated DiffRecord for an untracked file
"""

from commitctx.diff.parser import DEFAULT_MAX_CHARS_PER_FILE
from commitctx.diff.truncate import (
    FILE_TRUNCATION_MARKER,
    UNTRACKED_TRUNCATION_MARKER,
    truncate_tail,
)
from commitctx.models import DiffRecord


def looks_binary(data: bytes) -> bool:
    """Return True if data contains a NUL byte."""
    return b"\x00" in data


def _new_file_header(path: str) -> list[str]:
    return [
        f"diff --git a/{path} b/{path}",
        "new file mode 100644",
        "--- /dev/null",
        f"+++ b/{path}",
    ]


def build_new_file_patch(path: str, content: str) -> str:
    """Build a unified diff that adds a file with the given content.

    CRLF line endings are normalized to LF. Empty content gives the header
    block only, without a hunk, matching what git prints for an empty file.

    Args:
        path: Repo-relative path with forward slashes.
        content: The file text.

    Returns:
        Patch text (no trailing newline).
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n") if normalized else []

    patch_lines = _new_file_header(path)
    if not lines:
        return "\n".join(patch_lines)

    patch_lines.append(f"@@ -0,0 +1,{len(lines)} @@")
    patch_lines.extend(f"+{line}" for line in lines)
    return "\n".join(patch_lines)


def build_binary_patch(path: str) -> str:
    """Build the patch for a new binary file: headers plus a marker line."""
    patch_lines = _new_file_header(path)
    patch_lines.append(f"Binary files /dev/null and b/{path} differ")
    return "\n".join(patch_lines)


def build_untracked_patch(
    path: str,
    data: bytes,
    max_chars: int = DEFAULT_MAX_CHARS_PER_FILE,
) -> DiffRecord:
    """Build a DiffRecord for an untracked file from its raw bytes.

    Text content is capped before the patch is built and the finished patch
    is capped again with the same marker the diff parser uses.

    Args:
        path: Repo-relative path with forward slashes.
        data: Raw file content.
        max_chars: Character budget for the content and for the patch.

    Returns:
        DiffRecord for the file.
    """
    if looks_binary(data):
        patch = build_binary_patch(path)
    else:
        text = data.decode("utf-8", errors="replace")
        text, _ = truncate_tail(text, max_chars, UNTRACKED_TRUNCATION_MARKER)
        patch = build_new_file_patch(path, text)

    patch, _ = truncate_tail(patch, max_chars, FILE_TRUNCATION_MARKER)
    return DiffRecord(file_path=path, excerpt=patch, char_count=len(patch))
