"""Unified diff splitter.

Contains:
- parse_diff_records: Split a multi-file unified diff into per-file records
- UNKNOWN_FILE_PATH: Placeholder path for headers without two path tokens
"""

import re
from typing import Optional

from commitctx.diff.paths import DIFF_HEADER_PREFIX, parse_header_paths
from commitctx.diff.truncate import FILE_TRUNCATION_MARKER, truncate_tail
from commitctx.models import DiffRecord

UNKNOWN_FILE_PATH = "(unknown-file)"

DEFAULT_MAX_CHARS_PER_FILE = 12000
DEFAULT_MAX_FILES = 50

_LINE_SPLIT_RE = re.compile(r"\r?\n")


def _make_record(file_path: str, lines: list[str], max_chars: int) -> Optional[DiffRecord]:
    """Join, trim and truncate an accumulated file block.

    Returns:
        A DiffRecord, or None when the block is empty after trimming.
    """
    excerpt = "\n".join(lines).strip()
    if not excerpt:
        return None
    excerpt, _ = truncate_tail(excerpt, max_chars, FILE_TRUNCATION_MARKER)
    return DiffRecord(
        file_path=file_path or UNKNOWN_FILE_PATH,
        excerpt=excerpt,
        char_count=len(excerpt),
    )


def parse_diff_records(
    diff_text: str,
    max_chars_per_file: int = DEFAULT_MAX_CHARS_PER_FILE,
    max_files: Optional[int] = DEFAULT_MAX_FILES,
) -> list[DiffRecord]:
    """Split unified diff output into one record per `diff --git` block.

    Content before the first header is discarded. Once max_files records
    have been emitted no further block is opened; the open block still
    flushes, so the final list is sliced to max_files.

    Args:
        diff_text: Raw output of git diff (may be empty).
        max_chars_per_file: Character budget for each trimmed file block.
        max_files: Maximum number of records, or None for no limit.

    Returns:
        List of DiffRecord objects in input order.
    """
    records: list[DiffRecord] = []
    current_lines: Optional[list[str]] = None
    current_path = ""

    def flush() -> None:
        if current_lines:
            record = _make_record(current_path, current_lines, max_chars_per_file)
            if record:
                records.append(record)

    for line in _LINE_SPLIT_RE.split(diff_text or ""):
        if line.startswith(DIFF_HEADER_PREFIX):
            flush()
            current_lines = None
            if max_files is not None and len(records) >= max_files:
                break
            source, destination = parse_header_paths(line)
            current_path = destination or source or UNKNOWN_FILE_PATH
            current_lines = [line]
            continue

        if current_lines is None:
            # Preamble before the first file header
            continue
        current_lines.append(line)

    flush()

    if max_files is not None:
        return records[:max_files]
    return records
