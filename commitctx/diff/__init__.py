"""Diff parsing and synthesis for commitctx.

This package provides:
- paths: tokenize_header_paths, decode_path_token, parse_header_paths
- parser: parse_diff_records, UNKNOWN_FILE_PATH
- synthetic: looks_binary, build_new_file_patch, build_binary_patch,
             build_untracked_patch
- truncate: truncate_tail and the truncation markers
"""

# Header paths
from commitctx.diff.paths import (
    decode_path_token,
    parse_header_paths,
    tokenize_header_paths,
)

# Parser
from commitctx.diff.parser import (
    UNKNOWN_FILE_PATH,
    parse_diff_records,
)

# Synthetic patches
from commitctx.diff.synthetic import (
    build_binary_patch,
    build_new_file_patch,
    build_untracked_patch,
    looks_binary,
)

# Truncation
from commitctx.diff.truncate import (
    FILE_TRUNCATION_MARKER,
    MESSAGE_TRUNCATION_MARKER,
    UNTRACKED_TRUNCATION_MARKER,
    truncate_tail,
)


__all__ = [
    # Paths
    "tokenize_header_paths",
    "decode_path_token",
    "parse_header_paths",
    # Parser
    "parse_diff_records",
    "UNKNOWN_FILE_PATH",
    # Synthetic
    "looks_binary",
    "build_new_file_patch",
    "build_binary_patch",
    "build_untracked_patch",
    # Truncation
    "truncate_tail",
    "FILE_TRUNCATION_MARKER",
    "UNTRACKED_TRUNCATION_MARKER",
    "MESSAGE_TRUNCATION_MARKER",
]
