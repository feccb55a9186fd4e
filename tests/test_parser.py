"""Tests for commitctx.diff.parser module."""

from commitctx.diff.parser import UNKNOWN_FILE_PATH, parse_diff_records
from commitctx.diff.truncate import FILE_TRUNCATION_MARKER


def _file_block(path: str, body_lines: int = 2) -> str:
    lines = [f"diff --git a/{path} b/{path}", f"--- a/{path}", f"+++ b/{path}", "@@ -1 +1 @@"]
    lines.extend(f"+line {i}" for i in range(body_lines))
    return "\n".join(lines)


class TestParseDiffRecords:
    """Tests for parse_diff_records function."""

    def test_two_files_in_order(self):
        """Test that two file sections give two records in input order."""
        diff = "diff --git a/x b/x\n+x\ndiff --git a/y b/y\n+y\n"

        records = parse_diff_records(diff)

        assert [r.file_path for r in records] == ["x", "y"]
        assert records[0].excerpt == "diff --git a/x b/x\n+x"
        assert records[1].excerpt == "diff --git a/y b/y\n+y"

    def test_quoted_path_header(self):
        """Test that a quoted header yields the decoded path."""
        diff = 'diff --git "a/sp ace.txt" "b/sp ace.txt"\n+content\n'

        records = parse_diff_records(diff)

        assert len(records) == 1
        assert records[0].file_path == "sp ace.txt"

    def test_sample_diff(self, sample_diff):
        """Test parsing a realistic multi-file diff."""
        records = parse_diff_records(sample_diff)

        assert [r.file_path for r in records] == ["src/main.py", "tests/test_main.py"]
        assert "+    print(\"World\")" in records[0].excerpt
        assert "+import pytest" in records[1].excerpt

    def test_empty_input(self):
        """Test that an empty or blank diff gives no records."""
        assert parse_diff_records("") == []
        assert parse_diff_records("   \n\n") == []

    def test_discards_preamble(self):
        """Test that content before the first header is dropped."""
        diff = "warning: something\nnoise\ndiff --git a/x b/x\n+x"

        records = parse_diff_records(diff)

        assert len(records) == 1
        assert "noise" not in records[0].excerpt

    def test_never_merges_files(self, sample_diff):
        """Test that each record holds exactly one file header."""
        records = parse_diff_records(sample_diff + "\n" + _file_block("third.txt"))

        assert len(records) == 3
        for record in records:
            assert record.excerpt.count("diff --git ") == 1

    def test_file_count_cap(self):
        """Test that files beyond max_files are dropped, not reordered."""
        diff = "\n".join(_file_block(name) for name in ["a", "b", "c", "d"])

        records = parse_diff_records(diff, max_files=2)

        assert [r.file_path for r in records] == ["a", "b"]

    def test_open_block_flushes_at_cap(self):
        """Test that the block open when the cap is reached is complete."""
        diff = "\n".join(_file_block(name, body_lines=3) for name in ["a", "b"])

        records = parse_diff_records(diff, max_files=1)

        assert len(records) == 1
        assert records[0].excerpt == _file_block("a", body_lines=3)

    def test_zero_file_cap(self):
        """Test that max_files=0 gives no records."""
        assert parse_diff_records(_file_block("a"), max_files=0) == []

    def test_unlimited_files(self):
        """Test that max_files=None keeps every file."""
        diff = "\n".join(_file_block(f"f{i}") for i in range(60))

        records = parse_diff_records(diff, max_files=None)

        assert len(records) == 60

    def test_default_cap_is_fifty(self):
        """Test the default file cap."""
        diff = "\n".join(_file_block(f"f{i}") for i in range(60))

        assert len(parse_diff_records(diff)) == 50

    def test_malformed_header_uses_placeholder(self):
        """Test that a header with one path token gets the placeholder path."""
        records = parse_diff_records("diff --git onlyone\n+x")

        assert records[0].file_path == UNKNOWN_FILE_PATH

    def test_falls_back_to_source_path(self):
        """Test that an empty destination falls back to the source path."""
        records = parse_diff_records('diff --git a/src.txt ""\n+x')

        assert records[0].file_path == "src.txt"

    def test_crlf_lines(self):
        """Test that CRLF line endings are normalized."""
        records = parse_diff_records("diff --git a/x b/x\r\n+a\r\n+b\r\n")

        assert records[0].excerpt == "diff --git a/x b/x\n+a\n+b"

    def test_truncates_long_file(self):
        """Test that a long block is cut to the budget plus the marker."""
        block = _file_block("big.txt", body_lines=200)

        records = parse_diff_records(block, max_chars_per_file=100)
        excerpt = records[0].excerpt

        assert len(excerpt) == 100 + len(FILE_TRUNCATION_MARKER)
        assert excerpt[:100] == block[:100]
        assert excerpt.endswith("... [file excerpt truncated]")
        assert records[0].char_count == len(excerpt)

    def test_short_file_not_truncated(self):
        """Test that a block within budget is kept whole."""
        block = _file_block("small.txt")

        records = parse_diff_records(block, max_chars_per_file=len(block))

        assert records[0].excerpt == block
        assert "truncated" not in records[0].excerpt
