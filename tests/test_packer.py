"""Tests for commitctx.packer module."""

from commitctx.models import ChangeSection, ChangeSet
from commitctx.packer import (
    HISTORY_NOTICE,
    NO_EXCERPTS_NOTICE,
    build_closing_notice,
    pack_context,
)


def _section(*pairs):
    return ChangeSection.from_pairs(list(pairs))


class TestPackContext:
    """Tests for pack_context function."""

    def test_fragment_order(self):
        """Test staged, tracked, untracked, history, then closing."""
        change_set = ChangeSet(
            staged=_section(("s1.py", "diff s1"), ("s2.py", "diff s2")),
            tracked=_section(("t.py", "diff t")),
            untracked=_section(("u.txt", "diff u")),
        )

        fragments = pack_context(change_set, "history text", "Write it.")

        assert [(f.label, f.path) for f in fragments] == [
            ("staged", "s1.py"),
            ("staged", "s2.py"),
            ("tracked", "t.py"),
            ("untracked", "u.txt"),
            ("history", None),
            ("instructions", None),
        ]

    def test_ordinals_are_per_section(self):
        change_set = ChangeSet(
            staged=_section(("a", "x"), ("b", "y")),
            tracked=_section(("c", "z")),
        )

        fragments = pack_context(change_set, "", "go")

        assert [(f.ordinal, f.total) for f in fragments[:3]] == [(1, 2), (2, 2), (1, 1)]

    def test_diff_fragment_body(self):
        change_set = ChangeSet(tracked=_section(("src/app.py", "+print('hi')")))

        fragment = pack_context(change_set, None, "go")[0]

        assert fragment.body == (
            "Attachment 1/1: diff excerpt (tracked)\n"
            "File: src/app.py\n"
            "```diff\n"
            "+print('hi')\n"
            "```"
        )
        assert fragment.truncated is False

    def test_long_excerpt_truncated(self):
        """Test that excerpts over the fragment budget are cut and flagged."""
        change_set = ChangeSet(staged=_section(("big.py", "x" * 500)))

        fragment = pack_context(change_set, None, "go", max_chars=200, overhead=100)[0]

        assert fragment.truncated is True
        assert ("x" * 100 + "\n... [message truncated]\n```") in fragment.body
        assert "x" * 101 not in fragment.body

    def test_overhead_larger_than_budget(self):
        change_set = ChangeSet(staged=_section(("a.py", "abc")))

        fragment = pack_context(change_set, None, "go", max_chars=10, overhead=50)[0]

        assert fragment.truncated is True
        assert "```diff\n\n... [message truncated]\n```" in fragment.body

    def test_whitespace_only_diff_skipped(self):
        """Test that blank diffs produce no fragment but keep the total."""
        change_set = ChangeSet(tracked=_section(("a.py", "  \n"), ("b.py", "diff b")))

        fragments = pack_context(change_set, None, "go")

        assert len(fragments) == 2
        assert fragments[0].path == "b.py"
        assert (fragments[0].ordinal, fragments[0].total) == (2, 2)

    def test_history_fragment(self):
        fragments = pack_context(ChangeSet(), "  Selected files:\n- a.py  \n", "go")

        history = fragments[0]
        assert history.label == "history"
        assert history.body == (
            "Attachment: recent commits for changed files (for context)\n\nSelected files:\n- a.py"
        )

    def test_blank_history_left_out(self):
        fragments = pack_context(ChangeSet(), "   ", "go")

        assert [f.label for f in fragments] == ["instructions"]

    def test_closing_fragment_with_history(self):
        change_set = ChangeSet(
            staged=_section(("a", "x")),
            untracked=_section(("b", "y")),
        )

        closing = pack_context(change_set, "history", "Describe the change.")[-1]

        assert closing.body == (
            "Staged diff excerpts have been provided in previous messages. Please use them.\n"
            "Untracked new file excerpts have been provided in previous messages. Please use them.\n"
            f"{HISTORY_NOTICE}\n"
            "\n"
            "Describe the change."
        )

    def test_closing_fragment_without_excerpts(self):
        closing = pack_context(ChangeSet(), None, "Describe.")[-1]

        assert closing.body == f"{NO_EXCERPTS_NOTICE}\n\nDescribe."

    def test_instructions_appended_verbatim(self):
        instructions = "  Line one\n\n  Line two with {braces} and %s  \n"

        closing = pack_context(ChangeSet(), None, instructions)[-1]

        assert closing.body.endswith("\n\n" + instructions)

    def test_deterministic(self):
        change_set = ChangeSet(
            staged=_section(("a", "x" * 300)),
            tracked=_section(("b", "y")),
        )

        first = pack_context(change_set, "h", "go", max_chars=200, overhead=50)
        second = pack_context(change_set, "h", "go", max_chars=200, overhead=50)

        assert first == second


class TestBuildClosingNotice:
    """Tests for build_closing_notice function."""

    def test_tracked_notice(self):
        change_set = ChangeSet(tracked=_section(("a", "x")))

        notice = build_closing_notice(change_set, has_history=False)

        assert notice == "Tracked diff excerpts have been provided in previous messages. Please use them."

    def test_history_only(self):
        notice = build_closing_notice(ChangeSet(), has_history=True)

        assert notice == f"{NO_EXCERPTS_NOTICE}\n{HISTORY_NOTICE}"
