"""Packing of a change set into bounded context fragments.

Contains:
- pack_context: Turn a ChangeSet and history text into ordered fragments
- build_closing_notice: The notice lines that precede the task instructions

Fragment order is fixed: one fragment per staged, then tracked, then
untracked file, then at most one history fragment, then exactly one
closing fragment carrying the task instructions.
"""

from typing import Optional

from commitctx.diff.truncate import MESSAGE_TRUNCATION_MARKER, truncate_tail
from commitctx.models import ChangeSection, ChangeSet, ContextFragment

DEFAULT_MAX_FRAGMENT_CHARS = 14000
DEFAULT_FRAGMENT_OVERHEAD = 600

HISTORY_LABEL = "history"
CLOSING_LABEL = "instructions"

_SECTION_NOTICES = {
    "staged": "Staged diff excerpts have been provided in previous messages. Please use them.",
    "tracked": "Tracked diff excerpts have been provided in previous messages. Please use them.",
    "untracked": "Untracked new file excerpts have been provided in previous messages. Please use them.",
}
NO_EXCERPTS_NOTICE = "No diff excerpts were provided."
HISTORY_NOTICE = "History context has also been provided in a previous message. Please use it."


def _section_fragments(
    section: ChangeSection,
    label: str,
    max_excerpt: int,
) -> list[ContextFragment]:
    fragments = []
    total = len(section)

    for index, (path, diff_text) in enumerate(section, start=1):
        if not diff_text.strip():
            continue

        excerpt, truncated = truncate_tail(diff_text, max_excerpt, MESSAGE_TRUNCATION_MARKER)
        file_line = f"File: {path}" if path else "File: (unknown)"
        body = "\n".join([
            f"Attachment {index}/{total}: diff excerpt ({label})",
            file_line,
            "```diff",
            excerpt,
            "```",
        ])
        fragments.append(
            ContextFragment(
                label=label,
                ordinal=index,
                total=total,
                path=path or None,
                body=body,
                truncated=truncated,
            )
        )

    return fragments


def build_closing_notice(change_set: ChangeSet, has_history: bool) -> str:
    """Describe which context was supplied in earlier fragments."""
    lines = [
        _SECTION_NOTICES[label]
        for label, section in change_set.sections()
        if not section.is_empty
    ]
    if not lines:
        lines.append(NO_EXCERPTS_NOTICE)
    if has_history:
        lines.append(HISTORY_NOTICE)
    return "\n".join(lines)


def pack_context(
    change_set: ChangeSet,
    history: Optional[str],
    instructions: str,
    max_chars: int = DEFAULT_MAX_FRAGMENT_CHARS,
    overhead: int = DEFAULT_FRAGMENT_OVERHEAD,
) -> list[ContextFragment]:
    """Pack a change set and history summary into ordered fragments.

    Args:
        change_set: The assembled change set.
        history: Rendered history text (empty or None to leave it out).
        instructions: Task instruction text, appended verbatim at the end.
        max_chars: Character budget per fragment.
        overhead: Part of the budget reserved for the wrapping text.

    Returns:
        List of ContextFragment objects in delivery order.
    """
    max_excerpt = max(0, max_chars - overhead)

    fragments: list[ContextFragment] = []
    for label, section in change_set.sections():
        fragments.extend(_section_fragments(section, label, max_excerpt))

    history_text = (history or "").strip()
    if history_text:
        fragments.append(
            ContextFragment(
                label=HISTORY_LABEL,
                ordinal=1,
                total=1,
                body=f"Attachment: recent commits for changed files (for context)\n\n{history_text}",
            )
        )

    notice = build_closing_notice(change_set, bool(history_text))
    fragments.append(
        ContextFragment(
            label=CLOSING_LABEL,
            ordinal=1,
            total=1,
            body=f"{notice}\n\n{instructions}",
        )
    )
    return fragments
