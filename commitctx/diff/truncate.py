"""Tail truncation shared by every diff producer.

Contains:
- truncate_tail: Cut a text to a character budget and append a marker line
- FILE_TRUNCATION_MARKER, UNTRACKED_TRUNCATION_MARKER, MESSAGE_TRUNCATION_MARKER
"""

# Markers include their leading newline so they always start a new line.
FILE_TRUNCATION_MARKER = "\n... [file excerpt truncated]"
UNTRACKED_TRUNCATION_MARKER = "\n... [untracked file truncated]"
MESSAGE_TRUNCATION_MARKER = "\n... [message truncated]"


def truncate_tail(text: str, max_chars: int, marker: str = FILE_TRUNCATION_MARKER) -> tuple[str, bool]:
    """Keep the first max_chars characters of text and append marker.

    Args:
        text: The text to cut.
        max_chars: Character budget for the kept head (negative counts as 0).
        marker: Marker appended after the kept head when text was cut.

    Returns:
        Tuple of (resulting text, whether it was truncated).
    """
    max_chars = max(0, max_chars)
    if len(text) <= max_chars:
        return text, False
    return text[:max_chars] + marker, True
