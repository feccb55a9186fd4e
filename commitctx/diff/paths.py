"""Path extraction from `diff --git` header lines.

Contains:
- tokenize_header_paths: Split a header tail into raw path tokens
- decode_path_token: Decode one raw token into a repo-relative path
- parse_header_paths: Return the (source, destination) paths of a header line

Git quotes paths containing special characters as C-style strings, e.g.
`diff --git "a/sp ace.txt" "b/sp ace.txt"`. Tokenizing only splits and keeps
every quote and backslash; decoding is a separate step.
"""

import json

DIFF_HEADER_PREFIX = "diff --git "


def tokenize_header_paths(rest: str) -> list[str]:
    """Split the remainder of a header line into raw path tokens.

    Quoted runs are kept together with their quotes, a backslash keeps the
    following character literally, and unquoted spaces separate tokens. An
    unterminated quote runs to the end of the line.

    Args:
        rest: The header line with the `diff --git ` prefix removed.

    Returns:
        Raw tokens in order of appearance.
    """
    tokens: list[str] = []
    current = ""
    in_quotes = False
    escaped = False

    for ch in rest:
        if escaped:
            current += ch
            escaped = False
            continue
        if ch == "\\":
            current += ch
            escaped = True
            continue
        if ch == '"':
            current += ch
            in_quotes = not in_quotes
            continue
        if ch == " " and not in_quotes:
            if current:
                tokens.append(current)
                current = ""
            continue
        current += ch

    if current:
        tokens.append(current)
    return tokens


def decode_path_token(token: str) -> str:
    """Decode a raw path token and strip its `a/` or `b/` prefix.

    Quoted tokens are decoded as JSON strings (`\\n`, `\\t`, `\\"`, `\\\\`);
    when that fails the quotes are simply removed. Unquoted tokens only have
    `\\ ` turned back into a space.

    Args:
        token: A token produced by tokenize_header_paths.

    Returns:
        The decoded path.
    """
    t = token.strip()
    if len(t) >= 2 and t.startswith('"') and t.endswith('"'):
        try:
            path = json.loads(t)
        except ValueError:
            path = t[1:-1]
    else:
        path = t.replace("\\ ", " ")

    if path.startswith(("a/", "b/")):
        path = path[2:]
    return path


def parse_header_paths(line: str) -> tuple[str, str]:
    """Parse a `diff --git` header into (source, destination) paths.

    Returns ("", "") when the header has fewer than two path tokens.
    """
    rest = line[len(DIFF_HEADER_PREFIX):] if line.startswith(DIFF_HEADER_PREFIX) else line
    tokens = tokenize_header_paths(rest)
    if len(tokens) < 2:
        return "", ""
    return decode_path_token(tokens[0]), decode_path_token(tokens[1])
