"""Balanced delimiter matching for wikitext.

Two helpers shared by every recognizer:

- find_matching_close: end of a nested {{...}} or {|...|} span
- split_top_level: split on a separator outside {{...}} and [[...]]
"""

from __future__ import annotations

from typing import Final

# Tokens that open and close a nesting level for split_top_level.
# Depth is shared: "{{" may be closed by "]]" and vice versa.
NESTING_OPENERS: Final[frozenset[str]] = frozenset(["{{", "[["])
NESTING_CLOSERS: Final[frozenset[str]] = frozenset(["}}", "]]"])


def find_matching_close(text: str, start: int, open_token: str, close_token: str) -> int | None:
    """Find the end of the span opened at ``start``.

    Scans from ``start``, counting each ``open_token`` as one level deeper
    and each ``close_token`` as one level shallower. Opening tokens are
    checked first at every position.

    Args:
        text: Text to scan.
        start: Index of the opening token.
        open_token: Opening delimiter, e.g. "{{".
        close_token: Closing delimiter, e.g. "}}".

    Returns:
        Index just past the closing token that balances the span,
        or None if the text ends while still nested.

    Examples:
        >>> find_matching_close("{{a|{{b}}}} tail", 0, "{{", "}}")
        11
        >>> find_matching_close("{{unclosed", 0, "{{", "}}") is None
        True
    """
    depth = 0
    i = start
    while i < len(text):
        if text.startswith(open_token, i):
            depth += 1
            i += len(open_token)
        elif text.startswith(close_token, i):
            depth -= 1
            i += len(close_token)
            if depth == 0:
                return i
        else:
            i += 1
    return None


def split_top_level(text: str, separator: str) -> list[str]:
    """Split ``text`` on ``separator`` outside {{...}} and [[...]].

    Always returns at least one segment. A trailing separator yields a
    trailing empty segment.

    Args:
        text: Text to split.
        separator: Single separator character, usually "|".

    Returns:
        List of segments in order.

    Examples:
        >>> split_top_level("a|[[b|c]]|{{d|e}}", "|")
        ['a', '[[b|c]]', '{{d|e}}']
        >>> split_top_level("a|", "|")
        ['a', '']
    """
    segments: list[str] = []
    depth = 0
    last_split = 0
    i = 0
    while i < len(text):
        pair = text[i : i + 2]
        if pair in NESTING_OPENERS:
            depth += 1
            i += 2
            continue
        if pair in NESTING_CLOSERS:
            depth -= 1
            i += 2
            continue
        if text[i] == separator and depth == 0:
            segments.append(text[last_split:i])
            last_split = i + 1
        i += 1
    segments.append(text[last_split:])
    return segments
