"""Fixed-width pattern scanner.

Finds the earliest window of a string that equals any of a set of
fixed-width patterns. Every pattern carries a tag, and the tag of the
first matching pattern (in list order) is reported with the offset.

Uses str.find per pattern (C implementation) rather than stepping a
window in Python; the result is the same as a left-to-right window walk.

Thread Safety:
Pure functions, no shared state.

"""

from __future__ import annotations

from collections.abc import Sequence

type Pattern[T] = tuple[str, T]


def window_width(patterns: Sequence[Pattern[object]]) -> int:
    """Return the common width of patterns.

    Raises:
        ValueError: If patterns is empty, a pattern is empty, or widths differ
    """
    widths = {len(text) for text, _ in patterns}
    if len(widths) != 1 or 0 in widths:
        raise ValueError(f"patterns must share one non-zero width, got {sorted(widths)}")
    return widths.pop()


def find_pattern[T](text: str, patterns: Sequence[Pattern[T]]) -> tuple[int, T] | None:
    """Find the earliest offset at which any pattern matches.

    Args:
        text: String to scan
        patterns: (pattern, tag) pairs, all of the same width

    Returns:
        (offset, tag) of the earliest match, or None if nothing matches.
        When several patterns match at the same offset, the tag of the
        first one in list order wins.

    Example:
        >>> find_pattern("a /* b // c", [("//", "line"), ("/*", "block")])
        (2, 'block')
    """
    window_width(patterns)

    best: tuple[int, T] | None = None
    for pattern, tag in patterns:
        pos = text.find(pattern)
        if pos != -1 and (best is None or pos < best[0]):
            best = (pos, tag)
    return best
