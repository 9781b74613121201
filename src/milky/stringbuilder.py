"""Append-only output buffer for article and highlight HTML.

Both the article renderer and the Rust highlighter build their output
from many small fragments (tags, escaped text runs, highlighted spans).
Fragments are collected in a list and joined once by build().

Thread Safety:
One buffer per render() or highlight_rust() call; never shared.

"""

from __future__ import annotations


class StringBuilder:
    """Collects HTML fragments and joins them once.

    Usage:
            >>> sb = StringBuilder()
            >>> _ = sb.append("<p>").append("hi").append_line("</p>")
            >>> sb.build()
            '<p>hi</p>\\n'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Add a fragment; empty fragments are dropped."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Add a fragment that ends a block, followed by a newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def build(self) -> str:
        """Return everything appended so far as one string."""
        return "".join(self._parts)
