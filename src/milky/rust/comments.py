"""Comment scanner for Rust source text.

Splits a string into alternating plain and comment segments. Concatenating
the text of every yielded segment, in order, reproduces the input exactly.

State machine:
    SKIP            scan for the next ``//`` or ``/*``
    IN_COMMENT      scan for the delimiter that closes the current comment
                    (``\\n`` for line comments, ``*/`` for block comments)

An unterminated comment runs to the end of the input. Block comments do
not nest here: the scanner only sees text between tokens, where nested
comments have already been ruled out by the lexer or do not matter.

Thread Safety:
Each call returns an independent generator.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from milky.rust.patterns import find_pattern


class CommentKind(Enum):
    """Comment delimiter that opened the current comment."""

    LINE = auto()  # //
    BLOCK = auto()  # /*


@dataclass(frozen=True, slots=True)
class Plain:
    """Text outside any comment."""

    text: str


@dataclass(frozen=True, slots=True)
class Comment:
    """Comment text, delimiters included."""

    text: str


type Segment = Plain | Comment

_OPENERS: tuple[tuple[str, CommentKind], ...] = (
    ("//", CommentKind.LINE),
    ("/*", CommentKind.BLOCK),
)

# Closing pattern and its length as included in the comment.
_CLOSERS: dict[CommentKind, tuple[str, int]] = {
    CommentKind.LINE: ("\n", 1),
    CommentKind.BLOCK: ("*/", 2),
}


def scan_comments(code: str) -> Iterator[Segment]:
    """Lazily split code into Plain and Comment segments.

    Plain segments may be empty (a comment at the very start of the input
    is preceded by an empty Plain segment).

    Args:
        code: Source text

    Yields:
        Plain and Comment segments in source order

    Example:
        >>> list(scan_comments("aa//b\\nc"))
        [Plain(text='aa'), Comment(text='//b\\n'), Plain(text='c')]
    """
    rest = code
    while True:
        found = find_pattern(rest, _OPENERS)
        if found is None:
            yield Plain(rest)
            return

        pos, kind = found
        yield Plain(rest[:pos])
        rest = rest[pos:]

        closer, closer_len = _CLOSERS[kind]
        # The closer may overlap the opener: "/*/" is a complete comment.
        end = find_pattern(rest, ((closer, None),))
        if end is None:
            yield Comment(rest)
            return

        split = end[0] + closer_len
        yield Comment(rest[:split])
        rest = rest[split:]
