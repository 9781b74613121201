"""Token-tree lexer for Rust source code.

Turns source text into a tree of atoms (identifiers, literals, single
punctuation characters) and bracket-delimited groups, the way a Rust
procedural macro sees its input. The lexer does not parse: ``fn fn fn``
is accepted, ``fn (`` is not (the parenthesis is never closed).

Whitespace and comments are trivia and produce nothing. Comments are
rendered later by the comment scanner, which sees the gaps between tokens.

Single forward pass, no regex. The position only ever advances.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from milky.errors import LexError
from milky.rust.span import Span
from milky.rust.tokens import Delimiter, Group, Ident, Literal, Punct, TokenTree

_OPEN_DELIMITERS: dict[str, Delimiter] = {d.open: d for d in Delimiter}
_CLOSE_DELIMITERS = frozenset(d.close for d in Delimiter)

# Characters lexed as single-character Punct atoms.
_PUNCT_CHARS = frozenset("~!@#$%^&*-=+|;:,./<>?")


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_ident_continue(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


class Lexer:
    """Rust token-tree lexer.

    Usage:
            >>> trees = Lexer("fn main() {}").tokenize()
            >>> [type(t).__name__ for t in trees]
            ['Ident', 'Ident', 'Group', 'Group']

    Raises LexError on unbalanced delimiters, unterminated literals or
    comments, and characters that cannot start any token.

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = ("_source", "_source_len", "_pos")

    def __init__(self, source: str) -> None:
        """Initialize lexer with source text.

        Args:
            source: Rust source text
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0

    def tokenize(self) -> tuple[TokenTree, ...]:
        """Lex the whole source into top-level token trees.

        Returns:
            Token trees in source order

        Raises:
            LexError: If the source is not lexically valid
        """
        # Open groups: (delimiter, offset of opening char, enclosing trees)
        stack: list[tuple[Delimiter, int, list[TokenTree]]] = []
        trees: list[TokenTree] = []

        while True:
            self._skip_trivia()
            if self._pos >= self._source_len:
                break

            ch = self._source[self._pos]
            if ch in _OPEN_DELIMITERS:
                stack.append((_OPEN_DELIMITERS[ch], self._pos, trees))
                trees = []
                self._pos += 1
            elif ch in _CLOSE_DELIMITERS:
                if not stack:
                    raise self._error(f"unexpected closing delimiter {ch!r}")
                delimiter, start, parent = stack.pop()
                if delimiter.close != ch:
                    raise self._error(
                        f"mismatched closing delimiter {ch!r}, expected {delimiter.close!r}"
                    )
                self._pos += 1
                parent.append(Group(delimiter, tuple(trees), Span(start, self._pos)))
                trees = parent
            else:
                trees.append(self._scan_atom(ch))

        if stack:
            delimiter, start, _ = stack[-1]
            raise LexError(f"unclosed delimiter {delimiter.open!r}", self._source, start)

        return tuple(trees)

    # =========================================================================
    # Navigation helpers
    # =========================================================================

    def _peek(self, ahead: int = 0) -> str:
        """Return the character ahead of the position, or "" past the end."""
        pos = self._pos + ahead
        return self._source[pos] if pos < self._source_len else ""

    def _error(self, message: str, offset: int | None = None) -> LexError:
        return LexError(message, self._source, self._pos if offset is None else offset)

    def _eat_ident_continue(self) -> None:
        while self._pos < self._source_len and _is_ident_continue(self._source[self._pos]):
            self._pos += 1

    # =========================================================================
    # Trivia
    # =========================================================================

    def _skip_trivia(self) -> None:
        """Advance past whitespace and comments."""
        source = self._source
        while self._pos < self._source_len:
            ch = source[self._pos]
            if ch.isspace():
                self._pos += 1
            elif source.startswith("//", self._pos):
                newline = source.find("\n", self._pos)
                self._pos = newline if newline != -1 else self._source_len
            elif source.startswith("/*", self._pos):
                self._skip_block_comment()
            else:
                return

    def _skip_block_comment(self) -> None:
        """Advance past a block comment, honoring nesting."""
        start = self._pos
        source = self._source
        depth = 0
        while self._pos < self._source_len:
            if source.startswith("/*", self._pos):
                depth += 1
                self._pos += 2
            elif source.startswith("*/", self._pos):
                depth -= 1
                self._pos += 2
                if depth == 0:
                    return
            else:
                self._pos += 1
        raise self._error("unterminated block comment", start)

    # =========================================================================
    # Atoms
    # =========================================================================

    def _scan_atom(self, ch: str) -> TokenTree:
        """Scan one identifier, literal or punctuation atom starting at ch."""
        start = self._pos

        if ch.isdigit():
            self._scan_number()
            return Literal(Span(start, self._pos))

        if ch == '"':
            self._scan_quoted('"', "string")
            self._eat_ident_continue()
            return Literal(Span(start, self._pos))

        if ch == "'":
            if self._scan_char():
                return Literal(Span(start, self._pos))
            self._pos += 1
            return Punct("'", Span(start, self._pos))

        if ch in "brc":
            literal = self._scan_prefixed_literal(ch)
            if literal is not None:
                return literal

        if _is_ident_start(ch):
            self._eat_ident_continue()
            return Ident(Span(start, self._pos))

        if ch in _PUNCT_CHARS:
            self._pos += 1
            return Punct(ch, Span(start, self._pos))

        raise self._error(f"unexpected character {ch!r}")

    def _scan_prefixed_literal(self, ch: str) -> TokenTree | None:
        """Scan literals and raw identifiers that start with b, r or c.

        Returns None (position unchanged) when ch starts a plain identifier.
        """
        start = self._pos
        nxt = self._peek(1)

        if ch == "r" and nxt == "#" and _is_ident_start(self._peek(2)):
            self._pos += 2
            self._eat_ident_continue()
            return Ident(Span(start, self._pos))

        if ch == "r" and nxt in ('"', "#"):
            self._pos += 1
            self._scan_raw_string(start)
            return Literal(Span(start, self._pos))

        if ch in "bc" and nxt == "r" and self._peek(2) in ('"', "#"):
            self._pos += 2
            self._scan_raw_string(start)
            return Literal(Span(start, self._pos))

        if ch in "bc" and nxt == '"':
            self._pos += 1
            self._scan_quoted('"', "string")
            self._eat_ident_continue()
            return Literal(Span(start, self._pos))

        if ch == "b" and nxt == "'":
            self._pos += 1
            if not self._scan_char():
                raise self._error("unterminated byte literal", start)
            return Literal(Span(start, self._pos))

        return None

    def _scan_number(self) -> None:
        """Scan an integer or float literal, including any suffix."""
        source = self._source
        if source.startswith(("0x", "0o", "0b"), self._pos):
            self._pos += 2
            self._eat_ident_continue()
            return

        self._eat_digits()

        if self._peek() == ".":
            after = self._peek(1)
            if after.isdigit():
                self._pos += 1
                self._eat_digits()
            elif after != "." and not _is_ident_start(after):
                # `1.` is a float; `1..2` and `1.max(2)` are not.
                self._pos += 1
                return

        if self._peek() in ("e", "E") and self._peek(1) in ("+", "-") and self._peek(2).isdigit():
            self._pos += 2
            self._eat_digits()

        self._eat_ident_continue()

    def _eat_digits(self) -> None:
        while self._pos < self._source_len and (
            self._source[self._pos].isdigit() or self._source[self._pos] == "_"
        ):
            self._pos += 1

    def _scan_quoted(self, quote: str, what: str) -> None:
        """Scan from an opening quote to its closing quote, skipping escapes."""
        start = self._pos
        source = self._source
        self._pos += 1
        while self._pos < self._source_len:
            ch = source[self._pos]
            if ch == "\\":
                self._pos += 2
            elif ch == quote:
                self._pos += 1
                return
            else:
                self._pos += 1
        raise self._error(f"unterminated {what} literal", start)

    def _scan_raw_string(self, start: int) -> None:
        """Scan ``#*"..."#*`` after the r/br/cr prefix."""
        hashes = 0
        while self._peek() == "#":
            hashes += 1
            self._pos += 1
        if self._peek() != '"':
            raise self._error("expected '\"' to open raw string", start)

        terminator = '"' + "#" * hashes
        end = self._source.find(terminator, self._pos + 1)
        if end == -1:
            raise self._error("unterminated raw string literal", start)
        self._pos = end + len(terminator)
        self._eat_ident_continue()

    def _scan_char(self) -> bool:
        """Try to scan a character literal at the current quote.

        Returns:
            True if a char literal was consumed, False (position unchanged)
            if the quote starts a lifetime or label instead.

        Raises:
            LexError: If the quote starts neither
        """
        start = self._pos
        source = self._source
        first = self._peek(1)

        if first == "\\":
            # Escapes: '\n', '\'', '\x7f', '\u{1F600}'
            end = source.find("'", self._pos + 3)
            newline = source.find("\n", self._pos + 1)
            if end == -1 or (newline != -1 and newline < end):
                raise self._error("unterminated character literal", start)
            self._pos = end + 1
            return True

        if first and first not in ("'", "\n") and self._peek(2) == "'":
            self._pos += 3
            return True

        if _is_ident_start(first):
            return False

        raise self._error("unterminated character literal", start)


def tokenize(source: str) -> tuple[TokenTree, ...]:
    """Lex source into token trees.

    Raises:
        LexError: If the source is not lexically valid
    """
    return Lexer(source).tokenize()
