"""Token classification and merging.

Walks a token tree in document order and assigns each identifier and
literal a highlight kind. Two compound constructs that the lexer reports
as separate atoms are merged back together:

    println !     ->  MACRO      (identifier immediately followed by `!`)
    ' a           ->  LIFETIME   (`'` immediately followed by an identifier)

Merging uses a one-token lookback: at most one token is pending, and each
new token either merges with it or flushes it. Transient kinds left over
after merging (a lone `!` or `'`) are dropped, so their text is rendered
as plain text between tokens.

Thread Safety:
Keyword and type-name sets are immutable module constants.
All other state is local to each classify() call.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from milky.rust.tokens import Group, HighlightKind, Ident, Literal, Punct, Token, TokenTree

KEYWORDS: frozenset[str] = frozenset(
    {
        "as", "break", "const", "continue", "crate", "else", "enum", "extern",
        "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
        "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct",
        "super", "trait", "true", "type", "unsafe", "use", "where", "while",
        "async", "await", "dyn",
    }
)

PRIMITIVE_TYPES: frozenset[str] = frozenset(
    {
        "str", "char", "bool",
        "u8", "u16", "u32", "u64", "u128", "usize",
        "i8", "i16", "i32", "i64", "i128", "isize",
    }
)

# Atoms whose text starts with this marker are documentation comment
# content; the comment scanner renders them.
DOC_COMMENT_MARKER = "///"


def classify_word(word: str) -> HighlightKind:
    """Classify an identifier-like word.

    Example:
        >>> classify_word("T")
        <HighlightKind.GENERIC_PARAM: 'ge'>
    """
    if word == "static":
        return HighlightKind.STATIC_KEYWORD
    if word in KEYWORDS:
        return HighlightKind.KEYWORD
    if len(word) == 1 and word.isascii() and word.isupper():
        return HighlightKind.GENERIC_PARAM
    if word[:1].isascii() and word[:1].isupper():
        return HighlightKind.TYPE_NAME
    if word in PRIMITIVE_TYPES:
        return HighlightKind.TYPE_NAME
    return HighlightKind.IDENTIFIER


class TokenMerger:
    """One-token lookback buffer that merges compound tokens.

    Usage:
            >>> from milky.rust.span import Span
            >>> merger = TokenMerger()
            >>> merger.push(Token(HighlightKind.IDENTIFIER, Span(0, 7)))
            >>> merger.push(Token(HighlightKind.BANG, Span(7, 8)))
            >>> merger.finish()
            [Token(kind=<HighlightKind.MACRO: 'mc'>, span=Span(start=0, end=8))]

    """

    __slots__ = ("_pending", "_tokens")

    def __init__(self) -> None:
        self._pending: Token | None = None
        self._tokens: list[Token] = []

    def push(self, token: Token) -> None:
        """Merge token with the pending token, or flush the pending token."""
        pending = self._pending
        if pending is not None and pending.span.touches(token.span):
            merged = _merge(pending.kind, token.kind)
            if merged is not None:
                self._pending = Token(merged, pending.span.join(token.span))
                return

        self._flush()
        self._pending = token

    def finish(self) -> list[Token]:
        """Flush the pending token and return all accepted tokens."""
        self._flush()
        return self._tokens

    def _flush(self) -> None:
        pending = self._pending
        self._pending = None
        if pending is None:
            return
        match pending.kind:
            case HighlightKind.BANG | HighlightKind.APOSTROPHE:
                pass
            case HighlightKind.STATIC_KEYWORD:
                self._tokens.append(Token(HighlightKind.KEYWORD, pending.span))
            case _:
                self._tokens.append(pending)


def _merge(previous: HighlightKind, current: HighlightKind) -> HighlightKind | None:
    """Return the compound kind for two adjacent tokens, if any."""
    if previous is HighlightKind.IDENTIFIER and current is HighlightKind.BANG:
        return HighlightKind.MACRO
    if previous is HighlightKind.APOSTROPHE and current in (
        HighlightKind.IDENTIFIER,
        HighlightKind.STATIC_KEYWORD,
    ):
        return HighlightKind.LIFETIME
    return None


def classify(code: str, trees: Iterable[TokenTree]) -> list[Token]:
    """Classify token trees of code into highlight tokens.

    Args:
        code: The source the trees were lexed from
        trees: Top-level token trees

    Returns:
        Non-overlapping tokens in source order, with transient kinds
        resolved or dropped
    """
    merger = TokenMerger()
    _walk(code, trees, merger)
    return merger.finish()


def _walk(code: str, trees: Iterable[TokenTree], merger: TokenMerger) -> None:
    # Explicit stack of open groups; nesting depth is unbounded.
    stack: list[Iterator[TokenTree]] = [iter(trees)]
    while stack:
        tree = next(stack[-1], None)
        if tree is None:
            stack.pop()
            continue

        match tree:
            case Group(trees=children):
                stack.append(iter(children))
            case Ident(span=span):
                text = span.slice(code)
                if text.startswith(DOC_COMMENT_MARKER):
                    continue
                merger.push(Token(classify_word(text), span))
            case Literal(span=span):
                if span.slice(code).startswith(DOC_COMMENT_MARKER):
                    continue
                merger.push(Token(HighlightKind.LITERAL, span))
            case Punct(char="!", span=span):
                merger.push(Token(HighlightKind.BANG, span))
            case Punct(char="'", span=span):
                merger.push(Token(HighlightKind.APOSTROPHE, span))
            case Punct():
                pass


__all__ = [
    "DOC_COMMENT_MARKER",
    "KEYWORDS",
    "PRIMITIVE_TYPES",
    "TokenMerger",
    "classify",
    "classify_word",
]
