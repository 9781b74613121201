"""Token tree and highlight token definitions for the Rust highlighter.

The lexer produces a token tree: atoms (identifiers, literals, single
punctuation characters) and bracket-delimited groups that nest. The
classifier flattens the tree into highlight Tokens.

Thread Safety:
All classes here are frozen (immutable) and safe to share across threads.
HighlightKind is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from milky.rust.span import Span

# =============================================================================
# Token tree
# =============================================================================


class Delimiter(Enum):
    """Bracket pair enclosing a Group."""

    PARENTHESIS = ("(", ")")
    BRACKET = ("[", "]")
    BRACE = ("{", "}")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]


@dataclass(frozen=True, slots=True)
class Ident:
    """Identifier or keyword, including raw identifiers (``r#type``)."""

    span: Span


@dataclass(frozen=True, slots=True)
class Literal:
    """Numeric, string, byte or character literal."""

    span: Span


@dataclass(frozen=True, slots=True)
class Punct:
    """A single punctuation character."""

    char: str
    span: Span


@dataclass(frozen=True, slots=True)
class Group:
    """Trees enclosed by a matching delimiter pair.

    The span covers both delimiters.
    """

    delimiter: Delimiter
    trees: tuple[TokenTree, ...]
    span: Span


type TokenTree = Group | Ident | Literal | Punct

# =============================================================================
# Highlight tokens
# =============================================================================


class HighlightKind(Enum):
    """Highlight category of a token.

    The value is the CSS class emitted for the token. STATIC_KEYWORD,
    BANG and APOSTROPHE only exist while merging and never reach output.
    """

    KEYWORD = "kw"
    LITERAL = "li"
    TYPE_NAME = "ty"
    GENERIC_PARAM = "ge"
    IDENTIFIER = "id"
    MACRO = "mc"
    LIFETIME = "lt"

    # Transient kinds
    STATIC_KEYWORD = "kw-static"
    BANG = "ex"
    APOSTROPHE = "ap"

    @property
    def css_class(self) -> str:
        """CSS class for the visual category of this kind."""
        if self is HighlightKind.STATIC_KEYWORD:
            return HighlightKind.KEYWORD.value
        return self.value

    @property
    def is_transient(self) -> bool:
        return self in _TRANSIENT


_TRANSIENT = frozenset(
    {HighlightKind.STATIC_KEYWORD, HighlightKind.BANG, HighlightKind.APOSTROPHE}
)

# CSS class wrapped around comments found between tokens.
COMMENT_CLASS = "cm"


@dataclass(frozen=True, slots=True)
class Token:
    """A classified span of source code.

    Attributes:
        kind: Highlight category
        span: Range of the token in the highlighted code
    """

    kind: HighlightKind
    span: Span
