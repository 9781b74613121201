"""Rust source highlighting.

Pipeline:
    lexer       source text -> token trees
    classify    token trees -> highlight tokens (with macro/lifetime merging)
    comments    gaps between tokens -> plain and comment segments
    highlight   tokens + gaps -> escaped, class-annotated HTML
"""

from milky.rust.classify import classify, classify_word
from milky.rust.comments import Comment, Plain, Segment, scan_comments
from milky.rust.highlight import highlight_rust
from milky.rust.lexer import Lexer, tokenize
from milky.rust.patterns import find_pattern
from milky.rust.span import Span
from milky.rust.tokens import HighlightKind, Token, TokenTree

__all__ = [
    "Comment",
    "HighlightKind",
    "Lexer",
    "Plain",
    "Segment",
    "Span",
    "Token",
    "TokenTree",
    "classify",
    "classify_word",
    "find_pattern",
    "highlight_rust",
    "scan_comments",
    "tokenize",
]
