"""Tests for token classification and merging."""

import pytest

from milky.rust.classify import KEYWORDS, PRIMITIVE_TYPES, TokenMerger, classify, classify_word
from milky.rust.lexer import tokenize
from milky.rust.span import Span
from milky.rust.tokens import Delimiter, Group, HighlightKind, Ident, Literal, Punct, Token


def _classified(code: str) -> list[tuple[str, str]]:
    """Classify code and return (text, css class) pairs."""
    return [(t.span.slice(code), t.kind.css_class) for t in classify(code, tokenize(code))]


class TestClassifyWord:
    """Classification rules in priority order."""

    @pytest.mark.parametrize("word", sorted(KEYWORDS - {"static"}))
    def test_keywords(self, word: str) -> None:
        assert classify_word(word) is HighlightKind.KEYWORD

    def test_static_is_transient(self) -> None:
        assert classify_word("static") is HighlightKind.STATIC_KEYWORD

    def test_self_type_is_keyword_not_type(self) -> None:
        assert classify_word("Self") is HighlightKind.KEYWORD

    def test_single_uppercase_is_generic(self) -> None:
        assert classify_word("T") is HighlightKind.GENERIC_PARAM
        assert classify_word("K") is HighlightKind.GENERIC_PARAM

    def test_capitalized_is_type(self) -> None:
        assert classify_word("String") is HighlightKind.TYPE_NAME
        assert classify_word("HashMap") is HighlightKind.TYPE_NAME
        assert classify_word("T2") is HighlightKind.TYPE_NAME

    @pytest.mark.parametrize("word", sorted(PRIMITIVE_TYPES))
    def test_primitive_types(self, word: str) -> None:
        assert classify_word(word) is HighlightKind.TYPE_NAME

    def test_identifier(self) -> None:
        assert classify_word("main") is HighlightKind.IDENTIFIER
        assert classify_word("_") is HighlightKind.IDENTIFIER
        assert classify_word("t") is HighlightKind.IDENTIFIER

    def test_non_ascii_uppercase_is_identifier(self) -> None:
        assert classify_word("Ä") is HighlightKind.IDENTIFIER

    def test_raw_identifier(self) -> None:
        assert classify_word("r#type") is HighlightKind.IDENTIFIER


class TestClassify:
    """Classification over lexed code."""

    def test_function(self) -> None:
        assert _classified("fn id<T>(x: T) -> T { x }") == [
            ("fn", "kw"),
            ("id", "id"),
            ("T", "ge"),
            ("x", "id"),
            ("T", "ge"),
            ("T", "ge"),
            ("x", "id"),
        ]

    def test_literals(self) -> None:
        assert _classified('let s: &str = "a"; let n = 1u8;') == [
            ("let", "kw"),
            ("s", "id"),
            ("str", "ty"),
            ('"a"', "li"),
            ("let", "kw"),
            ("n", "id"),
            ("1u8", "li"),
        ]

    def test_static_resolves_to_keyword(self) -> None:
        code = "static X: u32 = 0;"
        tokens = classify(code, tokenize(code))
        assert tokens[0] == Token(HighlightKind.KEYWORD, Span(0, 6))

    def test_punctuation_ignored(self) -> None:
        assert _classified("a + b * (c)") == [("a", "id"), ("b", "id"), ("c", "id")]

    def test_lone_bang_dropped(self) -> None:
        assert _classified("!done") == [("done", "id")]

    def test_tokens_ordered_and_disjoint(self) -> None:
        code = "impl<'a> Foo<'a> { fn f(&self) { vec![1, 2]; } }"
        tokens = classify(code, tokenize(code))
        for prev, cur in zip(tokens, tokens[1:]):
            assert prev.span.end <= cur.span.start

    def test_no_transient_kinds_in_output(self) -> None:
        code = "x != y; 'a: loop { break 'a; } static Y: i32 = 1;"
        for token in classify(code, tokenize(code)):
            assert not token.kind.is_transient


class TestMerging:
    """Macro and lifetime merging."""

    def test_macro(self) -> None:
        assert _classified('println!("hi")') == [("println!", "mc"), ('"hi"', "li")]

    def test_macro_from_atoms(self) -> None:
        code = "println!"
        trees = (Ident(Span(0, 7)), Punct("!", Span(7, 8)))
        assert classify(code, trees) == [Token(HighlightKind.MACRO, Span(0, 8))]

    def test_lifetime(self) -> None:
        assert _classified("&'a str") == [("'a", "lt"), ("str", "ty")]

    def test_static_lifetime(self) -> None:
        assert _classified("&'static str") == [("'static", "lt"), ("str", "ty")]

    def test_lifetime_from_atoms(self) -> None:
        code = "'a"
        trees = (Punct("'", Span(0, 1)), Ident(Span(1, 2)))
        assert classify(code, trees) == [Token(HighlightKind.LIFETIME, Span(0, 2))]

    def test_separated_apostrophe_does_not_merge(self) -> None:
        """The two atoms must be textually adjacent."""
        code = "' a"
        trees = (Punct("'", Span(0, 1)), Ident(Span(2, 3)))
        assert classify(code, trees) == [Token(HighlightKind.IDENTIFIER, Span(2, 3))]

    def test_separated_bang_does_not_merge(self) -> None:
        code = "println !"
        trees = (Ident(Span(0, 7)), Punct("!", Span(8, 9)))
        assert classify(code, trees) == [Token(HighlightKind.IDENTIFIER, Span(0, 7))]

    def test_keyword_before_bang_does_not_merge(self) -> None:
        assert _classified("if!x {}") == [("if", "kw"), ("x", "id")]

    def test_type_before_bang_does_not_merge(self) -> None:
        assert _classified("Vec!") == [("Vec", "ty")]

    def test_at_most_one_merge_per_append(self) -> None:
        assert _classified("a!!") == [("a!", "mc")]

    def test_loop_label(self) -> None:
        assert _classified("'outer: loop {}") == [("'outer", "lt"), ("loop", "kw")]

    def test_merge_across_group_boundary(self) -> None:
        """Groups are walked in document order, so adjacency is textual."""
        code = "m!{}"
        assert _classified(code) == [("m!", "mc")]


class TestDocCommentAtoms:
    """Atoms whose text starts with /// are dropped."""

    def test_doc_literal_dropped(self) -> None:
        code = "/// docs\nfn"
        trees = (
            Punct("#", Span(0, 8)),
            Group(
                Delimiter.BRACKET,
                (Ident(Span(0, 8)), Punct("=", Span(0, 8)), Literal(Span(0, 8))),
                Span(0, 8),
            ),
            Ident(Span(9, 11)),
        )
        assert classify(code, trees) == [Token(HighlightKind.KEYWORD, Span(9, 11))]

    def test_lexer_never_produces_doc_atoms(self) -> None:
        code = "/// docs\nfn f() {}"
        assert _classified(code) == [("fn", "kw"), ("f", "id")]


class TestTokenMerger:
    """One-token lookback buffer."""

    def test_empty(self) -> None:
        assert TokenMerger().finish() == []

    def test_pending_flushed_on_finish(self) -> None:
        merger = TokenMerger()
        merger.push(Token(HighlightKind.IDENTIFIER, Span(0, 1)))
        assert merger.finish() == [Token(HighlightKind.IDENTIFIER, Span(0, 1))]

    def test_trailing_apostrophe_dropped(self) -> None:
        merger = TokenMerger()
        merger.push(Token(HighlightKind.IDENTIFIER, Span(0, 1)))
        merger.push(Token(HighlightKind.APOSTROPHE, Span(1, 2)))
        assert merger.finish() == [Token(HighlightKind.IDENTIFIER, Span(0, 1))]


class TestDeepNesting:
    """Group depth is limited only by memory."""

    def test_deeply_nested_groups(self) -> None:
        depth = 5000
        code = "(" * depth + "x" + ")" * depth
        assert _classified(code) == [("x", "id")]
