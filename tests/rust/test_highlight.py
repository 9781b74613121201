"""Tests for Rust highlighting output."""

import html
import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from milky.errors import LexError
from milky.highlighting import RustHighlighter
from milky.rust.highlight import highlight_rust

_TAG = re.compile(r"<[^>]*>")


def _plain(markup: str) -> str:
    """Strip highlight spans and unescape back to source text."""
    return html.unescape(_TAG.sub("", markup))


class TestHighlightRust:
    """Highlighted markup for well-formed code."""

    def test_let_statement(self) -> None:
        assert highlight_rust("let x = 1;") == (
            '<span class="kw">let</span> <span class="id">x</span> = '
            '<span class="li">1</span>;'
        )

    def test_function_with_comment(self) -> None:
        code = "fn main() {\n    // hi\n}"
        assert highlight_rust(code) == (
            '<span class="kw">fn</span> <span class="id">main</span>() {\n'
            '    <span class="cm">// hi\n</span>}'
        )

    def test_macro_and_string(self) -> None:
        assert highlight_rust('println!("hi");') == (
            '<span class="mc">println!</span>(<span class="li">&quot;hi&quot;</span>);'
        )

    def test_lifetime_and_types(self) -> None:
        assert highlight_rust("fn f<'a, T>(x: &'a T) -> Vec<u8>") == (
            '<span class="kw">fn</span> <span class="id">f</span>&lt;'
            '<span class="lt">&#x27;a</span>, <span class="ge">T</span>&gt;('
            '<span class="id">x</span>: &amp;<span class="lt">&#x27;a</span> '
            '<span class="ge">T</span>) -&gt; <span class="ty">Vec</span>&lt;'
            '<span class="ty">u8</span>&gt;'
        )

    def test_static_keyword(self) -> None:
        assert highlight_rust("static N: i32 = 0;").startswith('<span class="kw">static</span>')

    def test_block_comment(self) -> None:
        assert highlight_rust("a /* b */ c") == (
            '<span class="id">a</span> <span class="cm">/* b */</span> '
            '<span class="id">c</span>'
        )

    def test_doc_comment_is_comment(self) -> None:
        assert highlight_rust("/// docs\nfn f() {}") == (
            '<span class="cm">/// docs\n</span><span class="kw">fn</span> '
            '<span class="id">f</span>() {}'
        )

    def test_trailing_comment_without_newline(self) -> None:
        assert highlight_rust("x // end").endswith('<span class="cm">// end</span>')

    def test_escapes_operators(self) -> None:
        out = highlight_rust("a < b && c > d")
        assert "&lt;" in out
        assert "&amp;&amp;" in out
        assert "&gt;" in out
        assert "<" not in _TAG.sub("", out)

    def test_empty(self) -> None:
        assert highlight_rust("") == ""

    def test_comment_only(self) -> None:
        assert highlight_rust("// only") == '<span class="cm">// only</span>'

    def test_lone_bang_is_plain(self) -> None:
        assert highlight_rust("!x") == '!<span class="id">x</span>'

    def test_deeply_nested_groups(self) -> None:
        depth = 5000
        code = "[" * depth + "T" + "]" * depth
        assert highlight_rust(code) == "[" * depth + '<span class="ge">T</span>' + "]" * depth

    def test_unbalanced_raises(self) -> None:
        with pytest.raises(LexError, match="unclosed delimiter"):
            highlight_rust("fn (")


class TestCoverage:
    """Every input character appears exactly once in the output."""

    @pytest.mark.parametrize(
        "code",
        [
            "fn main() { println!(\"hi\"); }",
            "impl<'a> Foo<'a> for Bar { type T = &'static str; }",
            "let v = vec![1, 2, 3]; // numbers\n/* block */ let w = v;",
            "match x { Some(y) if y > 0 => y, _ => 0 }",
            "const S: &str = r#\"a \"quoted\" string\"#;",
        ],
    )
    def test_reconstructs_source(self, code: str) -> None:
        assert _plain(highlight_rust(code)) == code

    @given(st.text(alphabet="abcTU_ 019'!\"/*\n(){}[]<>&;:.,=", max_size=40))
    def test_reconstructs_arbitrary_text(self, code: str) -> None:
        try:
            out = highlight_rust(code)
        except LexError:
            return
        assert _plain(out) == code


class TestRustHighlighter:
    """Highlighter protocol adapter with lex-error fallback."""

    def test_supports_exact_tag(self) -> None:
        hl = RustHighlighter()
        assert hl.supports_language("rust")
        assert not hl.supports_language("Rust")
        assert not hl.supports_language("python")

    def test_custom_tag(self) -> None:
        hl = RustHighlighter("rs")
        assert hl.language == "rs"
        assert hl.supports_language("rs")
        assert not hl.supports_language("rust")

    def test_highlights(self) -> None:
        assert RustHighlighter().highlight("x") == '<span class="id">x</span>'

    def test_fallback_on_lex_error(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="milky"):
            out = RustHighlighter().highlight("fn f(a: &T<'_> {")
        assert out == "fn f(a: &amp;T&lt;&#x27;_&gt; {"
        assert "unclosed delimiter" in caplog.text
