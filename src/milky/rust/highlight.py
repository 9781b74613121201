"""Rust code highlighting.

Stitches classified tokens and the text between them into HTML:

    <span class="kw">fn</span> <span class="id">main</span>() {
        <span class="cm">// hi
    </span>}

Every character of the input appears in the output exactly once, either
inside a token span or inside an escaped gap. Gaps are passed through the
comment scanner so comments get their own span.

Thread Safety:
Pure function of its input; all buffers are local to each call.

"""

from __future__ import annotations

from milky.rust.classify import classify
from milky.rust.comments import Comment, Plain, scan_comments
from milky.rust.lexer import tokenize
from milky.rust.tokens import COMMENT_CLASS
from milky.stringbuilder import StringBuilder
from milky.utils.text import escape_html


def highlight_rust(code: str) -> str:
    """Highlight Rust source as class-annotated, escaped HTML.

    Args:
        code: Rust source text

    Returns:
        HTML markup without any enclosing ``<pre>``/``<code>`` wrapper

    Raises:
        LexError: If the code cannot be tokenized

    Example:
        >>> highlight_rust("let x = 1;")
        '<span class="kw">let</span> <span class="id">x</span> = <span class="li">1</span>;'
    """
    tokens = classify(code, tokenize(code))

    sb = StringBuilder()
    cursor = 0
    for token in tokens:
        _append_gap(code[cursor : token.span.start], sb)
        sb.append(f'<span class="{token.kind.css_class}">')
        sb.append(escape_html(token.span.slice(code)))
        sb.append("</span>")
        cursor = token.span.end

    _append_gap(code[cursor:], sb)
    return sb.build()


def _append_gap(text: str, sb: StringBuilder) -> None:
    """Append text between tokens, wrapping comments in a comment span."""
    for segment in scan_comments(text):
        match segment:
            case Comment(text=comment):
                sb.append(f'<span class="{COMMENT_CLASS}">')
                sb.append(escape_html(comment))
                sb.append("</span>")
            case Plain(text=plain):
                sb.append(escape_html(plain))
