"""
Milky — Markdown articles to static HTML

Renders a deliberately small subset of Markdown to semantic HTML and
highlights fenced Rust code blocks. Constructs outside the subset are
rejected rather than rendered approximately.

Quick Start:
    >>> from milky import render_article
    >>> article = render_article("# Hello\\n\\nSee `x` and ![img](a/b.png)", title="Hello")
    >>> print(article.html)
    <h1>Hello</h1>
    <p>See <code class="inline">x</code> and <img src="../a/b.png" alt="img"></p>
    <BLANKLINE>
    >>> article.assets
    frozenset({'a/b.png'})

Highlighting:
    >>> from milky import highlight_rust
    >>> highlight_rust("let x = 1; // one")
    '<span class="kw">let</span> <span class="id">x</span> = <span class="li">1</span>; <span class="cm">// one</span>'
"""

from __future__ import annotations

from dataclasses import dataclass

from milky.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from milky.errors import LexError, MilkyError, ParseError, UnsupportedConstructError
from milky.highlighting import Highlighter, RustHighlighter
from milky.parser import Parser
from milky.renderers.html import ArticleRenderer, RenderResult
from milky.rust import Comment, Plain, Segment, highlight_rust, scan_comments

__version__ = "0.1.0"


@dataclass(frozen=True, slots=True)
class Article:
    """A rendered article.

    Attributes:
        title: Title as given by the caller, untouched
        html: Article body HTML fragment
        assets: Image destinations to copy next to the published page
    """

    title: str
    html: str
    assets: frozenset[str]


def render_article(
    source: str,
    *,
    title: str = "",
    source_file: str | None = None,
    config: RenderConfig | None = None,
    highlighter: Highlighter | None = None,
) -> Article:
    """Render a Markdown article.

    Args:
        source: Markdown source text
        title: Article title, passed through untouched
        source_file: Optional source file path for error messages
        config: Render configuration (uses the context config if None)
        highlighter: Custom code highlighter (defaults to RustHighlighter)

    Returns:
        Article with body HTML and referenced asset paths

    Raises:
        UnsupportedConstructError: If the article uses a construct outside
            the supported subset
    """
    renderer = ArticleRenderer(config=config, highlighter=highlighter)
    result = renderer.render(source, source_file=source_file)
    return Article(title=title, html=result.html, assets=result.assets)


__all__ = [
    "Article",
    "ArticleRenderer",
    "Comment",
    "Highlighter",
    "LexError",
    "MilkyError",
    "ParseError",
    "Parser",
    "Plain",
    "RenderConfig",
    "RenderResult",
    "RustHighlighter",
    "Segment",
    "UnsupportedConstructError",
    "get_render_config",
    "highlight_rust",
    "render_article",
    "render_config_context",
    "reset_render_config",
    "scan_comments",
    "set_render_config",
]
