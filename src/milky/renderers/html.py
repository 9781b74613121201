"""Article HTML renderer using StringBuilder pattern.

Consumes the Markdown event stream and emits a restricted subset of
semantic HTML. Fenced code blocks whose language the highlighter
supports are buffered and highlighted in one shot when they close.
Image destinations are collected as asset references for the caller
to copy.

Only an allow-list of constructs is rendered. Anything else raises
UnsupportedConstructError and aborts the document.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single ArticleRenderer
instance and call render() concurrently without synchronization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import assert_never

from milky.config import RenderConfig, get_render_config
from milky.errors import UnsupportedConstructError
from milky.events import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionList,
    DefinitionListDefinition,
    DefinitionListTitle,
    DisplayMath,
    Emphasis,
    End,
    Event,
    FootnoteDefinition,
    FootnoteReference,
    HardBreak,
    Heading,
    Html,
    Image,
    InlineHtml,
    InlineMath,
    Item,
    Link,
    List,
    MetadataBlock,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Tag,
    TaskListMarker,
    Text,
)
from milky.highlighting import Highlighter, RustHighlighter
from milky.parser import Parser
from milky.stringbuilder import StringBuilder
from milky.utils.logger import get_logger
from milky.utils.text import decode_url, escape_html

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Output of a single render.

    Attributes:
        html: Article body HTML fragment
        assets: Image destinations referenced by the article
    """

    html: str
    assets: frozenset[str]


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render, ensuring thread safety when sharing
    ArticleRenderer instances across threads.

    Attributes:
        config: Active render configuration
        highlighter: Highlighter for source-language code blocks
        parser: Event source, read for error locations
        assets: Image destinations seen so far
        code: Buffer for the open source-language code block, if any
        alt: Buffer for the alt text of the open image, if any
        image_depth: Number of images open inside the current alt buffer
    """

    config: RenderConfig
    highlighter: Highlighter
    parser: Parser
    assets: set[str] = field(default_factory=set)
    code: StringBuilder | None = None
    alt: StringBuilder | None = None
    image_depth: int = 0

    def unsupported(self, construct: str) -> UnsupportedConstructError:
        return UnsupportedConstructError(
            construct,
            lineno=self.parser.lineno or None,
            source_file=self.parser.source_file,
        )


class ArticleRenderer:
    """Render Markdown articles to HTML.

    Usage:
        >>> renderer = ArticleRenderer()
        >>> result = renderer.render("# Hi\\n\\n![cat](img/cat.png)")
        >>> result.html
        '<h1>Hi</h1>\\n<p><img src="../img/cat.png" alt="cat"></p>\\n'
        >>> result.assets
        frozenset({'img/cat.png'})

    Thread Safety:
        Multiple threads can safely share a single ArticleRenderer instance.
        Each render() call creates an independent RenderContext.
    """

    __slots__ = ("_config", "_highlighter")

    def __init__(
        self,
        *,
        config: RenderConfig | None = None,
        highlighter: Highlighter | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            config: Render configuration (uses the context config if None)
            highlighter: Highlighter for code blocks (defaults to a
                RustHighlighter for config.source_language)
        """
        self._config = config
        self._highlighter = highlighter

    def render(self, source: str, *, source_file: str | None = None) -> RenderResult:
        """Render Markdown source to an HTML fragment.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages

        Returns:
            RenderResult with the HTML and referenced asset paths

        Raises:
            UnsupportedConstructError: If the document uses a construct
                outside the supported subset
        """
        config = self._config or get_render_config()
        highlighter = self._highlighter or RustHighlighter(config.source_language)
        parser = Parser(source, source_file=source_file)
        ctx = RenderContext(config=config, highlighter=highlighter, parser=parser)

        sb = StringBuilder()
        for event in parser.events():
            self._render_event(event, sb, ctx)

        return RenderResult(html=sb.build(), assets=frozenset(ctx.assets))

    # =========================================================================
    # Events
    # =========================================================================

    def _render_event(self, event: Event, sb: StringBuilder, ctx: RenderContext) -> None:
        match event:
            case Start(tag=tag):
                self._render_start(tag, sb, ctx)
            case End(tag=tag):
                self._render_end(tag, sb, ctx)
            case Text(text=text):
                if ctx.code is not None:
                    ctx.code.append(text)
                elif ctx.alt is not None:
                    ctx.alt.append(text)
                else:
                    sb.append(escape_html(text))
            case Code(text=text):
                if ctx.alt is not None:
                    ctx.alt.append(text)
                else:
                    css_class = escape_html(ctx.config.inline_code_class)
                    sb.append(f'<code class="{css_class}">')
                    sb.append(escape_html(text))
                    sb.append("</code>")
            case Html(html=raw) | InlineHtml(html=raw):
                if ctx.alt is None:
                    sb.append(raw)
            case SoftBreak():
                if ctx.alt is not None:
                    ctx.alt.append(" ")
                else:
                    sb.append("<br>")
            case (
                HardBreak()
                | Rule()
                | FootnoteReference()
                | TaskListMarker()
                | InlineMath()
                | DisplayMath()
            ):
                raise ctx.unsupported(event.construct)
            case _:
                assert_never(event)

    def _render_start(self, tag: Tag, sb: StringBuilder, ctx: RenderContext) -> None:
        if ctx.alt is not None and isinstance(tag, (Emphasis, Strong, Link)):
            # Image descriptions render as plain alt text
            return

        match tag:
            case Paragraph():
                sb.append("<p>")
            case Heading(level=level):
                sb.append(f"<h{level}>")
            case CodeBlock():
                sb.append("<pre><code>")
                language = tag.language
                if language is not None and ctx.highlighter.supports_language(language):
                    ctx.code = StringBuilder()
            case List(start=None):
                sb.append_line("<ul>")
            case List(start=start):
                start_attr = f' start="{start}"' if start != 1 else ""
                sb.append_line(f"<ol{start_attr}>")
            case Item():
                sb.append("<li>")
            case Emphasis():
                sb.append("<em>")
            case Strong():
                sb.append("<strong>")
            case Link(dest=dest, title=title):
                title_attr = f' title="{escape_html(title)}"' if title else ""
                target = escape_html(ctx.config.link_target)
                sb.append(f'<a href="{escape_html(dest)}"{title_attr} target="{target}">')
            case Image(dest=dest):
                ctx.assets.add(decode_url(dest))
                # Images nested in a description only contribute alt text
                if ctx.alt is None:
                    ctx.alt = StringBuilder()
                ctx.image_depth += 1
            case (
                BlockQuote()
                | Strikethrough()
                | Subscript()
                | Superscript()
                | Table()
                | TableHead()
                | TableRow()
                | TableCell()
                | FootnoteDefinition()
                | DefinitionList()
                | DefinitionListTitle()
                | DefinitionListDefinition()
                | MetadataBlock()
            ):
                raise ctx.unsupported(tag.construct)
            case _:
                assert_never(tag)

    def _render_end(self, tag: Tag, sb: StringBuilder, ctx: RenderContext) -> None:
        if ctx.alt is not None and isinstance(tag, (Emphasis, Strong, Link)):
            return

        match tag:
            case Paragraph():
                sb.append_line("</p>")
            case Heading(level=level):
                sb.append_line(f"</h{level}>")
            case CodeBlock():
                if ctx.code is not None:
                    code = ctx.code.build()
                    ctx.code = None
                    logger.debug("highlighting %d characters of %s", len(code), tag.language)
                    sb.append(ctx.highlighter.highlight(code))
                sb.append_line("</code></pre>")
            case List(start=None):
                sb.append_line("</ul>")
            case List():
                sb.append_line("</ol>")
            case Item():
                sb.append_line("</li>")
            case Emphasis():
                sb.append("</em>")
            case Strong():
                sb.append("</strong>")
            case Link():
                sb.append("</a>")
            case Image(dest=dest, title=title):
                ctx.image_depth -= 1
                if ctx.image_depth > 0:
                    return
                alt = ctx.alt.build() if ctx.alt is not None else ""
                ctx.alt = None
                src = escape_html(ctx.config.asset_prefix + dest)
                title_attr = f' title="{escape_html(title)}"' if title else ""
                sb.append(f'<img src="{src}" alt="{escape_html(alt)}"{title_attr}>')
            case (
                BlockQuote()
                | Strikethrough()
                | Subscript()
                | Superscript()
                | Table()
                | TableHead()
                | TableRow()
                | TableCell()
                | FootnoteDefinition()
                | DefinitionList()
                | DefinitionListTitle()
                | DefinitionListDefinition()
                | MetadataBlock()
            ):
                raise ctx.unsupported(tag.construct)
            case _:
                assert_never(tag)
