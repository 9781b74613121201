"""Markdown event source.

Parses Markdown with markdown-it-py and flattens its token stream into
the closed event vocabulary of milky.events.

The markdown-it instance recognizes more than the renderer supports
(tables, strikethrough, sub- and superscript, front matter, footnotes,
definition lists, task lists, math). Those constructs are parsed only so that they reach the
renderer as events and are rejected there, instead of leaking into the
output as literal text.

Thread Safety:
The markdown-it instance is built once and never mutated after
construction; each parse creates its own state. Parser instances are
single-use. Create one per source string.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from functools import cache

from markdown_it import MarkdownIt
from markdown_it.token import Token as MdToken
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.front_matter import front_matter_plugin
from mdit_py_plugins.subscript import sub_plugin
from mdit_py_plugins.superscript import superscript_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

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

# Container tokens with no counterpart in the event vocabulary. Their
# contents are still converted.
_TRANSPARENT = frozenset(
    {
        "tbody_open",
        "tbody_close",
        "footnote_block_open",
        "footnote_block_close",
    }
)

# Leaf tokens that carry nothing to render.
_IGNORED = frozenset({"footnote_anchor"})

# Checkbox markup the tasklists plugin prepends to a task item. The item
# itself is reported as a TaskListMarker instead.
_TASK_CHECKBOX = '<input class="task-list-item-checkbox"'


@cache
def markdown() -> MarkdownIt:
    """Return the shared markdown-it instance."""
    return (
        MarkdownIt("commonmark")
        .enable(["table", "strikethrough"])
        .use(front_matter_plugin)
        .use(footnote_plugin)
        .use(deflist_plugin)
        .use(tasklists_plugin)
        .use(dollarmath_plugin)
        .use(sub_plugin)
        .use(superscript_plugin)
    )


class Parser:
    """Markdown parser producing a flat event stream.

    Usage:
            >>> parser = Parser("# Hello *World*")
            >>> for event in parser.events():
            ...     print(event)
        Start(tag=Heading(level=1))
        Text(text='Hello ')
        Start(tag=Emphasis())
        Text(text='World')
        End(tag=Emphasis())
        End(tag=Heading(level=1))

    Attributes:
        lineno: 1-indexed line of the block whose events are currently
            being produced (0 before the first block)

    Thread Safety:
        Parser instances are single-use. Create one per source string.

    """

    __slots__ = ("_source", "_source_file", "lineno")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages
        """
        self._source = source
        self._source_file = source_file
        self.lineno = 0

    @property
    def source_file(self) -> str | None:
        return self._source_file

    def events(self) -> Iterator[Event]:
        """Parse the source and yield events in document order.

        Raises:
            UnsupportedConstructError: For a markdown-it token type that
                has no counterpart in the event vocabulary
        """
        yield from self._convert(markdown().parse(self._source))

    def _convert(self, tokens: Sequence[MdToken]) -> Iterator[Event]:
        # None marks a transparent container so its close is skipped too.
        stack: list[Tag | None] = []

        for i, token in enumerate(tokens):
            if token.map is not None:
                self.lineno = token.map[0] + 1
            if token.hidden:
                # Paragraphs inside tight lists
                continue
            if token.type in _IGNORED:
                continue

            if token.nesting == 1:
                if token.type in _TRANSPARENT:
                    stack.append(None)
                    continue
                tag = self._open_tag(token)
                stack.append(tag)
                yield Start(tag)
                if isinstance(tag, Item) and _is_task_item(token):
                    yield TaskListMarker(checked=_task_checked(tokens, i))
            elif token.nesting == -1:
                closed = stack.pop()
                if closed is not None:
                    yield End(closed)
            else:
                yield from self._leaf(token)

    def _open_tag(self, token: MdToken) -> Tag:
        """Map an opening markdown-it token to its tag."""
        match token.type:
            case "paragraph_open":
                return Paragraph()
            case "heading_open":
                return Heading(level=int(token.tag[1:]))
            case "blockquote_open":
                return BlockQuote()
            case "bullet_list_open":
                return List()
            case "ordered_list_open":
                return List(start=int(token.attrGet("start") or 1))
            case "list_item_open":
                return Item()
            case "em_open":
                return Emphasis()
            case "strong_open":
                return Strong()
            case "s_open":
                return Strikethrough()
            case "sub_open":
                return Subscript()
            case "sup_open":
                return Superscript()
            case "link_open":
                return Link(
                    dest=str(token.attrGet("href") or ""),
                    title=str(token.attrGet("title") or ""),
                )
            case "table_open":
                return Table()
            case "thead_open":
                return TableHead()
            case "tr_open":
                return TableRow()
            case "th_open" | "td_open":
                return TableCell()
            case "footnote_open" | "footnote_reference_open":
                return FootnoteDefinition(label=_footnote_label(token))
            case "dl_open":
                return DefinitionList()
            case "dt_open":
                return DefinitionListTitle()
            case "dd_open":
                return DefinitionListDefinition()
            case _:
                raise self._unknown(token)

    def _leaf(self, token: MdToken) -> Iterator[Event]:
        """Convert a self-contained markdown-it token."""
        match token.type:
            case "inline":
                yield from self._convert(token.children or [])
            case "text" | "text_special":
                yield Text(token.content)
            case "code_inline":
                yield Code(token.content)
            case "softbreak":
                yield SoftBreak()
            case "hardbreak":
                yield HardBreak()
            case "html_inline":
                if not token.content.startswith(_TASK_CHECKBOX):
                    yield InlineHtml(token.content)
            case "html_block":
                yield Html(token.content)
            case "code_block":
                yield from _wrap(CodeBlock(), token.content)
            case "fence":
                yield from _wrap(CodeBlock(info=token.info), token.content)
            case "front_matter":
                yield from _wrap(MetadataBlock(), token.content)
            case "hr":
                yield Rule()
            case "image":
                image = Image(
                    dest=str(token.attrGet("src") or ""),
                    title=str(token.attrGet("title") or ""),
                )
                yield Start(image)
                yield from self._convert(token.children or [])
                yield End(image)
            case "footnote_ref":
                yield FootnoteReference(label=_footnote_label(token))
            case "math_inline" | "math_inline_double":
                yield InlineMath(token.content)
            case "math_block" | "math_block_label":
                yield DisplayMath(token.content)
            case _:
                raise self._unknown(token)

    def _unknown(self, token: MdToken) -> UnsupportedConstructError:
        return UnsupportedConstructError(
            token.type, lineno=self.lineno or None, source_file=self._source_file
        )


def _wrap(tag: Tag, content: str) -> Iterator[Event]:
    yield Start(tag)
    if content:
        yield Text(content)
    yield End(tag)


def _footnote_label(token: MdToken) -> str:
    meta = token.meta or {}
    return str(meta.get("label") or meta.get("id", ""))


def _is_task_item(token: MdToken) -> bool:
    css_class = token.attrGet("class")
    return isinstance(css_class, str) and "task-list-item" in css_class.split()


def _task_checked(tokens: Sequence[MdToken], item_index: int) -> bool:
    """Read the checkbox state from the first inline token of a task item."""
    for token in tokens[item_index + 1 : item_index + 4]:
        if token.type == "inline" and token.children:
            return 'checked="checked"' in token.children[0].content
    return False
