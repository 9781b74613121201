"""Markdown event vocabulary.

The parser flattens a Markdown document into a stream of events. Nesting
is encoded by Start/End pairs; every End carries the same tag object as
its Start.

Event Hierarchy:
Event
├── Start(tag) / End(tag)
├── Text, Code                 (literal text, unescaped)
├── Html, InlineHtml           (raw HTML)
├── SoftBreak, HardBreak, Rule
└── FootnoteReference, TaskListMarker, InlineMath, DisplayMath

Tag
├── Paragraph, Heading, BlockQuote, CodeBlock, List, Item
├── Emphasis, Strong, Strikethrough, Subscript, Superscript
├── Link, Image
├── Table, TableHead, TableRow, TableCell
├── FootnoteDefinition, DefinitionList, DefinitionListTitle,
│   DefinitionListDefinition
└── MetadataBlock

The vocabulary is closed: the renderer matches on it exhaustively.
Every class names the Markdown construct it represents in ``construct``
for error messages.

Thread Safety:
All events and tags are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

# =============================================================================
# Tags
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph:
    construct: ClassVar[str] = "paragraph"


@dataclass(frozen=True, slots=True)
class Heading:
    """Heading with level 1-6."""

    construct: ClassVar[str] = "heading"

    level: int


@dataclass(frozen=True, slots=True)
class BlockQuote:
    construct: ClassVar[str] = "block quote"


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced or indented code block.

    Attributes:
        info: Fence info string, or None for indented blocks
    """

    construct: ClassVar[str] = "code block"

    info: str | None = None

    @property
    def language(self) -> str | None:
        """First word of the info string."""
        if not self.info:
            return None
        words = self.info.split()
        return words[0] if words else None


@dataclass(frozen=True, slots=True)
class List:
    """Bullet list (start is None) or ordered list."""

    construct: ClassVar[str] = "list"

    start: int | None = None


@dataclass(frozen=True, slots=True)
class Item:
    construct: ClassVar[str] = "list item"


@dataclass(frozen=True, slots=True)
class Emphasis:
    construct: ClassVar[str] = "emphasis"


@dataclass(frozen=True, slots=True)
class Strong:
    construct: ClassVar[str] = "strong emphasis"


@dataclass(frozen=True, slots=True)
class Strikethrough:
    construct: ClassVar[str] = "strikethrough"


@dataclass(frozen=True, slots=True)
class Link:
    construct: ClassVar[str] = "link"

    dest: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class Image:
    construct: ClassVar[str] = "image"

    dest: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class Subscript:
    construct: ClassVar[str] = "subscript"


@dataclass(frozen=True, slots=True)
class Superscript:
    construct: ClassVar[str] = "superscript"


@dataclass(frozen=True, slots=True)
class Table:
    construct: ClassVar[str] = "table"


@dataclass(frozen=True, slots=True)
class TableHead:
    construct: ClassVar[str] = "table head"


@dataclass(frozen=True, slots=True)
class TableRow:
    construct: ClassVar[str] = "table row"


@dataclass(frozen=True, slots=True)
class TableCell:
    construct: ClassVar[str] = "table cell"


@dataclass(frozen=True, slots=True)
class FootnoteDefinition:
    construct: ClassVar[str] = "footnote definition"

    label: str


@dataclass(frozen=True, slots=True)
class DefinitionList:
    construct: ClassVar[str] = "definition list"


@dataclass(frozen=True, slots=True)
class DefinitionListTitle:
    construct: ClassVar[str] = "definition list title"


@dataclass(frozen=True, slots=True)
class DefinitionListDefinition:
    construct: ClassVar[str] = "definition list definition"


@dataclass(frozen=True, slots=True)
class MetadataBlock:
    construct: ClassVar[str] = "metadata block"


type Tag = (
    Paragraph
    | Heading
    | BlockQuote
    | CodeBlock
    | List
    | Item
    | Emphasis
    | Strong
    | Strikethrough
    | Subscript
    | Superscript
    | Link
    | Image
    | Table
    | TableHead
    | TableRow
    | TableCell
    | FootnoteDefinition
    | DefinitionList
    | DefinitionListTitle
    | DefinitionListDefinition
    | MetadataBlock
)

# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class Start:
    """Opening of a tagged container."""

    tag: Tag


@dataclass(frozen=True, slots=True)
class End:
    """Closing of a tagged container."""

    tag: Tag


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text (not escaped)."""

    construct: ClassVar[str] = "text"

    text: str


@dataclass(frozen=True, slots=True)
class Code:
    """Inline code span content."""

    construct: ClassVar[str] = "inline code"

    text: str


@dataclass(frozen=True, slots=True)
class Html:
    """Raw HTML block."""

    construct: ClassVar[str] = "HTML block"

    html: str


@dataclass(frozen=True, slots=True)
class InlineHtml:
    """Raw inline HTML."""

    construct: ClassVar[str] = "inline HTML"

    html: str


@dataclass(frozen=True, slots=True)
class SoftBreak:
    construct: ClassVar[str] = "soft break"


@dataclass(frozen=True, slots=True)
class HardBreak:
    construct: ClassVar[str] = "hard break"


@dataclass(frozen=True, slots=True)
class Rule:
    construct: ClassVar[str] = "thematic break"


@dataclass(frozen=True, slots=True)
class FootnoteReference:
    construct: ClassVar[str] = "footnote reference"

    label: str


@dataclass(frozen=True, slots=True)
class TaskListMarker:
    construct: ClassVar[str] = "task list"

    checked: bool


@dataclass(frozen=True, slots=True)
class InlineMath:
    construct: ClassVar[str] = "inline math"

    text: str


@dataclass(frozen=True, slots=True)
class DisplayMath:
    construct: ClassVar[str] = "display math"

    text: str


type Event = (
    Start
    | End
    | Text
    | Code
    | Html
    | InlineHtml
    | SoftBreak
    | HardBreak
    | Rule
    | FootnoteReference
    | TaskListMarker
    | InlineMath
    | DisplayMath
)
