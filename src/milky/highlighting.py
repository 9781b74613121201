"""Syntax highlighting protocol for code blocks.

The renderer asks its highlighter whether a fenced block's language is
supported and, if so, hands it the block's literal text. The built-in
RustHighlighter handles exactly one language tag.

Usage:
    from milky import ArticleRenderer
    from milky.highlighting import RustHighlighter

    renderer = ArticleRenderer(highlighter=RustHighlighter("rust"))

    # Any object with the same two methods works
    class NoHighlighter:
        def highlight(self, code: str) -> str:
            return escape_html(code)

        def supports_language(self, language: str) -> bool:
            return False
"""

from __future__ import annotations

from typing import Protocol

from milky.errors import LexError
from milky.rust.highlight import highlight_rust
from milky.utils.logger import get_logger
from milky.utils.text import escape_html

logger = get_logger(__name__)


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Highlighters take code and return HTML markup with highlighting applied.

    Thread Safety:
        Implementations must be thread-safe. The highlight() method
        may be called concurrently from multiple render threads.
    """

    def highlight(self, code: str) -> str:
        """Highlight code with syntax classes.

        Args:
            code: Source code to highlight

        Returns:
            HTML markup with highlighting

        Contract:
            - MUST return valid HTML (never raise for bad input)
            - MUST escape HTML entities in code
            - MUST use CSS classes (not inline styles)
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language.

        Contract:
            - MUST NOT raise exceptions
        """
        ...


class RustHighlighter:
    """Rust highlighter implementing the Highlighter protocol.

    Code that fails to lex is not an error for the document: it is
    rendered as escaped plain text and a warning is logged.

    Usage:
        >>> hl = RustHighlighter()
        >>> hl.supports_language("rust")
        True
        >>> hl.supports_language("Rust")
        False
        >>> hl.highlight("fn (")
        'fn ('
    """

    __slots__ = ("_language",)

    def __init__(self, language: str = "rust") -> None:
        """Initialize highlighter.

        Args:
            language: Fence language tag that enables highlighting
                (matched case-sensitively)
        """
        self._language = language

    @property
    def language(self) -> str:
        return self._language

    def highlight(self, code: str) -> str:
        """Highlight Rust code, degrading to escaped text on lex errors."""
        try:
            return highlight_rust(code)
        except LexError as e:
            logger.warning("highlight %s error: %s", self._language, e)
            return escape_html(code)

    def supports_language(self, language: str) -> bool:
        return language == self._language
