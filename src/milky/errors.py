"""Exception classes for Milky.

Provides standardized exceptions for error handling throughout Milky.

Two tiers exist:
- UnsupportedConstructError is fatal: it aborts rendering of the document.
- LexError is recoverable: the highlighter catches it and degrades the
  code block to escaped plain text.
"""

from __future__ import annotations


class MilkyError(Exception):
    """Base exception for all Milky errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(MilkyError):
    """Error while reading Markdown or source code.

    Raised when the input contains something that cannot be processed.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class UnsupportedConstructError(ParseError):
    """A Markdown construct outside the supported subset was found.

    The supported subset is a closed allow-list; anything else aborts the
    current document instead of being rendered approximately.
    """

    def __init__(
        self,
        construct: str,
        lineno: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize unsupported construct error.

        Args:
            construct: Name of the rejected construct (e.g., "table")
            lineno: Line number of the enclosing block (optional)
            source_file: Path to source file (optional)
        """
        self.construct = construct
        super().__init__(
            f"unsupported Markdown construct: {construct}",
            lineno=lineno,
            source_file=source_file,
        )


class LexError(ParseError):
    """Source code in a highlighted block could not be tokenized.

    Carries the character offset into the code block in addition to the
    line and column derived from it.
    """

    def __init__(self, message: str, source: str, offset: int) -> None:
        """Initialize lex error at an offset into source.

        Args:
            message: Error description
            source: The code being lexed
            offset: Character offset where lexing failed
        """
        self.offset = offset
        lineno = source.count("\n", 0, offset) + 1
        col_offset = offset - (source.rfind("\n", 0, offset) + 1) + 1
        super().__init__(message, lineno=lineno, col_offset=col_offset)
