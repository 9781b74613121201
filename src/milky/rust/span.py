"""Span tracking for highlighted source code.

Provides the Span dataclass: a half-open range of character offsets into
a code string that is passed around separately. Spans never copy the
text they cover.

Thread Safety:
Span is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range ``[start, end)`` into a source string.

    Attributes:
        start: Offset of the first character
        end: Offset one past the last character

    Examples:
            >>> span = Span(3, 10)
            >>> span.slice("fn main() {}")
            'main() '
            >>> Span(0, 7).join(Span(7, 8))
            Span(start=0, end=8)

    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, source: str) -> str:
        """Return the text this span covers in source."""
        return source[self.start : self.end]

    def join(self, other: Span) -> Span:
        """Create the smallest span covering both spans."""
        return Span(min(self.start, other.start), max(self.end, other.end))

    def touches(self, other: Span) -> bool:
        """Check whether other begins exactly where this span ends."""
        return self.end == other.start
