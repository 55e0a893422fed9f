"""
Position-tracked view over recipe document text.

A StrIter never mutates: advancing returns a new cursor sharing the same
buffer, so a rule can retry an alternative from a saved cursor.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class StrIter:
    """Immutable text buffer plus the offset of the next unread character."""

    source: str
    offset: int = 0

    def at_end(self) -> bool:
        return self.offset >= len(self.source)

    def peek(self, n: int = 1) -> str:
        """Return up to n characters at the cursor without consuming them."""
        return self.source[self.offset:self.offset + n]

    def startswith(self, token: str) -> bool:
        return self.source.startswith(token, self.offset)

    def remaining(self) -> str:
        return self.source[self.offset:]

    def advance(self, n: int) -> "StrIter":
        return StrIter(self.source, min(self.offset + n, len(self.source)))

    def span_to(self, other: "StrIter") -> str:
        """Text between this cursor and a later one over the same buffer."""
        return self.source[self.offset:other.offset]

    def location(self) -> Tuple[int, int]:
        """1-based (line, column) of the cursor, for error messages."""
        line = self.source.count("\n", 0, self.offset) + 1
        line_start = self.source.rfind("\n", 0, self.offset) + 1
        return line, self.offset - line_start + 1

    def __repr__(self) -> str:
        return f"StrIter(offset={self.offset}, next={self.peek(10)!r})"
