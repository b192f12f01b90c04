"""Immutable text cursor threaded through every parsing function.

A parser takes a ``Cursor`` and returns either ``ParseResult(value, cursor)``
with the advanced cursor, or ``None`` when its construct does not match.
Because cursors are never mutated, backtracking is just keeping hold of the
old cursor.
"""

import re
from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import ParseError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Cursor:
    source: str
    pos: int = 0

    @property
    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character under the cursor ("" at end of input)."""
        return self.source[self.pos : self.pos + 1]

    @property
    def rest(self) -> str:
        return self.source[self.pos :]

    @property
    def line(self) -> int:
        return self.source.count("\n", 0, self.pos) + 1

    @property
    def column(self) -> int:
        return self.pos - (self.source.rfind("\n", 0, self.pos) + 1) + 1

    def advance(self, count: int = 1) -> "Cursor":
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def match(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        return pattern.match(self.source, self.pos)

    def skip(self, pattern: re.Pattern[str]) -> "Cursor | None":
        """Advance past ``pattern`` if it matches here."""
        m = self.match(pattern)
        if m is None:
            return None
        return Cursor(self.source, m.end())

    def error(self, msg: str, construct: str | None = None) -> ParseError:
        return ParseError(msg, self.line, self.column, offset=self.pos, construct=construct)


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    value: T
    cursor: Cursor
