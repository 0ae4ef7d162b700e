"""Line and column positions of text within a textual document."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Sequence

NO_POS = 0
"""The zero position: no file, line or column information is attached to it."""


@dataclass(frozen=True, order=True)
class Line:
    """A line number; ordinal 1 is the first line."""

    ordinal: int = 0

    @classmethod
    def from_offset(cls, offset: int) -> "Line":
        """Build a line from a zero-based offset."""
        return cls(offset + 1)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Line":
        """Build a line from a one-based ordinal."""
        return cls(ordinal)

    def offset(self) -> int:
        """The line number where 0 is the first line."""
        return self.ordinal - 1

    def is_valid(self) -> bool:
        """True if the ordinal is at least 1."""
        return self.ordinal > 0

    def __str__(self) -> str:
        return str(self.ordinal)


@dataclass(frozen=True, order=True)
class Column:
    """A horizontal position within a line; ordinal 1 is the first column."""

    ordinal: int = 0

    @classmethod
    def from_offset(cls, offset: int) -> "Column":
        """Build a column from a zero-based offset."""
        return cls(offset + 1)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Column":
        """Build a column from a one-based ordinal."""
        return cls(ordinal)

    def offset(self) -> int:
        """The column number where 0 is the first column."""
        return self.ordinal - 1

    def is_valid(self) -> bool:
        """True if the ordinal is at least 1."""
        return self.ordinal > 0

    def __str__(self) -> str:
        return str(self.ordinal)


@dataclass(frozen=True)
class LineColumn:
    """A two-dimensional textual position."""

    line: Line = field(default_factory=Line)
    column: Column = field(default_factory=Column)

    def __str__(self) -> str:
        # Both parts are shown only when the line is valid.
        if self.line.is_valid():
            return f"{self.line.ordinal}:{self.column.ordinal}"
        return "-:-"


@dataclass(frozen=True)
class Position:
    """A source position: file name, offset, line and column."""

    file_name: str = ""
    offset: int = 0
    line_column: LineColumn = field(default_factory=LineColumn)

    @property
    def line(self) -> Line:
        return self.line_column.line

    @property
    def column(self) -> Column:
        return self.line_column.column

    def is_valid(self) -> bool:
        """True if the line number is valid."""
        return self.line.is_valid()

    def __str__(self) -> str:
        text = self.file_name
        if self.is_valid():
            if text:
                text += ":"
            text += str(self.line.ordinal)
            if self.column.is_valid():
                text += f":{self.column.ordinal}"
        return text or "-"


def pos_is_valid(pos: int) -> bool:
    """True unless the position is NO_POS."""
    return pos != NO_POS


def search_ints(values: Sequence[int], x: int) -> int:
    """Index of the last element of sorted values that is <= x, or -1."""
    return bisect_right(values, x) - 1