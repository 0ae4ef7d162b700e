"""Source text addressed by character offsets, with row and column lookups."""

from __future__ import annotations

import math
from bisect import bisect_left
from dataclasses import dataclass

_MAX_UINT64 = 2**64 - 1
_MIN_INT64 = -(2**63)
_MAX_INT64 = 2**63 - 1
_DIGITS = "0123456789abcdef"
_PREFIX_BASES = {"b": 2, "o": 8, "x": 16}
_DECIMAL_DIGITS = "0123456789"


@dataclass(frozen=True, order=True)
class RowCol:
    """A zero-based (row, column) pair within a source file."""

    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row + 1}:{self.col + 1}"


@dataclass(frozen=True)
class SourceSpan:
    """A continuous interval of text within a named source file."""

    file_name: str
    start: RowCol
    end: RowCol

    def __str__(self) -> str:
        if self.start.row == self.end.row:
            tail = str(self.end.col + 1)
        else:
            tail = str(self.end)
        return f"{self.file_name}:{self.start}-{tail}"


class SourceFile:
    """Text held in memory with a cursor that moves one character at a time."""

    def __init__(self, name: str, code: str) -> None:
        self._name = name
        self._text = code
        self._cursor = 0
        self._newlines = [index for index, char in enumerate(code) if char == "\n"]

    @property
    def name(self) -> str:
        """The file name used in messages; it need not exist on disk."""
        return self._name

    @property
    def cursor(self) -> int:
        """The offset of the next character to be read."""
        return self._cursor

    def read_rune(self) -> str:
        """Return the next character and advance; raise EOFError at the end."""
        if self._cursor >= len(self._text):
            raise EOFError(f"{self._name}: end of input")
        char = self._text[self._cursor]
        self._cursor += 1
        return char

    def peek_rune(self) -> str:
        """Return the next character without advancing; raise EOFError at the end."""
        if self._cursor >= len(self._text):
            raise EOFError(f"{self._name}: end of input")
        return self._text[self._cursor]

    def unread_rune(self) -> None:
        """Move the cursor back one character; raise EOFError at the start."""
        if self._cursor == 0:
            raise EOFError(f"{self._name}: already at start of input")
        self._cursor -= 1

    def offset_to_row_col(self, offset: int) -> RowCol | None:
        """The row and column of an offset, or None if it is out of range."""
        if offset < 0 or offset > len(self._text):
            return None
        line = bisect_left(self._newlines, offset)
        start = self.line_start(line)
        return RowCol(line, offset - start)

    def row_col_to_offset(self, row_col: RowCol) -> int | None:
        """The offset of a row and column, or None if it is out of range."""
        start = self.line_start(row_col.row)
        if start is None:
            return None
        length = self.line_length(row_col.row)
        if length is None or row_col.col > length:
            return None
        return start + row_col.col

    def line_length(self, line: int) -> int | None:
        """The number of characters on a line, excluding its newline."""
        start = self.line_start(line)
        if start is None:
            return None
        next_start = self.line_start(line + 1)
        if next_start is None:
            return len(self._text) - start
        return next_start - start - 1

    def line_lengths(self) -> list[int]:
        """The length of every line in the file."""
        return [self.line_length(line) for line in range(len(self._newlines) + 1)]

    def line_start(self, line: int) -> int | None:
        """The offset at which a zero-based line starts, or None if it does not exist."""
        if line == 0:
            return 0
        if line < 0 or line - 1 >= len(self._newlines):
            return None
        return self._newlines[line - 1] + 1

    def line_starts(self) -> list[int]:
        """The start offset of every line in the file."""
        return [self.line_start(line) for line in range(len(self._newlines) + 1)]


def _underscore_ok(text: str) -> bool:
    """Whether underscores in a numeric literal only separate digits."""
    saw = "^"
    index = 0
    if text[:1] in ("+", "-"):
        text = text[1:]
    is_hex = False
    if len(text) >= 2 and text[0] == "0" and text[1].lower() in _PREFIX_BASES:
        index = 2
        saw = "0"
        is_hex = text[1].lower() == "x"
    for char in text[index:]:
        if char in _DECIMAL_DIGITS or (is_hex and char.lower() in "abcdef"):
            saw = "0"
            continue
        if char == "_":
            if saw != "0":
                return False
            saw = "_"
            continue
        if saw == "_":
            return False
        saw = "!"
    return saw != "_"


def _parse_uint(text: str) -> int | None:
    if not text or not _underscore_ok(text):
        return None
    base, digits = 10, text
    if text[0] == "0":
        prefix = text[1:2].lower()
        if len(text) >= 3 and prefix in _PREFIX_BASES:
            base, digits = _PREFIX_BASES[prefix], text[2:]
        else:
            base, digits = 8, text[1:]
    digits = digits.replace("_", "")
    allowed = _DIGITS[:base]
    if not all(char in allowed for char in digits.lower()):
        return None
    value = int(digits, base) if digits else 0
    return value if value <= _MAX_UINT64 else None


def _parse_int(text: str) -> int | None:
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    magnitude = _parse_uint(text)
    if magnitude is None:
        return None
    value = sign * magnitude
    if _MIN_INT64 <= value <= _MAX_INT64:
        return value
    return None


def _parse_float(text: str) -> float | None:
    if not text or not text.isascii() or text != text.strip():
        return None
    lowered = text.lower()
    unsigned = lowered[1:] if lowered[:1] in ("+", "-") else lowered
    if unsigned in ("inf", "infinity"):
        return float(text)
    if lowered == "nan":
        return math.nan
    if "_" in text and not _underscore_ok(text):
        return None
    try:
        if unsigned.startswith("0x"):
            if "p" not in unsigned:
                return None
            value = float.fromhex(lowered.replace("_", ""))
        else:
            value = float(text)
    except (ValueError, OverflowError):
        return None
    if math.isinf(value) or math.isnan(value):
        return None
    return value


def parse_number(token: str) -> int | float | None:
    """Parse a token as a number.

    Integers may carry 0x, 0o, 0b or a leading-0 octal prefix. Returns None
    if the token is not a number, and raises ValueError if it starts with a
    digit but cannot be parsed.
    """
    for parser in (_parse_uint, _parse_int, _parse_float):
        value = parser(token)
        if value is not None:
            return value
    if token[:1] in _DECIMAL_DIGITS and token:
        raise ValueError(f"got possible number {token!r} that failed to parse as a number")
    return None