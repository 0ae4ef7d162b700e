"""A reader that turns s-expression source text into forms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Union

from .form import Form, FormFactory, ListForm, StringForm
from .sourcefile import RowCol, SourceFile, SourceSpan, parse_number

_WHITESPACE = frozenset(" \t\n")
_TOKEN_TERMINATORS = frozenset(' \t\n)("')
_INVALID_ROW_COL = RowCol(-1, -1)

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_OCTAL_DIGITS = frozenset("01234567")


class ReadError(ValueError):
    """Raised when the source text cannot be read as a form."""


class RequiredSymbol(str, Enum):
    """Symbols the reader needs for lisp-style quoting syntax."""

    QUOTE = "QUOTE"
    QUASIQUOTE = "QUASIQUOTE"
    UNQUOTE = "UNQUOTE"
    UNQUOTE_SPLICING = "UNQUOTE-SPLICING"


@dataclass(frozen=True)
class ReaderMacroResult:
    """What a reader macro produced.

    If skip is true the macro declined to read and left the cursor where it
    was; the reader then handles the character itself and form is ignored.
    """

    skip: bool = False
    form: Form | None = None


MacroHandler = Callable[["FormReader"], ReaderMacroResult]
FactoryArg = Union[FormFactory, Callable[["FormReader"], FormFactory], None]


def _unquote(text: str) -> str:
    """Interpret the escapes of the body of a double-quoted string literal."""
    out = bytearray()
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == '"' or char == "\n":
            raise ValueError("invalid syntax")
        if char != "\\":
            out += char.encode("utf-8")
            index += 1
            continue
        if index + 1 >= length:
            raise ValueError("invalid syntax")
        escape = text[index + 1]
        index += 2
        if escape in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[escape].encode("utf-8")
        elif escape in ("x", "u", "U"):
            width = {"x": 2, "u": 4, "U": 8}[escape]
            digits = text[index:index + width]
            if len(digits) != width or not all(d in _HEX_DIGITS for d in digits):
                raise ValueError("invalid syntax")
            index += width
            value = int(digits, 16)
            if escape == "x":
                out.append(value)
            else:
                if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                    raise ValueError("invalid syntax")
                out += chr(value).encode("utf-8")
        elif escape in _OCTAL_DIGITS:
            digits = escape + text[index:index + 2]
            if len(digits) != 3 or not all(d in _OCTAL_DIGITS for d in digits):
                raise ValueError("invalid syntax")
            index += 2
            value = int(digits, 8)
            if value > 0xFF:
                raise ValueError("invalid syntax")
            out.append(value)
        else:
            raise ValueError("invalid syntax")
    return out.decode("utf-8", errors="replace")


class FormReader:
    """Reads a stream of s-expression forms from source text.

    The file name is only used in messages and spans; it is never opened.
    The factory may be a FormFactory, or a callable that receives the new
    reader and returns one.
    """

    def __init__(self, file_name: str, contents: str, *, factory: FactoryArg = None) -> None:
        self._source = SourceFile(file_name, contents)
        self._macros: dict[str, MacroHandler] = {}
        if factory is None:
            self._factory = FormFactory()
        elif isinstance(factory, FormFactory):
            self._factory = factory
        else:
            self._factory = factory(self)
        self.register_macro("'", _read_quote)

    @property
    def source(self) -> SourceFile:
        """The source text and its cursor."""
        return self._source

    @property
    def factory(self) -> FormFactory:
        """The factory that builds the forms this reader returns."""
        return self._factory

    def register_macro(self, char: str, handler: MacroHandler) -> None:
        """Call handler whenever a form starts with the given character."""
        if len(char) != 1:
            raise ValueError(f"macro character must be a single character, got {char!r}")
        self._macros[char] = handler

    def read_form(self) -> Form:
        """Read the next substantive form; raise EOFError at the end of input."""
        while True:
            form = self.read_form_even_trivial()
            if not form.is_valueless:
                return form

    def __iter__(self) -> Iterator[Form]:
        """Yield the remaining substantive forms."""
        while True:
            try:
                yield self.read_form()
            except EOFError:
                return

    def read_form_even_trivial(self) -> Form:
        """Read the next form, comments and whitespace included.

        Raises EOFError at the end of input.
        """
        char = self._source.peek_rune()
        handler = self._macros.get(char)
        if handler is not None:
            result = handler(self)
            if not result.skip:
                return result.form
        if char in _WHITESPACE:
            return self._read_whitespace()
        if char == '"':
            return self._read_string()
        if char == "(":
            return self._read_list()
        return self._read_number_symbol_or_comment()

    def make_span(self, start: int, end: int) -> SourceSpan:
        """The span between two offsets of the source."""
        src = self._source
        return SourceSpan(
            src.name,
            src.offset_to_row_col(start) or _INVALID_ROW_COL,
            src.offset_to_row_col(end) or _INVALID_ROW_COL,
        )

    def error(self, message: str) -> ReadError:
        """An error that names the current cursor position."""
        row_col = self._source.offset_to_row_col(self._source.cursor)
        where = str(row_col) if row_col is not None else "0:0"
        return ReadError(f"{self._source.name}:{where}: {message}")

    def _range_error(self, start: int, end: int, message: str) -> ReadError:
        return ReadError(f"{self.make_span(start, end)}: {message}")

    def _read_whitespace(self) -> Form:
        src = self._source
        start = src.cursor
        chars: list[str] = []
        while True:
            try:
                char = src.read_rune()
            except EOFError:
                break
            if char not in _WHITESPACE:
                src.unread_rune()
                break
            chars.append(char)
        if not chars:
            raise self.error("failed to consume any whitespace")
        return self._factory.new_whitespace("".join(chars), self.make_span(start, src.cursor))

    def _read_string(self) -> StringForm:
        src = self._source
        start = src.cursor
        first = src.read_rune()
        if first != '"':
            raise self.error(f"expected opening \", got {first!r}")
        raw: list[str] = []
        previous_was_escape = False
        while True:
            try:
                char = src.read_rune()
            except EOFError:
                raise self.error("did not find end of string token '\"'") from None
            if char == "\n":
                raw.append("\\n")
            elif char == '"' and not previous_was_escape:
                break
            else:
                raw.append(char)
            previous_was_escape = char == "\\"
        try:
            value = _unquote("".join(raw))
        except ValueError as exc:
            raise self.error(f"error parsing string - {exc}") from exc
        return self._factory.new_string(value, self.make_span(start, src.cursor))

    def _read_list(self) -> ListForm:
        src = self._source
        start = src.cursor
        first = src.read_rune()
        if first != "(":
            raise self.error(f"expected opening paren, got {first!r}")
        forms: list[Form] = []
        while True:
            try:
                char = src.read_rune()
            except EOFError:
                raise self.error("did not find end of list token ')'") from None
            if char == ")":
                break
            src.unread_rune()
            forms.append(self.read_form_even_trivial())
        return self._factory.new_list(forms, self.make_span(start, src.cursor))

    def _read_number_symbol_or_comment(self) -> Form:
        src = self._source
        start = src.cursor
        chars: list[str] = []
        while True:
            try:
                char = src.read_rune()
            except EOFError:
                break
            if char in _TOKEN_TERMINATORS:
                src.unread_rune()
                break
            if char != "/":
                chars.append(char)
                continue
            if not chars:
                comment = self._read_possible_comment(start)
                if comment is not None:
                    return comment
            # Either the end of a symbol followed by a comment, or a slash
            # in the middle of a symbol.
            try:
                following = src.read_rune()
            except EOFError:
                break
            src.unread_rune()
            if following in ("/", "*"):
                src.unread_rune()
                break
        if not chars:
            raise self.error("failed to consume a token")
        return self._make_token_form("".join(chars), start, src.cursor)

    def _make_token_form(self, token: str, start: int, end: int) -> Form:
        try:
            number = parse_number(token)
        except ValueError as exc:
            raise self._range_error(start, end, f"bad number: {exc}") from exc
        span = self.make_span(start, end)
        if number is None:
            return self._factory.new_symbol(token, span)
        return self._factory.new_number(number, span)

    def _read_possible_comment(self, start: int) -> Form | None:
        """Read a comment after a '/' has been consumed, or return None."""
        src = self._source
        second = src.read_rune()
        contents = ["/", second]
        if second == "*":
            while True:
                try:
                    char = src.read_rune()
                except EOFError:
                    break
                contents.append(char)
                if char != "*":
                    continue
                try:
                    after_star = src.read_rune()
                except EOFError:
                    contents.append("\x00")
                    break
                contents.append(after_star)
                if after_star == "/":
                    break
        elif second == "/":
            while True:
                try:
                    char = src.read_rune()
                except EOFError:
                    break
                if char == "\n":
                    break
                contents.append(char)
        else:
            src.unread_rune()
            return None
        return self._factory.new_comment("".join(contents), self.make_span(start, src.cursor))


def _read_quote(reader: FormReader) -> ReaderMacroResult:
    """Read 'x as the list (QUOTE x)."""
    src = reader.source
    start = src.cursor
    src.read_rune()
    quote = reader.factory.new_symbol(
        RequiredSymbol.QUOTE.value, reader.make_span(start, src.cursor)
    )
    try:
        quoted = reader.read_form()
    except EOFError:
        raise reader.error("expecting form after quote character, got EOF") from None
    form = reader.factory.new_list([quote, quoted], reader.make_span(start, src.cursor))
    return ReaderMacroResult(skip=False, form=form)


def read_forms(file_name: str, contents: str) -> list[Form]:
    """Read every substantive form in the given source text."""
    return list(FormReader(file_name, contents))