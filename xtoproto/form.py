"""S-expression forms and the factory that builds them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

from .sourcefile import SourceSpan


class Form:
    """A value read from source text, together with the span it came from.

    Valueless forms, such as comments and whitespace, are ignored in most
    contexts and are left out of a list's subforms.
    """

    is_valueless = False


@dataclass(frozen=True)
class StringForm(Form):
    """A string literal."""

    value: str
    span: SourceSpan


@dataclass(frozen=True)
class NumberForm(Form):
    """A number literal."""

    value: int | float
    span: SourceSpan


@dataclass(frozen=True)
class SymbolForm(Form):
    """A symbol; its value is None and its text is the literal."""

    literal: str
    span: SourceSpan

    @property
    def value(self) -> None:
        return None


@dataclass(frozen=True)
class CommentForm(Form):
    """A comment, including its delimiters."""

    is_valueless = True

    literal: str
    span: SourceSpan

    @property
    def value(self) -> None:
        return None


@dataclass(frozen=True)
class WhitespaceForm(Form):
    """A run of whitespace."""

    is_valueless = True

    literal: str
    span: SourceSpan

    @property
    def value(self) -> None:
        return None


@dataclass(frozen=True)
class ListForm(Form):
    """A parenthesised list.

    forms holds everything read between the parentheses, comments and
    whitespace included; the list's length, items and value cover only the
    substantive subforms.
    """

    forms: tuple[Form, ...]
    span: SourceSpan
    _subforms: tuple[Form, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        forms = tuple(self.forms)
        object.__setattr__(self, "forms", forms)
        object.__setattr__(
            self, "_subforms", tuple(f for f in forms if not f.is_valueless)
        )

    @property
    def subforms(self) -> tuple[Form, ...]:
        """The substantive forms of the list, in order."""
        return self._subforms

    @property
    def value(self) -> list[Form]:
        return list(self._subforms)

    def __len__(self) -> int:
        return len(self._subforms)

    def __iter__(self) -> Iterator[Form]:
        return iter(self._subforms)

    def nth(self, n: int) -> Form:
        """The n-th substantive subform; raises IndexError if there is none."""
        if n < 0:
            raise IndexError(f"list index {n} out of range")
        return self._subforms[n]


class FormFactory:
    """Builds the forms a reader produces; subclass it to customise them."""

    def new_list(self, forms: Sequence[Form], span: SourceSpan) -> ListForm:
        """A list of the given forms, which may include comments and whitespace."""
        return ListForm(tuple(forms), span)

    def new_number(self, value: int | float, span: SourceSpan) -> NumberForm:
        """A number form."""
        return NumberForm(value, span)

    def new_symbol(self, literal: str, span: SourceSpan) -> SymbolForm:
        """A symbol form."""
        return SymbolForm(literal, span)

    def new_string(self, value: str, span: SourceSpan) -> StringForm:
        """A string form."""
        return StringForm(value, span)

    def new_comment(self, value: str, span: SourceSpan) -> CommentForm:
        """A comment form."""
        return CommentForm(value, span)

    def new_whitespace(self, value: str, span: SourceSpan) -> WhitespaceForm:
        """A whitespace form."""
        return WhitespaceForm(value, span)


def subforms(form: ListForm) -> list[Any]:
    """The ordered substantive subforms of a list."""
    return list(map(form.nth, range(len(form))))