import pytest

from xtoproto.textpos import (
    NO_POS,
    Column,
    Line,
    LineColumn,
    Position,
    pos_is_valid,
    search_ints,
)


@pytest.mark.parametrize("cls", [Line, Column])
@pytest.mark.parametrize("n", [0, 1, 5, 100])
def test_offset_round_trip(cls, n):
    assert cls.from_offset(n).offset() == n
    assert cls.from_ordinal(n).ordinal == n


@pytest.mark.parametrize("cls", [Line, Column])
def test_first_offset_is_first_ordinal(cls):
    assert cls.from_offset(0) == cls.from_ordinal(1)


@pytest.mark.parametrize("cls", [Line, Column])
def test_validity(cls):
    assert cls.from_offset(0).is_valid() is True
    assert cls.from_ordinal(0).is_valid() is False
    assert cls.from_ordinal(-3).is_valid() is False
    assert cls().is_valid() is False


@pytest.mark.parametrize("cls", [Line, Column])
def test_str_is_ordinal(cls):
    assert str(cls.from_ordinal(42)) == "42"


def test_line_column_str():
    lc = LineColumn(Line.from_ordinal(3), Column.from_ordinal(7))
    assert str(lc) == "3:7"


def test_line_column_str_invalid_line():
    lc = LineColumn(Line.from_ordinal(0), Column.from_ordinal(7))
    assert str(lc) == "-:-"


def test_position_accessors():
    lc = LineColumn(Line.from_ordinal(3), Column.from_ordinal(4))
    p = Position("foo", 17, lc)
    assert p.line == Line.from_ordinal(3)
    assert p.column == Column.from_ordinal(4)
    assert p.offset == 17
    assert p.is_valid() is True


def test_position_str_forms():
    full = LineColumn(Line.from_ordinal(3), Column.from_ordinal(4))
    no_col = LineColumn(Line.from_ordinal(3), Column.from_ordinal(0))
    assert str(Position("foo", 0, full)) == "foo:3:4"
    assert str(Position("foo", 0, no_col)) == "foo:3"
    assert str(Position("", 0, full)) == "3:4"
    assert str(Position("", 0, no_col)) == "3"
    assert str(Position("foo", 0, LineColumn())) == "foo"
    assert str(Position()) == "-"


def test_default_position_invalid():
    p = Position()
    assert p.is_valid() is False
    assert p == Position("", 0, LineColumn(Line(), Column()))


def test_pos_is_valid():
    assert pos_is_valid(NO_POS) is False
    assert pos_is_valid(NO_POS + 1) is True


@pytest.mark.parametrize("values", [[0, 10, 11, 24], [0], [3, 4, 5, 90]])
def test_search_ints_invariant(values):
    for x in range(-2, 100):
        i = search_ints(values, x)
        if x < values[0]:
            assert i == -1
        else:
            assert values[i] <= x
            if i + 1 < len(values):
                assert values[i + 1] > x


def test_search_ints_empty():
    assert search_ints([], 5) == -1