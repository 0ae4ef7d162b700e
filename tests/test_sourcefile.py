import pytest

from xtoproto.sourcefile import RowCol, SourceFile, SourceSpan, parse_number


def test_line_starts():
    assert SourceFile("", "ab\n\n").line_starts() == [0, 3, 4]


def test_line_starts_empty_file():
    assert SourceFile("", "").line_starts() == [0]


def test_line_lengths():
    assert SourceFile("", "ab\n\n").line_lengths() == [2, 0, 0]


def test_line_lengths_single_line():
    assert SourceFile("", "abc").line_lengths() == [3]


def test_initial_cursor():
    assert SourceFile("", "abc").cursor == 0


@pytest.mark.parametrize(
    "code, offset, expected",
    [
        ("a\n", 1, RowCol(0, 1)),
        ("a\n", 2, RowCol(1, 0)),
        ("πxyz", 1, RowCol(0, 1)),
        ("0123456789\nabcdefghij\nXYZ", 0, RowCol(0, 0)),
        ("0123456789\nabcdefghij\nXYZ", 1, RowCol(0, 1)),
    ],
)
def test_offset_to_row_col(code, offset, expected):
    assert SourceFile("hi.go", code).offset_to_row_col(offset) == expected


def _perform(source, ops):
    results = []
    for op in ops:
        try:
            if op == "read":
                char = source.read_rune()
            elif op == "peek":
                char = source.peek_rune()
            else:
                source.unread_rune()
                char = None
            results.append((source.cursor, char, None))
        except EOFError:
            results.append((source.cursor, None, EOFError))
    return results


def test_peek_peek_read_read_unread_unread():
    source = SourceFile("", "a")
    results = _perform(source, ["peek", "peek", "read", "read", "unread", "unread"])
    assert results == [
        (0, "a", None),
        (0, "a", None),
        (1, "a", None),
        (1, None, EOFError),
        (0, None, None),
        (0, None, EOFError),
    ]


@pytest.mark.parametrize(
    "code",
    [
        "abc\n123\nsdfkl,sdkflksdflksdkfllk\n\n\n3533\n",
        "ひ°bc\n1ひ3\nsdfkl,sdkflksdflksdkfllk\n\n\n3533\n",
    ],
)
def test_offset_row_col_roundtrip(code):
    source = SourceFile("roundtrip", code)
    for offset in range(len(code) + 1):
        row_col = source.offset_to_row_col(offset)
        assert source.row_col_to_offset(row_col) == offset


def test_out_of_range_lookups():
    source = SourceFile("", "abc")
    assert source.offset_to_row_col(-1) is None
    assert source.offset_to_row_col(4) is None
    assert source.line_start(5) is None
    assert source.line_start(-1) is None
    assert source.line_length(2) is None
    assert source.row_col_to_offset(RowCol(0, 10)) is None
    assert source.row_col_to_offset(RowCol(3, 0)) is None


def test_row_col_str():
    assert str(RowCol(0, 1)) == "1:2"


def test_span_str_single_line():
    span = SourceSpan("a.go3", RowCol(0, 0), RowCol(0, 1))
    assert str(span) == "a.go3:1:1-2"


def test_span_str_multi_line():
    span = SourceSpan("f", RowCol(0, 0), RowCol(1, 2))
    assert str(span) == "f:1:1-2:3"


@pytest.mark.parametrize(
    "token, expected",
    [
        ("123", 123),
        ("0x10", 16),
        ("0b101", 5),
        ("0o17", 15),
        ("010", 8),
        ("1_000", 1000),
        ("-5", -5),
        ("+5", 5),
        ("1.5", 1.5),
        ("09", 9.0),
        ("18446744073709551615", 2**64 - 1),
        ("-9223372036854775808", -(2**63)),
    ],
)
def test_parse_number_values(token, expected):
    result = parse_number(token)
    assert result == expected
    assert type(result) is type(expected)


def test_parse_number_beyond_uint64_is_float():
    assert parse_number("18446744073709551616") == float(2**64)


@pytest.mark.parametrize("token", ["abc", "hello-world", "-", "QUOTE", "+nan"])
def test_parse_number_non_numbers(token):
    assert parse_number(token) is None


@pytest.mark.parametrize("token", ["1abc", "0x", "1e400", "1__0", "9z"])
def test_parse_number_possible_number_errors(token):
    with pytest.raises(ValueError, match="possible number"):
        parse_number(token)