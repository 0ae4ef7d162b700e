# xtoproto

Building blocks for reading structured text:

- `xtoproto.reader`: an s-expression reader in the spirit of the Common Lisp
  reader, with support for custom reader macros.
- `xtoproto.form`: the forms the reader produces (`ListForm`, `StringForm`,
  `NumberForm`, `SymbolForm`, `CommentForm`, `WhitespaceForm`) and the
  `FormFactory` that builds them.
- `xtoproto.sourcefile`: source text addressed by character offsets, with
  row/column lookups (`SourceFile`, `RowCol`, `SourceSpan`) and `parse_number`.
- `xtoproto.textpos`: one-based `Line` and `Column` values, `LineColumn` and
  `Position`.
- `xtoproto.protostrings`: parsing of protobuf string literals.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Reading s-expressions

```python
from xtoproto.reader import FormReader, read_forms

reader = FormReader("hello-world.sexpr", '("hello-world" 123)')
form = reader.read_form()
print(len(form))              # 2
print(form.nth(0).value)      # hello-world
print(form.nth(1).value)      # 123

for form in read_forms("example.sexpr", "'hi (a b) // a comment"):
    print(form.span, [sub.literal for sub in form])
# example.sexpr:1:1-4 ['QUOTE', 'hi']
# example.sexpr:1:5-10 ['a', 'b']
```

- `read_form` skips comments and whitespace and raises `EOFError` at the end
  of input. `read_form_even_trivial` also returns `CommentForm` and
  `WhitespaceForm` values. Iterating over a `FormReader` yields the remaining
  substantive forms.
- Strings are double-quoted and understand backslash escapes. Comments are
  `// ...` to the end of the line or `/* ... */`.
- Tokens that parse as numbers become `NumberForm` (decimal, `0x`, `0o`, `0b`,
  leading-zero octal and floats); other tokens become `SymbolForm`. A token that
  starts with a digit but is not a valid number is an error.
- `'x` reads as the list `(QUOTE x)`.
- Every form carries a `span` (`SourceSpan`), printed as
  `file:line:col-col` or `file:line:col-line:col`.
- Malformed input raises `ReadError` (a `ValueError`) whose message starts
  with the file name and position.

### Reader macros

A handler is called when a form starts with its character. It receives the
reader and returns a `ReaderMacroResult`; returning `skip=True` (with the
cursor left where it was) lets the reader handle the character itself.

```python
from xtoproto.reader import FormReader, ReaderMacroResult

def read_hash(reader):
    src = reader.source
    start = src.cursor
    src.read_rune()
    tag = reader.factory.new_symbol("HASH", reader.make_span(start, src.cursor))
    inner = reader.read_form()
    form = reader.factory.new_list([tag, inner], reader.make_span(start, src.cursor))
    return ReaderMacroResult(form=form)

reader = FormReader("macro.sexpr", "#(1 2)")
reader.register_macro("#", read_hash)
form = reader.read_form()
print(form.nth(0).literal, len(form.nth(1)))   # HASH 2
```

`FormReader` also takes a keyword-only `factory`: a `FormFactory` subclass
instance, or a callable that receives the new reader and returns one.

## Source files and positions

```python
from xtoproto.sourcefile import SourceFile, parse_number
from xtoproto.textpos import Column, Line, LineColumn, Position

sf = SourceFile("a.txt", "ab\n\n")
print(sf.line_starts())           # [0, 3, 4]
print(sf.line_lengths())          # [2, 0, 0]
print(sf.offset_to_row_col(2))    # 1:3

print(parse_number("0x1f"))       # 31
print(parse_number("abc"))        # None

pos = Position("main.txt", 11, LineColumn(Line.from_ordinal(2), Column.from_ordinal(2)))
print(pos)                        # main.txt:2:2
```

`SourceFile.read_rune` and `peek_rune` raise `EOFError` at the end of the text,
and `unread_rune` raises it at the start.

## Protobuf string literals

```python
from xtoproto.protostrings import parse_protobuf_string_literal

parse_protobuf_string_literal(r'"my quote\""')   # b'my quote"'
parse_protobuf_string_literal(r'"\x16\xFf"')     # b'\x16\xff'
```

The result is `bytes`; a malformed literal raises `ValueError`.

## What the package does not do

- It has no command-line program; it is a library only.
- `xtoproto.textpos` provides position values only. There is no set of files
  that maps compact positions to files, lines and columns.
- There is no registry of text encoders and decoders for converting values of
  given types to and from strings.

## Running the tests

```
pip install .[test]
pytest
```