"""Parsing of protocol buffer string literals."""

from __future__ import annotations

import re

_HEX_DIGIT = "[0-9A-Fa-f]"
_OCTAL_DIGIT = "[0-7]"

_STRING_LITERAL_CHAR = (
    "(?:"
    r"\\[xX](" + _HEX_DIGIT + _HEX_DIGIT + ")|"
    r"\\0(" + _OCTAL_DIGIT * 3 + ")|"
    r"\\([abfnrtv\\'" + '"' + "])|"
    r"([^\x00\n\\])"
    ")"
)

_ELEMENT = re.compile(_STRING_LITERAL_CHAR)

_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def parse_protobuf_string_literal(literal: str) -> bytes:
    """Parse a double-quoted protobuf string literal into its bytes.

    Raises ValueError if the literal is malformed.
    """
    if not literal.startswith('"'):
        raise ValueError(f'literal must begin with ": {literal}')
    if not literal.endswith('"') or len(literal) < 2:
        raise ValueError(f'literal must end with ": {literal}')
    body = literal[1:-1]

    out = bytearray()
    pos = 0
    while pos < len(body):
        match = _ELEMENT.match(body, pos)
        if match is None:
            raise ValueError(
                f"invalid string literal {body}; {body[pos:]!r} does not match "
                f"{_ELEMENT.pattern}"
            )
        pos = match.end()
        hex_digits, octal_digits, escaped, regular = match.groups()
        if regular is not None:
            out += regular.encode("utf-8")
        elif hex_digits is not None:
            out.append(int(hex_digits, 16))
        elif octal_digits is not None:
            number = int(octal_digits, 8)
            if number > 0xFF:
                raise ValueError(
                    "internal error in string parser with octal digits: "
                    f"value {octal_digits} out of range"
                )
            out.append(number)
        else:
            out += _ESCAPES[escaped].encode("utf-8")
    return bytes(out)