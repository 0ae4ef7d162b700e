"""An s-expression reader with source spans, text positions and protobuf string literal parsing."""

__version__ = "0.1.0"
__all__ = [
    "form",
    "protostrings",
    "reader",
    "sourcefile",
    "textpos",
]