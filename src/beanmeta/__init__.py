r"""beanmeta: parse the metadata blocks of plain-text ledger directives.

Example:
    from beanmeta import parse, StringValue

    source = '2023-05-27 commodity CHF\n    title: "Swiss Franc"\n'
    document = parse(source)
    assert document.directives[0].metadata["title"] == StringValue(value="Swiss Franc")
"""

__version__ = "0.1.0"

from .ast import (
    CurrencyValue,
    Directive,
    Document,
    Metadata,
    NumberValue,
    StringValue,
    Value,
)
from .cursor import Cursor, ParseResult
from .document import DocumentParser, parse, parse_file
from .errors import ParseError
from .metadata import ParseOptions, parse_block, parse_entry, parse_metadata, parse_value

__all__ = [
    # Parse
    "parse",
    "parse_file",
    "parse_metadata",
    "parse_block",
    "parse_entry",
    "parse_value",
    "DocumentParser",
    "ParseOptions",
    "ParseError",
    "Cursor",
    "ParseResult",
    # AST
    "Document",
    "Directive",
    "Metadata",
    "Value",
    "StringValue",
    "NumberValue",
    "CurrencyValue",
]
