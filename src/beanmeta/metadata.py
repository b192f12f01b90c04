"""Metadata block parser.

A directive may be followed by indented ``key: value`` lines, mixed with
blank lines:

    2023-05-27 commodity CHF
        title: "Swiss Franc"
        rate: 0.95 * 2
        unit: CHF

    block  = (entry | empty_line)*
    entry  = indent KEY ":" space value end_of_line
    value  = STRING | expression | CURRENCY

The block ends, without consuming it, at the first line that is neither an
entry nor blank. A failed entry never consumes input, so the caller can
always fall back to the next alternative from the same cursor.
"""

import logging
import re
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from . import ast
from .cursor import Cursor, ParseResult
from .primitives import (
    NumberType,
    currency,
    decimal_expression,
    empty_line,
    end_of_line,
    space1,
    string_literal,
)

logger = logging.getLogger(__name__)

# Any letter first (checked for lowercase below), then letters, digits, "-", "_"
_KEY = re.compile(r"[^\W\d_][\w-]*")


class ParseOptions(BaseModel):
    """Knobs shared by every parse function."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    number_type: NumberType = Decimal


DEFAULT_OPTIONS = ParseOptions()


def parse_block(
    cursor: Cursor, options: ParseOptions = DEFAULT_OPTIONS
) -> ParseResult[ast.Metadata]:
    """Collect metadata entries until the first non-matching line.

    Never fails for a non-matching line: a directive without metadata
    yields an empty map and the untouched cursor. Later duplicates of a
    key replace earlier ones.
    """
    metadata: ast.Metadata = {}
    while True:
        entry = parse_entry(cursor, options)
        if entry is not None:
            key, value = entry.value
            if key in metadata:
                logger.debug("line %d: metadata key %r overrides earlier value", cursor.line, key)
            metadata[key] = value
            cursor = entry.cursor
            continue

        blank = empty_line(cursor)
        if blank is not None:
            cursor = blank
            continue

        break

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("metadata block ends at line %d with %d entries", cursor.line, len(metadata))
    return ParseResult(metadata, cursor)


def parse_entry(
    cursor: Cursor, options: ParseOptions = DEFAULT_OPTIONS
) -> ParseResult[tuple[str, ast.Value]] | None:
    """Parse exactly one ``<indent>key: value`` line, or nothing at all."""
    cursor = space1(cursor)
    if cursor is None:
        return None

    m = cursor.match(_KEY)
    if m is None or not m.group(0)[0].islower():
        return None
    key = m.group(0)
    cursor = Cursor(cursor.source, m.end())

    if cursor.current != ":":
        return None
    cursor = space1(cursor.advance())
    if cursor is None:
        return None

    value = parse_value(cursor, options)
    if value is None:
        return None

    after = end_of_line(value.cursor)
    if after is None:
        return None
    return ParseResult((key, value.value), after)


def parse_value(
    cursor: Cursor, options: ParseOptions = DEFAULT_OPTIONS
) -> ParseResult[ast.Value] | None:
    """Try string, then number expression, then currency; first match wins."""
    if (s := string_literal(cursor)) is not None:
        return ParseResult(ast.StringValue(value=s.value), s.cursor)
    if (n := decimal_expression(cursor, options.number_type)) is not None:
        return ParseResult(ast.NumberValue(value=n.value), n.cursor)
    if (c := currency(cursor)) is not None:
        return ParseResult(ast.CurrencyValue(value=c.value), c.cursor)
    return None


def parse_metadata(
    source: str, *, pos: int = 0, options: ParseOptions | None = None
) -> ParseResult[ast.Metadata]:
    """Parse the metadata block starting at offset ``pos`` of ``source``.

    ``result.cursor.rest`` is the unconsumed remainder.
    """
    return parse_block(Cursor(source, pos), options or DEFAULT_OPTIONS)
