"""Lexical primitives shared by the metadata and directive parsers.

Each primitive takes a ``Cursor`` and returns ``ParseResult`` (or the
advanced ``Cursor`` for pure skips) on a match, ``None`` on no match.
Only malformed tokens that cannot belong to any other construct raise
``ParseError``:

    string      = '"' (char | escape)* '"'
    expression  = term (("+" | "-") term)*
    term        = unary (("*" | "/") unary)*
    unary       = ("-" | "+") unary | primary
    primary     = NUMBER | "(" expression ")"
    currency    = [A-Z] ([A-Z0-9'._-]{0,22} [A-Z0-9])?
    end_of_line = [ \\t]* (";" comment)? (newline | EOF)
    empty_line  = not EOF, end_of_line
"""

import re
from collections.abc import Callable
from typing import Any, Protocol

from .cursor import Cursor, ParseResult


class DecimalLike(Protocol):
    """Arithmetic a number type must support to evaluate expressions."""

    def __add__(self, other: Any) -> Any: ...

    def __sub__(self, other: Any) -> Any: ...

    def __mul__(self, other: Any) -> Any: ...

    def __truediv__(self, other: Any) -> Any: ...


# Builds a number from literal text, e.g. decimal.Decimal or float
NumberType = Callable[[str], DecimalLike]

_SPACE1 = re.compile(r"[ \t]+")
_END_OF_LINE = re.compile(r"[ \t]*(?:;[^\n]*)?(?:\r?\n|\Z)")
_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_NUMBER = re.compile(r"\d+(?:,\d{3})*(?:\.\d*)?")
_ADD_OP = re.compile(r"[ \t]*([+-])[ \t]*")
_MUL_OP = re.compile(r"[ \t]*([*/])[ \t]*")
_SIGN = re.compile(r"([+-])[ \t]*")
_LPAREN = re.compile(r"\([ \t]*")
_RPAREN = re.compile(r"[ \t]*\)")
_CURRENCY = re.compile(r"[A-Z](?:[A-Z0-9'._-]{0,22}[A-Z0-9])?")

_ESCAPES = {"n": "\n", "t": "\t"}


def space1(cursor: Cursor) -> Cursor | None:
    """One or more spaces/tabs."""
    return cursor.skip(_SPACE1)


def end_of_line(cursor: Cursor) -> Cursor | None:
    return cursor.skip(_END_OF_LINE)


def empty_line(cursor: Cursor) -> Cursor | None:
    """A line holding nothing but whitespace and/or a comment."""
    if cursor.is_eof:
        return None
    return end_of_line(cursor)


def string_literal(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a double-quoted string, returning the unescaped text.

    Strings may span several lines. A string that is opened but never
    closed is an error rather than a non-match.
    """
    if cursor.current != '"':
        return None

    source = cursor.source
    pos = cursor.pos + 1
    chars: list[str] = []
    while pos < len(source):
        ch = source[pos]
        if ch == '"':
            return ParseResult("".join(chars), Cursor(source, pos + 1))
        if ch == "\\" and pos + 1 < len(source):
            nxt = source[pos + 1]
            chars.append(_ESCAPES.get(nxt, nxt))
            pos += 2
            continue
        chars.append(ch)
        pos += 1

    raise cursor.error("unterminated string literal", construct="string literal")


def currency(cursor: Cursor) -> ParseResult[str] | None:
    m = cursor.match(_CURRENCY)
    if m is None:
        return None
    return ParseResult(m.group(0), Cursor(cursor.source, m.end()))


def decimal_expression(
    cursor: Cursor, number_type: NumberType
) -> ParseResult[Any] | None:
    """Parse and evaluate an arithmetic expression over ``number_type``."""
    return _ExpressionParser(number_type).parse_add(cursor)


class _ExpressionParser:
    """Precedence-climbing evaluator; every level backtracks on no-match."""

    def __init__(self, number_type: NumberType):
        self.number_type = number_type

    def parse_add(self, cursor: Cursor) -> ParseResult[Any] | None:
        left = self.parse_mul(cursor)
        if left is None:
            return None
        value, cursor = left.value, left.cursor
        while (m := cursor.match(_ADD_OP)) is not None:
            right = self.parse_mul(Cursor(cursor.source, m.end()))
            if right is None:
                break
            if m.group(1) == "+":
                value = value + right.value
            else:
                value = value - right.value
            cursor = right.cursor
        return ParseResult(value, cursor)

    def parse_mul(self, cursor: Cursor) -> ParseResult[Any] | None:
        left = self.parse_unary(cursor)
        if left is None:
            return None
        value, cursor = left.value, left.cursor
        while (m := cursor.match(_MUL_OP)) is not None:
            right = self.parse_unary(Cursor(cursor.source, m.end()))
            if right is None:
                break
            if m.group(1) == "*":
                value = value * right.value
            else:
                try:
                    value = value / right.value
                except ZeroDivisionError:
                    raise cursor.error("division by zero", construct="decimal expression") from None
            cursor = right.cursor
        return ParseResult(value, cursor)

    def parse_unary(self, cursor: Cursor) -> ParseResult[Any] | None:
        if (m := cursor.match(_SIGN)) is not None:
            operand = self.parse_unary(Cursor(cursor.source, m.end()))
            if operand is None:
                return None
            if m.group(1) == "-":
                return ParseResult(self._convert(cursor, "0") - operand.value, operand.cursor)
            return operand
        return self.parse_primary(cursor)

    def parse_primary(self, cursor: Cursor) -> ParseResult[Any] | None:
        if (inner := cursor.skip(_LPAREN)) is not None:
            result = self.parse_add(inner)
            if result is None:
                return None
            after = result.cursor.skip(_RPAREN)
            if after is None:
                return None
            return ParseResult(result.value, after)

        # Dates are their own token; 2023-05-27 is not a subtraction
        if cursor.match(_DATE):
            return None
        m = cursor.match(_NUMBER)
        if m is None:
            return None
        value = self._convert(cursor, m.group(0).replace(",", ""))
        return ParseResult(value, Cursor(cursor.source, m.end()))

    def _convert(self, cursor: Cursor, text: str) -> Any:
        try:
            return self.number_type(text)
        except (ValueError, ArithmeticError) as e:
            raise cursor.error(f"invalid number {text!r}: {e}", construct="decimal expression") from e
