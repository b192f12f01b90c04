"""Tests for the lexical primitives used by the metadata parser."""

from decimal import Decimal

import pytest

from beanmeta import Cursor, ParseError
from beanmeta.primitives import (
    currency,
    decimal_expression,
    empty_line,
    end_of_line,
    string_literal,
)


def evaluate(text: str):
    return decimal_expression(Cursor(text), Decimal)


class TestStringLiteral:
    def test_plain(self):
        result = string_literal(Cursor('"Swiss Franc" rest'))
        assert result.value == "Swiss Franc"
        assert result.cursor.rest == " rest"

    def test_escapes(self):
        result = string_literal(Cursor(r'"a\"b\\c\td"'))
        assert result.value == 'a"b\\c\td'

    def test_no_opening_quote(self):
        assert string_literal(Cursor("CHF")) is None

    def test_unterminated(self):
        with pytest.raises(ParseError, match="unterminated"):
            string_literal(Cursor('"never closed'))


class TestDecimalExpression:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("42", Decimal("42")),
            ("0.25", Decimal("0.25")),
            ("5 - 3", Decimal("2")),
            ("5-3", Decimal("2")),
            ("1 + 2 * 3", Decimal("7")),
            ("(1 + 2) * 3", Decimal("9")),
            ("( 1 + 2 )", Decimal("3")),
            ("2 * -3", Decimal("-6")),
            ("-(4 / 2)", Decimal("-2")),
            ("+7", Decimal("7")),
            ("12,345.6", Decimal("12345.6")),
        ],
    )
    def test_evaluates(self, text, expected):
        result = evaluate(text)
        assert result.value == expected
        assert result.cursor.is_eof

    def test_date_is_not_an_expression(self):
        assert evaluate("2023-05-27") is None

    def test_dangling_operator_not_consumed(self):
        result = evaluate("3 +")
        assert result.value == Decimal("3")
        assert result.cursor.pos == 1

    def test_unclosed_paren(self):
        assert evaluate("(1 + 2") is None

    @pytest.mark.parametrize("text", ["CHF", '"1"', "abc", ""])
    def test_no_match(self, text):
        assert evaluate(text) is None

    def test_division_by_zero(self):
        with pytest.raises(ParseError, match="division by zero") as exc:
            evaluate("1 / (2 - 2)")
        assert exc.value.construct == "decimal expression"


class TestCurrency:
    @pytest.mark.parametrize("text", ["CHF", "A", "VACHR", "BRK.B", "NT'D", "X_1"])
    def test_tickers(self, text):
        result = currency(Cursor(text))
        assert result.value == text
        assert result.cursor.is_eof

    def test_trailing_punctuation_not_included(self):
        result = currency(Cursor("CHF- "))
        assert result.value == "CHF"

    def test_max_length(self):
        result = currency(Cursor("A" * 30))
        assert result.value == "A" * 24

    @pytest.mark.parametrize("text", ["chf", "1ABC", "-CHF", ""])
    def test_no_match(self, text):
        assert currency(Cursor(text)) is None


class TestLines:
    def test_end_of_line_with_comment(self):
        cursor = end_of_line(Cursor("  ; note\nnext"))
        assert cursor.rest == "next"

    def test_end_of_line_crlf(self):
        cursor = end_of_line(Cursor(" \r\nnext"))
        assert cursor.rest == "next"

    def test_end_of_line_at_eof(self):
        cursor = end_of_line(Cursor(""))
        assert cursor is not None
        assert cursor.pos == 0

    def test_end_of_line_rejects_content(self):
        assert end_of_line(Cursor(" x\n")) is None

    def test_empty_line(self):
        cursor = empty_line(Cursor("   \n    unit: CHF"))
        assert cursor.rest == "    unit: CHF"

    def test_empty_line_fails_at_eof(self):
        assert empty_line(Cursor("")) is None

    def test_empty_line_rejects_content(self):
        assert empty_line(Cursor("    unit: CHF\n")) is None
