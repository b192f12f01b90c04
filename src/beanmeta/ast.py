"""AST nodes for ledger directives and their metadata."""

import datetime
from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Annotated, Any
from typing import Literal as TypingLiteral

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


# Metadata values - discriminated union, open to new variants
class StringValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: TypingLiteral["string"] = "string"
    value: str

    def to_literal(self) -> str:
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'


class NumberValue(BaseModel):
    """A number or evaluated number expression (e.g. ``2 * (3 + 1)``)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: TypingLiteral["number"] = "number"
    value: Any  # Decimal by default, or whatever number_type produced

    def to_literal(self) -> str:
        # Positional notation only; the expression lexer has no exponents
        if isinstance(self.value, float):
            return format(Decimal(repr(self.value)), "f")
        if isinstance(self.value, Decimal):
            return format(self.value, "f")
        return str(self.value)  # Fraction renders as "n/d", itself an expression


class CurrencyValue(BaseModel):
    """A commodity/currency ticker such as ``CHF``."""

    model_config = ConfigDict(frozen=True)

    type: TypingLiteral["currency"] = "currency"
    value: str

    def to_literal(self) -> str:
        return self.value


Value = Annotated[
    StringValue | NumberValue | CurrencyValue,
    Field(discriminator="type"),
]

Metadata = dict[str, Value]


class Directive(BaseModel):
    """A dated directive header plus its trailing metadata block."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    keyword: str  # e.g. open, commodity, price
    arguments: str = ""  # raw remainder of the header line
    metadata: Mapping[str, Value] = Field(default_factory=dict, validate_default=True)
    line: int = 0

    @field_validator("metadata", mode="after")
    @classmethod
    def _read_only(cls, metadata: Mapping[str, Value]) -> Mapping[str, Value]:
        return MappingProxyType(dict(metadata))

    @field_serializer("metadata", mode="wrap")
    def _dump_metadata(self, metadata, handler):
        return handler(dict(metadata))


class Document(BaseModel):
    """A parsed ledger file."""

    path: str = ""
    directives: list[Directive] = []
