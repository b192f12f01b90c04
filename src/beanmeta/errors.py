"""Errors raised while parsing ledger metadata."""


class ParseError(Exception):
    """A fatal parse failure at a known position.

    ``construct`` names the grammar construct that was being parsed when
    the failure happened (e.g. ``"string literal"`` or ``"directive"``).
    """

    def __init__(
        self,
        msg: str,
        line: int,
        col: int,
        offset: int = 0,
        construct: str | None = None,
    ):
        super().__init__(f"line {line}, col {col}: {msg}")
        self.msg = msg
        self.line = line
        self.col = col
        self.offset = offset
        self.construct = construct
