"""Document parser: dated directive headers, each with its metadata block.

Grammar (simplified):
    document   = (directive | empty_line)*
    directive  = DATE KEYWORD [arguments] end_of_line metadata
    metadata   = see beanmeta.metadata

Directive arguments are kept as raw text; only the metadata block below
each header is parsed into values.
"""

import datetime
import logging
import re
from pathlib import Path

from . import ast
from .cursor import Cursor
from .metadata import DEFAULT_OPTIONS, ParseOptions, parse_block
from .primitives import empty_line

logger = logging.getLogger(__name__)

_HEADER = re.compile(
    r"(\d{4}-\d{2}-\d{2})[ \t]+([a-z][a-z_]*)(?:[ \t]+([^\r\n]*))?[ \t]*(?:\r?\n|\Z)"
)


class DocumentParser:
    """Walks a ledger document one directive at a time."""

    def __init__(self, source: str, options: ParseOptions = DEFAULT_OPTIONS):
        self.source = source
        self.options = options

    def parse_document(self, path: str = "") -> ast.Document:
        document = ast.Document(path=path)
        cursor = Cursor(self.source)

        while not cursor.is_eof:
            blank = empty_line(cursor)
            if blank is not None:
                cursor = blank
                continue
            directive, cursor = self.parse_directive(cursor)
            document.directives.append(directive)

        logger.debug("parsed %d directives from %s", len(document.directives), path or "<string>")
        return document

    def parse_directive(self, cursor: Cursor) -> tuple[ast.Directive, Cursor]:
        m = cursor.match(_HEADER)
        if m is None:
            raise cursor.error(f"expected directive, got {cursor.rest[:20]!r}", construct="directive")
        try:
            day = datetime.date.fromisoformat(m.group(1))
        except ValueError as e:
            raise cursor.error(f"invalid date {m.group(1)!r}", construct="date") from e

        block = parse_block(Cursor(self.source, m.end()), self.options)
        directive = ast.Directive(
            date=day,
            keyword=m.group(2),
            arguments=(m.group(3) or "").strip(),
            metadata=block.value,
            line=cursor.line,
        )
        return directive, block.cursor


def parse(source: str, path: str = "", options: ParseOptions | None = None) -> ast.Document:
    """Parse ledger source into a Document."""
    return DocumentParser(source, options or DEFAULT_OPTIONS).parse_document(path)


def parse_file(filepath: str | Path, options: ParseOptions | None = None) -> ast.Document:
    """Parse a ledger file."""
    filepath = Path(filepath)
    source = filepath.read_text(encoding="utf-8")
    return parse(source, str(filepath), options)
