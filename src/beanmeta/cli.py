"""Parse ledger files and print each directive's metadata as JSON lines.

Usage:
    beanmeta ledger.beancount
    beanmeta a.beancount b.beancount --number-type float -v
"""

import argparse
import json
import logging
import sys
from decimal import Decimal
from fractions import Fraction
from pathlib import Path

from .document import parse_file
from .errors import ParseError
from .metadata import ParseOptions

NUMBER_TYPES = {
    "decimal": Decimal,
    "float": float,
    "fraction": Fraction,
}


def directive_to_json(directive) -> str:
    record = {
        "date": directive.date.isoformat(),
        "keyword": directive.keyword,
        "line": directive.line,
        "metadata": {key: value.model_dump() for key, value in directive.metadata.items()},
    }
    return json.dumps(record, default=str)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print directive metadata from ledger files")
    parser.add_argument("files", nargs="+", type=Path)
    parser.add_argument(
        "--number-type",
        choices=sorted(NUMBER_TYPES),
        default="decimal",
        help="Type used for numeric metadata values (default: decimal)",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    options = ParseOptions(number_type=NUMBER_TYPES[args.number_type])

    errors: list[tuple[Path, str]] = []
    for f in args.files:
        try:
            document = parse_file(f, options)
        except (ParseError, OSError, UnicodeDecodeError) as e:
            errors.append((f, str(e)))
            continue
        for directive in document.directives:
            print(directive_to_json(directive))

    for f, e in errors:
        print(f"{f}: {e}", file=sys.stderr)
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
