"""
kaleidoscope-parse: print the AST (or tokens) of every unit in a file.

Failed units are reported on stderr and parsing continues with the next
line. Exit status is 0 when every unit parsed, 1 when any failed and 2 when
the input could not be read.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .driver import parse_units, split_lines
from .lexer.errors import LexerError
from .lexer.lexer import Lexer
from .parser.ast_nodes import dump

logger = logging.getLogger(__name__)


def _print_tokens(source: str, filename: str) -> int:
    failures = 0
    for line, text in enumerate(split_lines(source), start=1):
        try:
            tokens = Lexer(text, filename, line).tokenize()
        except LexerError as e:
            failures += 1
            print(f"error: {e.location}: {e.message}", file=sys.stderr)
            continue
        if tokens:
            print(f"{line}: " + " ".join(str(token) for token in tokens))
    return failures


def _print_ast(source: str, filename: str) -> int:
    failures = 0
    for result in parse_units(source, filename):
        if result.ok:
            print(f"{result.line}: {dump(result.node)}")
        else:
            failures += 1
            location = result.error.location or f"{filename}:{result.line}"
            print(f"error: {location}: {result.error.message}", file=sys.stderr)
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="kaleidoscope-parse",
        description="Parse Kaleidoscope source and print one AST per line"
    )
    parser.add_argument("file", help="Kaleidoscope source file ('-' for stdin)")
    parser.add_argument("--tokens", action="store_true", help="Print tokens instead of the AST")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if args.file == "-":
        filename = "<stdin>"
        source = sys.stdin.read()
    else:
        filename = args.file
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                source = f.read()
        except OSError as e:
            logger.error("cannot read %s: %s", filename, e)
            return 2

    if args.tokens:
        failures = _print_tokens(source, filename)
    else:
        failures = _print_ast(source, filename)

    logger.info("%s: %d unit(s) failed", filename, failures)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
