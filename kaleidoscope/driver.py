"""
Batch parsing of Kaleidoscope source, one unit at a time.

Each line of the input is an independent unit with its own Parser, so an
error in one definition never affects the lines after it. Blank and
comment-only lines are skipped.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .parser.ast_nodes import Node
from .parser.errors import ParseError
from .parser.parser import Parser

logger = logging.getLogger(__name__)

# Same line breaks that end a comment in the lexer
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class UnitResult:
    """Outcome of parsing one unit: exactly one of `node` and `error` is set."""
    line: int
    source: str
    node: Optional[Node] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def split_lines(source: str) -> List[str]:
    r"""Split `source` at `\r\n`, `\r` or `\n`, the breaks that end a comment."""
    lines = _LINE_BREAK.split(source)
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_unit(source: str, filename: str = "<string>", line: int = 1) -> Optional[Node]:
    """
    Parse a single unit.

    Returns:
        The parsed node, or None if the unit holds no tokens

    Raises:
        ParseError: If the unit is malformed or has trailing tokens
    """
    parser = Parser.from_source(source, filename, line)
    if parser.current is None:
        return None

    node = parser.parse()
    parser.expect_end()
    return node


def parse_units(source: str, filename: str = "<string>") -> Iterator[UnitResult]:
    """Parse every line of `source`, yielding a result per non-empty unit."""
    for line, text in enumerate(split_lines(source), start=1):
        try:
            node = parse_unit(text, filename, line)
        except ParseError as e:
            logger.debug("%s:%d: unit failed: %s", filename, line, e.message)
            yield UnitResult(line, text, error=e)
            continue

        if node is not None:
            yield UnitResult(line, text, node=node)


def parse_file(filepath: str) -> List[UnitResult]:
    """
    Parse every unit of a source file.

    Raises:
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return list(parse_units(source, filepath))
