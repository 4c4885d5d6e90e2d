"""
Kaleidoscope Parser Package

Implements a recursive descent parser with operator-precedence climbing for
the Kaleidoscope language. Produces immutable, structurally comparable AST
values.

Key Features:
- One token of lookahead over a lazy token stream
- Precedence climbing for left-associative binary operators
- Diagnostics naming the expected construct and the token found
"""

from .ast_nodes import (
    Expr, NumberExpr, VariableExpr, BinaryExpr, CallExpr,
    Prototype, Function, Node, dump
)
from .parser import Parser, BINOP_PRECEDENCE, parse_string
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "BINOP_PRECEDENCE",
    "parse_string",

    # AST nodes
    "Expr", "NumberExpr", "VariableExpr", "BinaryExpr", "CallExpr",
    "Prototype", "Function", "Node", "dump",

    # Error handling
    "ParseError",
]
