"""
Kaleidoscope Parser Implementation

Recursive descent parser with one token of lookahead. Binary expressions
are handled by operator-precedence climbing over a fixed table, so there is
no grammar rule per precedence level.

Grammar (informal):

    definition  ::= 'def' prototype expression
    external    ::= 'extern' prototype
    toplevel    ::= expression
    prototype   ::= identifier '(' identifier* ')'
    expression  ::= primary (binop primary)*
    primary     ::= identifierexpr | numberexpr | parenexpr
    identifierexpr ::= identifier | identifier '(' (expression (',' expression)*)? ')'
    parenexpr   ::= '(' expression ')'
"""

import logging
from typing import Dict, List, Optional

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from ..lexer.errors import LexerError
from .ast_nodes import (
    Expr, NumberExpr, VariableExpr, BinaryExpr, CallExpr, Prototype, Function, Node
)
from .errors import (
    create_unexpected_token_error, create_missing_delimiter_error,
    create_lexical_error, create_nesting_error
)

logger = logging.getLogger(__name__)


# Binary operator precedence; higher binds tighter. Characters missing from
# this table are never operators.
BINOP_PRECEDENCE: Dict[str, int] = {
    '<': 10,
    '+': 20,
    '-': 20,
    '*': 40,
}


class Parser:
    """
    Kaleidoscope parser.

    Wraps exactly one Lexer and holds one buffered lookahead token. Every
    entry point consumes tokens irreversibly; build a new Parser for each
    unit of input.
    """

    def __init__(self, lexer: Lexer):
        """
        Initialize parser over a lexer.

        The first token is read lazily so that a malformed leading number is
        reported by the entry point, not by the constructor.
        """
        self.lexer = lexer
        self._current: Optional[Token] = None
        self._primed = False

    @classmethod
    def from_source(cls, source: str, filename: str = "<string>", line: int = 1) -> 'Parser':
        return cls(Lexer(source, filename, line))

    @property
    def current(self) -> Optional[Token]:
        """The lookahead token, or None at end of input."""
        if not self._primed:
            self._advance()
        return self._current

    # Entry points

    def parse(self) -> Node:
        """
        Parse one top-level unit, choosing the entry point by the leading token.

        Returns:
            Function for `def` and for bare expressions, Prototype for `extern`

        Raises:
            ParseError: If the unit is malformed or nested too deeply
        """
        try:
            if self._check(TokenType.DEFINE):
                return self.parse_definition()
            if self._check(TokenType.EXTERN):
                return self.parse_extern()
            return self.parse_top_level_expr()
        except RecursionError as e:
            logger.debug("nesting exceeded the recursion limit")
            raise create_nesting_error(self._end_location()) from e

    def parse_definition(self) -> Function:
        """Parse `def prototype expression`."""
        if not self._check(TokenType.DEFINE):
            raise create_unexpected_token_error("'def'", self.current, self._end_location())
        self._advance()  # Eat 'def'

        prototype = self.parse_prototype()
        body = self.parse_expression()

        logger.debug("parsed definition of %s/%d", prototype.name, prototype.arity)
        return Function(prototype, body)

    def parse_extern(self) -> Prototype:
        """Parse `extern prototype`."""
        if not self._check(TokenType.EXTERN):
            raise create_unexpected_token_error("'extern'", self.current, self._end_location())
        self._advance()  # Eat 'extern'

        prototype = self.parse_prototype()

        logger.debug("parsed extern %s/%d", prototype.name, prototype.arity)
        return prototype

    def parse_top_level_expr(self) -> Function:
        """Parse a bare expression and wrap it in an anonymous function."""
        body = self.parse_expression()

        logger.debug("parsed top-level expression")
        return Function.anonymous(body)

    def parse_prototype(self) -> Prototype:
        """Parse `name(param param ...)`."""
        name_token = self.current
        if name_token is None or not name_token.is_identifier():
            raise create_unexpected_token_error(
                "function name in prototype", name_token, self._end_location()
            )
        self._advance()

        if not self._check_char('('):
            raise create_missing_delimiter_error(
                "(", "after function name in prototype", self.current, self._end_location()
            )
        self._advance()

        # Parameters are whitespace separated; the first non-identifier ends
        # the list and must then be ')'
        params: List[str] = []
        while self.current is not None and self.current.is_identifier():
            params.append(self.current.value)
            self._advance()

        if not self._check_char(')'):
            raise create_missing_delimiter_error(
                ")", "at end of prototype", self.current, self._end_location()
            )
        self._advance()

        return Prototype(name_token.value, params)

    def parse_expression(self) -> Expr:
        """Parse a primary expression followed by any binary operators."""
        lhs = self._parse_primary()
        return self._parse_binop_rhs(0, lhs)

    def expect_end(self):
        """Raise unless every token of the input has been consumed."""
        if self.current is not None:
            raise create_unexpected_token_error("end of input", self.current)

    # Expressions

    def _parse_primary(self) -> Expr:
        token = self.current

        if token is not None:
            if token.type == TokenType.IDENTIFIER:
                return self._parse_identifier_expr()
            if token.type == TokenType.NUMBER:
                self._advance()
                return NumberExpr(token.value)
            if token.is_char('('):
                return self._parse_paren_expr()

        raise create_unexpected_token_error("expression", token, self._end_location())

    def _parse_identifier_expr(self) -> Expr:
        name = self.current.value
        self._advance()

        if not self._check_char('('):
            return VariableExpr(name)

        return self._parse_call(name)

    def _parse_call(self, name: str) -> CallExpr:
        self._advance()  # Eat '('

        args: List[Expr] = []
        if self._check_char(')'):
            self._advance()
            return CallExpr(name, args)

        while True:
            args.append(self.parse_expression())

            if self._check_char(')'):
                self._advance()
                break

            if not self._check_char(','):
                raise create_missing_delimiter_error(
                    ",)", f"in arguments of call to '{name}'", self.current, self._end_location()
                )
            self._advance()

        return CallExpr(name, args)

    def _parse_paren_expr(self) -> Expr:
        self._advance()  # Eat '('

        expr = self.parse_expression()

        if not self._check_char(')'):
            raise create_missing_delimiter_error(
                ")", "to close parenthesized expression", self.current, self._end_location()
            )
        self._advance()

        return expr

    def _parse_binop_rhs(self, min_precedence: int, lhs: Expr) -> Expr:
        """
        Precedence climbing.

        Folds `op primary` pairs into `lhs` for as long as the operator binds
        at least as tightly as `min_precedence`. When the operator after the
        right operand binds tighter than the current one, that operand is
        first extended by a recursive call.
        """
        while True:
            precedence = self._current_precedence()
            if precedence < min_precedence:
                return lhs

            op = self.current.value
            self._advance()

            rhs = self._parse_primary()

            if precedence < self._current_precedence():
                rhs = self._parse_binop_rhs(precedence + 1, rhs)

            lhs = BinaryExpr(op, lhs, rhs)

    def _current_precedence(self) -> int:
        """Precedence of the lookahead, or -1 if it is not a binary operator."""
        token = self.current
        if token is None or token.type != TokenType.UNKNOWN_CHAR:
            return -1
        return BINOP_PRECEDENCE.get(token.value, -1)

    # Utility methods

    def _advance(self):
        """Replace the lookahead with the next token from the lexer."""
        self._primed = True
        try:
            self._current = self.lexer.next_token()
        except LexerError as e:
            logger.debug("lexical error: %s", e.message)
            raise create_lexical_error(e) from e

    def _check(self, token_type: TokenType) -> bool:
        token = self.current
        return token is not None and token.type == token_type

    def _check_char(self, char: str) -> bool:
        token = self.current
        return token is not None and token.is_char(char)

    def _end_location(self):
        return self.lexer.current_location()


def parse_string(source: str, filename: str = "<string>") -> Node:
    """
    Convenience function to parse one unit of source.

    The whole string must be consumed; trailing tokens are an error.

    Raises:
        ParseError: If parsing fails
    """
    parser = Parser.from_source(source, filename)
    node = parser.parse()
    parser.expect_end()
    return node
