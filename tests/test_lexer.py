"""
Test suite for the Kaleidoscope lexer.

Tests cover:
- Numeric literals and malformed numbers
- Identifiers and command keywords
- Whitespace and comment skipping
- Laziness and end of input
- Source locations
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from kaleidoscope.lexer import Lexer, Token, TokenType, LexerError, tokenize_string


def lex(source):
    return Lexer(source).tokenize()


class TestNumbers(unittest.TestCase):
    """Numeric literal tokenization."""

    def test_number_values(self):
        """Digit sequences with at most one '.' become their float value."""
        cases = {
            "1": 1.0,
            "1234567890": 1234567890.0,
            "3.14159": 3.14159,
            "1.": 1.0,
            ".1": 0.1,
            "007": 7.0,
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(lex(source), [Token.number(expected)])

    def test_number_keeps_lexeme(self):
        """The raw text of a literal is kept alongside its value."""
        token = lex("3.50")[0]
        self.assertEqual(token.type, TokenType.NUMBER)
        self.assertEqual(token.value, 3.5)
        self.assertEqual(token.lexeme, "3.50")

    def test_number_followed_by_identifier(self):
        """A number stops at the first non digit, non '.' character."""
        self.assertEqual(lex("12abc"), [Token.number(12), Token.identifier("abc")])

    def test_multiple_dots_is_an_error(self):
        """More than one '.' in a literal raises L003."""
        with self.assertRaises(LexerError) as ctx:
            lex("1.2.3")

        error = ctx.exception
        self.assertEqual(error.code, "L003")
        self.assertIn("'1.2.3'", error.message)
        self.assertEqual(error.location.column, 1)

    def test_lone_dot_is_an_error(self):
        """A '.' with no digits is not a number."""
        with self.assertRaises(LexerError):
            lex("x + .")

    def test_error_location_points_at_literal(self):
        """Lexer errors point at the first character of the literal."""
        with self.assertRaises(LexerError) as ctx:
            lex("foo(1,\n  2..5)")

        self.assertEqual(ctx.exception.location.line, 2)
        self.assertEqual(ctx.exception.location.column, 3)

    def test_error_message_renders_diagnostic(self):
        """str() of a LexerError shows the code and location."""
        with self.assertRaises(LexerError) as ctx:
            lex("1..")

        rendered = str(ctx.exception)
        self.assertIn("ERROR[L003]", rendered)
        self.assertIn("<unknown>:1:1", rendered)


class TestIdentifiers(unittest.TestCase):
    """Identifier and keyword tokenization."""

    def test_keywords(self):
        """'def' and 'extern' are the only keywords."""
        self.assertEqual(lex("def"), [Token.define()])
        self.assertEqual(lex("extern"), [Token.extern()])

    def test_identifiers_are_verbatim(self):
        """Names that merely resemble keywords stay identifiers."""
        for name in ["foo", "x", "x1y2", "define", "externs", "Def", "def1"]:
            with self.subTest(name=name):
                self.assertEqual(lex(name), [Token(TokenType.IDENTIFIER, name)])

    def test_unicode_letters_start_identifiers(self):
        """Any alphabetic character may start an identifier."""
        self.assertEqual(lex("λx"), [Token.identifier("λx")])

    def test_underscore_is_not_part_of_identifier(self):
        """'_' is not alphanumeric, so it splits identifiers."""
        self.assertEqual(
            lex("a_b"),
            [Token.identifier("a"), Token.char("_"), Token.identifier("b")]
        )


class TestWhitespaceAndComments(unittest.TestCase):
    """Whitespace insensitivity and comment skipping."""

    EXPECTED = [
        Token.number(1),
        Token.char('+'),
        Token.number(1),
        Token.char('-'),
        Token.identifier("foo"),
    ]

    def test_simple_tokens_and_value(self):
        """Tokens separated by spaces."""
        self.assertEqual(lex("1 + 1 - foo"), self.EXPECTED)

    def test_simple_tokens_and_value_no_whitespace(self):
        """Whitespace between tokens is optional."""
        self.assertEqual(lex("1+1-foo"), self.EXPECTED)

    def test_tabs_and_newlines(self):
        """Tabs and line breaks are whitespace."""
        self.assertEqual(lex("\t1\n+\r\n1   -\tfoo\n"), self.EXPECTED)

    def test_comments(self):
        """Comments run to the end of their line and produce no token."""
        code = "# This is a comment 1+1\n1 + 2 # <- is code\n# this is not"
        lexer = Lexer(code)

        self.assertEqual(next(lexer), Token.number(1))
        self.assertEqual(next(lexer), Token.char('+'))
        self.assertEqual(next(lexer), Token.number(2))
        self.assertIsNone(lexer.next_token())

    def test_comment_ends_at_carriage_return(self):
        r"""A lone '\r' also ends a comment."""
        self.assertEqual(lex("# note\rx"), [Token.identifier("x")])

    def test_only_comments_and_whitespace(self):
        """Input without tokens lexes to an empty list."""
        self.assertEqual(lex("   # nothing here\n\n  # still nothing"), [])

    def test_empty_source(self):
        """Empty input has no tokens."""
        self.assertEqual(lex(""), [])


class TestTokenStream(unittest.TestCase):
    """Iterator behaviour and token metadata."""

    def test_unknown_characters(self):
        """Every other character becomes UnknownChar."""
        self.assertEqual(
            lex("(),;<*"),
            [Token.char(c) for c in "(),;<*"]
        )

    def test_lexer_is_lazy(self):
        """Tokens before a malformed number are produced before the error."""
        lexer = Lexer("1 1.2.3")

        self.assertEqual(next(lexer), Token.number(1))
        with self.assertRaises(LexerError):
            next(lexer)

    def test_end_of_input(self):
        """An exhausted lexer keeps returning None and stops iteration."""
        lexer = Lexer("x")
        self.assertEqual(list(lexer), [Token.identifier("x")])
        self.assertIsNone(lexer.next_token())
        with self.assertRaises(StopIteration):
            next(lexer)

    def test_lexer_is_forward_only(self):
        """Tokens are read once; a second tokenize() is empty."""
        lexer = Lexer("a b")
        self.assertEqual(lexer.tokenize(), [Token.identifier("a"), Token.identifier("b")])
        self.assertEqual(lexer.tokenize(), [])

    def test_locations(self):
        """Tokens carry 1-based line and column plus a 0-based offset."""
        tokens = tokenize_string("def foo\n  bar", "example.kal")

        self.assertEqual(str(tokens[0].location), "example.kal:1:1")
        self.assertEqual(str(tokens[1].location), "example.kal:1:5")
        self.assertEqual(str(tokens[2].location), "example.kal:2:3")
        self.assertEqual(tokens[2].location.offset, 10)

    def test_lone_carriage_return_starts_a_line(self):
        r"""'\r' alone ends a line; '\r\n' counts as a single break."""
        tokens = tokenize_string("a\rb\r\nc\r\rd")

        self.assertEqual(str(tokens[1].location), "<string>:2:1")
        self.assertEqual(str(tokens[2].location), "<string>:3:1")
        self.assertEqual(str(tokens[3].location), "<string>:5:1")

    def test_comment_location_after_carriage_return(self):
        r"""A token after a comment ended by '\r' is on the next line."""
        token = tokenize_string("# note\r  x")[0]
        self.assertEqual(token.location.line, 2)
        self.assertEqual(token.location.column, 3)

    def test_starting_line(self):
        """The first line number can be configured."""
        token = Lexer("x", "f.kal", line=7).tokenize()[0]
        self.assertEqual(token.location.line, 7)

    def test_equality_ignores_location(self):
        """Tokens compare equal by type and value only."""
        first, second = lex("1 1")
        self.assertNotEqual(first.location, second.location)
        self.assertEqual(first, second)

    def test_token_predicates(self):
        """is_char and is_identifier are both plain methods."""
        self.assertTrue(Token.char('(').is_char('('))
        self.assertFalse(Token.char('(').is_char(')'))
        self.assertFalse(Token.identifier("x").is_char("x"))
        self.assertTrue(Token.identifier("x").is_identifier())
        self.assertFalse(Token.define().is_identifier())

    def test_token_str(self):
        """str() renders the token variant."""
        self.assertEqual(str(Token.define()), "Define")
        self.assertEqual(str(Token.extern()), "Extern")
        self.assertEqual(str(Token.identifier("foo")), "Identifier('foo')")
        self.assertEqual(str(Token.number(2)), "Number(2.0)")
        self.assertEqual(str(Token.char(';')), "UnknownChar(';')")


if __name__ == '__main__':
    unittest.main()
