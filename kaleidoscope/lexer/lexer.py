"""
Kaleidoscope Lexer - turns source text into tokens

The lexer is an iterator: tokens are produced one at a time as the parser
asks for them, and it only ever moves forward. Create a new Lexer to start
over.
"""

from typing import Iterator, List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, COMMENT_CHAR, LINE_BREAKS
)
from .errors import create_invalid_number_error


class Lexer:
    """
    Kaleidoscope lexical analyzer.

    Skips whitespace and `#` line comments, recognizes identifiers, the
    `def`/`extern` commands and numeric literals, and hands every other
    character to the parser as an UNKNOWN_CHAR token.
    """

    def __init__(self, source: str, filename: str = "<unknown>", line: int = 1):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
            line: Line number of the first character, for sources cut
                  out of a larger file
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = line
        self.column = 1

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Optional[Token]:
        """
        Get the next token from the source.

        Returns:
            The next token, or None at end of input

        Raises:
            LexerError: If a numeric literal is malformed
        """
        while True:
            self._skip_whitespace()

            if self._at_end():
                return None

            current_char = self.source[self.pos]

            # Comments produce no token; lexing resumes after them
            if current_char == COMMENT_CHAR:
                self._skip_comment()
                continue

            location = self.current_location()

            if current_char.isalpha():
                return self._tokenize_identifier_or_keyword(location)

            if self._is_number_char(current_char):
                return self._tokenize_number(location)

            self._advance()
            return Token(TokenType.UNKNOWN_CHAR, current_char, current_char, location)

    def tokenize(self) -> List[Token]:
        """
        Drain the remaining source into a list of tokens.

        Raises:
            LexerError: If a numeric literal is malformed
        """
        return list(self)

    def _tokenize_identifier_or_keyword(self, location: SourceLocation) -> Token:
        """Tokenize an identifier or one of the command keywords."""
        start_pos = self.pos

        # First character is already known to be a letter
        self._advance()
        while not self._at_end() and self.source[self.pos].isalnum():
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None

        return Token(token_type, value, lexeme, location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize a run of digits and dots as a float literal."""
        start_pos = self.pos

        while not self._at_end() and self._is_number_char(self.source[self.pos]):
            self._advance()

        lexeme = self.source[start_pos:self.pos]

        try:
            value = float(lexeme)
        except ValueError:
            raise create_invalid_number_error(
                lexeme,
                location,
                "A number is a run of digits with at most one decimal point."
            )

        return Token(TokenType.NUMBER, value, lexeme, location)

    @staticmethod
    def _is_number_char(char: str) -> bool:
        # Only ASCII digits; str.isdigit() accepts superscripts and other scripts
        return '0' <= char <= '9' or char == '.'

    def _skip_whitespace(self):
        """Skip whitespace, including line breaks."""
        while not self._at_end() and self.source[self.pos].isspace():
            self._advance()

    def _skip_comment(self):
        """Skip a comment up to, but not including, the line break."""
        while not self._at_end() and self.source[self.pos] not in LINE_BREAKS:
            self._advance()

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            char = self.source[self.pos]
            # '\r\n' counts once, at its '\n'
            if char == '\n' or (char == '\r' and self.source[self.pos + 1:self.pos + 2] != '\n'):
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def current_location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
