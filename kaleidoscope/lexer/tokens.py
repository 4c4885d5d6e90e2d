"""
Token definitions for the Kaleidoscope lexer.

Kaleidoscope has a deliberately tiny token vocabulary:
- Commands (`def`, `extern`)
- Identifiers
- Numbers (every number is a 64-bit float)
- Unknown characters (operators and punctuation are left to the parser)

End of input is not a token; the lexer simply stops yielding.
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Optional, Union


class TokenType(Enum):
    """Enumeration of all token types in Kaleidoscope."""

    # Commands
    DEFINE = auto()                 # def
    EXTERN = auto()                 # extern

    # Primary
    IDENTIFIER = auto()             # foo, x1
    NUMBER = auto()                 # 1, 3.14159, .5, 1.

    # Anything else: '(', '+', ',', ';', ...
    UNKNOWN_CHAR = auto()


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting only; lines and columns are 1-based.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of buffer

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    `value` holds the payload of the variant: the name for IDENTIFIER, the
    float for NUMBER, the character for UNKNOWN_CHAR and None for the
    commands. The lexeme and location are carried for diagnostics and do not
    take part in equality.
    """
    type: TokenType
    value: Union[str, float, None] = None
    lexeme: str = field(default="", compare=False)
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __str__(self) -> str:
        if self.type == TokenType.DEFINE:
            return "Define"
        if self.type == TokenType.EXTERN:
            return "Extern"
        if self.type == TokenType.IDENTIFIER:
            return f"Identifier({self.value!r})"
        if self.type == TokenType.NUMBER:
            return f"Number({self.value!r})"
        return f"UnknownChar({self.value!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.location!r})"

    def is_char(self, char: str) -> bool:
        """Check if this token is the UNKNOWN_CHAR for `char`."""
        return self.type == TokenType.UNKNOWN_CHAR and self.value == char

    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER

    # Variant constructors, mostly for tests and tooling

    @classmethod
    def define(cls) -> 'Token':
        return cls(TokenType.DEFINE, None, "def")

    @classmethod
    def extern(cls) -> 'Token':
        return cls(TokenType.EXTERN, None, "extern")

    @classmethod
    def identifier(cls, name: str) -> 'Token':
        return cls(TokenType.IDENTIFIER, name, name)

    @classmethod
    def number(cls, value: float) -> 'Token':
        return cls(TokenType.NUMBER, float(value), repr(float(value)))

    @classmethod
    def char(cls, char: str) -> 'Token':
        return cls(TokenType.UNKNOWN_CHAR, char, char)


def describe_token(token: Optional[Token]) -> str:
    """Human readable name for a lookahead token, including end of input."""
    if token is None:
        return "end of input"
    return str(token)


# Command keywords; every other spelling is an identifier
KEYWORDS = {
    "def": TokenType.DEFINE,
    "extern": TokenType.EXTERN,
}

# Character that opens a line comment
COMMENT_CHAR = "#"

# Characters that end a line comment
LINE_BREAKS = frozenset("\r\n")
