"""
Kaleidoscope Front End Package

Tokenizer and parser for Kaleidoscope, a small expression-oriented language
with a single numeric type. Source text becomes an AST that a code generator
can consume.

Architecture:
    kaleidoscope/
    ├── lexer/           # Tokenization
    ├── parser/          # Syntax analysis and AST generation
    ├── driver.py        # Unit-by-unit batch parsing
    └── cli.py           # kaleidoscope-parse command

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, LexerError
from .parser import Parser, ParseError, parse_string

__all__ = [
    # Core classes
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "parse_string",

    # Errors
    "LexerError",
    "ParseError",

    # Version info
    "__version__",
    "__license__",
]
