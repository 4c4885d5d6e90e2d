"""
Kaleidoscope Lexer Package

Implements the lexical analyzer (tokenizer) for the Kaleidoscope language.

Key Features:
- Lazy, forward-only token stream (the Lexer is an iterator)
- `#` line comments skipped transparently
- Structured errors for malformed numeric literals
- Source location tracking for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
