"""
Error handling for the Kaleidoscope parser.

Every parse failure, including a malformed number reported by the lexer,
surfaces as a ParseError carrying a Diagnostic that names the expected
construct and the token actually found. There is no error recovery: the
first error aborts the top-level parse in progress.
"""

from typing import Optional, List

from ..lexer.tokens import Token, SourceLocation, describe_token
from ..lexer.errors import Diagnostic, LexerError


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation],
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


# Parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Missing delimiter",
    "P003": "Invalid numeric literal",
    "P004": "Expression nested too deeply",
}

# Suggestions keyed by the delimiter that was missing
DELIMITER_SUGGESTIONS = {
    "(": ["Add an opening parenthesis '(' after the function name"],
    ")": ["Add a closing parenthesis ')'"],
    ",": ["Separate call arguments with ','"],
}


def create_unexpected_token_error(expected: str, found: Optional[Token],
                                  location: Optional[SourceLocation] = None) -> ParseError:
    """Create an error for a token that cannot start the expected construct."""
    found_str = describe_token(found)

    return ParseError(
        message=f"Expected {expected}, found {found_str}",
        location=found.location if found is not None else location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected} at this position, but found {found_str} instead."
    )


def create_missing_delimiter_error(delimiter: str, context: str, found: Optional[Token],
                                   location: Optional[SourceLocation] = None) -> ParseError:
    """Create an error for a missing '(', ')' or ','."""
    found_str = describe_token(found)
    suggestions = []
    for char in delimiter:
        suggestions.extend(DELIMITER_SUGGESTIONS.get(char, []))

    expected = " or ".join(f"'{char}'" for char in delimiter)

    return ParseError(
        message=f"Expected {expected} {context}, found {found_str}",
        location=found.location if found is not None else location,
        token=found,
        code="P002",
        help_text=f"A {expected} is required {context}.",
        suggestions=suggestions or None
    )


def create_lexical_error(error: LexerError) -> ParseError:
    """Report a lexer failure through the parser's error channel."""
    return ParseError(
        message=error.message,
        location=error.location,
        code="P003",
        help_text=error.diagnostic.help_text,
        suggestions=error.diagnostic.suggestions
    )


def create_nesting_error(location: Optional[SourceLocation]) -> ParseError:
    """Create an error for input nested deeper than the parser can recurse."""
    return ParseError(
        message="Expression nested too deeply",
        location=location,
        code="P004",
        help_text="Parentheses and calls nest one parser call per level; "
                  "split the expression into smaller definitions.",
        suggestions=["Move inner sub-expressions into helper functions"]
    )
