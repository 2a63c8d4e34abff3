"""
Error handling for the llparse predictive parser.

Syntax errors abort a single parse and carry the index of the offending
token. Structural errors are raised by the AST converter when a parse tree
does not have a shape the grammar can produce.
"""

from enum import Enum
from typing import Optional, List

from ..lexer.tokens import Token, SourceLocation
from ..lexer.errors import Diagnostic


class SyntaxErrorKind(Enum):
    """Why the engine stopped."""
    TERMINAL_MISMATCH = "P001"
    NO_PRODUCTION = "P002"
    TRAILING_INPUT = "P003"
    UNEXPECTED_EOF = "P004"

    @property
    def code(self) -> str:
        return self.value


PARSE_ERROR_CODES = {
    "P001": "Expected terminal not found",
    "P002": "No production for nonterminal and lookahead",
    "P003": "Unexpected trailing input",
    "P004": "Unexpected end of input",
    "P100": "Malformed parse tree",
}


class ParseError(Exception):
    """
    Exception raised when the predictive parser rejects its input.

    ``position`` is the index of the offending token in the token list.
    """

    def __init__(
        self,
        message: str,
        kind: SyntaxErrorKind,
        position: int,
        token: Optional[Token] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.position = position
        self.token = token
        location: Optional[SourceLocation] = token.location if token is not None else None
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=kind.code,
            help_text=help_text,
            suggestions=suggestions,
            title=PARSE_ERROR_CODES[kind.code]
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class StructuralError(Exception):
    """Raised when a parse tree cannot be converted to an AST."""

    def __init__(self, message: str, symbol: Optional[str] = None):
        super().__init__(message)
        self.symbol = symbol
        self.diagnostic = Diagnostic(
            message=message,
            location=None,
            severity="error",
            code="P100",
            help_text="The parse tree does not match any production of the language grammar.",
            title=PARSE_ERROR_CODES["P100"]
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


def _describe(token: Optional[Token], terminal: str) -> str:
    if token is None:
        return terminal
    if token.is_eof:
        return "end of input"
    return f"'{token.lexeme}'"


def create_terminal_mismatch_error(expected: str, found: str, position: int,
                                   token: Optional[Token] = None) -> ParseError:
    """Create an error for a stack terminal that does not match the lookahead."""
    suggestions = []
    if expected in (";", ")", "]", "}"):
        suggestions.append(f"Add a closing '{expected}'")

    return ParseError(
        message=f"Expected {expected}, found {_describe(token, found)} at position {position}",
        kind=SyntaxErrorKind.TERMINAL_MISMATCH,
        position=position,
        token=token,
        suggestions=suggestions
    )


def create_no_production_error(nonterminal: str, lookahead: str, position: int,
                               token: Optional[Token] = None,
                               expected: Optional[List[str]] = None) -> ParseError:
    """Create an error for an empty table cell."""
    help_text = None
    if expected:
        help_text = f"{nonterminal} can start with: {', '.join(expected)}"

    return ParseError(
        message=(f"No production for ({nonterminal}, {lookahead}) "
                 f"at position {position}: unexpected {_describe(token, lookahead)}"),
        kind=SyntaxErrorKind.NO_PRODUCTION,
        position=position,
        token=token,
        help_text=help_text
    )


def create_trailing_input_error(position: int, token: Optional[Token] = None) -> ParseError:
    """Create an error for tokens left over once the start symbol is complete."""
    return ParseError(
        message=f"Unexpected trailing input at position {position}",
        kind=SyntaxErrorKind.TRAILING_INPUT,
        position=position,
        token=token,
        suggestions=["Remove the extra tokens or terminate the previous statement"]
    )


def create_unexpected_eof_error(position: int, expected: str) -> ParseError:
    """Create an error for a token list that ended without an EOF token."""
    return ParseError(
        message=f"Unexpected end of input at position {position} while expecting {expected}",
        kind=SyntaxErrorKind.UNEXPECTED_EOF,
        position=position,
        help_text="Token sequences must be terminated by an EOF token."
    )
