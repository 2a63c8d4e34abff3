"""
llparse Lexer Package

Scanner that turns source text into the token list consumed by the
table-driven parser.

Key Features:
- Keywords, identifiers, numeric and string literals
- Operators grouped into precedence classes (additive, multiplicative, comparison)
- // line comments
- Source location tracking for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "tokenize_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
]
