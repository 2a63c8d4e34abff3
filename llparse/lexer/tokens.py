"""
Token definitions for the llparse scanner.

This module defines every token type the scripting language understands:
- Literals (numbers, strings)
- Identifiers and reserved keywords
- Binary/unary operators, grouped into precedence classes
- Punctuation and delimiters
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of file

    # ========================================================================
    # Literals
    # ========================================================================
    NUMBER = auto()                 # 42, 3.5
    STRING = auto()                 # "hello", 'hi'

    # ========================================================================
    # Identifiers and Keywords
    # ========================================================================
    IDENTIFIER = auto()             # foo, print, x1

    LET = auto()                    # let
    CONST = auto()                  # const
    FN = auto()                     # fn
    IF = auto()                     # if
    ELSE = auto()                   # else
    WHILE = auto()                  # while
    FOR = auto()                    # for
    RETURN = auto()                 # return
    BREAK = auto()                  # break
    CONTINUE = auto()               # continue

    # ========================================================================
    # Operators
    # ========================================================================
    BINARY_OPERATOR = auto()        # + - * / % < > <= >= == != !
    EQUALS = auto()                 # =

    # ========================================================================
    # Punctuation
    # ========================================================================
    COMMA = auto()                  # ,
    DOT = auto()                    # .
    COLON = auto()                  # :
    SEMICOLON = auto()              # ;
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and for locating parse failures.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, lexeme (raw text), semantic value,
    and source location for error reporting.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Parsed value (float for NUMBER, str for STRING)
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def is_operator(self) -> bool:
        """Check if this token is a binary/unary operator."""
        return self.type == TokenType.BINARY_OPERATOR

    @property
    def is_eof(self) -> bool:
        return self.type == TokenType.EOF


# Reserved words. Anything else matching the identifier pattern is an IDENTIFIER.
KEYWORDS = {
    "let": TokenType.LET,
    "const": TokenType.CONST,
    "fn": TokenType.FN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
    "return": TokenType.RETURN,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
}

# Operator lexemes grouped by precedence class. The grammar sees the class,
# the AST keeps the lexeme.
ADDITIVE_OPERATORS = frozenset({"+", "-"})
MULTIPLICATIVE_OPERATORS = frozenset({"*", "/", "%"})
COMPARISON_OPERATORS = frozenset({"<", ">", "<=", ">=", "==", "!="})
UNARY_ONLY_OPERATORS = frozenset({"!"})

BINARY_OPERATORS = (
    ADDITIVE_OPERATORS | MULTIPLICATIVE_OPERATORS
    | COMPARISON_OPERATORS | UNARY_ONLY_OPERATORS
)

PUNCTUATION = {
    "=": TokenType.EQUALS,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
}
