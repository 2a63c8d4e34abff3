"""
llparse scanner - turns source text into the token list the parsers consume.

The token list always ends with a single EOF token, which the predictive
parser relies on to recognise the end of input.
"""

import logging
from typing import List

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, PUNCTUATION, BINARY_OPERATORS
)
from .errors import (
    LexerError, create_invalid_character_error,
    create_unterminated_string_error, create_invalid_number_error
)

LOGGER = logging.getLogger(__name__)


class Lexer:
    """
    Lexical analyzer for the scripting language.

    Converts source code text into a list of tokens. Errors are collected
    rather than raised so that every bad character is reported in one pass;
    callers decide whether a non-empty ``errors`` list is fatal.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens including the trailing EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        self.errors = []

        while self.pos < len(self.source):
            try:
                self._skip_whitespace_and_comments()

                if self.pos >= len(self.source):
                    break

                start = self.pos
                self.tokens.append(self._next_token())

            except LexerError as e:
                self.errors.append(e)
                # A bad lexeme that was already consumed is dropped as a whole;
                # otherwise skip the offending character and keep scanning
                if self.pos == start:
                    self._advance()

        eof_location = SourceLocation(self.filename, self.line, self.column, self.pos)
        self.tokens.append(Token(TokenType.EOF, "", None, eof_location))

        LOGGER.debug("scanned %d tokens (%d errors) from %s",
                     len(self.tokens), len(self.errors), self.filename)
        return self.tokens

    def _next_token(self) -> Token:
        """Scan one token starting at the current position."""
        location = SourceLocation(self.filename, self.line, self.column, self.pos)
        current_char = self.source[self.pos]

        if current_char.isdigit():
            return self._tokenize_number(location)

        if self._is_identifier_start(current_char):
            return self._tokenize_identifier_or_keyword(location)

        if current_char in ('"', "'"):
            return self._tokenize_string(location)

        # Two-character operators first: <= >= == !=
        pair = self.source[self.pos:self.pos + 2]
        if pair in BINARY_OPERATORS:
            self._advance_by(2)
            return Token(TokenType.BINARY_OPERATOR, pair, None, location)

        if current_char in BINARY_OPERATORS:
            self._advance()
            return Token(TokenType.BINARY_OPERATOR, current_char, None, location)

        if current_char in PUNCTUATION:
            self._advance()
            return Token(PUNCTUATION[current_char], current_char, None, location)

        raise create_invalid_character_error(current_char, location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize an integer or decimal literal; the value is always a float."""
        start_pos = self.pos
        while self.pos < len(self.source) and self.source[self.pos].isdigit():
            self._advance()

        if self._current() == '.' and self._peek().isdigit():
            self._advance()
            while self.pos < len(self.source) and self.source[self.pos].isdigit():
                self._advance()

        if self._is_identifier_start(self._current()):
            while self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos]):
                self._advance()
            raise create_invalid_number_error(
                self.source[start_pos:self.pos], location,
                "Identifiers cannot start with a digit"
            )

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.NUMBER, lexeme, float(lexeme), location)

    def _tokenize_identifier_or_keyword(self, location: SourceLocation) -> Token:
        start_pos = self.pos
        self._advance()
        while self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos]):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None
        return Token(token_type, lexeme, value, location)

    def _tokenize_string(self, location: SourceLocation) -> Token:
        """Tokenize a single- or double-quoted string. No escape sequences."""
        quote = self.source[self.pos]
        start_pos = self.pos
        self._advance()  # opening quote

        while self.pos < len(self.source) and self.source[self.pos] != quote:
            self._advance()

        if self.pos >= len(self.source):
            raise create_unterminated_string_error(quote, location)

        self._advance()  # closing quote
        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.STRING, lexeme, lexeme[1:-1], location)

    def _is_identifier_start(self, char: str) -> bool:
        return char.isalpha() or char == '_'

    def _is_identifier_continue(self, char: str) -> bool:
        return char.isalnum() or char == '_'

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and // line comments."""
        while self.pos < len(self.source):
            if self.source[self.pos].isspace():
                self._advance()
                continue

            if self.source[self.pos:self.pos + 2] == '//':
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
                continue

            break

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        for _ in range(count):
            self._advance()

    def _current(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return '\0'

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'

    def has_errors(self) -> bool:
        return len(self.errors) > 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens ending with EOF

    Raises:
        LexerError: The first error found, if any
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()
    if lexer.errors:
        raise lexer.errors[0]
    return tokens
