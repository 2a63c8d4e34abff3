"""
Shared fixtures for building token streams over small test grammars.
"""

from typing import List

from llparse.grammar.model import END_MARKER
from llparse.lexer.tokens import SourceLocation, Token, TokenType


def make_tokens(*terminals: str, eof: bool = True) -> List[Token]:
    """One IDENTIFIER token per terminal name, plus a trailing EOF token."""
    tokens = []
    for index, terminal in enumerate(terminals):
        location = SourceLocation("<test>", 1, index + 1, index)
        tokens.append(Token(TokenType.IDENTIFIER, terminal, terminal, location))
    if eof:
        location = SourceLocation("<test>", 1, len(terminals) + 1, len(terminals))
        tokens.append(Token(TokenType.EOF, "", None, location))
    return tokens


def lexeme_terminal(token: Token) -> str:
    """Terminal mapping for ``make_tokens`` streams: the lexeme, or ``$`` at EOF."""
    if token.is_eof:
        return END_MARKER
    return token.lexeme
