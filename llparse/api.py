"""
Entry points that tie scanning, table lookup, parsing and AST conversion
together.
"""

import logging
from typing import Callable, Optional, Sequence

from .lexer.lexer import tokenize_string
from .lexer.tokens import Token
from .grammar.language import language_analysis
from .grammar.table import ParseTable
from .parser.ast_nodes import Program
from .parser.config import ParserConfig
from .parser.converter import ParseTreeConverter
from .parser.errors import ParseError
from .parser.predictive import PredictiveParser

LOGGER = logging.getLogger(__name__)


def parse(tokens: Sequence[Token], table: ParseTable,
          config: Optional[ParserConfig] = None) -> Program:
    """
    Parse a token sequence into an AST using a pre-built table.

    Raises:
        ConflictError: ``table`` is not LL(1)
        ParseError: The tokens are not a sentence of the grammar
        StructuralError: The parse tree could not be converted
    """
    tree = PredictiveParser(table, config).parse_tree(tokens)
    return ParseTreeConverter().convert(tree)


def parse_source(source: str, filename: str = "<string>",
                 config: Optional[ParserConfig] = None) -> Program:
    """Scan ``source`` and parse it with the built-in language table."""
    tokens = tokenize_string(source, filename)
    table = language_analysis().require_ll1()
    return parse(tokens, table, config)


def parse_with_fallback(tokens: Sequence[Token], table: ParseTable,
                        fallback: Callable[[Sequence[Token]], Program],
                        config: Optional[ParserConfig] = None) -> Program:
    """
    Parse with the predictive parser, handing the tokens to ``fallback``
    when it reports a syntax error.

    Only ``ParseError`` triggers the fallback; structural and grammar
    errors propagate.
    """
    try:
        return parse(tokens, table, config)
    except ParseError as e:
        LOGGER.info("Predictive parse failed at token %d (%s); using fallback parser",
                    e.position, e.kind.name)
        return fallback(tokens)
