"""
llparse

LL(1) grammar analysis and table-driven predictive parsing for a small
scripting language.

Architecture:
    llparse/
    ├── lexer/           # Tokenization
    ├── grammar/         # Grammar model, FIRST/FOLLOW sets, parse table
    ├── parser/          # Predictive parser, parse tree, AST conversion
    └── api.py           # parse / parse_source / parse_with_fallback

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .grammar import Grammar, GrammarAnalysis, ParseTable, analyze, language_analysis
from .grammar.errors import ConflictError, GrammarError
from .lexer import Lexer, LexerError, tokenize_string
from .parser import PredictiveParser, ParserConfig, Program, ParseError, StructuralError
from .api import parse, parse_source, parse_with_fallback

__all__ = [
    # Analysis
    "Grammar", "GrammarAnalysis", "ParseTable", "analyze", "language_analysis",

    # Parsing
    "Lexer", "tokenize_string", "PredictiveParser", "ParserConfig", "Program",
    "parse", "parse_source", "parse_with_fallback",

    # Errors
    "ConflictError", "GrammarError", "LexerError", "ParseError", "StructuralError",

    # Version info
    "__version__",
    "__license__",
]
