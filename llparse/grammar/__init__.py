"""
llparse Grammar Package

Grammar representation and LL(1) analysis.

Key Features:
- Validated, immutable grammar model
- Fixed-point FIRST/FOLLOW set computation
- LL(1) parse-table construction that reports every conflict
- The built-in grammar of the scripting language
"""

from .model import (
    EPSILON, END_MARKER, OPERATOR, Grammar, Production, validate,
)
from .sets import FirstSets, FollowSets, compute_first, compute_follow, first_of_sequence
from .table import Conflict, ParseTable, build_parse_table, format_parse_table, is_ll1
from .analysis import GrammarAnalysis, analyze
from .errors import ConflictError, GrammarError, GrammarIssue
from .language import LANGUAGE_GRAMMAR, language_analysis, token_to_terminal

__all__ = [
    # Model
    "EPSILON", "END_MARKER", "OPERATOR", "Grammar", "Production", "validate",

    # Sets
    "FirstSets", "FollowSets", "compute_first", "compute_follow", "first_of_sequence",

    # Table
    "Conflict", "ParseTable", "build_parse_table", "format_parse_table", "is_ll1",

    # Analysis
    "GrammarAnalysis", "analyze",

    # Language
    "LANGUAGE_GRAMMAR", "language_analysis", "token_to_terminal",

    # Errors
    "ConflictError", "GrammarError", "GrammarIssue",
]
