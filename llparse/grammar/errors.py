"""
Error types raised while analysing a grammar.

Both errors are raised once, at analysis time, and abort construction of any
parser that depends on the grammar. They are never raised per parse.
"""

from typing import List, Optional, TYPE_CHECKING
from dataclasses import dataclass

from ..lexer.errors import Diagnostic

if TYPE_CHECKING:
    from .table import Conflict


@dataclass(frozen=True)
class GrammarIssue:
    """One structural problem found by ``validate``."""
    code: str
    message: str
    symbol: Optional[str] = None
    production_id: Optional[int] = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


GRAMMAR_ERROR_CODES = {
    "G001": "Undefined symbol in right-hand side",
    "G002": "Start symbol is not a nonterminal",
    "G003": "Symbol is both terminal and nonterminal",
    "G004": "Epsilon mixed with other symbols",
    "G005": "Duplicate production id",
    "G006": "Left-hand side is not a nonterminal",
    "G100": "LL(1) parse table conflict",
}


class GrammarError(Exception):
    """
    Raised for a malformed grammar.

    Carries every issue found, not just the first one.
    """

    def __init__(self, issues: List[GrammarIssue]):
        self.issues = list(issues)
        message = f"Malformed grammar ({len(self.issues)} issue(s)): " + "; ".join(
            issue.message for issue in self.issues
        )
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=None,
            severity="error",
            code=self.issues[0].code if self.issues else None,
            help_text="Every right-hand-side symbol must be declared as a terminal or nonterminal.",
            suggestions=[str(issue) for issue in self.issues],
            title=GRAMMAR_ERROR_CODES.get(self.issues[0].code) if self.issues else None
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class ConflictError(Exception):
    """
    Raised when a parse-table cell received more than one production.

    All conflicts recorded during construction are reported together.
    """

    def __init__(self, conflicts: List["Conflict"]):
        self.conflicts = list(conflicts)
        cells = ", ".join(
            f"[{c.nonterminal}, {c.terminal}] (productions {c.existing_id} and {c.candidate_id})"
            for c in self.conflicts
        )
        message = f"Grammar is not LL(1): {len(self.conflicts)} conflict(s) at {cells}"
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=None,
            severity="error",
            code="G100",
            help_text="Left-factor the productions so that their FIRST sets are disjoint.",
            suggestions=[str(c) for c in self.conflicts],
            title=GRAMMAR_ERROR_CODES["G100"]
        )

    def __str__(self) -> str:
        return str(self.diagnostic)
