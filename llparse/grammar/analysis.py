"""
One-call grammar analysis: validation, FIRST/FOLLOW sets and the parse table.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from .errors import ConflictError
from .model import EPSILON, Grammar
from .sets import FirstSets, FollowSets, compute_first, compute_follow
from .table import Conflict, ParseTable, build_parse_table, format_parse_table

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GrammarAnalysis:
    """Everything derived from a grammar. Immutable and shareable."""
    grammar: Grammar
    first: FirstSets
    follow: FollowSets
    table: ParseTable
    conflicts: Tuple[Conflict, ...]

    @property
    def is_ll1(self) -> bool:
        return not self.conflicts

    def require_ll1(self) -> ParseTable:
        """Return the table, or raise ``ConflictError`` with every conflict."""
        if self.conflicts:
            raise ConflictError(list(self.conflicts))
        return self.table

    def report(self) -> str:
        """FIRST sets, FOLLOW sets, the table and the LL(1) verdict as text."""
        nonterminals = sorted(self.grammar.nonterminals)
        lines = ["FIRST sets:"]
        for nonterminal in nonterminals:
            lines.append(f"FIRST({nonterminal}) = {{{_join(self.first[nonterminal])}}}")

        lines.append("")
        lines.append("FOLLOW sets:")
        for nonterminal in nonterminals:
            lines.append(f"FOLLOW({nonterminal}) = {{{_join(self.follow[nonterminal])}}}")

        lines.append("")
        lines.append("Parse table:")
        lines.append(format_parse_table(self.table))

        lines.append("")
        lines.append(f"Is the grammar LL(1)? {'Yes' if self.is_ll1 else 'No'}")
        for conflict in self.conflicts:
            lines.append(f"  conflict: {conflict}")
        return "\n".join(lines)


def _join(symbols) -> str:
    # epsilon last, everything else alphabetical
    return ", ".join(sorted(symbols, key=lambda s: (s == EPSILON, s)))


def analyze(grammar: Grammar) -> GrammarAnalysis:
    """
    Validate ``grammar`` and derive FIRST, FOLLOW and the parse table.

    Conflicts are reported on the result rather than raised, so callers can
    inspect a non-LL(1) grammar. Use ``require_ll1`` (or build a parser,
    which calls it) to turn conflicts into a ``ConflictError``.

    Raises:
        GrammarError: The grammar is structurally malformed
    """
    grammar.check()
    first = compute_first(grammar)
    follow = compute_follow(grammar, first)
    table = build_parse_table(grammar, first, follow, strict=False)

    LOGGER.debug("analysed grammar: %d terminal(s), %d nonterminal(s), %d production(s), LL(1)=%s",
                 len(grammar.terminals), len(grammar.nonterminals),
                 len(grammar.productions), table.is_ll1)
    return GrammarAnalysis(grammar, first, follow, table, table.conflicts)
