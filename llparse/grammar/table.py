"""
LL(1) parse table construction.

The table maps (nonterminal, lookahead terminal) to the single production
to expand. A cell that would receive a second production is a conflict.
Conflicts are never resolved by overwriting: the cell keeps its first
production, the collision is recorded, and strict construction fails with
a ``ConflictError`` that lists every conflict at once.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import ConflictError
from .model import EPSILON, END_MARKER, Grammar, NonTerminal, Production, Terminal
from .sets import FirstSets, FollowSets, first_of_sequence

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conflict:
    """A table cell that received more than one candidate production."""
    nonterminal: NonTerminal
    terminal: Terminal
    existing_id: int
    candidate_id: int

    @property
    def cell(self) -> Tuple[NonTerminal, Terminal]:
        return (self.nonterminal, self.terminal)

    def __str__(self) -> str:
        return (f"table[{self.nonterminal}, {self.terminal}]: "
                f"production {self.existing_id} vs production {self.candidate_id}")


class ParseTable:
    """
    Read-only (nonterminal, terminal) -> production lookup.

    Instances are produced by ``build_parse_table`` and never change after
    construction, so one table can serve any number of parses.
    """

    def __init__(self, grammar: Grammar,
                 cells: Dict[NonTerminal, Dict[Terminal, Production]],
                 conflicts: List[Conflict]):
        self.grammar = grammar
        self._cells = MappingProxyType({
            nonterminal: MappingProxyType(dict(row)) for nonterminal, row in cells.items()
        })
        self.conflicts: Tuple[Conflict, ...] = tuple(conflicts)

    @property
    def is_ll1(self) -> bool:
        return not self.conflicts

    def get(self, nonterminal: NonTerminal, terminal: Terminal) -> Optional[Production]:
        row = self._cells.get(nonterminal)
        if row is None:
            return None
        return row.get(terminal)

    def row(self, nonterminal: NonTerminal) -> Mapping[Terminal, Production]:
        return self._cells.get(nonterminal, MappingProxyType({}))

    def expected_terminals(self, nonterminal: NonTerminal) -> List[Terminal]:
        """Lookaheads that have an entry for ``nonterminal``, sorted."""
        return sorted(self.row(nonterminal))

    def items(self) -> Iterator[Tuple[Tuple[NonTerminal, Terminal], Production]]:
        for nonterminal in sorted(self._cells):
            row = self._cells[nonterminal]
            for terminal in sorted(row):
                yield (nonterminal, terminal), row[terminal]

    def __len__(self) -> int:
        return sum(len(row) for row in self._cells.values())

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParseTable):
            return NotImplemented
        return (self.grammar == other.grammar
                and dict(self.items()) == dict(other.items())
                and self.conflicts == other.conflicts)

    def __repr__(self) -> str:
        return f"ParseTable(cells={len(self)}, conflicts={len(self.conflicts)})"


def build_parse_table(grammar: Grammar, first: FirstSets, follow: FollowSets,
                      strict: bool = True) -> ParseTable:
    """
    Derive the LL(1) table from FIRST and FOLLOW sets.

    For A -> α: an ε-production fills every t in FOLLOW(A); otherwise every
    t in FIRST(α) - {ε}, plus FOLLOW(A) when α is nullable.

    Args:
        grammar: The analysed grammar
        first: Output of ``compute_first``
        follow: Output of ``compute_follow``
        strict: Raise ``ConflictError`` if any cell collided

    Returns:
        The table; ``table.conflicts`` lists collisions when ``strict`` is off

    Raises:
        ConflictError: ``strict`` is on and the grammar is not LL(1)
    """
    cells: Dict[NonTerminal, Dict[Terminal, Production]] = {
        nonterminal: {} for nonterminal in grammar.nonterminals
    }
    conflicts: List[Conflict] = []

    def assign(production: Production, terminal: Terminal):
        row = cells[production.lhs]
        existing = row.get(terminal)
        if existing is None:
            row[terminal] = production
        elif existing.id != production.id:
            conflict = Conflict(production.lhs, terminal, existing.id, production.id)
            LOGGER.warning("Grammar is not LL(1): %s", conflict)
            conflicts.append(conflict)

    for production in grammar.productions:
        lhs_follow = sorted(follow[production.lhs])
        if production.is_epsilon:
            for terminal in lhs_follow:
                assign(production, terminal)
            continue

        rhs_first = first_of_sequence(production.rhs, first)
        for terminal in sorted(rhs_first - {EPSILON}):
            assign(production, terminal)
        if EPSILON in rhs_first:
            for terminal in lhs_follow:
                assign(production, terminal)

    table = ParseTable(grammar, cells, conflicts)
    LOGGER.debug("built parse table with %d cell(s) and %d conflict(s)",
                 len(table), len(conflicts))

    if strict and conflicts:
        raise ConflictError(conflicts)
    return table


def is_ll1(table: ParseTable) -> bool:
    """True iff construction recorded zero conflicts."""
    return table.is_ll1


def format_parse_table(table: ParseTable) -> str:
    """Render the table as a tab-separated grid of production ids."""
    grammar = table.grammar
    terminals = sorted(grammar.terminals - {EPSILON}) + [END_MARKER]
    terminals = list(dict.fromkeys(terminals))

    lines = ["NT\\T\t" + "\t".join(terminals)]
    for nonterminal in sorted(grammar.nonterminals):
        row = table.row(nonterminal)
        cells = [str(row[t].id) if t in row else "-" for t in terminals]
        lines.append(nonterminal + "\t" + "\t".join(cells))
    return "\n".join(lines)
