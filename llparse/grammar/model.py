"""
Grammar model: terminals, nonterminals, productions and a start symbol.

A grammar is static data. It is built once, validated, and then shared
read-only by the set solver, the table builder and every parser instance.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from .errors import GrammarError, GrammarIssue

# Symbols are interned names.
Terminal = str
NonTerminal = str
Symbol = str

EPSILON: Symbol = "ε"
END_MARKER: Terminal = "$"

# Generic operator class. On the parser stack it matches any token whose
# terminal is one of the grammar's ``operator_terminals``.
OPERATOR: Terminal = "op"


@dataclass(frozen=True)
class Production:
    """A rewrite rule ``lhs -> rhs`` with a unique numeric identity."""
    id: int
    lhs: NonTerminal
    rhs: Tuple[Symbol, ...]

    def __post_init__(self):
        object.__setattr__(self, "rhs", tuple(self.rhs))

    @property
    def is_epsilon(self) -> bool:
        """True for the empty derivation ``A -> ε``."""
        return self.rhs == (EPSILON,)

    def __str__(self) -> str:
        return f"{self.id}: {self.lhs} -> {' '.join(self.rhs)}"


@dataclass(frozen=True)
class Grammar:
    """
    A context-free grammar.

    ``terminals`` and ``nonterminals`` are disjoint; ``start`` must be a
    nonterminal. Use ``validate``/``check`` before analysing a grammar built
    from untrusted data.
    """
    terminals: FrozenSet[Terminal]
    nonterminals: FrozenSet[NonTerminal]
    productions: Tuple[Production, ...]
    start: NonTerminal
    operator_terminals: FrozenSet[Terminal] = frozenset()
    _by_lhs: Dict[NonTerminal, Tuple[Production, ...]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "terminals", frozenset(self.terminals))
        object.__setattr__(self, "nonterminals", frozenset(self.nonterminals))
        object.__setattr__(self, "productions", tuple(self.productions))
        object.__setattr__(self, "operator_terminals", frozenset(self.operator_terminals))

        by_lhs: Dict[NonTerminal, List[Production]] = {}
        for production in self.productions:
            by_lhs.setdefault(production.lhs, []).append(production)
        object.__setattr__(self, "_by_lhs", {k: tuple(v) for k, v in by_lhs.items()})

    @classmethod
    def from_rules(
        cls,
        start: NonTerminal,
        rules: Sequence[Tuple[NonTerminal, Union[str, Sequence[Symbol]]]],
        terminals: Iterable[Terminal],
        operator_terminals: Iterable[Terminal] = (),
    ) -> "Grammar":
        """
        Build a grammar from ``(lhs, rhs)`` pairs.

        Productions are numbered from 1 in the order given. A string rhs is
        split on whitespace, so ``("S", "a S")`` and ``("S", ["a", "S"])``
        are equivalent. Nonterminals are the set of left-hand sides.
        """
        productions = []
        for number, (lhs, rhs) in enumerate(rules, start=1):
            symbols = rhs.split() if isinstance(rhs, str) else list(rhs)
            productions.append(Production(number, lhs, tuple(symbols)))

        return cls(
            terminals=frozenset(terminals),
            nonterminals=frozenset(lhs for lhs, _ in rules),
            productions=tuple(productions),
            start=start,
            operator_terminals=frozenset(operator_terminals),
        )

    def is_terminal(self, symbol: Symbol) -> bool:
        return symbol in self.terminals

    def is_nonterminal(self, symbol: Symbol) -> bool:
        return symbol in self.nonterminals

    def productions_for(self, nonterminal: NonTerminal) -> Tuple[Production, ...]:
        """Productions with ``nonterminal`` on the left, in grammar order."""
        return self._by_lhs.get(nonterminal, ())

    def production(self, production_id: int) -> Optional[Production]:
        for production in self.productions:
            if production.id == production_id:
                return production
        return None

    def check(self) -> "Grammar":
        """Raise ``GrammarError`` listing every issue, or return self."""
        issues = validate(self)
        if issues:
            raise GrammarError(issues)
        return self

    def __str__(self) -> str:
        return "\n".join(str(p) for p in self.productions)


def validate(grammar: Grammar) -> List[GrammarIssue]:
    """
    Check the structural invariants of a grammar.

    Returns an empty list on success, otherwise every issue found:
    undefined right-hand-side symbols, a start symbol outside the
    nonterminal set, overlapping terminal/nonterminal sets, epsilon mixed
    with other symbols, duplicate production ids and left-hand sides that
    are not nonterminals.
    """
    issues: List[GrammarIssue] = []
    known = grammar.terminals | grammar.nonterminals | {EPSILON}

    if grammar.start not in grammar.nonterminals:
        issues.append(GrammarIssue(
            "G002", f"start symbol '{grammar.start}' is not a nonterminal",
            symbol=grammar.start,
        ))

    for symbol in sorted(grammar.terminals & grammar.nonterminals):
        issues.append(GrammarIssue(
            "G003", f"'{symbol}' is declared as both terminal and nonterminal",
            symbol=symbol,
        ))

    seen_ids = set()
    for production in grammar.productions:
        if production.id in seen_ids:
            issues.append(GrammarIssue(
                "G005", f"production id {production.id} is used more than once",
                production_id=production.id,
            ))
        seen_ids.add(production.id)

        if production.lhs not in grammar.nonterminals:
            issues.append(GrammarIssue(
                "G006", f"production {production.id} has undeclared left-hand side '{production.lhs}'",
                symbol=production.lhs, production_id=production.id,
            ))

        if EPSILON in production.rhs and len(production.rhs) != 1:
            issues.append(GrammarIssue(
                "G004", f"production {production.id} mixes epsilon with other symbols",
                symbol=EPSILON, production_id=production.id,
            ))

        for symbol in production.rhs:
            if symbol not in known:
                issues.append(GrammarIssue(
                    "G001", f"production {production.id} references undefined symbol '{symbol}'",
                    symbol=symbol, production_id=production.id,
                ))

    return issues
