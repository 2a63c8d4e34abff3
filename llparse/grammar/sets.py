"""
FIRST and FOLLOW set computation.

Both solvers are classic fixed-point iterations: every set only grows and
is bounded by the finite terminal alphabet, so the loops terminate. The
returned mappings hold frozensets and are safe to share between parsers.
"""

import logging
from typing import Dict, FrozenSet, Iterable, Set

from .model import EPSILON, END_MARKER, Grammar, NonTerminal, Symbol, Terminal

LOGGER = logging.getLogger(__name__)

FirstSets = Dict[Symbol, FrozenSet[Terminal]]
FollowSets = Dict[NonTerminal, FrozenSet[Terminal]]


def compute_first(grammar: Grammar) -> FirstSets:
    """
    Compute FIRST(X) for every terminal, nonterminal and epsilon.

    FIRST(t) = {t} for terminals, FIRST(ε) = {ε}. For each production
    A -> s1..sn the solver adds FIRST(si) - {ε} for the leading run of
    symbols that derive ε, and ε itself when the whole right-hand side can
    vanish.
    """
    first: Dict[Symbol, Set[Terminal]] = {}
    for terminal in grammar.terminals:
        first[terminal] = {terminal}
    for nonterminal in grammar.nonterminals:
        first[nonterminal] = set()
    first[EPSILON] = {EPSILON}

    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        for production in grammar.productions:
            target = first[production.lhs]
            before = len(target)

            if production.is_epsilon:
                target.add(EPSILON)
            else:
                all_nullable = True
                for symbol in production.rhs:
                    symbol_first = first[symbol]
                    target.update(symbol_first - {EPSILON})
                    if EPSILON not in symbol_first:
                        all_nullable = False
                        break
                if all_nullable:
                    target.add(EPSILON)

            if len(target) != before:
                changed = True

    LOGGER.debug("FIRST sets converged after %d pass(es)", passes)
    return {symbol: frozenset(terminals) for symbol, terminals in first.items()}


def first_of_sequence(sequence: Iterable[Symbol], first: FirstSets) -> FrozenSet[Terminal]:
    """
    FIRST set of an arbitrary symbol sequence.

    The empty sequence (and the sequence ``[ε]``) yields {ε}.
    """
    result: Set[Terminal] = set()
    for symbol in sequence:
        symbol_first = first[symbol]
        result.update(symbol_first - {EPSILON})
        if EPSILON not in symbol_first:
            return frozenset(result)
    result.add(EPSILON)
    return frozenset(result)


def compute_follow(grammar: Grammar, first: FirstSets) -> FollowSets:
    """
    Compute FOLLOW(A) for every nonterminal.

    FOLLOW(start) contains the end marker. For A -> α B β the solver adds
    FIRST(β) - {ε} to FOLLOW(B), and FOLLOW(A) when β is empty or nullable.
    """
    follow: Dict[NonTerminal, Set[Terminal]] = {nt: set() for nt in grammar.nonterminals}
    follow[grammar.start].add(END_MARKER)

    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        for production in grammar.productions:
            rhs = production.rhs
            for index, symbol in enumerate(rhs):
                if not grammar.is_nonterminal(symbol):
                    continue

                target = follow[symbol]
                before = len(target)

                trailer = first_of_sequence(rhs[index + 1:], first)
                target.update(trailer - {EPSILON})
                if EPSILON in trailer:
                    target.update(follow[production.lhs])

                if len(target) != before:
                    changed = True

    LOGGER.debug("FOLLOW sets converged after %d pass(es)", passes)
    return {nonterminal: frozenset(terminals) for nonterminal, terminals in follow.items()}
