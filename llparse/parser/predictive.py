"""
Table-driven LL(1) predictive parser.

The engine keeps a symbol stack seeded with ``[$, start]`` and a parallel
stack of parse-tree nodes. At every step it either expands the nonterminal
on top using the table cell for the current lookahead, matches a terminal
against the lookahead, or accepts when ``$`` meets ``$``. The first
violation ends the parse with a ``ParseError``; there is no recovery.
"""

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple

from ..lexer.tokens import Token
from ..grammar.errors import ConflictError
from ..grammar.model import EPSILON, END_MARKER, Production, Symbol, Terminal
from ..grammar.table import ParseTable
from .config import ParserConfig
from .errors import (
    create_no_production_error, create_terminal_mismatch_error,
    create_trailing_input_error, create_unexpected_eof_error,
)
from .parse_tree import ParseTreeNode
from .trace import NULL_TRACER, ParseStep, ParseTracer, StepAction

LOGGER = logging.getLogger(__name__)


class PredictiveParser:
    """
    Stack-driven parser over a pre-built LL(1) table.

    A parser holds only read-only references (table, mapping, tracer), so a
    single instance can run any number of independent parses.
    """

    def __init__(self, table: ParseTable, config: Optional[ParserConfig] = None,
                 terminal_of: Optional[Callable[[Token], Terminal]] = None,
                 tracer: Optional[ParseTracer] = None):
        if not table.is_ll1:
            raise ConflictError(list(table.conflicts))

        config = config or ParserConfig()
        if terminal_of is not None:
            config = replace(config, terminal_of=terminal_of)
        if tracer is not None:
            config = replace(config, tracer=tracer)

        self.table = table
        self.grammar = table.grammar
        self.config = config
        self._terminal_of = config.terminal_of
        self._tracer = config.tracer or NULL_TRACER
        self._operator = config.operator

    def parse_tree(self, tokens: Sequence[Token]) -> ParseTreeNode:
        """
        Parse ``tokens`` (terminated by an EOF token) into a parse tree.

        Raises:
            ParseError: On the first syntax error, with its kind and the
                index of the offending token
        """
        tokens = list(tokens)
        start = self.grammar.start
        root = ParseTreeNode(start)

        # Fresh state per call; nothing here outlives this frame.
        symbols: List[Symbol] = [END_MARKER, start]
        nodes: List[Optional[ParseTreeNode]] = [None, root]
        position = 0
        step = 0

        while symbols:
            top = symbols[-1]
            token, lookahead = self._lookahead(tokens, position, top)

            if top == END_MARKER:
                if lookahead != END_MARKER:
                    self._trace(step, StepAction.ERROR, symbols, lookahead, position, token)
                    raise create_trailing_input_error(position, token)
                if position != len(tokens) - 1:
                    extra = position + 1
                    raise create_trailing_input_error(extra, tokens[extra])
                self._trace(step, StepAction.ACCEPT, symbols, lookahead, position, token)
                LOGGER.debug("accepted %d token(s) in %d step(s)", len(tokens), step + 1)
                symbols.pop()
                nodes.pop()
                return root

            if self.grammar.is_nonterminal(top):
                production = self._predict(top, lookahead)
                if production is None:
                    self._trace(step, StepAction.ERROR, symbols, lookahead, position, token)
                    raise create_no_production_error(
                        top, lookahead, position, token,
                        expected=self.table.expected_terminals(top),
                    )
                self._trace(step, StepAction.EXPAND, symbols, lookahead, position, token,
                            production)

                symbols.pop()
                node = nodes.pop()
                node.production_id = production.id
                node.children = [
                    ParseTreeNode(symbol) for symbol in production.rhs if symbol != EPSILON
                ]
                for child in reversed(node.children):
                    symbols.append(child.symbol)
                    nodes.append(child)
            else:
                if not self._matches(top, lookahead):
                    self._trace(step, StepAction.ERROR, symbols, lookahead, position, token)
                    raise create_terminal_mismatch_error(top, lookahead, position, token)
                self._trace(step, StepAction.MATCH, symbols, lookahead, position, token)

                symbols.pop()
                nodes.pop().token = token
                position += 1

            step += 1

        # Unreachable: the end marker is only popped on accept.
        raise create_unexpected_eof_error(position, END_MARKER)

    def _lookahead(self, tokens: List[Token], position: int,
                   expecting: Symbol) -> Tuple[Token, Terminal]:
        if position >= len(tokens):
            raise create_unexpected_eof_error(position, expecting)
        token = tokens[position]
        return token, self._terminal_of(token)

    def _predict(self, nonterminal: Symbol, lookahead: Terminal) -> Optional[Production]:
        production = self.table.get(nonterminal, lookahead)
        if production is None and lookahead in self.grammar.operator_terminals:
            production = self.table.get(nonterminal, self._operator)
        return production

    def _matches(self, expected: Symbol, lookahead: Terminal) -> bool:
        if expected == lookahead:
            return True
        return expected == self._operator and lookahead in self.grammar.operator_terminals

    def _trace(self, index: int, action: StepAction, symbols: List[Symbol],
               lookahead: Terminal, position: int, token: Optional[Token],
               production: Optional[Production] = None):
        if self._tracer is NULL_TRACER:
            return
        self._tracer.on_step(ParseStep(
            index=index,
            action=action,
            stack=tuple(symbols),
            lookahead=lookahead,
            position=position,
            token=token,
            production=production,
        ))
