"""
Optional step tracing for the predictive parser.

The engine reports every action it takes to a tracer. The default tracer
does nothing, so parsing is silent unless a caller opts in.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..lexer.tokens import Token
from ..grammar.model import Production, Symbol, Terminal

LOGGER = logging.getLogger(__name__)


class StepAction(Enum):
    EXPAND = "expand"
    MATCH = "match"
    ACCEPT = "accept"
    ERROR = "error"


@dataclass(frozen=True)
class ParseStep:
    """One engine iteration: the stack before the action and what was done."""
    index: int
    action: StepAction
    stack: Tuple[Symbol, ...]
    lookahead: Terminal
    position: int
    token: Optional[Token] = None
    production: Optional[Production] = None

    def __str__(self) -> str:
        stack = " ".join(self.stack)
        detail = f" using {self.production}" if self.production is not None else ""
        return (f"step {self.index}: {self.action.value} [{stack}] "
                f"lookahead={self.lookahead}@{self.position}{detail}")


class ParseTracer:
    """Base tracer; ignores every step."""

    def on_step(self, step: ParseStep):
        pass


class LoggingTracer(ParseTracer):
    """Logs each step at DEBUG level."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or LOGGER

    def on_step(self, step: ParseStep):
        self.logger.debug("%s", step)


class RecordingTracer(ParseTracer):
    """Keeps every step in memory, for tests and debugging."""

    def __init__(self):
        self.steps: List[ParseStep] = []

    def on_step(self, step: ParseStep):
        self.steps.append(step)

    def actions(self) -> List[StepAction]:
        return [step.action for step in self.steps]

    def clear(self):
        self.steps.clear()


NULL_TRACER = ParseTracer()
