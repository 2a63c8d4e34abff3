"""
Per-parser configuration.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from ..lexer.tokens import Token
from ..grammar.language import token_to_terminal
from ..grammar.model import OPERATOR, Terminal
from .trace import ParseTracer


@dataclass
class ParserConfig:
    """
    Knobs for a ``PredictiveParser``.

    The defaults match the built-in language grammar: tokens are mapped
    with ``token_to_terminal``, no tracing, and ``"op"`` as the generic
    operator terminal.
    """
    terminal_of: Callable[[Token], Terminal] = field(default=token_to_terminal)
    tracer: Optional[ParseTracer] = None
    operator: Terminal = OPERATOR
