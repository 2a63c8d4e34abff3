"""
Concrete parse tree produced by the predictive parser.

Each node owns its children directly, in left-to-right order. Terminal
leaves keep the token they consumed; an ε-expansion leaves a nonterminal
with no children.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from ..lexer.tokens import Token


@dataclass
class ParseTreeNode:
    symbol: str
    children: List['ParseTreeNode'] = field(default_factory=list)
    token: Optional[Token] = None
    production_id: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_terminal(self) -> bool:
        """True for leaves created by matching a token."""
        return self.token is not None

    def child_symbols(self) -> List[str]:
        return [child.symbol for child in self.children]

    def leaves(self) -> Iterator['ParseTreeNode']:
        """Terminal leaves in input order."""
        if self.token is not None:
            yield self
        for child in self.children:
            yield from child.leaves()

    def pretty(self, indent: int = 0) -> str:
        """Indented multi-line rendering, one node per line."""
        label = self.symbol
        if self.token is not None:
            label += f" '{self.token.lexeme}'"
        lines = ["  " * indent + label]
        for child in self.children:
            lines.append(child.pretty(indent + 1))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.pretty()
