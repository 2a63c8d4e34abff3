"""
Abstract Syntax Tree node definitions for the scripting language.

One dataclass per node kind. Every node reports its kind through the
``NodeKind`` enum, exposes its children in source order and can be walked
depth first. Equality is structural, so two parses of the same text compare
equal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional


class NodeKind(Enum):
    """Enumeration of all AST node kinds."""

    # Top-level
    PROGRAM = "Program"

    # Statements
    VAR_DECLARATION = "VarDeclaration"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    IF_STATEMENT = "IfStatement"
    WHILE_STATEMENT = "WhileStatement"
    FOR_STATEMENT = "ForStatement"
    RETURN_STATEMENT = "ReturnStatement"
    BREAK_STATEMENT = "BreakStatement"
    CONTINUE_STATEMENT = "ContinueStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"

    # Expressions
    ASSIGNMENT_EXPR = "AssignmentExpr"
    BINARY_EXPR = "BinaryExpr"
    UNARY_EXPR = "UnaryExpr"
    CALL_EXPR = "CallExpr"
    MEMBER_EXPR = "MemberExpr"

    # Literals
    IDENTIFIER = "Identifier"
    NUMERIC_LITERAL = "NumericLiteral"
    STRING_LITERAL = "StringLiteral"
    OBJECT_LITERAL = "ObjectLiteral"
    ARRAY_LITERAL = "ArrayLiteral"
    PROPERTY = "Property"


class ASTNode(ABC):
    """Base class for all AST nodes."""
    kind: ClassVar[NodeKind]

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def walk(self):
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()


class Statement(ASTNode):
    """Base class for statements."""
    pass


class Expression(ASTNode):
    """Base class for expressions."""
    pass


# ============================================================================
# Top-level nodes
# ============================================================================

@dataclass
class Program(ASTNode):
    """Root AST node representing a complete program."""
    kind: ClassVar[NodeKind] = NodeKind.PROGRAM
    body: List[Statement] = field(default_factory=list)

    def children(self) -> List[ASTNode]:
        return list(self.body)


# ============================================================================
# Statements
# ============================================================================

@dataclass
class VarDeclaration(Statement):
    """``let name = value;``, ``let name;`` or ``const name = value;``."""
    kind: ClassVar[NodeKind] = NodeKind.VAR_DECLARATION
    constant: bool
    identifier: str
    value: Optional[Expression] = None

    def children(self) -> List[ASTNode]:
        return [self.value] if self.value is not None else []


@dataclass
class FunctionDeclaration(Statement):
    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_DECLARATION
    name: str
    parameters: List[str]
    body: List[Statement]

    def children(self) -> List[ASTNode]:
        return list(self.body)


@dataclass
class IfStatement(Statement):
    """Conditional; ``else_body`` is None when there is no else branch."""
    kind: ClassVar[NodeKind] = NodeKind.IF_STATEMENT
    condition: Expression
    then_body: List[Statement]
    else_body: Optional[List[Statement]] = None

    def children(self) -> List[ASTNode]:
        result: List[ASTNode] = [self.condition]
        result.extend(self.then_body)
        if self.else_body:
            result.extend(self.else_body)
        return result


@dataclass
class WhileStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.WHILE_STATEMENT
    condition: Expression
    body: List[Statement]

    def children(self) -> List[ASTNode]:
        return [self.condition] + list(self.body)


@dataclass
class ForStatement(Statement):
    """C-style loop. Every header part is optional."""
    kind: ClassVar[NodeKind] = NodeKind.FOR_STATEMENT
    init: Optional[Statement]
    condition: Optional[Expression]
    update: Optional[Expression]
    body: List[Statement]

    def children(self) -> List[ASTNode]:
        header = [part for part in (self.init, self.condition, self.update) if part is not None]
        return header + list(self.body)


@dataclass
class ReturnStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.RETURN_STATEMENT
    value: Optional[Expression] = None

    def children(self) -> List[ASTNode]:
        return [self.value] if self.value is not None else []


@dataclass
class BreakStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.BREAK_STATEMENT

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class ContinueStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.CONTINUE_STATEMENT

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class ExpressionStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_STATEMENT
    expression: Expression

    def children(self) -> List[ASTNode]:
        return [self.expression]


# ============================================================================
# Expressions
# ============================================================================

@dataclass
class AssignmentExpr(Expression):
    """Right-associative assignment: ``a = b = c`` is ``a = (b = c)``."""
    kind: ClassVar[NodeKind] = NodeKind.ASSIGNMENT_EXPR
    assignee: Expression
    value: Expression

    def children(self) -> List[ASTNode]:
        return [self.assignee, self.value]


@dataclass
class BinaryExpr(Expression):
    """Binary operation; chains of one precedence level nest to the left."""
    kind: ClassVar[NodeKind] = NodeKind.BINARY_EXPR
    left: Expression
    operator: str
    right: Expression

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass
class UnaryExpr(Expression):
    kind: ClassVar[NodeKind] = NodeKind.UNARY_EXPR
    operator: str
    argument: Expression

    def children(self) -> List[ASTNode]:
        return [self.argument]


@dataclass
class CallExpr(Expression):
    kind: ClassVar[NodeKind] = NodeKind.CALL_EXPR
    caller: Expression
    args: List[Expression] = field(default_factory=list)

    def children(self) -> List[ASTNode]:
        return [self.caller] + list(self.args)


@dataclass
class MemberExpr(Expression):
    """``object.property`` (``computed`` False) or ``object[property]``."""
    kind: ClassVar[NodeKind] = NodeKind.MEMBER_EXPR
    object: Expression
    property: Expression
    computed: bool = False

    def children(self) -> List[ASTNode]:
        return [self.object, self.property]


# ============================================================================
# Literals
# ============================================================================

@dataclass
class Identifier(Expression):
    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER
    symbol: str

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class NumericLiteral(Expression):
    kind: ClassVar[NodeKind] = NodeKind.NUMERIC_LITERAL
    value: float

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class StringLiteral(Expression):
    kind: ClassVar[NodeKind] = NodeKind.STRING_LITERAL
    value: str

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class Property(ASTNode):
    """Object literal entry; ``{ key }`` is shorthand with no value."""
    kind: ClassVar[NodeKind] = NodeKind.PROPERTY
    key: str
    value: Optional[Expression] = None

    def children(self) -> List[ASTNode]:
        return [self.value] if self.value is not None else []


@dataclass
class ObjectLiteral(Expression):
    kind: ClassVar[NodeKind] = NodeKind.OBJECT_LITERAL
    properties: List[Property] = field(default_factory=list)

    def children(self) -> List[ASTNode]:
        return list(self.properties)


@dataclass
class ArrayLiteral(Expression):
    kind: ClassVar[NodeKind] = NodeKind.ARRAY_LITERAL
    elements: List[Expression] = field(default_factory=list)

    def children(self) -> List[ASTNode]:
        return list(self.elements)


