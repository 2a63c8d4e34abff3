"""
llparse Parser Package

Table-driven LL(1) parsing for the scripting language.

Key Features:
- Stack-driven predictive parser over a pre-built parse table
- Concrete parse trees with exclusively owned children
- Opt-in step tracing through injectable tracers
- Parse tree to AST conversion with left-associative binary chains
- Typed syntax errors that name the offending token position
"""

from .ast_nodes import *
from .config import ParserConfig
from .converter import ParseTreeConverter, convert
from .errors import ParseError, StructuralError, SyntaxErrorKind
from .parse_tree import ParseTreeNode
from .predictive import PredictiveParser
from .trace import LoggingTracer, ParseStep, ParseTracer, RecordingTracer, StepAction

__all__ = [
    # Core parser
    "PredictiveParser", "ParserConfig", "ParseTreeNode",
    "ParseTreeConverter", "convert",

    # Tracing
    "ParseTracer", "LoggingTracer", "RecordingTracer", "ParseStep", "StepAction",

    # AST nodes
    "NodeKind", "ASTNode", "Program", "Statement", "Expression",
    "VarDeclaration", "FunctionDeclaration", "IfStatement", "WhileStatement",
    "ForStatement", "ReturnStatement", "BreakStatement", "ContinueStatement",
    "ExpressionStatement", "AssignmentExpr", "BinaryExpr", "UnaryExpr", "CallExpr",
    "MemberExpr", "Identifier", "NumericLiteral", "StringLiteral", "ObjectLiteral",
    "ArrayLiteral", "Property",

    # Error handling
    "ParseError", "StructuralError", "SyntaxErrorKind",
]
