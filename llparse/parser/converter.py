"""
Parse tree to AST conversion for the language grammar.

Every nonterminal has a handler in a dispatch table; a node whose symbol
has no handler, or whose children do not match any production, raises
``StructuralError``. Right-recursive binary chains (``AddExpr -> MulExpr
AddTail``) are collected and folded to the left, so ``a - b - c`` becomes
``(a - b) - c``. Assignment stays right-associative.

Wrapper levels of the expression ladder are skipped in a loop, so deeply
parenthesised input converts without deep recursion.
"""

import logging
from typing import Callable, Dict, List, Optional

from .ast_nodes import (
    ASTNode, Program, Statement, Expression,
    VarDeclaration, FunctionDeclaration, IfStatement, WhileStatement, ForStatement,
    ReturnStatement, BreakStatement, ContinueStatement, ExpressionStatement,
    AssignmentExpr, BinaryExpr, UnaryExpr, CallExpr, MemberExpr,
    Identifier, NumericLiteral, StringLiteral, ObjectLiteral, ArrayLiteral, Property,
)
from .errors import StructuralError
from .parse_tree import ParseTreeNode

LOGGER = logging.getLogger(__name__)

# chain nonterminal -> (operand nonterminal, tail nonterminal)
BINARY_CHAINS = {
    "CompExpr": ("AddExpr", "CompTail"),
    "AddExpr": ("MulExpr", "AddTail"),
    "MulExpr": ("UnaryExpr", "MulTail"),
}

# ladder level -> (children shape, index of the wrapped child). A level with
# that shape and no other non-empty child is a plain wrapper; wrappers are
# walked in a loop instead of through handler calls.
PASS_THROUGH = {
    "Expr": (("AssignExpr",), 0),
    "AssignExpr": (("CompExpr", "AssignTail"), 0),
    "CompExpr": (("AddExpr", "CompTail"), 0),
    "AddExpr": (("MulExpr", "AddTail"), 0),
    "MulExpr": (("UnaryExpr", "MulTail"), 0),
    "UnaryExpr": (("CallExpr",), 0),
    "CallExpr": (("MemberExpr", "CallTail"), 0),
    "MemberExpr": (("PrimaryExpr", "MemberTail"), 0),
    "PrimaryExpr": (("(", "Expr", ")"), 1),
}


def _shape(node: ParseTreeNode) -> tuple:
    return tuple(node.child_symbols())


def _expect(node: ParseTreeNode, *symbols: str) -> List[ParseTreeNode]:
    """Children of ``node``, which must have exactly the given symbols."""
    if _shape(node) != symbols:
        raise StructuralError(
            f"malformed {node.symbol}: expected children ({' '.join(symbols) or 'ε'}), "
            f"found ({' '.join(_shape(node)) or 'ε'})",
            symbol=node.symbol,
        )
    return node.children


def _lexeme(node: ParseTreeNode) -> str:
    if node.token is None:
        raise StructuralError(f"terminal '{node.symbol}' has no token", symbol=node.symbol)
    return node.token.lexeme


def _unexpected(node: ParseTreeNode) -> StructuralError:
    return StructuralError(
        f"unexpected shape for {node.symbol}: ({' '.join(_shape(node)) or 'ε'})",
        symbol=node.symbol,
    )


def _descend(node: ParseTreeNode) -> ParseTreeNode:
    """Follow plain wrapper levels down to the node that carries the structure."""
    while node.symbol in PASS_THROUGH:
        shape, index = PASS_THROUGH[node.symbol]
        if _shape(node) != shape:
            break
        if any(child.children for i, child in enumerate(node.children) if i != index):
            break
        node = node.children[index]
    return node


class ParseTreeConverter:
    """Builds the AST ``Program`` from a parse tree rooted at ``Program``."""

    def __init__(self):
        self._handlers: Dict[str, Callable[[ParseTreeNode], ASTNode]] = {
            # Statements
            "Stmt": self._convert_stmt,
            "VarDecl": self._convert_var_decl,
            "FnDecl": self._convert_fn_decl,
            "IfStmt": self._convert_if,
            "WhileStmt": self._convert_while,
            "ForStmt": self._convert_for,
            "ReturnStmt": self._convert_return,
            "BreakStmt": self._convert_break,
            "ContinueStmt": self._convert_continue,
            "ExprStmt": self._convert_expr_stmt,

            # Expressions
            "Expr": self._convert_expr,
            "AssignExpr": self._convert_assign,
            "CompExpr": self._convert_binary_chain,
            "AddExpr": self._convert_binary_chain,
            "MulExpr": self._convert_binary_chain,
            "UnaryExpr": self._convert_unary,
            "CallExpr": self._convert_call,
            "MemberExpr": self._convert_member,
            "PrimaryExpr": self._convert_primary,
            "ObjLiteral": self._convert_object,
            "ArrayLiteral": self._convert_array,
        }

    def convert(self, root: ParseTreeNode) -> Program:
        if root.symbol != "Program":
            raise StructuralError(f"expected a Program root, found '{root.symbol}'",
                                  symbol=root.symbol)
        stmt_list, = _expect(root, "StmtList")
        try:
            program = Program(self._convert_stmt_list(stmt_list))
        except RecursionError:
            raise StructuralError("expression nesting too deep to convert",
                                  symbol=root.symbol) from None
        LOGGER.debug("converted parse tree into %d top-level statement(s)", len(program.body))
        return program

    def _dispatch(self, node: ParseTreeNode) -> ASTNode:
        node = _descend(node)
        handler = self._handlers.get(node.symbol)
        if handler is None:
            raise StructuralError(f"no AST conversion for parse-tree symbol '{node.symbol}'",
                                  symbol=node.symbol)
        return handler(node)

    # ========================================================================
    # Statements
    # ========================================================================

    def _convert_stmt_list(self, node: ParseTreeNode) -> List[Statement]:
        statements = []
        while node.children:
            stmt, node = _expect(node, "Stmt", "StmtList")
            statements.append(self._dispatch(stmt))
        return statements

    def _convert_block(self, node: ParseTreeNode) -> List[Statement]:
        stmt_list, = _expect(node, "StmtList")
        return self._convert_stmt_list(stmt_list)

    def _convert_stmt(self, node: ParseTreeNode) -> Statement:
        if len(node.children) != 1:
            raise _unexpected(node)
        return self._dispatch(node.children[0])

    def _convert_var_decl(self, node: ParseTreeNode) -> VarDeclaration:
        shape = _shape(node)
        if shape == ("let", "identifier", "VarInit"):
            _, name, init = node.children
            if _shape(init) == ("=", "Expr", ";"):
                value = self._dispatch(init.children[1])
            else:
                _expect(init, ";")
                value = None
            return VarDeclaration(constant=False, identifier=_lexeme(name), value=value)

        if shape == ("const", "identifier", "=", "Expr", ";"):
            _, name, _, expr, _ = node.children
            return VarDeclaration(constant=True, identifier=_lexeme(name), value=self._dispatch(expr))

        raise _unexpected(node)

    def _convert_fn_decl(self, node: ParseTreeNode) -> FunctionDeclaration:
        _, name, _, params, _, _, block, _ = _expect(
            node, "fn", "identifier", "(", "Params", ")", "{", "Block", "}"
        )
        parameters = []
        if params.children:
            first, tail = _expect(params, "identifier", "ParamTail")
            parameters.append(_lexeme(first))
            while tail.children:
                _, ident, tail = _expect(tail, ",", "identifier", "ParamTail")
                parameters.append(_lexeme(ident))

        return FunctionDeclaration(
            name=_lexeme(name), parameters=parameters, body=self._convert_block(block)
        )

    def _convert_if(self, node: ParseTreeNode) -> IfStatement:
        _, _, cond, _, _, block, _, else_clause = _expect(
            node, "if", "(", "Expr", ")", "{", "Block", "}", "ElseClause"
        )
        else_body = None
        if else_clause.children:
            _, _, else_block, _ = _expect(else_clause, "else", "{", "Block", "}")
            else_body = self._convert_block(else_block)

        return IfStatement(
            condition=self._dispatch(cond),
            then_body=self._convert_block(block),
            else_body=else_body,
        )

    def _convert_while(self, node: ParseTreeNode) -> WhileStatement:
        _, _, cond, _, _, block, _ = _expect(
            node, "while", "(", "Expr", ")", "{", "Block", "}"
        )
        return WhileStatement(condition=self._dispatch(cond), body=self._convert_block(block))

    def _convert_for(self, node: ParseTreeNode) -> ForStatement:
        _, _, init, cond, _, update, _, _, block, _ = _expect(
            node, "for", "(", "ForInit", "OptExpr", ";", "OptExpr", ")", "{", "Block", "}"
        )
        init_shape = _shape(init)
        if init_shape == (";",):
            init_stmt = None
        elif init_shape in (("VarDecl",), ("ExprStmt",)):
            init_stmt = self._dispatch(init.children[0])
        else:
            raise _unexpected(init)

        return ForStatement(
            init=init_stmt,
            condition=self._convert_optional_expr(cond),
            update=self._convert_optional_expr(update),
            body=self._convert_block(block),
        )

    def _convert_optional_expr(self, node: ParseTreeNode) -> Optional[Expression]:
        if not node.children:
            return None
        expr, = _expect(node, "Expr")
        return self._dispatch(expr)

    def _convert_return(self, node: ParseTreeNode) -> ReturnStatement:
        _, value, _ = _expect(node, "return", "OptExpr", ";")
        return ReturnStatement(self._convert_optional_expr(value))

    def _convert_break(self, node: ParseTreeNode) -> BreakStatement:
        _expect(node, "break", ";")
        return BreakStatement()

    def _convert_continue(self, node: ParseTreeNode) -> ContinueStatement:
        _expect(node, "continue", ";")
        return ContinueStatement()

    def _convert_expr_stmt(self, node: ParseTreeNode) -> ExpressionStatement:
        expr, _ = _expect(node, "Expr", ";")
        return ExpressionStatement(self._dispatch(expr))

    # ========================================================================
    # Expressions
    # ========================================================================

    def _convert_expr(self, node: ParseTreeNode) -> Expression:
        assign, = _expect(node, "AssignExpr")
        return self._dispatch(assign)

    def _convert_assign(self, node: ParseTreeNode) -> Expression:
        comp, tail = _expect(node, "CompExpr", "AssignTail")
        left = self._dispatch(comp)
        if not tail.children:
            return left
        _, rest = _expect(tail, "=", "AssignExpr")
        # recursion on the right keeps a = b = c as a = (b = c)
        return AssignmentExpr(assignee=left, value=self._dispatch(rest))

    def _convert_binary_chain(self, node: ParseTreeNode) -> Expression:
        operand_symbol, tail_symbol = BINARY_CHAINS[node.symbol]
        operand, tail = _expect(node, operand_symbol, tail_symbol)
        result = self._dispatch(operand)

        while tail.children:
            if len(tail.children) != 2 or tail.children[1].symbol != node.symbol:
                raise _unexpected(tail)
            operator, rest = tail.children
            operand, tail = _expect(rest, operand_symbol, tail_symbol)
            result = BinaryExpr(left=result, operator=_lexeme(operator),
                                right=self._dispatch(operand))
        return result

    def _convert_unary(self, node: ParseTreeNode) -> Expression:
        shape = _shape(node)
        if len(shape) == 2 and shape[1] == "UnaryExpr":
            operator, argument = node.children
            return UnaryExpr(operator=_lexeme(operator), argument=self._dispatch(argument))
        raise _unexpected(node)

    def _convert_call(self, node: ParseTreeNode) -> Expression:
        member, tail = _expect(node, "MemberExpr", "CallTail")
        result = self._dispatch(member)
        while tail.children:
            _, args, _, tail = _expect(tail, "(", "Args", ")", "CallTail")
            result = CallExpr(caller=result, args=self._convert_args(args))
        return result

    def _convert_args(self, node: ParseTreeNode) -> List[Expression]:
        if not node.children:
            return []
        expr, tail = _expect(node, "Expr", "ArgsTail")
        args = [self._dispatch(expr)]
        while tail.children:
            _, expr, tail = _expect(tail, ",", "Expr", "ArgsTail")
            args.append(self._dispatch(expr))
        return args

    def _convert_member(self, node: ParseTreeNode) -> Expression:
        primary, tail = _expect(node, "PrimaryExpr", "MemberTail")
        result = self._dispatch(primary)
        while tail.children:
            shape = _shape(tail)
            if shape == (".", "identifier", "MemberTail"):
                _, name, tail = tail.children
                result = MemberExpr(object=result, property=Identifier(_lexeme(name)),
                                    computed=False)
            elif shape == ("[", "Expr", "]", "MemberTail"):
                _, index, _, tail = tail.children
                result = MemberExpr(object=result, property=self._dispatch(index),
                                    computed=True)
            else:
                raise _unexpected(tail)
        return result

    def _convert_primary(self, node: ParseTreeNode) -> Expression:
        shape = _shape(node)
        if shape == ("identifier",):
            return Identifier(_lexeme(node.children[0]))
        if shape in (("number",), ("string",)):
            token = node.children[0].token
            if token is None:
                raise _unexpected(node)
            if shape == ("number",):
                return NumericLiteral(token.value if token.value is not None else float(token.lexeme))
            return StringLiteral(token.value if token.value is not None else token.lexeme)
        if shape in (("ObjLiteral",), ("ArrayLiteral",)):
            return self._dispatch(node.children[0])
        raise _unexpected(node)

    def _convert_object(self, node: ParseTreeNode) -> ObjectLiteral:
        _, prop_list, _ = _expect(node, "{", "PropList", "}")
        properties = []
        while prop_list.children:
            prop, tail = _expect(prop_list, "Prop", "PropTail")
            key, value = _expect(prop, "identifier", "PropValue")
            if value.children:
                _, expr = _expect(value, ":", "Expr")
                properties.append(Property(_lexeme(key), self._dispatch(expr)))
            else:
                properties.append(Property(_lexeme(key)))

            if not tail.children:
                break
            _, prop_list = _expect(tail, ",", "PropList")
        return ObjectLiteral(properties)

    def _convert_array(self, node: ParseTreeNode) -> ArrayLiteral:
        _, elements, _ = _expect(node, "[", "Elements", "]")
        items = []
        while elements.children:
            expr, tail = _expect(elements, "Expr", "ElementsTail")
            items.append(self._dispatch(expr))
            if not tail.children:
                break
            _, elements = _expect(tail, ",", "Elements")
        return ArrayLiteral(items)


def convert(root: ParseTreeNode) -> Program:
    """Convert a ``Program`` parse tree into the AST."""
    return ParseTreeConverter().convert(root)
