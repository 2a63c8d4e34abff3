"""
Test suite for parse tree to AST conversion.

Tests cover:
- Every statement kind of the language
- Operator precedence and left-associative binary chains
- Right-associative assignment
- Calls, member access and literals
- Deeply nested expressions
- Structural errors and the fallback hook
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from llparse import parse, parse_source, parse_with_fallback
from llparse.grammar import language_analysis
from llparse.lexer import tokenize_string
from llparse.parser import (
    ArrayLiteral, AssignmentExpr, BinaryExpr, BreakStatement, CallExpr, ContinueStatement,
    ExpressionStatement, ForStatement, FunctionDeclaration, Identifier, IfStatement,
    MemberExpr, NodeKind, NumericLiteral, ObjectLiteral, ParseError, ParseTreeConverter,
    ParseTreeNode, Program, Property, ReturnStatement, StringLiteral, StructuralError,
    UnaryExpr, VarDeclaration, WhileStatement,
)


def num(value) -> NumericLiteral:
    return NumericLiteral(float(value))


def ident(name: str) -> Identifier:
    return Identifier(name)


class TestExpressionConversion(unittest.TestCase):
    """Test cases for expression ASTs."""

    def _expr(self, source: str):
        program = parse_source(source)
        self.assertEqual(len(program.body), 1)
        statement = program.body[0]
        self.assertIsInstance(statement, ExpressionStatement)
        return statement.expression

    def test_call_with_additive_argument(self):
        program = parse_source("print(5 + 10);")

        expected = Program([ExpressionStatement(
            CallExpr(ident("print"), [BinaryExpr(num(5), "+", num(10))])
        )])
        self.assertEqual(program, expected)

    def test_subtraction_is_left_associative(self):
        self.assertEqual(
            self._expr("a - b - c;"),
            BinaryExpr(BinaryExpr(ident("a"), "-", ident("b")), "-", ident("c")),
        )

    def test_division_is_left_associative(self):
        self.assertEqual(
            self._expr("8 / 4 / 2;"),
            BinaryExpr(BinaryExpr(num(8), "/", num(4)), "/", num(2)),
        )

    def test_mixed_additive_chain(self):
        self.assertEqual(
            self._expr("1 - 2 + 3 - 4;"),
            BinaryExpr(
                BinaryExpr(BinaryExpr(num(1), "-", num(2)), "+", num(3)),
                "-", num(4),
            ),
        )

    def test_multiplication_binds_tighter(self):
        self.assertEqual(
            self._expr("1 + 2 * 3 % 4;"),
            BinaryExpr(num(1), "+", BinaryExpr(BinaryExpr(num(2), "*", num(3)), "%", num(4))),
        )

    def test_parentheses_override_precedence(self):
        self.assertEqual(
            self._expr("(1 + 2) * 3;"),
            BinaryExpr(BinaryExpr(num(1), "+", num(2)), "*", num(3)),
        )

    def test_comparison_chain(self):
        self.assertEqual(
            self._expr("a < b == c;"),
            BinaryExpr(BinaryExpr(ident("a"), "<", ident("b")), "==", ident("c")),
        )
        self.assertEqual(
            self._expr("x + 1 >= y * 2;"),
            BinaryExpr(
                BinaryExpr(ident("x"), "+", num(1)), ">=", BinaryExpr(ident("y"), "*", num(2))
            ),
        )

    def test_assignment_is_right_associative(self):
        self.assertEqual(
            self._expr("a = b = c + 1;"),
            AssignmentExpr(ident("a"), AssignmentExpr(ident("b"),
                                                      BinaryExpr(ident("c"), "+", num(1)))),
        )

    def test_unary_operators(self):
        self.assertEqual(
            self._expr("-x * 2;"),
            BinaryExpr(UnaryExpr("-", ident("x")), "*", num(2)),
        )
        self.assertEqual(self._expr("!!done;"), UnaryExpr("!", UnaryExpr("!", ident("done"))))

    def test_member_access_and_method_call(self):
        self.assertEqual(
            self._expr("obj.items[0].run(1, 2);"),
            CallExpr(
                MemberExpr(
                    MemberExpr(MemberExpr(ident("obj"), ident("items"), False), num(0), True),
                    ident("run"), False,
                ),
                [num(1), num(2)],
            ),
        )

    def test_chained_calls(self):
        self.assertEqual(
            self._expr("make(1)(2)();"),
            CallExpr(CallExpr(CallExpr(ident("make"), [num(1)]), [num(2)]), []),
        )

    def test_literals(self):
        program = parse_source('let o = { a: 1, b, }; let xs = [1, "two", [3],]; let e = {};')

        self.assertEqual(program.body, [
            VarDeclaration(False, "o", ObjectLiteral([Property("a", num(1)), Property("b")])),
            VarDeclaration(False, "xs", ArrayLiteral([
                num(1), StringLiteral("two"), ArrayLiteral([num(3)]),
            ])),
            VarDeclaration(False, "e", ObjectLiteral([])),
        ])


class TestStatementConversion(unittest.TestCase):
    """Test cases for statement ASTs."""

    def test_variable_declarations(self):
        program = parse_source("let x = 1; let y; const z = x;")

        self.assertEqual(program.body, [
            VarDeclaration(False, "x", num(1)),
            VarDeclaration(False, "y", None),
            VarDeclaration(True, "z", ident("x")),
        ])

    def test_function_declaration(self):
        program = parse_source("fn add(a, b) { return a + b; } fn noop() { return; }")

        self.assertEqual(program.body, [
            FunctionDeclaration("add", ["a", "b"],
                                [ReturnStatement(BinaryExpr(ident("a"), "+", ident("b")))]),
            FunctionDeclaration("noop", [], [ReturnStatement(None)]),
        ])

    def test_if_else(self):
        program = parse_source("if (x > 1) { y = 1; } else { y = 2; } if (z) { }")

        self.assertEqual(program.body, [
            IfStatement(
                BinaryExpr(ident("x"), ">", num(1)),
                [ExpressionStatement(AssignmentExpr(ident("y"), num(1)))],
                [ExpressionStatement(AssignmentExpr(ident("y"), num(2)))],
            ),
            IfStatement(ident("z"), [], None),
        ])

    def test_while_loop(self):
        program = parse_source("while (n > 0) { n = n - 1; continue; }")

        self.assertEqual(program.body, [WhileStatement(
            BinaryExpr(ident("n"), ">", num(0)),
            [
                ExpressionStatement(AssignmentExpr(ident("n"), BinaryExpr(ident("n"), "-", num(1)))),
                ContinueStatement(),
            ],
        )])

    def test_for_loops(self):
        program = parse_source(
            "for (let i = 0; i < 10; i = i + 1) { print(i); } for (;;) { break; }"
        )

        self.assertEqual(program.body, [
            ForStatement(
                VarDeclaration(False, "i", num(0)),
                BinaryExpr(ident("i"), "<", num(10)),
                AssignmentExpr(ident("i"), BinaryExpr(ident("i"), "+", num(1))),
                [ExpressionStatement(CallExpr(ident("print"), [ident("i")]))],
            ),
            ForStatement(None, None, None, [BreakStatement()]),
        ])

    def test_for_loop_with_expression_init(self):
        program = parse_source("for (i = 0; i < n;) { }")

        loop = program.body[0]
        self.assertEqual(loop.init, ExpressionStatement(AssignmentExpr(ident("i"), num(0))))
        self.assertIsNone(loop.update)

    def test_empty_program(self):
        self.assertEqual(parse_source("// nothing here\n"), Program([]))

    def test_nested_kinds_and_walk(self):
        program = parse_source("fn f(x) { if (x) { return [x]; } }")

        kinds = [node.kind for node in program.walk()]
        self.assertEqual(kinds, [
            NodeKind.PROGRAM, NodeKind.FUNCTION_DECLARATION, NodeKind.IF_STATEMENT,
            NodeKind.IDENTIFIER, NodeKind.RETURN_STATEMENT, NodeKind.ARRAY_LITERAL,
            NodeKind.IDENTIFIER,
        ])

    def test_repeated_parses_are_independent(self):
        table = language_analysis().require_ll1()

        first = parse(tokenize_string("x = 1;"), table)
        second = parse(tokenize_string("x = 2;"), table)

        self.assertEqual(first, Program([ExpressionStatement(AssignmentExpr(ident("x"), num(1)))]))
        self.assertEqual(second, Program([ExpressionStatement(AssignmentExpr(ident("x"), num(2)))]))
        self.assertIsNot(first.body, second.body)


class TestDeepNesting(unittest.TestCase):
    """Test cases for expressions nested far deeper than typical source."""

    def _nested(self, opening: str, closing: str, depth: int) -> str:
        return "x = " + opening * depth + "1" + closing * depth + ";"

    def test_deeply_parenthesized_expression(self):
        program = parse_source(self._nested("(", ")", 500))

        self.assertEqual(program, Program([ExpressionStatement(AssignmentExpr(ident("x"), num(1)))]))

    def test_deeply_nested_calls(self):
        program = parse_source(self._nested("f(", ")", 100))

        node = program.body[0].expression.value
        depth = 0
        while isinstance(node, CallExpr):
            self.assertEqual(node.caller, ident("f"))
            self.assertEqual(len(node.args), 1)
            node = node.args[0]
            depth += 1
        self.assertEqual(depth, 100)
        self.assertEqual(node, num(1))

    def test_deeply_nested_right_operands(self):
        program = parse_source(self._nested("1 + (", ")", 200))

        node = program.body[0].expression.value
        depth = 0
        while isinstance(node, BinaryExpr):
            self.assertEqual(node.left, num(1))
            node = node.right
            depth += 1
        self.assertEqual(depth, 200)
        self.assertEqual(node, num(1))

    def test_nesting_beyond_the_stack_is_a_structural_error(self):
        with self.assertRaises(StructuralError) as ctx:
            parse_source(self._nested("f(", ")", 2000))

        self.assertIn("too deep", str(ctx.exception))
        self.assertEqual(ctx.exception.symbol, "Program")


class TestConversionErrors(unittest.TestCase):
    """Test cases for malformed trees and the fallback hook."""

    def setUp(self):
        """Set up test fixtures."""
        self.converter = ParseTreeConverter()

    def test_wrong_root(self):
        with self.assertRaises(StructuralError) as ctx:
            self.converter.convert(ParseTreeNode("Stmt"))

        self.assertIn("[P100]", str(ctx.exception))
        self.assertIn("note: Malformed parse tree", str(ctx.exception))

    def test_unknown_symbol(self):
        tree = ParseTreeNode("Program", [
            ParseTreeNode("StmtList", [ParseTreeNode("Stmt", [ParseTreeNode("Mystery")]),
                                       ParseTreeNode("StmtList")]),
        ])

        with self.assertRaises(StructuralError) as ctx:
            self.converter.convert(tree)

        self.assertEqual(ctx.exception.symbol, "Mystery")

    def test_unexpected_children(self):
        tree = ParseTreeNode("Program", [ParseTreeNode("Expr")])

        with self.assertRaises(StructuralError):
            self.converter.convert(tree)

    def test_fallback_runs_on_syntax_error(self):
        table = language_analysis().require_ll1()
        tokens = tokenize_string("( 1 + ;")
        calls = []

        def fallback(received):
            calls.append(received)
            return Program([])

        with self.assertLogs("llparse.api", level="INFO"):
            result = parse_with_fallback(tokens, table, fallback)

        self.assertEqual(result, Program([]))
        self.assertEqual(calls, [tokens])

    def test_fallback_not_used_on_success(self):
        table = language_analysis().require_ll1()

        def fallback(received):
            raise AssertionError("fallback should not run")

        result = parse_with_fallback(tokenize_string("x;"), table, fallback)
        self.assertEqual(result, Program([ExpressionStatement(ident("x"))]))

    def test_syntax_error_propagates_without_fallback(self):
        with self.assertRaises(ParseError):
            parse_source("let = 1;")


if __name__ == '__main__':
    unittest.main()
