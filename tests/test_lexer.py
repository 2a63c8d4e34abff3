"""
Test suite for the llparse scanner.

Tests cover:
- Keywords, identifiers and literals
- Operators and punctuation
- Comments and source locations
- Error reporting and recovery
- Token to terminal mapping
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from llparse import parse
from llparse.grammar.language import UNKNOWN_OPERATOR, language_analysis, token_to_terminal
from llparse.lexer import Lexer, LexerError, SourceLocation, Token, TokenType, tokenize_string
from llparse.parser import ParseError, SyntaxErrorKind


class TestLexer(unittest.TestCase):
    """Test cases for tokenization."""

    def _types(self, source: str):
        return [token.type for token in tokenize_string(source)]

    def test_keywords_and_identifiers(self):
        self.assertEqual(self._types("let const fn if else while for return break continue foo"), [
            TokenType.LET, TokenType.CONST, TokenType.FN, TokenType.IF, TokenType.ELSE,
            TokenType.WHILE, TokenType.FOR, TokenType.RETURN, TokenType.BREAK,
            TokenType.CONTINUE, TokenType.IDENTIFIER, TokenType.EOF,
        ])

    def test_numbers(self):
        tokens = tokenize_string("42 3.25")

        self.assertEqual([t.value for t in tokens[:2]], [42.0, 3.25])
        self.assertEqual(tokens[1].lexeme, "3.25")

    def test_strings(self):
        tokens = tokenize_string("'hi' \"there\"")

        self.assertEqual([t.type for t in tokens[:2]], [TokenType.STRING, TokenType.STRING])
        self.assertEqual([t.value for t in tokens[:2]], ["hi", "there"])

    def test_two_character_operators(self):
        tokens = tokenize_string("a <= b == c != d >= e")

        operators = [t.lexeme for t in tokens if t.type == TokenType.BINARY_OPERATOR]
        self.assertEqual(operators, ["<=", "==", "!=", ">="])

    def test_equals_is_not_an_operator(self):
        tokens = tokenize_string("x = 1")

        self.assertEqual(tokens[1].type, TokenType.EQUALS)
        self.assertFalse(tokens[1].is_operator)

    def test_comments_are_skipped(self):
        self.assertEqual(self._types("x // trailing comment\n; // another"), [
            TokenType.IDENTIFIER, TokenType.SEMICOLON, TokenType.EOF,
        ])

    def test_locations(self):
        tokens = tokenize_string("let x\n  = 1;", filename="demo.ls")

        self.assertEqual((tokens[2].location.line, tokens[2].location.column), (2, 3))
        self.assertEqual(str(tokens[0].location), "demo.ls:1:1")

    def test_always_ends_with_eof(self):
        tokens = tokenize_string("")

        self.assertEqual(len(tokens), 1)
        self.assertTrue(tokens[0].is_eof)

    def test_invalid_character(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string("let x = 1 @ 2;")

        self.assertEqual(ctx.exception.diagnostic.code, "L001")
        self.assertEqual(ctx.exception.location.column, 11)

    def test_errors_are_collected(self):
        lexer = Lexer("a @ b # c", "<test>")
        tokens = lexer.tokenize()

        self.assertTrue(lexer.has_errors())
        self.assertEqual(len(lexer.errors), 2)
        self.assertEqual([t.lexeme for t in tokens if t.type == TokenType.IDENTIFIER],
                         ["a", "b", "c"])
        self.assertTrue(tokens[-1].is_eof)

    def test_unterminated_string(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string('"open')

        self.assertEqual(ctx.exception.diagnostic.code, "L002")

    def test_invalid_number(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string("12abc")

        self.assertEqual(ctx.exception.diagnostic.code, "L003")
        self.assertIn("12abc", str(ctx.exception))

    def test_scanning_resumes_after_invalid_number(self):
        lexer = Lexer("1abc;", "<test>")
        tokens = lexer.tokenize()

        self.assertEqual(len(lexer.errors), 1)
        self.assertEqual([t.type for t in tokens], [TokenType.SEMICOLON, TokenType.EOF])
        self.assertEqual(tokens[0].location.column, 5)

    def test_error_title_comes_from_code_table(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string("a @ b")

        self.assertEqual(ctx.exception.diagnostic.title, "Invalid character")
        self.assertIn("note: Invalid character", str(ctx.exception))


class TestTerminalMapping(unittest.TestCase):
    """Test cases for the token -> terminal mapping."""

    def test_operator_classes(self):
        tokens = tokenize_string("+ - * / % < == ! =")

        self.assertEqual([token_to_terminal(t) for t in tokens], [
            "add_op", "add_op", "mul_op", "mul_op", "mul_op",
            "comp_op", "comp_op", "not_op", "=", "$",
        ])

    def test_keywords_literals_and_punctuation(self):
        tokens = tokenize_string("fn f(a, 'x') { return 1.5; }")

        self.assertEqual([token_to_terminal(t) for t in tokens], [
            "fn", "identifier", "(", "identifier", ",", "string", ")",
            "{", "return", "number", ";", "}", "$",
        ])

    def test_unknown_operator_lexeme(self):
        location = SourceLocation("<test>", 1, 3, 2)
        token = Token(TokenType.BINARY_OPERATOR, "&&", None, location)

        self.assertEqual(token_to_terminal(token), UNKNOWN_OPERATOR)
        self.assertNotEqual(token_to_terminal(token), "not_op")

    def test_unknown_operator_is_a_syntax_error(self):
        tokens = tokenize_string("a b")
        location = tokens[1].location
        tokens[1] = Token(TokenType.BINARY_OPERATOR, "&&", None, location)

        with self.assertRaises(ParseError) as ctx:
            parse(tokens, language_analysis().require_ll1())

        self.assertEqual(ctx.exception.kind, SyntaxErrorKind.NO_PRODUCTION)
        self.assertEqual(ctx.exception.position, 1)


if __name__ == '__main__':
    unittest.main()
