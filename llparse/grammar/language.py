"""
The LL(1) grammar of the scripting language and its token->terminal mapping.

Binary chains are written right-recursively through tail nonterminals
(``AddExpr -> MulExpr AddTail``, ``AddTail -> add_op AddExpr | ε``) so the
grammar stays LL(1). The AST converter re-associates those chains to the
left. Operator tokens are mapped to one terminal per precedence class;
without that split every tail would start with the same terminal and the
table would conflict.
"""

from functools import lru_cache

from ..lexer.tokens import (
    Token, TokenType, ADDITIVE_OPERATORS, MULTIPLICATIVE_OPERATORS, COMPARISON_OPERATORS,
    UNARY_ONLY_OPERATORS,
)
from .analysis import GrammarAnalysis, analyze
from .model import EPSILON, END_MARKER, Grammar, Terminal

ADD_OP = "add_op"
MUL_OP = "mul_op"
COMP_OP = "comp_op"
NOT_OP = "not_op"

# operator lexemes outside every precedence class; no production references it
UNKNOWN_OPERATOR = "binary_operator"

OPERATOR_TERMINALS = frozenset({ADD_OP, MUL_OP, COMP_OP, NOT_OP})

TERMINALS = frozenset({
    "identifier", "number", "string",
    "let", "const", "fn", "if", "else", "while", "for",
    "return", "break", "continue",
    "=", ";", "(", ")", "{", "}", "[", "]", ",", ":", ".",
}) | OPERATOR_TERMINALS

E = EPSILON

RULES = [
    # Program structure
    ("Program", "StmtList"),
    ("StmtList", "Stmt StmtList"),
    ("StmtList", E),

    # Statements
    ("Stmt", "VarDecl"),
    ("Stmt", "FnDecl"),
    ("Stmt", "IfStmt"),
    ("Stmt", "WhileStmt"),
    ("Stmt", "ForStmt"),
    ("Stmt", "ReturnStmt"),
    ("Stmt", "BreakStmt"),
    ("Stmt", "ContinueStmt"),
    ("Stmt", "ExprStmt"),

    # Declarations
    ("VarDecl", "let identifier VarInit"),
    ("VarDecl", "const identifier = Expr ;"),
    ("VarInit", "= Expr ;"),
    ("VarInit", ";"),
    ("FnDecl", "fn identifier ( Params ) { Block }"),
    ("Params", "identifier ParamTail"),
    ("Params", E),
    ("ParamTail", ", identifier ParamTail"),
    ("ParamTail", E),

    # Control flow
    ("IfStmt", "if ( Expr ) { Block } ElseClause"),
    ("ElseClause", "else { Block }"),
    ("ElseClause", E),
    ("WhileStmt", "while ( Expr ) { Block }"),
    ("ForStmt", "for ( ForInit OptExpr ; OptExpr ) { Block }"),
    ("ForInit", "VarDecl"),
    ("ForInit", "ExprStmt"),
    ("ForInit", ";"),
    ("OptExpr", "Expr"),
    ("OptExpr", E),
    ("ReturnStmt", "return OptExpr ;"),
    ("BreakStmt", "break ;"),
    ("ContinueStmt", "continue ;"),
    ("ExprStmt", "Expr ;"),
    ("Block", "StmtList"),

    # Expression ladder: assignment > comparison > additive > multiplicative
    # > unary > call > member > primary
    ("Expr", "AssignExpr"),
    ("AssignExpr", "CompExpr AssignTail"),
    ("AssignTail", "= AssignExpr"),
    ("AssignTail", E),
    ("CompExpr", "AddExpr CompTail"),
    ("CompTail", f"{COMP_OP} CompExpr"),
    ("CompTail", E),
    ("AddExpr", "MulExpr AddTail"),
    ("AddTail", f"{ADD_OP} AddExpr"),
    ("AddTail", E),
    ("MulExpr", "UnaryExpr MulTail"),
    ("MulTail", f"{MUL_OP} MulExpr"),
    ("MulTail", E),
    ("UnaryExpr", f"{ADD_OP} UnaryExpr"),
    ("UnaryExpr", f"{NOT_OP} UnaryExpr"),
    ("UnaryExpr", "CallExpr"),
    ("CallExpr", "MemberExpr CallTail"),
    ("CallTail", "( Args ) CallTail"),
    ("CallTail", E),
    ("MemberExpr", "PrimaryExpr MemberTail"),
    ("MemberTail", ". identifier MemberTail"),
    ("MemberTail", "[ Expr ] MemberTail"),
    ("MemberTail", E),
    ("PrimaryExpr", "identifier"),
    ("PrimaryExpr", "number"),
    ("PrimaryExpr", "string"),
    ("PrimaryExpr", "( Expr )"),
    ("PrimaryExpr", "ObjLiteral"),
    ("PrimaryExpr", "ArrayLiteral"),

    # Call arguments
    ("Args", "Expr ArgsTail"),
    ("Args", E),
    ("ArgsTail", ", Expr ArgsTail"),
    ("ArgsTail", E),

    # Object literals; trailing comma allowed
    ("ObjLiteral", "{ PropList }"),
    ("PropList", "Prop PropTail"),
    ("PropList", E),
    ("PropTail", ", PropList"),
    ("PropTail", E),
    ("Prop", "identifier PropValue"),
    ("PropValue", ": Expr"),
    ("PropValue", E),

    # Array literals; trailing comma allowed
    ("ArrayLiteral", "[ Elements ]"),
    ("Elements", "Expr ElementsTail"),
    ("Elements", E),
    ("ElementsTail", ", Elements"),
    ("ElementsTail", E),
]

LANGUAGE_GRAMMAR = Grammar.from_rules(
    "Program", RULES, terminals=TERMINALS, operator_terminals=OPERATOR_TERMINALS
)

_TYPE_TERMINALS = {
    TokenType.NUMBER: "number",
    TokenType.STRING: "string",
    TokenType.IDENTIFIER: "identifier",
    TokenType.LET: "let",
    TokenType.CONST: "const",
    TokenType.FN: "fn",
    TokenType.IF: "if",
    TokenType.ELSE: "else",
    TokenType.WHILE: "while",
    TokenType.FOR: "for",
    TokenType.RETURN: "return",
    TokenType.BREAK: "break",
    TokenType.CONTINUE: "continue",
    TokenType.EQUALS: "=",
    TokenType.SEMICOLON: ";",
    TokenType.LEFT_PAREN: "(",
    TokenType.RIGHT_PAREN: ")",
    TokenType.LEFT_BRACE: "{",
    TokenType.RIGHT_BRACE: "}",
    TokenType.LEFT_BRACKET: "[",
    TokenType.RIGHT_BRACKET: "]",
    TokenType.COMMA: ",",
    TokenType.COLON: ":",
    TokenType.DOT: ".",
    TokenType.EOF: END_MARKER,
}


def operator_class(lexeme: str) -> Terminal:
    """
    Precedence-class terminal for an operator lexeme.

    Lexemes the language does not define map to ``UNKNOWN_OPERATOR``.
    """
    if lexeme in ADDITIVE_OPERATORS:
        return ADD_OP
    if lexeme in MULTIPLICATIVE_OPERATORS:
        return MUL_OP
    if lexeme in COMPARISON_OPERATORS:
        return COMP_OP
    if lexeme in UNARY_ONLY_OPERATORS:
        return NOT_OP
    return UNKNOWN_OPERATOR


def token_to_terminal(token: Token) -> Terminal:
    """
    Map a token to the grammar terminal it stands for.

    Total: a token type with no dedicated terminal maps to its lower-cased
    type name, which no production references, so the parser rejects it
    with an ordinary syntax error.
    """
    if token.type == TokenType.BINARY_OPERATOR:
        return operator_class(token.lexeme)
    terminal = _TYPE_TERMINALS.get(token.type)
    if terminal is None:
        return token.type.name.lower()
    return terminal


@lru_cache(maxsize=None)
def language_analysis() -> GrammarAnalysis:
    """Analysis of ``LANGUAGE_GRAMMAR``, computed once per process."""
    return analyze(LANGUAGE_GRAMMAR)
