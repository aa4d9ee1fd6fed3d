"""
Language Front End
==================

Scanner, parser and AST for a small imperative scripting language with
functions, classes, `let` bindings and C-like control flow.

Pipeline
--------
    Source → Scanner → Tokens → Parser → canonical AST

The parser lowers syntactic sugar as it goes: compound assignment,
postfix `++`/`--` and `for` loops come out as plain assignments and
while loops, so consumers of the tree handle only a small set of node
kinds.

Usage
-----
>>> from lcfront.lang import parse_source, format_program
>>> program = parse_source("let total = 0; total += 5;")
>>> print(format_program(program))
let total = 0;
total = total + 5;
"""

from lcfront.lang.ast import (
    ASTNode,
    ASTPrinter,
    ASTVisitor,
    Assign,
    Binary,
    BinaryOperator,
    Block,
    Call,
    ClassDecl,
    Declaration,
    Expression,
    ExprStmt,
    FnDecl,
    If,
    LetDecl,
    Literal,
    LiteralKind,
    Logical,
    LogicalOperator,
    Print,
    Program,
    Return,
    Statement,
    Unary,
    UnaryOperator,
    Variable,
    While,
)
from lcfront.lang.errors import (
    Diagnostic,
    ErrorCollector,
    ErrorKind,
    InvalidAssignmentTargetError,
    LangError,
    LangSyntaxError,
    MissingExpressionError,
    ParseFailure,
    ScanError,
    TooManyArgumentsError,
    TrailingTokensError,
    UnexpectedTokenError,
    UnterminatedBlockError,
)
from lcfront.lang.frontend import Frontend, FrontendOptions, FrontendResult
from lcfront.lang.lexer import Scanner, Token, TokenCategory, TokenType
from lcfront.lang.parser import (
    Parser,
    ParserOptions,
    parse_expression_source,
    parse_source,
)
from lcfront.lang.printer import SourcePrinter, format_expression, format_program


__all__ = [
    # Main API
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
    "Parser",
    "ParserOptions",
    "parse_source",
    "parse_expression_source",
    # Errors
    "LangError",
    "LangSyntaxError",
    "ScanError",
    "UnexpectedTokenError",
    "InvalidAssignmentTargetError",
    "UnterminatedBlockError",
    "MissingExpressionError",
    "TrailingTokensError",
    "TooManyArgumentsError",
    "ParseFailure",
    "ErrorKind",
    "Diagnostic",
    "ErrorCollector",
    # Scanner
    "Scanner",
    "Token",
    "TokenType",
    "TokenCategory",
    # Printing
    "SourcePrinter",
    "format_program",
    "format_expression",
    # AST Nodes
    "ASTNode",
    "ASTVisitor",
    "ASTPrinter",
    "Program",
    "LetDecl",
    "FnDecl",
    "ClassDecl",
    "ExprStmt",
    "Block",
    "Return",
    "Print",
    "If",
    "While",
    "Assign",
    "Logical",
    "Binary",
    "Unary",
    "Call",
    "Literal",
    "Variable",
    "BinaryOperator",
    "LogicalOperator",
    "UnaryOperator",
    "LiteralKind",
    "Expression",
    "Statement",
    "Declaration",
]
