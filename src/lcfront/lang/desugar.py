"""
Desugaring Transforms
=====================

Pure functions that lower surface sugar into canonical AST nodes. The
parser calls them at the moment it recognizes the sugar; there is no
separate lowering pass, so a `for` loop or `x += 1` never exists as a
node.

Lowerings
---------
    x += e          Assign(x, Binary(Variable(x), +, e))     (-=, *=, /= alike)
    x++             Assign(x, Binary(Variable(x), +, 1))
    x--             Assign(x, Binary(Variable(x), -, 1))
    for (I; C; U) S Block[I, While(C or true, Block[S, ExprStmt(U)])]

`x++` evaluates to the updated value because it is an assignment.
"""

from typing import Optional

from lcfront.errors import SourceLocation
from lcfront.lang.ast import (
    Assign,
    Binary,
    BinaryOperator,
    Block,
    Declaration,
    Expression,
    ExprStmt,
    Literal,
    LiteralKind,
    Statement,
    Variable,
    While,
)
from lcfront.lang.lexer import Token, TokenType


COMPOUND_OPERATORS = {
    TokenType.PLUS_EQUAL: BinaryOperator.ADD,
    TokenType.MINUS_EQUAL: BinaryOperator.SUBTRACT,
    TokenType.STAR_EQUAL: BinaryOperator.MULTIPLY,
    TokenType.SLASH_EQUAL: BinaryOperator.DIVIDE,
}

STEP_OPERATORS = {
    TokenType.PLUS_PLUS: BinaryOperator.ADD,
    TokenType.MINUS_MINUS: BinaryOperator.SUBTRACT,
}


def _lookup(table: dict, operator_token: Token) -> BinaryOperator:
    try:
        return table[operator_token.type]
    except KeyError:
        raise ValueError(
            f"{operator_token.lexeme!r} is not a desugarable operator"
        ) from None


def desugar_compound_assignment(
    target_token: Token,
    operator_token: Token,
    value: Expression,
) -> Assign:
    """
    Lower `name op= value` to `name = name op value`.

    Args:
        target_token: IDENTIFIER token naming the variable
        operator_token: One of += -= *= /=
        value: The already parsed right-hand side

    Raises:
        ValueError: If operator_token is not a compound assignment operator
    """
    operator = _lookup(COMPOUND_OPERATORS, operator_token)
    name = target_token.lexeme
    location = target_token.location
    return Assign(
        location,
        name,
        Binary(location, operator, Variable(location, name), value),
    )


def desugar_increment(target_token: Token, operator_token: Token) -> Assign:
    """
    Lower postfix `name++` / `name--` to `name = name +/- 1`.

    Raises:
        ValueError: If operator_token is not ++ or --
    """
    operator = _lookup(STEP_OPERATORS, operator_token)
    name = target_token.lexeme
    location = target_token.location
    one = Literal(operator_token.location, LiteralKind.NUMBER, 1.0)
    return Assign(
        location,
        name,
        Binary(location, operator, Variable(location, name), one),
    )


def desugar_for(
    initializer: Optional[Declaration],
    condition: Optional[Expression],
    increment: Optional[Expression],
    body: Statement,
    location: SourceLocation,
) -> Statement:
    """
    Lower a `for` loop to a while loop.

    The loop body is always wrapped in a Block, with the increment
    appended when present. A missing condition becomes `true`. When an
    initializer is present the whole loop is wrapped in an outer Block
    so the loop variable is scoped to it.

    Args:
        initializer: LetDecl or ExprStmt, or None when omitted
        condition: Loop condition, or None when omitted
        increment: Expression evaluated after each iteration, or None
        body: The loop body statement
        location: Location of the `for` keyword

    Returns:
        A While statement, or a Block wrapping the initializer and loop
    """
    inner: tuple = (body,)
    if increment is not None:
        inner = (body, ExprStmt(increment.location, increment))

    if condition is None:
        condition = Literal(location, LiteralKind.BOOL, True)

    loop = While(location, condition, Block(location, inner))

    if initializer is None:
        return loop
    return Block(location, (initializer, loop))
