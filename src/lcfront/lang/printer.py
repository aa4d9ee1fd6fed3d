"""
Source Printer
==============

Renders a canonical AST back to source text. Parentheses are inserted
only where precedence or associativity require them, so parsing the
output yields a tree equal to the one printed.

The output never contains `for`, compound assignment or `++`/`--`; those
forms do not exist in the tree.

Example:
    >>> from lcfront.lang.parser import parse_source
    >>> print(format_program(parse_source("for (let i = 0; i < 3; i++) print i;")))
    {
        let i = 0;
        while (i < 3) {
            print i;
            i = i + 1;
        }
    }
"""

from lcfront.lang.ast import (
    ASTNode,
    ASTVisitor,
    Assign,
    Binary,
    BinaryOperator,
    Block,
    Call,
    ClassDecl,
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
    Variable,
    While,
    format_number,
)


# Binding strength of each expression form. Higher binds tighter.
ASSIGNMENT = 1
OR = 2
AND = 3
EQUALITY = 4
COMPARISON = 5
TERM = 6
FACTOR = 7
UNARY = 8
CALL = 9
PRIMARY = 10

BINARY_LEVELS = {
    BinaryOperator.EQUAL: EQUALITY,
    BinaryOperator.NOT_EQUAL: EQUALITY,
    BinaryOperator.LESS: COMPARISON,
    BinaryOperator.LESS_EQUAL: COMPARISON,
    BinaryOperator.GREATER: COMPARISON,
    BinaryOperator.GREATER_EQUAL: COMPARISON,
    BinaryOperator.ADD: TERM,
    BinaryOperator.SUBTRACT: TERM,
    BinaryOperator.MULTIPLY: FACTOR,
    BinaryOperator.DIVIDE: FACTOR,
}


class SourcePrinter(ASTVisitor):
    """
    Prints declarations and statements as indented source code.

    Usage:
        printer = SourcePrinter()
        text = printer.print(program)
    """

    def __init__(self, indent: str = "    "):
        self.indent = indent
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Render a Program, declaration or statement."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        self.output.append(f"{self.indent * self.indent_level}{text}")

    def _body(self, header: str, body: Statement) -> None:
        """Emit `header` followed by a statement body."""
        if isinstance(body, Block):
            self._emit(f"{header} {{")
            self._declarations(body.declarations)
            self._emit("}")
        else:
            self._emit(header)
            self.indent_level += 1
            self.visit(body)
            self.indent_level -= 1

    def _declarations(self, declarations) -> None:
        self.indent_level += 1
        for declaration in declarations:
            self.visit(declaration)
        self.indent_level -= 1

    def generic_visit(self, node: ASTNode) -> None:
        raise TypeError(f"cannot print AST node: {type(node).__name__}")

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def visit_Program(self, node: Program):
        for declaration in node.declarations:
            self.visit(declaration)

    def visit_LetDecl(self, node: LetDecl):
        self._emit(f"let {node.name} = {format_expression(node.initializer)};")

    def visit_FnDecl(self, node: FnDecl, keyword: str = "fn "):
        self._body(f"{keyword}{node.name}({', '.join(node.params)})", node.body)

    def visit_ClassDecl(self, node: ClassDecl):
        self._emit(f"class {node.name} {{")
        self.indent_level += 1
        for method in node.methods:
            self.visit_FnDecl(method, keyword="")
        self.indent_level -= 1
        self._emit("}")

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def visit_Block(self, node: Block):
        self._emit("{")
        self._declarations(node.declarations)
        self._emit("}")

    def visit_ExprStmt(self, node: ExprStmt):
        self._emit(f"{format_expression(node.expression)};")

    def visit_Print(self, node: Print):
        self._emit(f"print {format_expression(node.expression)};")

    def visit_Return(self, node: Return):
        self._emit(f"return {format_expression(node.value)};")

    def visit_While(self, node: While):
        self._body(f"while ({format_expression(node.condition)})", node.body)

    def visit_If(self, node: If, prefix: str = ""):
        self._body(f"{prefix}if ({format_expression(node.condition)})", node.then_branch)
        if node.else_branch is None:
            return
        if isinstance(node.else_branch, If):
            self.visit_If(node.else_branch, prefix="else ")
        else:
            self._body("else", node.else_branch)


# =============================================================================
# Expressions
# =============================================================================

def _render(expr: Expression) -> tuple[str, int]:
    """Return the text of an expression and its binding level."""
    if isinstance(expr, Literal):
        if expr.kind == LiteralKind.NUMBER:
            return format_number(expr.value), PRIMARY
        if expr.kind == LiteralKind.STRING:
            return f'"{expr.value}"', PRIMARY
        if expr.kind == LiteralKind.BOOL:
            return ("true" if expr.value else "false"), PRIMARY
        return "null", PRIMARY

    if isinstance(expr, Variable):
        return expr.name, PRIMARY

    if isinstance(expr, Assign):
        return f"{expr.name} = {_operand(expr.value, ASSIGNMENT)}", ASSIGNMENT

    if isinstance(expr, Logical):
        level = OR if expr.operator == LogicalOperator.OR else AND
        return _infix(expr, level), level

    if isinstance(expr, Binary):
        level = BINARY_LEVELS[expr.operator]
        return _infix(expr, level), level

    if isinstance(expr, Unary):
        operand = _operand(expr.operand, UNARY)
        # "- -x" must not collapse into the "--" token
        if expr.operator.symbol == "-" and operand.startswith("-"):
            operand = f" {operand}"
        return f"{expr.operator.symbol}{operand}", UNARY

    if isinstance(expr, Call):
        args = ", ".join(_operand(arg, ASSIGNMENT) for arg in expr.arguments)
        return f"{_operand(expr.callee, CALL)}({args})", CALL

    raise TypeError(f"cannot print expression node: {type(expr).__name__}")


def _infix(expr, level: int) -> str:
    # Left associative: only the right operand needs parentheses at equal level
    left = _operand(expr.left, level)
    right = _operand(expr.right, level + 1)
    return f"{left} {expr.operator.symbol} {right}"


def _operand(expr: Expression, min_level: int) -> str:
    text, level = _render(expr)
    if level < min_level:
        return f"({text})"
    return text


def format_expression(expr: Expression) -> str:
    """Render an expression with minimal parentheses."""
    return _render(expr)[0]


def format_program(program: Program) -> str:
    """Render a whole program, one declaration per line group."""
    return SourcePrinter().print(program)
