"""
Abstract Syntax Tree (AST) Definitions
======================================

This module defines the AST node types produced by the parser. The tree
is canonical: syntactic sugar (compound assignment, `++`/`--`, `for`
loops, parenthesized grouping) never appears in it, so consumers only
deal with the primitive node kinds below.

Node Hierarchy
--------------
ASTNode (base)
├── Program - root node containing all declarations
├── Declarations
│   ├── LetDecl - variable declaration
│   ├── FnDecl - function declaration
│   └── ClassDecl - class with methods
├── Statements
│   ├── ExprStmt - expression as statement
│   ├── Block - { ... }, a lexical scope boundary
│   ├── Return - return statement (value is mandatory)
│   ├── Print - print statement
│   ├── If - if/else statement
│   └── While - while loop (also the lowering target of `for`)
└── Expressions
    ├── Assign - assignment to a bare name
    ├── Logical - short-circuit `and` / `or`
    ├── Binary - arithmetic, comparison and equality operators
    ├── Unary - `!` and unary `-`
    ├── Call - function call
    ├── Literal - number, string, boolean or null constant
    └── Variable - variable reference

Design Notes
------------
- All nodes are frozen dataclasses; sequences are tuples
- Each node stores its source location, excluded from equality so two
  trees compare equal when their structure matches
- `Expression`, `Statement` and `Declaration` are Union aliases of the
  closed variant sets
"""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum, auto
from typing import Any, Optional, Union
import math

from lcfront.errors import SourceLocation


# =============================================================================
# AST Node Base Class
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts. Not part of
                  node equality.
    """
    location: SourceLocation = field(compare=False, repr=False)


# =============================================================================
# Operators
# =============================================================================

class BinaryOperator(Enum):
    """Binary operators, grouped by precedence tier."""
    # Equality
    EQUAL = auto()          # ==
    NOT_EQUAL = auto()      # !=
    # Comparison
    LESS = auto()           # <
    LESS_EQUAL = auto()     # <=
    GREATER = auto()        # >
    GREATER_EQUAL = auto()  # >=
    # Term
    ADD = auto()            # +
    SUBTRACT = auto()       # -
    # Factor
    MULTIPLY = auto()       # *
    DIVIDE = auto()         # /

    @property
    def symbol(self) -> str:
        return _BINARY_SYMBOLS[self]


class LogicalOperator(Enum):
    """Short-circuit operators."""
    AND = auto()
    OR = auto()

    @property
    def symbol(self) -> str:
        return "and" if self is LogicalOperator.AND else "or"


class UnaryOperator(Enum):
    """Prefix operators."""
    NOT = auto()     # !
    NEGATE = auto()  # -

    @property
    def symbol(self) -> str:
        return "!" if self is UnaryOperator.NOT else "-"


_BINARY_SYMBOLS = {
    BinaryOperator.EQUAL: "==",
    BinaryOperator.NOT_EQUAL: "!=",
    BinaryOperator.LESS: "<",
    BinaryOperator.LESS_EQUAL: "<=",
    BinaryOperator.GREATER: ">",
    BinaryOperator.GREATER_EQUAL: ">=",
    BinaryOperator.ADD: "+",
    BinaryOperator.SUBTRACT: "-",
    BinaryOperator.MULTIPLY: "*",
    BinaryOperator.DIVIDE: "/",
}


class LiteralKind(Enum):
    """
    Tag for literal constants.

    Kept separate from the Python value so that `true` and `1` never
    compare equal.
    """
    NUMBER = auto()
    STRING = auto()
    BOOL = auto()
    NULL = auto()


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class Assign(ASTNode):
    """
    Assignment expression: name = value

    Also the lowering target for compound assignment and `++`/`--`.
    Its value is the newly assigned value.
    """
    name: str = ""
    value: "Expression" = None


@dataclass(frozen=True)
class Logical(ASTNode):
    """Short-circuit expression: left and/or right"""
    operator: LogicalOperator = LogicalOperator.AND
    left: "Expression" = None
    right: "Expression" = None


@dataclass(frozen=True)
class Binary(ASTNode):
    """Binary operation: left op right"""
    operator: BinaryOperator = BinaryOperator.ADD
    left: "Expression" = None
    right: "Expression" = None


@dataclass(frozen=True)
class Unary(ASTNode):
    """Unary operation: op operand"""
    operator: UnaryOperator = UnaryOperator.NEGATE
    operand: "Expression" = None


@dataclass(frozen=True)
class Call(ASTNode):
    """Function call: callee(arguments...)"""
    callee: "Expression" = None
    arguments: tuple["Expression", ...] = ()


@dataclass(frozen=True)
class Literal(ASTNode):
    """
    Constant value.

    Attributes:
        kind: Which kind of constant
        value: float for NUMBER, str for STRING, bool for BOOL,
               None for NULL
    """
    kind: LiteralKind = LiteralKind.NULL
    value: Union[float, str, bool, None] = None


@dataclass(frozen=True)
class Variable(ASTNode):
    """Reference to a named variable."""
    name: str = ""


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class ExprStmt(ASTNode):
    """Expression evaluated for its side effects."""
    expression: "Expression" = None


@dataclass(frozen=True)
class Block(ASTNode):
    """Braced sequence of declarations; a lexical scope boundary."""
    declarations: tuple["Declaration", ...] = ()


@dataclass(frozen=True)
class Return(ASTNode):
    """Return statement. The value is mandatory."""
    value: "Expression" = None


@dataclass(frozen=True)
class Print(ASTNode):
    expression: "Expression" = None


@dataclass(frozen=True)
class If(ASTNode):
    """
    If statement with optional else branch.

    A dangling else always belongs to the nearest unmatched if.
    """
    condition: "Expression" = None
    then_branch: "Statement" = None
    else_branch: Optional["Statement"] = None


@dataclass(frozen=True)
class While(ASTNode):
    condition: "Expression" = None
    body: "Statement" = None


# =============================================================================
# Declaration Nodes
# =============================================================================

@dataclass(frozen=True)
class LetDecl(ASTNode):
    """
    Variable declaration: let name = initializer;

    A declaration without an initializer carries a null literal.
    """
    name: str = ""
    initializer: "Expression" = None


@dataclass(frozen=True)
class FnDecl(ASTNode):
    """Function declaration: fn name(params) { body }"""
    name: str = ""
    params: tuple[str, ...] = ()
    body: Block = None


@dataclass(frozen=True)
class ClassDecl(ASTNode):
    """Class declaration. The body holds methods only."""
    name: str = ""
    methods: tuple[FnDecl, ...] = ()


# =============================================================================
# Program Root Node
# =============================================================================

@dataclass(frozen=True)
class Program(ASTNode):
    """Root node: the ordered top-level declarations of one source."""
    declarations: tuple["Declaration", ...] = ()


# =============================================================================
# Variant Sets
# =============================================================================

Expression = Union[Assign, Logical, Binary, Unary, Call, Literal, Variable]
Statement = Union[ExprStmt, Block, Return, Print, If, While]
Declaration = Union[LetDecl, FnDecl, ClassDecl, Statement]

EXPRESSION_TYPES = (Assign, Logical, Binary, Unary, Call, Literal, Variable)
STATEMENT_TYPES = (ExprStmt, Block, Return, Print, If, While)
DECLARATION_TYPES = (LetDecl, FnDecl, ClassDecl) + STATEMENT_TYPES


# =============================================================================
# AST Visitor
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Provides a visitor pattern for traversing the AST. Subclasses
    override visit_* methods for specific node types they care about.

    Usage:
        class NameCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_Variable(self, node):
                self.names.append(node.name)

        collector = NameCollector()
        collector.visit(program)
    """

    def visit(self, node: ASTNode) -> Any:
        """
        Visit a node by dispatching to the appropriate method.

        Args:
            node: The AST node to visit

        Returns:
            The result of the visit method (varies by node type)
        """
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """
        Default visit method for unhandled node types.

        Visits all children of the node in field order.
        """
        for node_field in fields(node):
            value = getattr(node, node_field.name)
            if isinstance(value, ASTNode):
                self.visit(value)
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Produces an indented, human-readable representation of the tree.

    Usage:
        printer = ASTPrinter()
        output = printer.print(program)
        print(output)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        """Emit a line with current indentation."""
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def _visit_children(self, nodes) -> None:
        self._indent()
        for child in nodes:
            self.visit(child)
        self._dedent()

    # -------------------------------------------------------------------------
    # Declarations and statements
    # -------------------------------------------------------------------------

    def visit_Program(self, node: Program):
        self._emit("Program")
        self._visit_children(node.declarations)

    def visit_LetDecl(self, node: LetDecl):
        self._emit(f"Let {node.name} = {self._expr_str(node.initializer)}")

    def visit_FnDecl(self, node: FnDecl):
        self._emit(f"Fn {node.name}({', '.join(node.params)})")
        self._visit_children(node.body.declarations)

    def visit_ClassDecl(self, node: ClassDecl):
        self._emit(f"Class {node.name}")
        self._visit_children(node.methods)

    def visit_Block(self, node: Block):
        self._emit("Block")
        self._visit_children(node.declarations)

    def visit_ExprStmt(self, node: ExprStmt):
        self._emit(f"Expr: {self._expr_str(node.expression)}")

    def visit_Print(self, node: Print):
        self._emit(f"Print {self._expr_str(node.expression)}")

    def visit_Return(self, node: Return):
        self._emit(f"Return {self._expr_str(node.value)}")

    def visit_If(self, node: If):
        self._emit(f"If {self._expr_str(node.condition)}")
        self._indent()
        self._emit("Then:")
        self._visit_children([node.then_branch])
        if node.else_branch is not None:
            self._emit("Else:")
            self._visit_children([node.else_branch])
        self._dedent()

    def visit_While(self, node: While):
        self._emit(f"While {self._expr_str(node.condition)}")
        self._visit_children([node.body])

    def generic_visit(self, node: ASTNode) -> None:
        if isinstance(node, EXPRESSION_TYPES):
            self._emit(self._expr_str(node))
            return
        raise TypeError(f"unknown AST node: {type(node).__name__}")

    # -------------------------------------------------------------------------
    # Expressions (fully parenthesized, one line)
    # -------------------------------------------------------------------------

    def _expr_str(self, expr: ASTNode) -> str:
        """Convert expression to a fully parenthesized string."""
        if isinstance(expr, Literal):
            if expr.kind == LiteralKind.STRING:
                return f'"{expr.value}"'
            if expr.kind == LiteralKind.BOOL:
                return "true" if expr.value else "false"
            if expr.kind == LiteralKind.NULL:
                return "null"
            return format_number(expr.value)
        if isinstance(expr, Variable):
            return expr.name
        if isinstance(expr, Assign):
            return f"({expr.name} = {self._expr_str(expr.value)})"
        if isinstance(expr, (Binary, Logical)):
            return (
                f"({self._expr_str(expr.left)} {expr.operator.symbol} "
                f"{self._expr_str(expr.right)})"
            )
        if isinstance(expr, Unary):
            return f"({expr.operator.symbol}{self._expr_str(expr.operand)})"
        if isinstance(expr, Call):
            args = ", ".join(self._expr_str(a) for a in expr.arguments)
            return f"{self._expr_str(expr.callee)}({args})"
        raise TypeError(f"unknown expression node: {type(expr).__name__}")


def format_number(value: float) -> str:
    """
    Render a number literal in plain decimal notation.

    The result is digits with an optional fraction, the only form the
    scanner reads back as a single number: `1e+20` prints as
    `100000000000000000000`, `1e-07` as `0.0000001`, and integral values
    drop their `.0`.

    Raises:
        ValueError: If the value is infinite or NaN
    """
    if not math.isfinite(value):
        raise ValueError(f"number literal has no source form: {value!r}")

    text = format(Decimal(repr(value)), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text
