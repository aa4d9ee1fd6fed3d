"""
AST Tests
=========

Tests for node equality, immutability, the visitor and the tree dump.
"""

import dataclasses

import pytest

from conftest import LOC, num, var
from lcfront.errors import SourceLocation
from lcfront.lang.ast import (
    ASTPrinter,
    ASTVisitor,
    Literal,
    LiteralKind,
    Variable,
)
from lcfront.lang.parser import parse_source


class TestNodes:
    """Tests for node value semantics."""

    def test_equality_ignores_location(self):
        assert Variable(SourceLocation("a.lc", 1, 1), "x") == Variable(SourceLocation("b.lc", 9, 9), "x")

    def test_equality_compares_fields(self):
        assert var("x") != var("y")

    def test_literal_kind_distinguishes_values(self):
        """`true` and `1` hold equal Python values but are different literals."""
        assert Literal(LOC, LiteralKind.BOOL, True) != num(1)

    def test_nodes_are_immutable(self):
        node = var("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.name = "y"

    def test_sequences_are_tuples(self):
        program = parse_source("fn f(a) { print a; }")
        assert isinstance(program.declarations, tuple)
        assert isinstance(program.declarations[0].params, tuple)
        assert isinstance(program.declarations[0].body.declarations, tuple)

    def test_nodes_are_hashable(self):
        assert len({var("x"), var("x"), var("y")}) == 2


class TestVisitor:
    """Tests for ASTVisitor dispatch and traversal."""

    def test_generic_visit_reaches_every_variable(self):
        class NameCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_Variable(self, node):
                self.names.append(node.name)

        collector = NameCollector()
        collector.visit(parse_source("let a = b + c(d); if (e) print f; else { g = h; }"))
        assert collector.names == ["b", "c", "d", "e", "f", "h"]

    def test_specific_method_wins(self):
        class Counter(ASTVisitor):
            def visit_Literal(self, node):
                return "literal"

        assert Counter().visit(num(1)) == "literal"


class TestASTPrinter:
    """Tests for the indented tree dump."""

    def test_let(self):
        output = ASTPrinter().print(parse_source("let x = 1 + 2 * y;"))
        assert output == "Program\n  Let x = (1 + (2 * y))"

    def test_function(self):
        output = ASTPrinter().print(parse_source("fn add(a, b) { return a + b; }"))
        assert output == "Program\n  Fn add(a, b)\n    Return (a + b)"

    def test_if_else(self):
        output = ASTPrinter().print(parse_source("if (a) print 1; else print 2;"))
        assert output.splitlines() == [
            "Program",
            "  If a",
            "    Then:",
            "      Print 1",
            "    Else:",
            "      Print 2",
        ]

    def test_lowered_for(self):
        output = ASTPrinter().print(parse_source("for (;;) x++;"))
        assert output.splitlines() == [
            "Program",
            "  While true",
            "    Block",
            "      Expr: (x = (x + 1))",
        ]

    def test_class_and_literals(self):
        output = ASTPrinter().print(parse_source('class C { m() { print "s"; print null; } }'))
        assert output.splitlines() == [
            "Program",
            "  Class C",
            "    Fn m()",
            '      Print "s"',
            "      Print null",
        ]

    def test_expression_node(self):
        assert ASTPrinter().print(parse_source("-f(1, x);").declarations[0].expression) == "(-f(1, x))"
