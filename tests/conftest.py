"""
Test Configuration
==================

Shared fixtures and helpers for the lcfront test suite.
"""

import pytest

from lcfront.errors import SourceLocation
from lcfront.lang.ast import (
    Assign,
    Binary,
    BinaryOperator,
    Literal,
    LiteralKind,
    Variable,
)
from lcfront.lang.errors import ParseFailure
from lcfront.lang.parser import parse_source


# Location for hand-built trees. Node equality ignores locations.
LOC = SourceLocation("<test>", 1, 1)


def num(value: float) -> Literal:
    return Literal(LOC, LiteralKind.NUMBER, float(value))


def var(name: str) -> Variable:
    return Variable(LOC, name)


def binary(left, operator: BinaryOperator, right) -> Binary:
    return Binary(LOC, operator, left, right)


def assign(name: str, value) -> Assign:
    return Assign(LOC, name, value)


@pytest.fixture
def parse_failure():
    """Parse source that must fail and return the ParseFailure."""
    def _parse(source: str) -> ParseFailure:
        with pytest.raises(ParseFailure) as exc_info:
            parse_source(source, "test.lc")
        return exc_info.value
    return _parse


@pytest.fixture
def write_source(tmp_path):
    """Write a source file under a temporary directory and return its path."""
    def _write(text: str, name: str = "script.lc"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
