"""
lcfront - Parser Front End for a Small Scripting Language
=========================================================

This package turns source text of a small imperative scripting language
into a canonical abstract syntax tree, reporting every syntax error it
can find in one pass.

Main Components
---------------
- **lang**: scanner, parser, AST, desugaring and source printer
    Converts source files (.lc) into a Program tree

- **cli**: command-line tools (lcparse)
    Dumps the tree or the canonical source of a file

Quick Start
-----------
Parse a program:
    >>> from lcfront import parse_source
    >>> program = parse_source("for (let i = 0; i < 3; i++) print i;")
    >>> len(program.declarations)
    1

Collect diagnostics instead of raising:
    >>> from lcfront import Frontend, FrontendOptions
    >>> result = Frontend(FrontendOptions(partial_ast=True)).parse_source("5 = 3;")
    >>> [d.kind.value for d in result.diagnostics]
    ['invalid-assignment-target']

Or use the command-line tool:
    $ lcparse script.lc
    $ lcparse script.lc --format
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from lcfront.errors import LcError, SourceLocation
from lcfront.lang import (
    Frontend,
    FrontendOptions,
    FrontendResult,
    ParseFailure,
    Parser,
    ParserOptions,
    Program,
    Scanner,
    format_program,
    parse_expression_source,
    parse_source,
)

__all__ = [
    "__version__",
    "LcError",
    "SourceLocation",
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
    "ParseFailure",
    "Parser",
    "ParserOptions",
    "Program",
    "Scanner",
    "format_program",
    "parse_source",
    "parse_expression_source",
]
