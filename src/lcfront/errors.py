"""
lcfront Error Hierarchy
=======================

This module defines the root of the exception hierarchy for lcfront.
All exceptions inherit from LcError, allowing callers to catch every
front-end error with a single except clause if desired.

Exception Hierarchy
-------------------
LcError (base)
└── LangError (language front end, see lcfront.lang.errors)
    ├── LangSyntaxError - scanner and parser errors
    └── ParseFailure - aggregate of all diagnostics from one parse

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
when applicable. This allows for detailed error messages that help users
quickly locate and fix issues in their source code.

Error messages follow this format:
    filename:line:column: error: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class LcError(Exception):
    """
    Base exception for all lcfront errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch all front-end errors with a single except clause:

        try:
            program = parse_source(text, "script.lc")
        except LcError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    This class is used throughout the front end to track where tokens,
    AST nodes, and errors occur in the source file. The immutable
    (frozen) design ensures locations cannot be accidentally modified.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
