"""
Language Front End Error Hierarchy
==================================

This module defines the exception hierarchy for the scanner and parser.
All exceptions inherit from LangError, which itself inherits from the
base LcError for consistent error handling across the package.

Exception Hierarchy
-------------------
LangError (base for all front-end errors)
├── ParseFailure - aggregate of every diagnostic from one parse
└── LangSyntaxError - scanner and parser syntax errors
    ├── ScanError - problems turning characters into tokens
    │   ├── UnterminatedStringError - missing closing quote
    │   ├── UnterminatedCommentError - missing closing */
    │   └── InvalidCharacterError - unexpected character
    ├── UnexpectedTokenError - token does not fit the grammar
    ├── InvalidAssignmentTargetError - left side is not a bare name
    ├── UnterminatedBlockError - '{' without matching '}'
    ├── MissingExpressionError - an expression was required
    ├── TrailingTokensError - tokens left after a complete parse
    └── TooManyArgumentsError - more than 255 parameters/arguments

Every parser error carries an ErrorKind so that callers can treat the
collected errors as plain (kind, message, location) diagnostics.

Error Message Format
--------------------
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing

Example:
    demo.lc:3:3: error: invalid assignment target for '='
        5 = 3;
          ^
    hint: only a bare variable name can be assigned to
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from lcfront.errors import LcError, SourceLocation

if TYPE_CHECKING:
    from lcfront.lang.ast import Program


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(Enum):
    """Stable identifiers for each category of front-end error."""
    # Scanner
    INVALID_CHARACTER = "invalid-character"
    UNTERMINATED_STRING = "unterminated-string"
    UNTERMINATED_COMMENT = "unterminated-comment"
    NUMBER_OUT_OF_RANGE = "number-out-of-range"

    # Parser
    UNEXPECTED_TOKEN = "unexpected-token"
    INVALID_ASSIGNMENT_TARGET = "invalid-assignment-target"
    UNTERMINATED_BLOCK = "unterminated-block"
    MISSING_EXPRESSION = "missing-expression"
    TRAILING_TOKENS_AFTER_PROGRAM = "trailing-tokens-after-program"
    TOO_MANY_ARGUMENTS = "too-many-arguments"


# =============================================================================
# Base Front-End Exception
# =============================================================================

class LangError(LcError):
    """
    Base exception for all scanner and parser errors.

    This class provides common functionality for error messages including
    source location tracking, source line context, and helpful hints.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example:

            demo.lc:1:8: error: expected ';' after value, found end of input
                print 1
                        ^
        """
        parts = []

        # Location prefix: filename:line:column: error: message
        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Diagnostics
# =============================================================================

@dataclass(frozen=True)
class Diagnostic:
    """
    One reported problem, reduced to its (kind, message, location) triple.

    Attributes:
        kind: The error category
        message: Human readable description (without location prefix)
        location: Where the problem was detected, if known
    """
    kind: ErrorKind
    message: str
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.kind.value}: {self.message}"
        return f"{self.kind.value}: {self.message}"


# =============================================================================
# Syntax Errors (Scanner and Parser)
# =============================================================================

class LangSyntaxError(LangError):
    """
    Syntax error in source code.

    Raised when the scanner or parser encounters input that cannot be
    tokenized or parsed according to the grammar. Subclasses set `kind`.
    """
    kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN

    def to_diagnostic(self) -> Diagnostic:
        """Reduce this error to a plain diagnostic triple."""
        return Diagnostic(self.kind, self.message, self.location)


class ScanError(LangSyntaxError):
    """Error while turning source characters into tokens."""
    kind = ErrorKind.INVALID_CHARACTER


class UnterminatedCommentError(ScanError):
    """Block comment without its closing marker."""
    kind = ErrorKind.UNTERMINATED_COMMENT

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "unterminated block comment",
            location=location,
            hint="add closing */ to terminate the comment",
        )


class UnterminatedStringError(ScanError):
    """
    Unterminated string literal.

    Example:
        print "hello;    // missing closing quote
    """
    kind = ErrorKind.UNTERMINATED_STRING

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class InvalidCharacterError(ScanError):
    """Character that cannot start any token."""
    kind = ErrorKind.INVALID_CHARACTER

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class NumberOutOfRangeError(ScanError):
    """Number literal too large to represent as a finite float."""
    kind = ErrorKind.NUMBER_OUT_OF_RANGE

    def __init__(
        self,
        lexeme: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.lexeme = lexeme
        super().__init__(
            f"number literal is out of range ({len(lexeme)} characters)",
            location=location,
            source_line=source_line,
        )


class UnexpectedTokenError(LangSyntaxError):
    """
    Unexpected token during parsing.

    Raised when the parser requires a specific token (like ';' or ')')
    and finds something else.

    Attributes:
        expected: Description of what the grammar required
        found: Description of the token actually present
    """
    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, found {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidAssignmentTargetError(LangSyntaxError):
    """
    Left-hand side of '=', a compound assignment, or '++'/'--' is not a
    bare identifier.

    Examples:
        5 = 3;
        (x) = 1;
        f() += 2;
        1++;
    """
    kind = ErrorKind.INVALID_ASSIGNMENT_TARGET

    def __init__(
        self,
        operator: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operator = operator
        super().__init__(
            f"invalid assignment target for '{operator}'",
            location=location,
            hint="only a bare variable name can be assigned to",
            source_line=source_line,
        )


class UnterminatedBlockError(LangSyntaxError):
    """Input ended before the closing '}' of a block or class body."""
    kind = ErrorKind.UNTERMINATED_BLOCK

    def __init__(
        self,
        opened_at: Optional[SourceLocation] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.opened_at = opened_at
        hint = f"block opened at {opened_at}" if opened_at else None
        super().__init__(
            "expected '}' before end of input",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingExpressionError(LangSyntaxError):
    """An expression was required but the current token cannot start one."""
    kind = ErrorKind.MISSING_EXPRESSION

    def __init__(
        self,
        message: str = "expected expression",
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class TrailingTokensError(LangSyntaxError):
    """Tokens remain where the input was expected to end."""
    kind = ErrorKind.TRAILING_TOKENS_AFTER_PROGRAM

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"unexpected {found} after end of program",
            location=location,
            source_line=source_line,
        )


class TooManyArgumentsError(LangSyntaxError):
    """A parameter list or argument list exceeded the supported maximum."""
    kind = ErrorKind.TOO_MANY_ARGUMENTS

    def __init__(
        self,
        what: str,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.limit = limit
        super().__init__(
            f"can't have more than {limit} {what}",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Aggregate Failure
# =============================================================================

class ParseFailure(LangError):
    """
    Aggregate parse error containing every error found in one pass.

    The message is already a formatted report from ErrorCollector and is
    passed through unchanged.

    Attributes:
        errors: The individual syntax errors, in source order
        program: Best-effort partial AST built from the declarations
                 that parsed cleanly (None when no AST was attempted)
    """

    def __init__(
        self,
        report: str,
        errors: List[LangSyntaxError],
        program: Optional["Program"] = None,
    ):
        self.errors = list(errors)
        self.program = program
        super().__init__(report)

    def _format_message(self) -> str:
        """Return message as-is - it's already a formatted aggregate report."""
        return self.message

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """The collected errors as (kind, message, location) triples."""
        return [error.to_diagnostic() for error in self.errors]


# =============================================================================
# Error Collection (for multi-error reporting)
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The parser uses this to continue after an error, collecting all
    errors before reporting them together.

    Example:
        collector = ErrorCollector(max_errors=100)

        while not at_end:
            try:
                parse_declaration()
            except LangSyntaxError as e:
                collector.add(e)
                if collector.should_stop():
                    break
                synchronize()

        collector.raise_if_errors()
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before stopping
        """
        self.errors: List[LangSyntaxError] = []
        self.max_errors = max_errors

    def add(self, error: LangSyntaxError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def should_stop(self) -> bool:
        """Return True if max_errors has been reached."""
        return len(self.errors) >= self.max_errors

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """The collected errors as (kind, message, location) triples."""
        return [error.to_diagnostic() for error in self.errors]

    def report(self) -> str:
        """Format all errors for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()

    def raise_if_errors(self, program: Optional["Program"] = None) -> None:
        """Raise a ParseFailure if any errors were collected."""
        if self.has_errors():
            raise ParseFailure(self.report(), self.errors, program)
