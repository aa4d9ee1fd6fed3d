"""
Front End Driver
================

This module ties the scanner and parser together behind one interface:

    Source → Scan → Parse → Program

Usage
-----
Command line:
    $ lcparse script.lc

Programmatic:
    >>> from lcfront.lang.frontend import Frontend
    >>> result = Frontend().parse_source("let x = 1;")
    >>> result.success
    True

Error Handling
--------------
Parse errors are collected for the whole source and raised together as a
single ParseFailure. With `FrontendOptions(partial_ast=True)` the failure
is returned instead: the result then carries the diagnostics and the
partial tree built from the declarations that parsed.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import logging

from lcfront.lang.ast import Expression, Program
from lcfront.lang.errors import (
    Diagnostic,
    ErrorCollector,
    ParseFailure,
    ScanError,
)
from lcfront.lang.lexer import Scanner, Token
from lcfront.lang.parser import Parser, ParserOptions


logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """
    Front end configuration options.

    Attributes:
        filename: Name reported for sources parsed from strings
        max_errors: Stop parsing a source after this many errors
        partial_ast: If True, failures are returned in the result rather
                     than raised
    """
    filename: str = "<input>"
    max_errors: int = 100
    partial_ast: bool = False

    def __post_init__(self):
        if self.max_errors < 1:
            raise ValueError(f"max_errors must be at least 1, got {self.max_errors}")


@dataclass
class FrontendResult:
    """
    Result of parsing one source.

    Attributes:
        filename: Source filename
        success: True if the source parsed without errors
        program: The AST; partial when success is False
        token_count: Number of tokens scanned (including EOF)
        diagnostics: Errors found, in source order
    """
    filename: str = ""
    success: bool = False
    program: Optional[Program] = None
    token_count: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)


class Frontend:
    """
    Scanner and parser pipeline.

    Example:
        frontend = Frontend(FrontendOptions(partial_ast=True))
        result = frontend.parse_file("script.lc")
        for diagnostic in result.diagnostics:
            print(diagnostic)

    Attributes:
        options: Front end configuration options
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def parse_source(self, source: str, filename: Optional[str] = None) -> FrontendResult:
        """
        Scan and parse source code.

        Args:
            source: Program text
            filename: Name for error messages (defaults to options.filename)

        Returns:
            FrontendResult with the program and diagnostics

        Raises:
            ParseFailure: On any scan or parse error, unless partial_ast is set
        """
        filename = filename or self.options.filename
        result = FrontendResult(filename=filename)
        source_lines = source.splitlines()

        try:
            tokens = self._scan(source, filename)
            result.token_count = len(tokens)
            result.program = self._parse(tokens, filename, source_lines)
            result.success = True
        except ScanError as e:
            # Scanning stops at the first bad character; report it the same
            # way as parse errors
            collector = ErrorCollector()
            collector.add(e)
            failure = ParseFailure(collector.report(), collector.errors)
            return self._failed(result, failure)
        except ParseFailure as e:
            return self._failed(result, e)

        logger.info(
            f"Parsed {filename}: {len(result.program.declarations)} declarations "
            f"from {result.token_count} tokens"
        )
        return result

    def parse_file(self, filepath: Union[str, Path]) -> FrontendResult:
        """
        Scan and parse a source file.

        Raises:
            FileNotFoundError: If the file does not exist
            ParseFailure: On any scan or parse error, unless partial_ast is set
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.parse_source(source, str(filepath))

    def parse_expression(self, source: str, filename: Optional[str] = None) -> Expression:
        """
        Parse a single expression.

        Raises:
            ScanError: If the text cannot be tokenized
            ParseFailure: If it is not exactly one well-formed expression
        """
        filename = filename or self.options.filename
        tokens = self._scan(source, filename)
        parser = Parser(tokens, self._parser_options(filename), source.splitlines())
        return parser.parse_expression()

    def _scan(self, source: str, filename: str) -> list[Token]:
        return list(Scanner(source, filename).tokenize())

    def _parse(self, tokens: list[Token], filename: str, source_lines: list[str]) -> Program:
        parser = Parser(tokens, self._parser_options(filename), source_lines)
        return parser.parse()

    def _parser_options(self, filename: str) -> ParserOptions:
        return ParserOptions(filename=filename, max_errors=self.options.max_errors)

    def _failed(self, result: FrontendResult, failure: ParseFailure) -> FrontendResult:
        count = len(failure.errors)
        logger.info(f"{result.filename}: {count} error{'s' if count != 1 else ''}")

        if not self.options.partial_ast:
            raise failure

        result.success = False
        result.program = failure.program
        result.diagnostics = failure.diagnostics
        return result
