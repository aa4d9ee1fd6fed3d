"""
Scanner (Tokenizer)
===================

This module defines the token model consumed by the parser and a
reference scanner that converts source text into that token stream.

The parser only depends on `Token` and `TokenType`; any scanner that
produces a list of tokens terminated by an EOF token can feed it.

Token Categories
----------------
- Keywords: and, class, else, false, fn, for, if, let, null, or,
  print, return, super, this, true, while
- Identifiers: variable, function and class names
- Literals: numbers (integer or decimal, always float-valued) and
  "double quoted" strings (may span lines, no escape sequences)
- Operators: + - * / ! = == != < <= > >= += -= *= /= ++ --
- Punctuation: ( ) { } , . ;

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Example Usage
-------------
>>> from lcfront.lang.lexer import Scanner
>>> for token in Scanner("let x = 1;", "demo.lc").tokenize():
...     print(token)
Token(LET, 'let', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(EQUAL, '=', 1:7)
Token(NUMBER, '1', 1.0, 1:9)
Token(SEMICOLON, ';', 1:10)
Token(EOF, 1:11)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Union
import math
import string

from lcfront.errors import SourceLocation
from lcfront.lang.errors import (
    InvalidCharacterError,
    NumberOutOfRangeError,
    UnterminatedCommentError,
    UnterminatedStringError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the language.

    Keywords are distinguished from identifiers to simplify parsing.
    """

    # === Structural ===
    EOF = auto()

    # === Identifiers and Literals ===
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()

    # === Punctuation ===
    LEFT_PAREN = auto()     # (
    RIGHT_PAREN = auto()    # )
    LEFT_BRACE = auto()     # {
    RIGHT_BRACE = auto()    # }
    COMMA = auto()          # ,
    DOT = auto()            # .
    SEMICOLON = auto()      # ;

    # === Operators ===
    MINUS = auto()          # -
    MINUS_EQUAL = auto()    # -=
    MINUS_MINUS = auto()    # --
    PLUS = auto()           # +
    PLUS_EQUAL = auto()     # +=
    PLUS_PLUS = auto()      # ++
    SLASH = auto()          # /
    SLASH_EQUAL = auto()    # /=
    STAR = auto()           # *
    STAR_EQUAL = auto()     # *=
    BANG = auto()           # !
    BANG_EQUAL = auto()     # !=
    EQUAL = auto()          # =
    EQUAL_EQUAL = auto()    # ==
    GREATER = auto()        # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()           # <
    LESS_EQUAL = auto()     # <=

    # === Keywords ===
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FN = auto()
    FOR = auto()
    IF = auto()
    LET = auto()
    NULL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    WHILE = auto()


class TokenCategory(Enum):
    """Coarse kind tag of a token."""
    KEYWORD = auto()
    IDENTIFIER = auto()
    LITERAL = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    EOF = auto()


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "fn": TokenType.FN,
    "for": TokenType.FOR,
    "if": TokenType.IF,
    "let": TokenType.LET,
    "null": TokenType.NULL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "while": TokenType.WHILE,
}

_PUNCTUATION = frozenset({
    TokenType.LEFT_PAREN,
    TokenType.RIGHT_PAREN,
    TokenType.LEFT_BRACE,
    TokenType.RIGHT_BRACE,
    TokenType.COMMA,
    TokenType.DOT,
    TokenType.SEMICOLON,
})

_KEYWORD_TYPES = frozenset(KEYWORDS.values())


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token from source code.

    Attributes:
        type: The TokenType classification
        lexeme: The exact source text of the token ("" for EOF)
        literal: Parsed value for NUMBER (float) and STRING (str) tokens
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    lexeme: str
    literal: Union[float, str, None] = None
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.type == TokenType.EOF:
            return f"Token(EOF, {self.line}:{self.column})"
        if self.literal is not None:
            return (
                f"Token({self.type.name}, {self.lexeme!r}, {self.literal!r}, "
                f"{self.line}:{self.column})"
            )
        return f"Token({self.type.name}, {self.lexeme!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def category(self) -> TokenCategory:
        """Return the coarse kind tag of this token."""
        if self.type == TokenType.EOF:
            return TokenCategory.EOF
        if self.type == TokenType.IDENTIFIER:
            return TokenCategory.IDENTIFIER
        if self.type in (TokenType.NUMBER, TokenType.STRING):
            return TokenCategory.LITERAL
        if self.type in _KEYWORD_TYPES:
            return TokenCategory.KEYWORD
        if self.type in _PUNCTUATION:
            return TokenCategory.PUNCTUATION
        return TokenCategory.OPERATOR

    def describe(self) -> str:
        """Short description used in error messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        return f"'{self.lexeme}'"


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes source code.

    Usage:
        scanner = Scanner(source_text, filename)
        tokens = list(scanner.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    DIGITS = frozenset(string.digits)

    # Operators that may be followed by '=' or by a repeat of themselves.
    # Value: (single, with '=', doubled)
    OPERATORS = {
        "-": (TokenType.MINUS, TokenType.MINUS_EQUAL, TokenType.MINUS_MINUS),
        "+": (TokenType.PLUS, TokenType.PLUS_EQUAL, TokenType.PLUS_PLUS),
        "*": (TokenType.STAR, TokenType.STAR_EQUAL, None),
        "/": (TokenType.SLASH, TokenType.SLASH_EQUAL, None),
        "!": (TokenType.BANG, TokenType.BANG_EQUAL, None),
        "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL, None),
        "<": (TokenType.LESS, TokenType.LESS_EQUAL, None),
        ">": (TokenType.GREATER, TokenType.GREATER_EQUAL, None),
    }

    SINGLE_TOKENS = {
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        "{": TokenType.LEFT_BRACE,
        "}": TokenType.RIGHT_BRACE,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        ";": TokenType.SEMICOLON,
    }

    def __init__(self, source: str, filename: str = "<input>", line_number: int = 1):
        """
        Initialize the scanner with source code.

        Args:
            source: The source code to tokenize
            filename: Name of the source file (for error messages)
            line_number: Starting line number
        """
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = line_number
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, always ending with an EOF token

        Raises:
            ScanError: If invalid input is encountered
        """
        while not self._at_end():
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            yield self._scan_token()

        yield Token(TokenType.EOF, "", None, self._line, self._column, self.filename)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _make_token(
        self,
        token_type: TokenType,
        start_pos: int,
        start_line: int,
        start_column: int,
        literal: Union[float, str, None] = None,
    ) -> Token:
        return Token(
            type=token_type,
            lexeme=self.source[start_pos:self._pos],
            literal=literal,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in " \t\n\r":
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            if char == "/" and self._peek(1) == "*":
                self._skip_block_comment()
                continue

            break

    def _skip_block_comment(self) -> None:
        """
        Skip a block comment (/* ... */).

        Raises:
            UnterminatedCommentError: If the comment is not closed
        """
        start = SourceLocation(self.filename, self._line, self._column)
        self._advance()
        self._advance()

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

        raise UnterminatedCommentError(start)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start_pos = self._pos
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_pos, start_line, start_column)

        if char in self.DIGITS:
            return self._scan_number(start_pos, start_line, start_column)

        if char == '"':
            return self._scan_string(start_pos, start_line, start_column)

        return self._scan_operator(start_pos, start_line, start_column)

    def _scan_identifier(self, start_pos: int, start_line: int, start_column: int) -> Token:
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._advance()

        name = self.source[start_pos:self._pos]
        token_type = KEYWORDS.get(name, TokenType.IDENTIFIER)
        return self._make_token(token_type, start_pos, start_line, start_column)

    def _scan_number(self, start_pos: int, start_line: int, start_column: int) -> Token:
        """
        Scan a numeric literal.

        A fractional part is only consumed when a digit follows the dot,
        so `1.` scans as NUMBER then DOT.
        Literals that overflow a float are rejected.
        """
        while self._peek() in self.DIGITS:
            self._advance()

        if self._peek() == "." and self._peek(1) in self.DIGITS:
            self._advance()
            while self._peek() in self.DIGITS:
                self._advance()

        lexeme = self.source[start_pos:self._pos]
        value = float(lexeme)
        if math.isinf(value):
            raise NumberOutOfRangeError(
                lexeme,
                SourceLocation(self.filename, start_line, start_column),
                self._line_text(start_pos),
            )
        return self._make_token(TokenType.NUMBER, start_pos, start_line, start_column, value)

    def _scan_string(self, start_pos: int, start_line: int, start_column: int) -> Token:
        """Scan a double-quoted string. Newlines are allowed inside."""
        self._advance()

        while not self._at_end() and self._peek() != '"':
            self._advance()

        if self._at_end():
            raise UnterminatedStringError(
                SourceLocation(self.filename, start_line, start_column),
                self._line_text(start_pos),
            )

        self._advance()
        value = self.source[start_pos + 1:self._pos - 1]
        return self._make_token(TokenType.STRING, start_pos, start_line, start_column, value)

    def _scan_operator(self, start_pos: int, start_line: int, start_column: int) -> Token:
        char = self._advance()

        if char in self.OPERATORS:
            single, with_equal, doubled = self.OPERATORS[char]
            if self._match("="):
                return self._make_token(with_equal, start_pos, start_line, start_column)
            if doubled is not None and self._match(char):
                return self._make_token(doubled, start_pos, start_line, start_column)
            return self._make_token(single, start_pos, start_line, start_column)

        if char in self.SINGLE_TOKENS:
            return self._make_token(self.SINGLE_TOKENS[char], start_pos, start_line, start_column)

        raise InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._line_text(start_pos),
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _line_text(self, pos: int) -> str:
        """Get the full source line containing `pos` for error reporting."""
        line_start = self.source.rfind("\n", 0, pos) + 1
        line_end = self.source.find("\n", pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[line_start:line_end]


def scan(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize a whole source string into a list ending with EOF."""
    return list(Scanner(source, filename).tokenize())
