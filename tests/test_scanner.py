"""
Scanner Test Suite
==================

Tests for token generation: keywords, operators, literals, comments,
position tracking and scan errors.
"""

import pytest

from lcfront.errors import SourceLocation
from lcfront.lang.errors import (
    ErrorKind,
    InvalidCharacterError,
    NumberOutOfRangeError,
    ScanError,
    UnterminatedCommentError,
    UnterminatedStringError,
)
from lcfront.lang.lexer import KEYWORDS, Scanner, Token, TokenCategory, TokenType, scan


def types(source: str) -> list[TokenType]:
    return [token.type for token in scan(source, "test.lc")]


# =============================================================================
# Basic Tokens
# =============================================================================

class TestBasicTokens:
    """Tests for simple token recognition."""

    def test_empty_source(self):
        """Empty source should produce only EOF token."""
        tokens = scan("", "test.lc")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_whitespace_only(self):
        """Whitespace-only source should produce only EOF token."""
        assert types("   \n\t  \r\n  ") == [TokenType.EOF]

    def test_punctuation(self):
        assert types("(){},.;") == [
            TokenType.LEFT_PAREN,
            TokenType.RIGHT_PAREN,
            TokenType.LEFT_BRACE,
            TokenType.RIGHT_BRACE,
            TokenType.COMMA,
            TokenType.DOT,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ]

    def test_one_and_two_char_operators(self):
        """Longest match wins for every operator pair."""
        assert types("- -= -- + += ++ / /= * *= ! != = == < <= > >=") == [
            TokenType.MINUS,
            TokenType.MINUS_EQUAL,
            TokenType.MINUS_MINUS,
            TokenType.PLUS,
            TokenType.PLUS_EQUAL,
            TokenType.PLUS_PLUS,
            TokenType.SLASH,
            TokenType.SLASH_EQUAL,
            TokenType.STAR,
            TokenType.STAR_EQUAL,
            TokenType.BANG,
            TokenType.BANG_EQUAL,
            TokenType.EQUAL,
            TokenType.EQUAL_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.EOF,
        ]

    def test_double_minus_is_one_token(self):
        """`--x` starts with a decrement token, `- -x` with two minuses."""
        assert types("--x")[:2] == [TokenType.MINUS_MINUS, TokenType.IDENTIFIER]
        assert types("- -x")[:3] == [TokenType.MINUS, TokenType.MINUS, TokenType.IDENTIFIER]

    def test_keywords(self):
        """Every keyword maps to its own token type."""
        for word, token_type in KEYWORDS.items():
            assert types(word) == [token_type, TokenType.EOF]

    def test_identifiers(self):
        tokens = scan("foo _bar baz42 classy", "test.lc")
        assert [t.type for t in tokens[:-1]] == [TokenType.IDENTIFIER] * 4
        assert [t.lexeme for t in tokens[:-1]] == ["foo", "_bar", "baz42", "classy"]


# =============================================================================
# Literals
# =============================================================================

class TestLiterals:
    """Tests for number and string literals."""

    def test_integer(self):
        token = scan("42", "test.lc")[0]
        assert token.type == TokenType.NUMBER
        assert token.literal == 42.0
        assert isinstance(token.literal, float)

    def test_decimal(self):
        token = scan("3.25", "test.lc")[0]
        assert token.literal == 3.25
        assert token.lexeme == "3.25"

    def test_trailing_dot_is_not_fraction(self):
        """`1.` scans as a number followed by a dot."""
        assert types("1.") == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]

    def test_large_integer(self):
        token = scan("100000000000000000000", "test.lc")[0]
        assert token.literal == 1e20

    def test_overflowing_number(self):
        """A literal too large for a float is rejected, not read as inf."""
        source = "print " + "9" * 400 + ";"
        with pytest.raises(NumberOutOfRangeError) as exc_info:
            scan(source, "big.lc")
        error = exc_info.value
        assert error.kind == ErrorKind.NUMBER_OUT_OF_RANGE
        assert error.location == SourceLocation("big.lc", 1, 7)
        assert isinstance(error, ScanError)

    def test_string(self):
        token = scan('"hello world"', "test.lc")[0]
        assert token.type == TokenType.STRING
        assert token.literal == "hello world"
        assert token.lexeme == '"hello world"'

    def test_multiline_string(self):
        """Strings may span lines; following tokens keep correct lines."""
        tokens = scan('"a\nb" x', "test.lc")
        assert tokens[0].literal == "a\nb"
        assert tokens[1].line == 2
        assert tokens[1].column == 4

    def test_empty_string(self):
        assert scan('""', "test.lc")[0].literal == ""


# =============================================================================
# Comments
# =============================================================================

class TestComments:
    """Tests for comment skipping."""

    def test_line_comment(self):
        assert types("// comment\n42") == [TokenType.NUMBER, TokenType.EOF]

    def test_block_comment(self):
        assert types("/* one\n two */ 42") == [TokenType.NUMBER, TokenType.EOF]

    def test_slash_alone_is_operator(self):
        assert types("a / b") == [
            TokenType.IDENTIFIER, TokenType.SLASH, TokenType.IDENTIFIER, TokenType.EOF,
        ]


# =============================================================================
# Positions and Token Model
# =============================================================================

class TestPositions:
    """Tests for line/column tracking and Token helpers."""

    def test_columns_are_one_based(self):
        tokens = scan("let x = 1;", "demo.lc")
        assert [(t.line, t.column) for t in tokens] == [
            (1, 1), (1, 5), (1, 7), (1, 9), (1, 10), (1, 11),
        ]

    def test_lines_advance(self):
        tokens = scan("a\n  b", "demo.lc")
        assert tokens[1].line == 2
        assert tokens[1].column == 3

    def test_location(self):
        token = scan("  x", "demo.lc")[0]
        assert token.location == SourceLocation("demo.lc", 1, 3)

    def test_categories(self):
        tokens = scan('let x = 1 "s" ;', "t.lc")
        assert [t.category for t in tokens] == [
            TokenCategory.KEYWORD,
            TokenCategory.IDENTIFIER,
            TokenCategory.OPERATOR,
            TokenCategory.LITERAL,
            TokenCategory.LITERAL,
            TokenCategory.PUNCTUATION,
            TokenCategory.EOF,
        ]

    def test_tokens_are_immutable(self):
        token = Token(TokenType.IDENTIFIER, "x")
        with pytest.raises(AttributeError):
            token.lexeme = "y"

    def test_repr(self):
        token = Token(TokenType.NUMBER, "1", 1.0, 2, 3)
        assert repr(token) == "Token(NUMBER, '1', 1.0, 2:3)"

    def test_describe(self):
        assert scan(";", "t.lc")[0].describe() == "';'"
        assert scan("", "t.lc")[0].describe() == "end of input"

    def test_tokenize_is_lazy(self):
        iterator = Scanner("a b", "t.lc").tokenize()
        assert next(iterator).lexeme == "a"


# =============================================================================
# Scan Errors
# =============================================================================

class TestScanErrors:
    """Tests for invalid input."""

    def test_invalid_character(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            scan("let x = @;", "bad.lc")
        error = exc_info.value
        assert error.char == "@"
        assert error.location == SourceLocation("bad.lc", 1, 9)
        assert error.kind == ErrorKind.INVALID_CHARACTER
        assert "bad.lc:1:9: error:" in str(error)

    def test_unterminated_string(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            scan('print "oops;', "bad.lc")
        assert exc_info.value.location == SourceLocation("bad.lc", 1, 7)
        assert exc_info.value.kind == ErrorKind.UNTERMINATED_STRING

    def test_unterminated_comment(self):
        with pytest.raises(UnterminatedCommentError) as exc_info:
            scan("1 /* never closed", "bad.lc")
        assert exc_info.value.kind == ErrorKind.UNTERMINATED_COMMENT

    def test_scan_errors_share_base(self):
        with pytest.raises(ScanError):
            scan("#", "bad.lc")

    def test_non_ascii_digit_is_invalid(self):
        """Unicode digits such as superscripts do not start a number."""
        with pytest.raises(InvalidCharacterError) as exc_info:
            scan("print ²;", "bad.lc")
        assert exc_info.value.char == "²"
        assert exc_info.value.location == SourceLocation("bad.lc", 1, 7)

    def test_non_ascii_digit_ends_number(self):
        with pytest.raises(InvalidCharacterError):
            scan("print 1٣;", "bad.lc")
