"""
Recursive Descent Parser
========================

This module implements a recursive descent parser for the scripting
language. It takes a stream of tokens and builds a canonical Abstract
Syntax Tree (AST). Syntactic sugar is lowered the moment it is
recognized, using the pure transforms in `lcfront.lang.desugar`.

Grammar (Simplified EBNF)
-------------------------
program         ::= declaration* EOF
declaration     ::= let_decl | fn_decl | class_decl | statement
let_decl        ::= 'let' IDENTIFIER ('=' expression)? ';'
fn_decl         ::= 'fn' function
class_decl      ::= 'class' IDENTIFIER '{' ('fn'? function)* '}'
function        ::= IDENTIFIER '(' params? ')' block
params          ::= IDENTIFIER (',' IDENTIFIER)*

statement       ::= expr_stmt | block | return_stmt | print_stmt
                  | if_stmt | while_stmt | for_stmt
block           ::= '{' declaration* '}'
return_stmt     ::= 'return' expression ';'
print_stmt      ::= 'print' expression ';'
if_stmt         ::= 'if' '(' expression ')' statement ('else' statement)?
while_stmt      ::= 'while' '(' expression ')' statement
for_stmt        ::= 'for' '(' (let_decl | expr_stmt | ';')
                    expression? ';' expression? ')' statement
expr_stmt       ::= expression ';'

Expression Precedence (lowest to highest)
-----------------------------------------
1.  assignment     =                right-assoc
2.  compound       += -= *= /=      right-assoc
3.  logical_or     or
4.  logical_and    and
5.  equality       == !=
6.  comparison     < <= > >=
7.  term           + -
8.  factor         * /
9.  unary          ! -              right-assoc
10. inc_dec        postfix ++ --
11. call           f(args) (repeatable)
12. primary        NUMBER, STRING, true, false, null, IDENTIFIER,
                   '(' expression ')'

All binary tiers are left associative. An `else` binds to the nearest
unmatched `if`.

Error Recovery
--------------
A syntax error unwinds to the enclosing declaration. The error is
recorded, tokens are discarded up to a statement boundary, and parsing
resumes. At the end every recorded error is raised together as a
ParseFailure carrying the partial tree.

Example Usage
-------------
>>> from lcfront.lang.lexer import Scanner
>>> from lcfront.lang.parser import Parser
>>> tokens = list(Scanner("print 1 + 2 * 3;", "demo.lc").tokenize())
>>> program = Parser(tokens).parse()
>>> program.declarations[0].expression.operator
<BinaryOperator.ADD: 7>
"""

from dataclasses import dataclass
from typing import Callable, Optional
import logging

from lcfront.errors import SourceLocation
from lcfront.lang.ast import (
    Assign,
    Binary,
    BinaryOperator,
    Block,
    ClassDecl,
    Call,
    Declaration,
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
    UnaryOperator,
    Variable,
    While,
)
from lcfront.lang.desugar import (
    COMPOUND_OPERATORS,
    STEP_OPERATORS,
    desugar_compound_assignment,
    desugar_for,
    desugar_increment,
)
from lcfront.lang.errors import (
    ErrorCollector,
    InvalidAssignmentTargetError,
    LangSyntaxError,
    MissingExpressionError,
    TooManyArgumentsError,
    TrailingTokensError,
    UnexpectedTokenError,
    UnterminatedBlockError,
)
from lcfront.lang.lexer import Scanner, Token, TokenType


logger = logging.getLogger(__name__)


# Parameter and argument lists are capped at this many entries.
MAX_ARGUMENTS = 255

# Tokens that begin a new declaration or statement; synchronization
# stops in front of them.
SYNC_TOKENS = frozenset({
    TokenType.CLASS,
    TokenType.FN,
    TokenType.LET,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})

# Operators that only exist in infix position. Seeing one where an
# operand should start means its left operand is missing.
INFIX_ONLY = frozenset({
    TokenType.PLUS,
    TokenType.STAR,
    TokenType.SLASH,
    TokenType.EQUAL_EQUAL,
    TokenType.BANG_EQUAL,
    TokenType.LESS,
    TokenType.LESS_EQUAL,
    TokenType.GREATER,
    TokenType.GREATER_EQUAL,
    TokenType.AND,
    TokenType.OR,
})


# =============================================================================
# Parser Options
# =============================================================================

@dataclass
class ParserOptions:
    """
    Configuration for a parse.

    Attributes:
        filename: Name used for locations the parser synthesizes
        max_errors: Stop parsing once this many errors are recorded
    """
    filename: str = "<input>"
    max_errors: int = 100

    def __post_init__(self):
        if self.max_errors < 1:
            raise ValueError(f"max_errors must be at least 1, got {self.max_errors}")


class _ErrorLimitReached(Exception):
    """Unwinds the whole parse once the error limit is hit."""


# =============================================================================
# Parser
# =============================================================================

class Parser:
    """
    Recursive descent parser.

    Parses a token stream into a Program. The parser recovers from
    syntax errors at declaration boundaries so that one pass reports
    every error it can find.

    A parser instance is single use: create one per token stream.

    Attributes:
        tokens: The token stream, always ending with an EOF token
        options: ParserOptions in effect
    """

    def __init__(
        self,
        tokens: list[Token],
        options: Optional[ParserOptions] = None,
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Tokens to parse. An EOF token is appended if missing.
            options: Parser configuration (defaults when None)
            source_lines: Original source lines for error context
        """
        self.options = options or ParserOptions()
        self.tokens = self._terminated(list(tokens))
        self.source_lines = source_lines or []

        self._pos = 0
        self._errors = ErrorCollector(self.options.max_errors)

    def _terminated(self, tokens: list[Token]) -> list[Token]:
        if tokens and tokens[-1].type == TokenType.EOF:
            return tokens

        if tokens:
            last = tokens[-1]
            eof = Token(
                TokenType.EOF, "", None,
                last.line, last.column + len(last.lexeme), last.filename,
            )
        else:
            eof = Token(TokenType.EOF, "", None, 1, 1, self.options.filename)
        logger.debug(f"Token stream has no EOF, synthesized one at {eof.location}")
        tokens.append(eof)
        return tokens

    # =========================================================================
    # Entry Points
    # =========================================================================

    def parse(self) -> Program:
        """
        Parse the whole token stream.

        Returns:
            Program containing every top-level declaration

        Raises:
            ParseFailure: If any syntax error was found. The exception
                carries the diagnostics and the partial Program.
        """
        declarations = []

        try:
            while not self._at_end():
                if self._check(TokenType.RIGHT_BRACE):
                    self._skip_stray_brace()
                    continue

                declaration = self._declaration()
                if declaration is not None:
                    declarations.append(declaration)
        except _ErrorLimitReached:
            logger.debug(
                f"Stopped after {self._errors.error_count()} errors "
                f"(max_errors={self.options.max_errors})"
            )

        program = Program(self.tokens[0].location, tuple(declarations))
        self._errors.raise_if_errors(program)
        return program

    def parse_expression(self) -> Expression:
        """
        Parse a single expression spanning the whole token stream.

        Raises:
            ParseFailure: If the expression is malformed or tokens remain
        """
        expr = None
        try:
            expr = self._expression()
            if not self._at_end():
                token = self._peek()
                raise TrailingTokensError(
                    token.describe(), token.location, self._source_line(token),
                )
        except LangSyntaxError as e:
            self._errors.add(e)
        except _ErrorLimitReached:
            pass  # already recorded

        self._errors.raise_if_errors()
        return expr

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self, offset: int = 0) -> Token:
        """Look at token at current position + offset."""
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def _previous(self) -> Optional[Token]:
        """The most recently consumed token, or None at the start."""
        if self._pos == 0:
            return None
        return self.tokens[self._pos - 1]

    def _advance(self) -> Token:
        """Consume and return the current token. EOF is never consumed."""
        token = self._peek()
        if not self._at_end():
            self._pos += 1
        return token

    def _check(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _match(self, *types: TokenType) -> Optional[Token]:
        """
        Consume current token if it matches one of the types.

        Returns:
            The consumed token, or None if no match
        """
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType, expected: str) -> Token:
        """
        Expect and consume a specific token type.

        Args:
            token_type: The required token type
            expected: Description used in the error message

        Raises:
            UnexpectedTokenError: If the current token is of another type
        """
        if self._check(token_type):
            return self._advance()

        current = self._peek()
        raise UnexpectedTokenError(
            expected,
            current.describe(),
            current.location,
            self._source_line(current),
        )

    def _source_line(self, token: Token) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < token.line <= len(self.source_lines):
            return self.source_lines[token.line - 1]
        return None

    # =========================================================================
    # Error Recovery
    # =========================================================================

    def _record(self, error: LangSyntaxError) -> None:
        """Record an error; unwind the parse if the limit is reached."""
        logger.debug(f"Recorded {error.kind.value} at {error.location}: {error.message}")
        self._errors.add(error)
        if self._errors.should_stop():
            raise _ErrorLimitReached()

    def _synchronize(self) -> None:
        """
        Discard tokens up to the next likely declaration boundary.

        Always consumes the offending token, then stops after a ';' or
        in front of a keyword that starts a declaration or statement.
        """
        start = self._peek()
        self._advance()

        while not self._at_end():
            previous = self._previous()
            if previous is not None and previous.type == TokenType.SEMICOLON:
                break
            if self._peek().type in SYNC_TOKENS:
                break
            self._advance()

        logger.debug(f"Synchronized from {start.location} to {self._peek().location}")

    def _skip_stray_brace(self) -> None:
        token = self._advance()
        self._record(TrailingTokensError(
            token.describe(), token.location, self._source_line(token),
        ))

    # =========================================================================
    # Declarations
    # =========================================================================

    def _declaration(self) -> Optional[Declaration]:
        """
        Parse one declaration, recovering from any syntax error in it.

        Returns:
            The declaration, or None if it was discarded after an error
        """
        try:
            if self._match(TokenType.LET):
                return self._let_declaration()
            if self._match(TokenType.FN):
                return self._function(self._previous().location)
            if self._match(TokenType.CLASS):
                return self._class_declaration()
            return self._statement()
        except LangSyntaxError as e:
            self._record(e)
            self._synchronize()
            return None

    def _let_declaration(self) -> LetDecl:
        """Parse the rest of `let NAME (= expr)? ;` after the keyword."""
        location = self._previous().location
        name = self._expect(TokenType.IDENTIFIER, "variable name")

        if self._match(TokenType.EQUAL):
            initializer = self._expression()
        else:
            initializer = Literal(name.location, LiteralKind.NULL, None)

        self._expect(TokenType.SEMICOLON, "';' after variable declaration")
        return LetDecl(location, name.lexeme, initializer)

    def _function(self, location: SourceLocation, kind: str = "function") -> FnDecl:
        """Parse `NAME ( params? ) block` for functions and methods."""
        name = self._expect(TokenType.IDENTIFIER, f"{kind} name")
        self._expect(TokenType.LEFT_PAREN, f"'(' after {kind} name")

        params = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self._too_many("parameters")
                param = self._expect(TokenType.IDENTIFIER, "parameter name")
                params.append(param.lexeme)
                if not self._match(TokenType.COMMA):
                    break

        self._expect(TokenType.RIGHT_PAREN, "')' after parameters")
        opening = self._expect(TokenType.LEFT_BRACE, f"'{{' before {kind} body")
        body = self._block(opening)
        return FnDecl(location, name.lexeme, tuple(params), body)

    def _class_declaration(self) -> ClassDecl:
        """Parse `class NAME { method* }`. Class bodies hold methods only."""
        location = self._previous().location
        name = self._expect(TokenType.IDENTIFIER, "class name")
        opening = self._expect(TokenType.LEFT_BRACE, "'{' before class body")

        methods = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._at_end():
            fn_token = self._match(TokenType.FN)
            method_location = fn_token.location if fn_token else self._peek().location
            methods.append(self._function(method_location, "method"))

        self._close_block(opening)
        return ClassDecl(location, name.lexeme, tuple(methods))

    def _too_many(self, what: str) -> None:
        """Record an over-long list without unwinding."""
        token = self._peek()
        self._record(TooManyArgumentsError(
            what, MAX_ARGUMENTS, token.location, self._source_line(token),
        ))

    # =========================================================================
    # Statements
    # =========================================================================

    def _statement(self) -> Statement:
        """Parse any statement."""
        if self._match(TokenType.PRINT):
            return self._print_statement()
        if self._match(TokenType.RETURN):
            return self._return_statement()
        if self._match(TokenType.IF):
            return self._if_statement()
        if self._match(TokenType.WHILE):
            return self._while_statement()
        if self._match(TokenType.FOR):
            return self._for_statement()
        if self._check(TokenType.LEFT_BRACE):
            return self._block(self._advance())
        return self._expression_statement()

    def _block(self, opening: Token) -> Block:
        """
        Parse the declarations of a block after its '{'.

        Errors inside the block are recovered per declaration, so one bad
        statement does not discard its siblings.
        """
        declarations = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._at_end():
            declaration = self._declaration()
            if declaration is not None:
                declarations.append(declaration)

        self._close_block(opening)
        return Block(opening.location, tuple(declarations))

    def _close_block(self, opening: Token) -> None:
        if self._at_end():
            eof = self._peek()
            raise UnterminatedBlockError(
                opening.location, eof.location, self._source_line(opening),
            )
        self._expect(TokenType.RIGHT_BRACE, "'}'")

    def _print_statement(self) -> Print:
        location = self._previous().location
        value = self._expression()
        self._expect(TokenType.SEMICOLON, "';' after value")
        return Print(location, value)

    def _return_statement(self) -> Return:
        """Parse `return expr ;`. The value is mandatory."""
        keyword = self._previous()
        if self._check(TokenType.SEMICOLON):
            token = self._peek()
            raise MissingExpressionError(
                "expected expression after 'return'",
                token.location,
                self._source_line(token),
                hint="return always needs a value; use 'return null;'",
            )
        value = self._expression()
        self._expect(TokenType.SEMICOLON, "';' after return value")
        return Return(keyword.location, value)

    def _if_statement(self) -> If:
        """Parse if statement. A trailing else binds to this, the innermost if."""
        location = self._previous().location
        self._expect(TokenType.LEFT_PAREN, "'(' after 'if'")
        condition = self._expression()
        self._expect(TokenType.RIGHT_PAREN, "')' after if condition")

        then_branch = self._statement()

        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self._statement()

        return If(location, condition, then_branch, else_branch)

    def _while_statement(self) -> While:
        location = self._previous().location
        self._expect(TokenType.LEFT_PAREN, "'(' after 'while'")
        condition = self._expression()
        self._expect(TokenType.RIGHT_PAREN, "')' after condition")
        return While(location, condition, self._statement())

    def _for_statement(self) -> Statement:
        """Parse a for loop and lower it to a while loop."""
        location = self._previous().location
        self._expect(TokenType.LEFT_PAREN, "'(' after 'for'")

        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._match(TokenType.LET):
            initializer = self._let_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._expression()
        self._expect(TokenType.SEMICOLON, "';' after loop condition")

        increment = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self._expression()
        self._expect(TokenType.RIGHT_PAREN, "')' after for clauses")

        body = self._statement()
        return desugar_for(initializer, condition, increment, body, location)

    def _expression_statement(self) -> ExprStmt:
        expression = self._expression()
        self._expect(TokenType.SEMICOLON, "';' after expression")
        return ExprStmt(expression.location, expression)

    # =========================================================================
    # Expression Parsing (Operator Precedence)
    # =========================================================================

    def _expression(self) -> Expression:
        return self._assignment()

    def _assignment(self) -> Expression:
        """Parse assignment expression (right-associative)."""
        expr = self._compound_assignment()
        target = self._previous()

        equals = self._match(TokenType.EQUAL)
        if equals is None:
            return expr

        value = self._assignment()
        self._check_target(expr, target, equals)
        return Assign(expr.location, expr.name, value)

    def _compound_assignment(self) -> Expression:
        """Parse `name op= value`, lowering it to a plain assignment."""
        expr = self._logical_or()
        target = self._previous()

        operator = self._match(*COMPOUND_OPERATORS)
        if operator is None:
            return expr

        value = self._assignment()
        self._check_target(expr, target, operator)
        return desugar_compound_assignment(target, operator, value)

    def _check_target(self, expr: Expression, target: Optional[Token], operator: Token) -> None:
        """
        Require the left side of an assignment operator to be a bare name.

        A parenthesized name is an expression, not a name, so `(x) = 1` is
        rejected by also requiring the token before the operator to be the
        identifier itself.
        """
        if (
            isinstance(expr, Variable)
            and target is not None
            and target.type == TokenType.IDENTIFIER
        ):
            return
        raise InvalidAssignmentTargetError(
            operator.lexeme, operator.location, self._source_line(operator),
        )

    def _logical_or(self) -> Expression:
        """Parse logical OR expression (or)."""
        return self._parse_binary(
            self._logical_and,
            {TokenType.OR: LogicalOperator.OR},
            Logical,
        )

    def _logical_and(self) -> Expression:
        """Parse logical AND expression (and)."""
        return self._parse_binary(
            self._equality,
            {TokenType.AND: LogicalOperator.AND},
            Logical,
        )

    def _equality(self) -> Expression:
        """Parse equality expression (== !=)."""
        return self._parse_binary(
            self._comparison,
            {
                TokenType.BANG_EQUAL: BinaryOperator.NOT_EQUAL,
                TokenType.EQUAL_EQUAL: BinaryOperator.EQUAL,
            },
        )

    def _comparison(self) -> Expression:
        """Parse comparison expression (< <= > >=)."""
        return self._parse_binary(
            self._term,
            {
                TokenType.LESS: BinaryOperator.LESS,
                TokenType.LESS_EQUAL: BinaryOperator.LESS_EQUAL,
                TokenType.GREATER: BinaryOperator.GREATER,
                TokenType.GREATER_EQUAL: BinaryOperator.GREATER_EQUAL,
            },
        )

    def _term(self) -> Expression:
        """Parse additive expression (+ -)."""
        return self._parse_binary(
            self._factor,
            {
                TokenType.MINUS: BinaryOperator.SUBTRACT,
                TokenType.PLUS: BinaryOperator.ADD,
            },
        )

    def _factor(self) -> Expression:
        """Parse multiplicative expression (* /)."""
        return self._parse_binary(
            self._unary,
            {
                TokenType.SLASH: BinaryOperator.DIVIDE,
                TokenType.STAR: BinaryOperator.MULTIPLY,
            },
        )

    def _parse_binary(
        self,
        operand_parser: Callable[[], Expression],
        operators: dict,
        node_type: type = Binary,
    ) -> Expression:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Function to parse operands (the next tier up)
            operators: Map of token types to operator enum members
            node_type: Binary or Logical
        """
        expr = operand_parser()

        while self._peek().type in operators:
            op_token = self._advance()
            right = operand_parser()
            expr = node_type(expr.location, operators[op_token.type], expr, right)

        return expr

    def _unary(self) -> Expression:
        """Parse unary expression (! -), right-associative."""
        token = self._match(TokenType.BANG, TokenType.MINUS)
        if token is None:
            return self._inc_dec()

        operator = UnaryOperator.NOT if token.type == TokenType.BANG else UnaryOperator.NEGATE
        return Unary(token.location, operator, self._unary())

    def _inc_dec(self) -> Expression:
        """Parse postfix `++`/`--`, lowering it to an assignment."""
        expr = self._call()
        target = self._previous()

        operator = self._match(*STEP_OPERATORS)
        if operator is None:
            return expr

        self._check_target(expr, target, operator)
        return desugar_increment(target, operator)

    def _call(self) -> Expression:
        """Parse call expressions; `f()()` calls the result again."""
        expr = self._primary()

        while self._match(TokenType.LEFT_PAREN):
            expr = self._finish_call(expr)

        return expr

    def _finish_call(self, callee: Expression) -> Call:
        arguments = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self._too_many("arguments")
                arguments.append(self._expression())
                if not self._match(TokenType.COMMA):
                    break

        self._expect(TokenType.RIGHT_PAREN, "')' after arguments")
        return Call(callee.location, callee, tuple(arguments))

    def _primary(self) -> Expression:
        """Parse primary expression (literals, identifiers, parenthesized)."""
        token = self._peek()

        if self._match(TokenType.FALSE):
            return Literal(token.location, LiteralKind.BOOL, False)
        if self._match(TokenType.TRUE):
            return Literal(token.location, LiteralKind.BOOL, True)
        if self._match(TokenType.NULL):
            return Literal(token.location, LiteralKind.NULL, None)
        if self._match(TokenType.NUMBER):
            return Literal(token.location, LiteralKind.NUMBER, token.literal)
        if self._match(TokenType.STRING):
            return Literal(token.location, LiteralKind.STRING, token.literal)
        if self._match(TokenType.IDENTIFIER):
            return Variable(token.location, token.lexeme)

        # Parentheses steer tree shape only; no grouping node is kept
        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._expect(TokenType.RIGHT_PAREN, "')' after expression")
            return expr

        if token.type in INFIX_ONLY:
            raise MissingExpressionError(
                f"binary operator '{token.lexeme}' is missing its left operand",
                token.location,
                self._source_line(token),
            )

        raise MissingExpressionError(
            f"expected expression, found {token.describe()}",
            token.location,
            self._source_line(token),
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    options: Optional[ParserOptions] = None,
) -> Program:
    """
    Scan and parse source code into an AST.

    Args:
        source: The program text
        filename: Source filename for error messages
        options: Parser configuration; its filename is replaced by `filename`

    Raises:
        ScanError: If the text cannot be tokenized
        ParseFailure: If parsing fails
    """
    options = _with_filename(options, filename)
    tokens = list(Scanner(source, filename).tokenize())
    return Parser(tokens, options, source.splitlines()).parse()


def parse_expression_source(source: str, filename: str = "<input>") -> Expression:
    """Scan and parse a single expression, e.g. `1 + 2 * x`."""
    tokens = list(Scanner(source, filename).tokenize())
    parser = Parser(tokens, ParserOptions(filename=filename), source.splitlines())
    return parser.parse_expression()


def _with_filename(options: Optional[ParserOptions], filename: str) -> ParserOptions:
    if options is None:
        return ParserOptions(filename=filename)
    return ParserOptions(filename=filename, max_errors=options.max_errors)
