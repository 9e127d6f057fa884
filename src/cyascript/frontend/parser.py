"""
CyaScript Parser.

A recursive descent parser that turns the token list and line table from
the tokenizer into a ``ParsedFile``. Parsing stops at the first error.

Grammar:
    file       := { statement }
    statement  := ";"
                | "let" IDENT ( "=" expr | ":" type "=" expr | type "=" expr ) [ ";" ]
                | expr [ ";" ]
    type       := "(" { type | "," } ")"
                | IDENT [ "<" [ type { "," type } [ "," ] ] ">" ]
    expr       := atom
    atom       := STRING | INTEGER | FLOAT | IDENT
                | "-" atom
                | "(" [ expr { "," expr } [ "," ] ] ")"
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from cyascript.frontend.ast_nodes import (
    # Root
    ParsedFile,
    ParsedFunc,
    # Types
    ParsedType,
    SelfType,
    SingleType,
    TupleType,
    # Variables
    VarName,
    # Expressions
    Expression,
    IntLiteral,
    NegOp,
    NumLiteral,
    StrLiteral,
    TupleExpr,
    VarExpr,
    # Statements
    DiscardStatement,
    ExprStatement,
    LetStatement,
    Statement,
)
from cyascript.frontend.tokens import Token, TokenType
from cyascript.utils.diagnostics import ErrorCode
from cyascript.utils.errors import ParseError

logger = logging.getLogger(__name__)

SELF_TYPE_NAME = "Self"

# Deepest nesting of parentheses, generics and negations accepted
MAX_NESTING_DEPTH = 100

INT_MAX = 2**63 - 1

# Literal token types and the expression node each one becomes
LITERAL_NODES: dict[TokenType, type] = {
    TokenType.STRING: StrLiteral,
    TokenType.INTEGER: IntLiteral,
    TokenType.FLOAT: NumLiteral,
}


class Parser:
    """
    Recursive descent parser for CyaScript.

    The parser takes ownership of the token list and the line table; the
    line table must hold one entry per token plus the trailing sentinel.

    Usage:
        tokens, lines = tokenize(source)
        parsed_file = Parser(tokens, lines).parse()
    """

    def __init__(self, tokens: list[Token], lines: list[int]) -> None:
        """
        Initialize the parser.

        Args:
            tokens: Tokens from the tokenizer
            lines: Line table from the tokenizer
        """
        if len(lines) != len(tokens) + 1:
            raise ValueError(
                f"line table has {len(lines)} entries for {len(tokens)} tokens, "
                f"expected {len(tokens) + 1}"
            )
        self.tokens = tokens
        self.lines = lines
        self.pos = 0
        self.depth = 0
        self.funcs: list[tuple[str, ParsedFunc, bool]] = []

    # -------------------------------------------------------------------------
    # Cursor
    # -------------------------------------------------------------------------

    def _is_at_end(self) -> bool:
        """Check if every token has been consumed."""
        return self.pos >= len(self.tokens)

    def _peek(self) -> Optional[Token]:
        """Return the current token without consuming it, or None at end."""
        if self._is_at_end():
            return None
        return self.tokens[self.pos]

    def _check(self, *types: TokenType) -> bool:
        """Check if the current token is one of the given types."""
        token = self._peek()
        return token is not None and token.type in types

    def _match(self, *types: TokenType) -> bool:
        """Consume current token if it matches one of the given types."""
        if self._check(*types):
            self.pos += 1
            return True
        return False

    def _line(self) -> int:
        """Line of the current token; the sentinel line once input is exhausted."""
        return self.lines[min(self.pos, len(self.tokens))]

    # -------------------------------------------------------------------------
    # Errors
    # -------------------------------------------------------------------------

    def _error(self, reason: str, code: str = ErrorCode.E0201) -> ParseError:
        """Create a parse error tagged with the current line."""
        return ParseError(self._line(), reason, code)

    def _end_of_input(self, expected: str) -> ParseError:
        return self._error(
            f"unexpected end of input, expect {expected}", ErrorCode.E0203
        )

    def _unsupported(self, construct: str) -> ParseError:
        return self._error(f"{construct} is not supported in this version", ErrorCode.E0205)

    @contextmanager
    def _nested(self) -> Iterator[None]:
        """Track one level of recursion, failing past ``MAX_NESTING_DEPTH``."""
        if self.depth >= MAX_NESTING_DEPTH:
            raise self._error(
                f"nesting is deeper than {MAX_NESTING_DEPTH} levels", ErrorCode.E0209
            )
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    # -------------------------------------------------------------------------
    # Consumption primitives
    # -------------------------------------------------------------------------

    def assert_next(self, expected: Token) -> None:
        """
        Consume the current token if it is structurally equal to ``expected``.

        Payloads take part in the comparison, so ``Token(IDENTIFIER, "x")``
        only matches an identifier spelled ``x``.

        Raises:
            ParseError: naming both the expected and the found token
        """
        token = self._peek()
        if token is None:
            raise self._end_of_input(f"token {expected.describe()}")
        if token != expected:
            raise self._error(f"expect token {expected.describe()}, found {token.describe()}")
        self.pos += 1

    def _identifier(self) -> str:
        """Consume an identifier and return its text."""
        token = self._peek()
        if token is None:
            raise self._end_of_input("an identifier")
        if token.type != TokenType.IDENTIFIER:
            raise self._error(f"expect identifier, found {token.describe()}")
        self.pos += 1
        return token.value

    # -------------------------------------------------------------------------
    # File Parsing
    # -------------------------------------------------------------------------

    def parse(self) -> ParsedFile:
        """
        Parse the whole token list.

        Returns:
            The parsed file, with ``index`` left at its default

        Raises:
            ParseError: on the first token sequence outside the grammar
        """
        statements = self._parse_statements()
        logger.debug(f"Parsed {len(statements)} statements from {len(self.tokens)} tokens")
        return ParsedFile(statements=tuple(statements), funcs=tuple(self.funcs))

    def _parse_statements(self) -> list[Statement]:
        statements: list[Statement] = []
        while not self._is_at_end():
            if self._match(TokenType.SEMICOLON):
                continue
            statements.append(self._parse_statement())
        return statements

    # -------------------------------------------------------------------------
    # Statement Parsing
    # -------------------------------------------------------------------------

    def _parse_statement(self) -> Statement:
        """Parse a single statement at the current token."""
        token = self._peek()
        if token.type == TokenType.LET:
            return self._parse_let()
        if token.type == TokenType.FUN:
            raise self._unsupported("function declaration")
        return self._parse_expression_statement()

    def _parse_let(self) -> LetStatement:
        """
        Parse a let statement.

        Handles:
            let x = expr
            let x: Type = expr
            let x Type = expr
        """
        line = self._line()
        self.assert_next(Token(TokenType.LET))
        name = self._identifier()

        parsed_type: Optional[ParsedType] = None
        if self._match(TokenType.ASSIGN):
            pass
        elif self._match(TokenType.COLON):
            parsed_type = self._parse_type()
            try:
                self.assert_next(Token(TokenType.ASSIGN))
            except ParseError as e:
                raise e.with_context("expect a '=' after 'let' and variable name") from e
        else:
            parsed_type = self._parse_type()
            try:
                self.assert_next(Token(TokenType.ASSIGN))
            except ParseError as e:
                raise e.with_context(
                    "expect a '=' after variable type in 'let' statement"
                ) from e

        expr = self._parse_expression()
        self._match(TokenType.SEMICOLON)

        return LetStatement(var=VarName(name), parsed_type=parsed_type, expr=expr, line=line)

    def _parse_expression_statement(self) -> Statement:
        """
        Parse an expression used as a statement.

        A trailing ``;`` drops the value; without one the value is kept.
        """
        line = self._line()
        expr = self._parse_expression()
        if self._match(TokenType.SEMICOLON):
            return DiscardStatement(expr=expr, line=line)
        return ExprStatement(expr=expr, line=line)

    # -------------------------------------------------------------------------
    # Type Parsing
    # -------------------------------------------------------------------------

    def _parse_type(self) -> ParsedType:
        """
        Parse a type annotation.

        Handles:
            Int, Self
            List<Int>, Map<Int, Str,>, Unit<>
            (Int, (Str, Bool))
        """
        if self._match(TokenType.LPAREN):
            with self._nested():
                return self._parse_tuple_type()

        try:
            type_name = self._identifier()
        except ParseError as e:
            raise e.with_context("expect a type identifier") from e

        if not self._match(TokenType.LT):
            if type_name == SELF_TYPE_NAME:
                return SelfType()
            return SingleType(name=type_name)

        generic: list[ParsedType] = []
        with self._nested():
            while not self._match(TokenType.GT):
                if self._is_at_end():
                    raise self._end_of_input("'>' to close generic arguments")
                generic.append(self._parse_type())
                self._match(TokenType.COMMA)
        return SingleType(name=type_name, generic=tuple(generic))

    def _parse_tuple_type(self) -> TupleType:
        """Parse the items of a tuple type after its opening parenthesis."""
        items: list[ParsedType] = []
        while True:
            if self._is_at_end():
                raise self._end_of_input("')' to close tuple type")
            if self._match(TokenType.COMMA):
                continue
            if self._match(TokenType.RPAREN):
                break
            items.append(self._parse_type())
        return TupleType(items=tuple(items))

    # -------------------------------------------------------------------------
    # Expression Parsing
    # -------------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        """
        Parse an expression.

        Only single atoms are expressions. An operator or call after the atom
        is rejected instead of leaving it for the next statement.
        """
        expr = self._parse_atom()

        token = self._peek()
        if token is not None:
            if token.is_operator:
                raise self._unsupported(f"binary operator {token.describe()}")
            if token.type == TokenType.LPAREN:
                raise self._unsupported("call expression")
        return expr

    def _parse_atom(self) -> Expression:
        """Parse a literal, a variable, a negation, or a parenthesized form."""
        token = self._peek()
        if token is None:
            raise self._end_of_input("an expression")

        if token.type == TokenType.INTEGER and token.value > INT_MAX:
            raise self._error(
                f"integer literal {token.value} does not fit in 64 bits", ErrorCode.E0207
            )

        node_type = LITERAL_NODES.get(token.type)
        if node_type is not None:
            self.pos += 1
            return node_type(token.value)

        if self._match(TokenType.IDENTIFIER):
            return VarExpr(VarName(token.value))

        if self._match(TokenType.MINUS):
            following = self._peek()
            if (
                following is not None
                and following.type == TokenType.INTEGER
                and following.value == INT_MAX + 1
            ):
                # The smallest 64-bit integer has no positive counterpart to negate
                self.pos += 1
                return IntLiteral(-following.value)
            with self._nested():
                return NegOp(self._parse_atom())

        if self._match(TokenType.LPAREN):
            with self._nested():
                return self._parse_grouped_or_tuple()

        raise self._error(f"expect an expression, found {token.describe()}", ErrorCode.E0204)

    def _parse_grouped_or_tuple(self) -> Expression:
        """
        Parse a parenthesized expression or tuple after its opening parenthesis.

        Handles:
            ()          -> empty tuple
            (expr)      -> expr
            (expr,)     -> one-element tuple
            (a, b, ...) -> tuple
        """
        items: list[Expression] = []
        trailing_comma = False
        while not self._match(TokenType.RPAREN):
            if self._is_at_end():
                raise self._end_of_input("')' to close tuple")
            items.append(self._parse_expression())
            trailing_comma = self._match(TokenType.COMMA)
            token = self._peek()
            if not trailing_comma and token is not None and token.type != TokenType.RPAREN:
                raise self._error(f"expect token ',' or ')', found {token.describe()}")

        if len(items) == 1 and not trailing_comma:
            return items[0]
        return TupleExpr(items=tuple(items))


def parse(tokens: list[Token], lines: list[int]) -> ParsedFile:
    """
    Convenience function to parse tokens into an AST.

    Args:
        tokens: Tokens from the tokenizer
        lines: Line table from the tokenizer

    Returns:
        The parsed file
    """
    return Parser(tokens, lines).parse()
