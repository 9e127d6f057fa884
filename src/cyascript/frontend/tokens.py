"""
Token definitions for the CyaScript tokenizer.

Tokens carry no position. The tokenizer hands out line numbers in a
separate table aligned with the token list.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional


class TokenType(Enum):
    """Enumeration of all token types in CyaScript."""

    # Literals
    INTEGER = auto()
    FLOAT = auto()
    STRING = auto()

    # Identifiers
    IDENTIFIER = auto()

    # Keywords
    LET = auto()
    FUN = auto()

    # Operators
    PLUS = auto()          # +
    MINUS = auto()         # -
    STAR = auto()          # *
    ASSIGN = auto()        # =

    # Delimiters
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    LT = auto()            # < (generic arguments)
    GT = auto()            # >

    # Punctuation
    SEMICOLON = auto()     # ;
    COLON = auto()         # :
    COMMA = auto()         # ,


KEYWORDS: dict[str, TokenType] = {
    "let": TokenType.LET,
    "fun": TokenType.FUN,
}

# Single byte tokens, keyed by byte value
SINGLE_CHAR_TOKENS: dict[int, TokenType] = {
    ord("("): TokenType.LPAREN,
    ord(")"): TokenType.RPAREN,
    ord("+"): TokenType.PLUS,
    ord("-"): TokenType.MINUS,
    ord("*"): TokenType.STAR,
    ord(";"): TokenType.SEMICOLON,
    ord("="): TokenType.ASSIGN,
    ord(":"): TokenType.COLON,
    ord(","): TokenType.COMMA,
    ord("<"): TokenType.LT,
    ord(">"): TokenType.GT,
}

TOKEN_SYMBOLS: dict[TokenType, str] = {
    token_type: chr(byte) for byte, token_type in SINGLE_CHAR_TOKENS.items()
}
TOKEN_SYMBOLS.update({token_type: word for word, token_type in KEYWORDS.items()})

OPERATOR_TYPES: frozenset[TokenType] = frozenset(
    {TokenType.PLUS, TokenType.MINUS, TokenType.STAR}
)


@dataclass(frozen=True, slots=True)
class Token:
    """
    A single lexical unit.

    Equality is structural: two tokens are equal when they have the same type
    and the same payload. Punctuation and keywords carry no payload, so any
    two of the same kind compare equal.

    Attributes:
        type: The type of this token
        value: Identifier or string text, or the numeric value of a literal
    """

    type: TokenType
    value: Optional[Any] = None

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r})"
        return f"Token({self.type.name})"

    def __str__(self) -> str:
        return self.describe()

    def describe(self) -> str:
        """Describe the token the way error messages quote it."""
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.type == TokenType.STRING:
            return f'string "{self.value}"'
        if self.type in (TokenType.INTEGER, TokenType.FLOAT):
            return f"number {self.value}"
        return f"'{TOKEN_SYMBOLS[self.type]}'"

    @property
    def is_literal(self) -> bool:
        """Check if this token represents a literal value."""
        return self.type in {
            TokenType.INTEGER,
            TokenType.FLOAT,
            TokenType.STRING,
        }

    @property
    def is_operator(self) -> bool:
        """Check if this token is a binary operator."""
        return self.type in OPERATOR_TYPES
