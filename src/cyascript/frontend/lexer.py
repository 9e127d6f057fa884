"""
CyaScript Lexer (Tokenizer).

Transforms raw CyaScript source bytes into a token list and a parallel
table of 1-based line numbers.
"""

import logging
import sys
from typing import Optional, Union

from cyascript.frontend.tokens import KEYWORDS, SINGLE_CHAR_TOKENS, Token, TokenType
from cyascript.utils.diagnostics import ErrorCode
from cyascript.utils.errors import LexerError

logger = logging.getLogger(__name__)

_NEWLINE = ord("\n")
_QUOTE = ord('"')
_HASH = ord("#")
_DOT = ord(".")
_SPACE = ord(" ")

_DIGITS = frozenset(b"0123456789")
_IDENT_START = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
)
_IDENT_CONTINUE = _IDENT_START | _DIGITS

# Largest magnitude an integer literal may have; 2**63 is only valid after "-"
INT_LITERAL_LIMIT = 2**63
INT_RANGE_HINT = "integer literals range from -9223372036854775808 to 9223372036854775807"


class Lexer:
    """
    Tokenizer for CyaScript source code.

    The lexer makes a single forward pass over the byte buffer and
    supports:
    - Punctuation and operators: ( ) ; : , < > + - * =
    - Keywords ``let`` and ``fun``
    - ASCII identifiers
    - Double-quoted string literals (no escapes)
    - Decimal integer and float literals
    - Comments from ``#`` to the end of the line

    Usage:
        tokens, lines = Lexer(source).tokenize()
    """

    def __init__(self, source: Union[bytes, str]) -> None:
        """
        Initialize the lexer with source code.

        Args:
            source: Raw source bytes; ``str`` input is encoded as UTF-8
        """
        if isinstance(source, str):
            source = source.encode("utf-8")
        self.source = bytes(source)
        self.pos = 0
        self.line = 1
        self.tokens: list[Token] = []
        self.lines: list[int] = []

    @property
    def _current_byte(self) -> Optional[int]:
        """Return the current byte or None if at end."""
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    @property
    def _peek_byte(self) -> Optional[int]:
        """Return the next byte without consuming it."""
        peek_pos = self.pos + 1
        if peek_pos >= len(self.source):
            return None
        return self.source[peek_pos]

    def _emit(self, token: Token, line: int) -> None:
        self.tokens.append(token)
        self.lines.append(line)

    def _skip_comment(self) -> None:
        """
        Skip a ``#`` comment together with the newline that ends it.

        The line counter advances even when the comment runs to end of input
        without a newline, so the sentinel entry ends up one higher than for
        the same source without the comment.
        """
        while self._current_byte is not None and self._current_byte != _NEWLINE:
            self.pos += 1
        self.line += 1
        if self._current_byte == _NEWLINE:
            self.pos += 1

    def _read_string(self) -> Token:
        """
        Read a string literal.

        The bytes between the quotes are taken verbatim. Newlines inside the
        literal advance the line counter.
        """
        start_line = self.line
        self.pos += 1  # consume opening quote
        start = self.pos

        while True:
            byte = self._current_byte
            if byte is None:
                raise LexerError(
                    "unterminated string literal",
                    start_line,
                    code=ErrorCode.E0206,
                    hint="add a closing '\"' to end the string",
                )
            if byte == _QUOTE:
                break
            if byte == _NEWLINE:
                self.line += 1
            self.pos += 1

        raw = self.source[start:self.pos]
        self.pos += 1  # consume closing quote

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise LexerError(
                "string literal is not valid UTF-8",
                start_line,
                byte=raw[e.start],
                hint=(
                    f"save the file as UTF-8; byte 0x{raw[e.start]:02x} "
                    "starts an invalid sequence"
                ),
            ) from e

        return Token(TokenType.STRING, sys.intern(text))

    def _read_number(self) -> Token:
        """
        Read a numeric literal.

        Supports:
        - Decimal integers: 123
        - Floats: 123.456 (digits are required on both sides of the dot)
        """
        start = self.pos
        is_float = False

        while self._current_byte in _DIGITS:
            self.pos += 1

        if self._current_byte == _DOT and self._peek_byte in _DIGITS:
            is_float = True
            self.pos += 1
            while self._current_byte in _DIGITS:
                self.pos += 1

        text = self.source[start:self.pos].decode("ascii")

        if self._current_byte in _IDENT_START:
            raise LexerError(
                f"invalid number literal '{text}{chr(self._current_byte)}'",
                self.line,
                code=ErrorCode.E0207,
                hint="separate the number from the name that follows it",
            )

        if is_float:
            return Token(TokenType.FLOAT, float(text))

        value = int(text)
        if value > INT_LITERAL_LIMIT:
            raise LexerError(
                f"integer literal {text} does not fit in 64 bits",
                self.line,
                code=ErrorCode.E0207,
                hint=INT_RANGE_HINT,
            )
        return Token(TokenType.INTEGER, value)

    def _read_identifier_or_keyword(self) -> Token:
        """
        Read an identifier or keyword.

        Identifiers start with an ASCII letter or underscore and continue
        with ASCII letters, digits, and underscores.
        """
        start = self.pos
        self.pos += 1
        while self._current_byte in _IDENT_CONTINUE:
            self.pos += 1

        identifier = self.source[start:self.pos].decode("ascii")

        token_type = KEYWORDS.get(identifier)
        if token_type is not None:
            return Token(token_type)
        return Token(TokenType.IDENTIFIER, sys.intern(identifier))

    def _unexpected_byte(self, byte: int) -> LexerError:
        if 0x21 <= byte < 0x7F:
            message = f"unexpected character '{chr(byte)}'"
        else:
            message = f"unexpected byte 0x{byte:02x}"
        return LexerError(message, self.line, byte=byte)

    def tokenize(self) -> tuple[list[Token], list[int]]:
        """
        Tokenize the entire source.

        Returns:
            The token list and the line table. The line table holds one entry
            per token plus a trailing sentinel equal to the last line + 1.
        """
        self.tokens = []
        self.lines = []
        self.pos = 0
        self.line = 1

        while self.pos < len(self.source):
            byte = self.source[self.pos]

            if byte == _NEWLINE:
                self.line += 1
                self.pos += 1
            elif byte in SINGLE_CHAR_TOKENS:
                self._emit(Token(SINGLE_CHAR_TOKENS[byte]), self.line)
                self.pos += 1
            elif byte == _HASH:
                self._skip_comment()
            elif byte == _QUOTE:
                line = self.line
                self._emit(self._read_string(), line)
            elif byte in _IDENT_START:
                self._emit(self._read_identifier_or_keyword(), self.line)
            elif byte in _DIGITS:
                self._emit(self._read_number(), self.line)
            elif byte <= _SPACE:
                self.pos += 1
            else:
                raise self._unexpected_byte(byte)

        self.lines.append(self.line + 1)

        logger.debug(
            f"Tokenized {len(self.source)} bytes into {len(self.tokens)} tokens "
            f"({self.line} lines)"
        )
        return self.tokens, self.lines


def tokenize(source: Union[bytes, str]) -> tuple[list[Token], list[int]]:
    """
    Convenience function to tokenize source code.

    Args:
        source: CyaScript source bytes (or text, encoded as UTF-8)

    Returns:
        The token list and its line table
    """
    return Lexer(source).tokenize()
