"""
CyaScript Front End Package.

This package contains the front-end components:
- Tokens: Token kinds and the immutable Token value
- Lexer: Turns source bytes into tokens and a line table
- AST: Node definitions for the syntax tree
- Parser: Builds a ParsedFile from tokens and lines
"""

from typing import Union

from cyascript.frontend.ast_nodes import ParsedFile
from cyascript.frontend.lexer import Lexer, tokenize
from cyascript.frontend.parser import Parser, parse
from cyascript.frontend.tokens import Token, TokenType


def parse_source(source: Union[bytes, str]) -> ParsedFile:
    """
    Tokenize and parse source code in one step.

    Args:
        source: CyaScript source bytes (or text, encoded as UTF-8)

    Returns:
        The parsed file

    Raises:
        LexerError: if the source cannot be tokenized
        ParseError: if the tokens do not form a valid file
    """
    tokens, lines = tokenize(source)
    return parse(tokens, lines)


__all__ = [
    "Lexer",
    "Parser",
    "ParsedFile",
    "Token",
    "TokenType",
    "parse",
    "parse_source",
    "tokenize",
]
