"""
CyaScript - the front end of a small statically-typed scripting language.

Converts raw source into a line-annotated token stream and then into an
abstract syntax tree of statements, expressions and type annotations.
"""

from cyascript.frontend import parse, parse_source, tokenize
from cyascript.frontend.lexer import Lexer
from cyascript.frontend.parser import Parser

__version__ = "0.1.0"
__all__ = [
    "tokenize",
    "parse",
    "parse_source",
    "Lexer",
    "Parser",
]
