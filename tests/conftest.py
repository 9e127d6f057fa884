"""
Pytest configuration and shared fixtures for CyaScript tests.
"""

import pytest

from cyascript.frontend.ast_nodes import ParsedFile
from cyascript.frontend.lexer import Lexer
from cyascript.frontend.parser import Parser
from cyascript.frontend.tokens import Token


@pytest.fixture
def lexer_factory():
    """Factory fixture for creating lexers."""

    def _create_lexer(source) -> Lexer:
        return Lexer(source)

    return _create_lexer


@pytest.fixture
def parser_factory(lexer_factory):
    """Factory fixture for creating parsers from source."""

    def _create_parser(source) -> Parser:
        tokens, lines = lexer_factory(source).tokenize()
        return Parser(tokens, lines)

    return _create_parser


@pytest.fixture
def tokenize(lexer_factory):
    """Fixture to tokenize source code into tokens and line table."""

    def _tokenize(source) -> tuple[list[Token], list[int]]:
        return lexer_factory(source).tokenize()

    return _tokenize


@pytest.fixture
def parse(parser_factory):
    """Fixture to parse source code into a ParsedFile."""

    def _parse(source) -> ParsedFile:
        return parser_factory(source).parse()

    return _parse


@pytest.fixture
def source_file(tmp_path):
    """Fixture writing source text to a temporary .cyas file."""

    def _write(source: str, name: str = "program.cyas"):
        path = tmp_path / name
        path.write_text(source)
        return path

    return _write
