"""
Unit tests for error rendering and the error hierarchy.
"""

import pytest

from cyascript.utils.diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    ErrorCode,
    SourceSpan,
    source_lines,
)
from cyascript.utils.errors import (
    CyaScriptError,
    LexerError,
    ParseError,
    UnsupportedFeatureError,
)


class TestErrorHierarchy:
    """Tests for the front-end exception types."""

    def test_all_errors_share_base(self):
        assert issubclass(LexerError, CyaScriptError)
        assert issubclass(ParseError, CyaScriptError)
        assert issubclass(UnsupportedFeatureError, CyaScriptError)

    def test_message_with_filename(self):
        error = CyaScriptError("bad thing", line=3, filename="a.cyas")
        assert str(error) == "[a.cyas:3] bad thing"

    def test_message_without_line(self):
        assert str(CyaScriptError("bad thing")) == "bad thing"

    def test_unsupported_feature_code(self):
        error = UnsupportedFeatureError("for loop", 2)
        assert error.code == ErrorCode.E0205
        assert str(error) == "[line 2] for loop is not supported in this version"


class TestDiagnosticFromError:
    """Tests for building diagnostics out of exceptions."""

    def test_parse_error(self):
        diagnostic = Diagnostic.from_error(ParseError(2, "expect token '='"), "main.cyas")
        assert diagnostic.code == ErrorCode.E0201
        assert diagnostic.level == DiagnosticLevel.ERROR
        assert diagnostic.message == "expect token '='"
        assert diagnostic.span == SourceSpan(2, 2, "main.cyas")

    def test_lexer_error_adds_help(self):
        diagnostic = Diagnostic.from_error(LexerError("unexpected character '@'", 1, byte=0x40))
        assert diagnostic.code == ErrorCode.E0208
        assert diagnostic.helps == ["remove the byte 0x40"]

    def test_lexer_error_hint_replaces_byte_help(self):
        """An error with its own hint does not suggest removing the byte."""
        error = LexerError(
            "string literal is not valid UTF-8", 1, byte=0xC3, hint="save the file as UTF-8"
        )
        diagnostic = Diagnostic.from_error(error)
        assert diagnostic.helps == ["save the file as UTF-8"]

    def test_invalid_utf8_string_help(self, lexer_factory):
        with pytest.raises(LexerError) as exc_info:
            lexer_factory(b'let s = "\xc3("').tokenize()
        helps = Diagnostic.from_error(exc_info.value).helps
        assert len(helps) == 1
        assert "UTF-8" in helps[0]
        assert "remove the byte" not in helps[0]

    def test_unterminated_string_help(self, lexer_factory):
        with pytest.raises(LexerError) as exc_info:
            lexer_factory(b'let s = "abc').tokenize()
        helps = Diagnostic.from_error(exc_info.value).helps
        assert helps == ["add a closing '\"' to end the string"]

    def test_unsupported_adds_note(self):
        error = ParseError(1, "call expression is not supported", ErrorCode.E0205)
        diagnostic = Diagnostic.from_error(error)
        assert len(diagnostic.notes) == 1

    def test_simple_message(self):
        diagnostic = Diagnostic.from_error(ParseError(1, "oops"))
        assert diagnostic.to_simple_message() == "[E0201] oops"


class TestDiagnosticRender:
    """Tests for Rust-style rendering."""

    def test_render_without_color(self):
        source = "let a = 1\n  let x Int \"hi\"\n"
        diagnostic = Diagnostic.from_error(ParseError(2, "expect token '='"), "main.cyas")
        rendered = diagnostic.render(source, use_color=False)
        assert rendered.splitlines() == [
            "error[E0201]: expect token '='",
            "  --> main.cyas:2",
            "   |",
            '  2 |   let x Int "hi"',
            "   |   ^^^^^^^^^^^^^^",
            "   |",
        ]

    def test_render_line_past_end(self):
        """Errors on the sentinel line show the header and location only."""
        diagnostic = Diagnostic.from_error(ParseError(2, "unexpected end of input"))
        rendered = diagnostic.render("let x =", use_color=False)
        assert rendered.splitlines() == [
            "error[E0201]: unexpected end of input",
            "  --> <input>:2",
        ]

    def test_render_with_color(self):
        diagnostic = Diagnostic.from_error(ParseError(1, "oops"))
        assert "\033[" in diagnostic.render("x", use_color=True)

    def test_render_help(self):
        diagnostic = Diagnostic.from_error(LexerError("unexpected byte 0xff", 1, byte=0xFF))
        rendered = diagnostic.render("�", use_color=False)
        assert rendered.splitlines()[-1] == "   = help: remove the byte 0xff"

    def test_render_ignores_other_line_breaks(self):
        """A form feed does not start a new line, so line 2 is the second "\\n" line."""
        source = 'let a = 1\x0c\nlet x Int "hi"'
        diagnostic = Diagnostic.from_error(ParseError(2, "expect token '='"), "main.cyas")
        rendered = diagnostic.render(source, use_color=False).splitlines()
        assert '  2 | let x Int "hi"' in rendered
        assert "   | ^^^^^^^^^^^^^^" in rendered


class TestSourceLines:
    """Tests for splitting source text into numbered lines."""

    def test_crlf(self):
        assert source_lines("a\r\nb\r\n") == ["a", "b", ""]

    def test_only_newline_breaks(self):
        assert source_lines("a\x0cb\x1cc\u2028d\ne") == ["a\x0cb\x1cc\u2028d", "e"]

    def test_lone_carriage_return_kept_inside_line(self):
        assert source_lines("a\rb") == ["a\rb"]

    def test_empty(self):
        assert source_lines("") == [""]
