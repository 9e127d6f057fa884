"""Tests for the CyaScript LSP diagnostics provider."""

from lsprotocol.types import DiagnosticSeverity

from cyascript.lsp.diagnostics import DiagnosticProvider, get_diagnostics_for_document

URI = "test://test.cyas"


class TestDiagnosticProvider:
    """Test suite for DiagnosticProvider."""

    def test_valid_code_no_errors(self) -> None:
        """Valid code produces no diagnostics."""
        source = """
let x: Int = 42
let y: Float = 3.14
"""
        assert get_diagnostics_for_document(source, URI) == []

    def test_valid_code_keeps_parse(self) -> None:
        provider = DiagnosticProvider("let x = 1", URI)
        provider.get_diagnostics()
        assert provider.parsed_file is not None
        assert len(provider.parsed_file.statements) == 1

    def test_syntax_error_produces_one_diagnostic(self) -> None:
        """The front end stops at the first error."""
        source = 'let a = 1\nlet x Int "hi"\nlet = 3'
        diagnostics = get_diagnostics_for_document(source, URI)

        assert len(diagnostics) == 1
        diag = diagnostics[0]
        assert diag.severity == DiagnosticSeverity.Error
        assert diag.range.start.line == 1
        assert diag.range.start.character == 0
        assert diag.range.end.character == len('let x Int "hi"')
        assert "expect token '='" in diag.message

    def test_unterminated_string_error(self) -> None:
        source = 'let s = "hello'
        diagnostics = get_diagnostics_for_document(source, URI)

        assert len(diagnostics) == 1
        assert "unterminated string" in diagnostics[0].message
        assert diagnostics[0].code == "E0206"

    def test_end_of_input_clamped_to_last_line(self) -> None:
        """Errors on the sentinel line point at the last line of the document."""
        diagnostics = get_diagnostics_for_document("let x =", URI)

        assert len(diagnostics) == 1
        assert diagnostics[0].range.start.line == 0

    def test_empty_document(self) -> None:
        assert get_diagnostics_for_document("", URI) == []

    def test_diagnostic_has_source(self) -> None:
        diagnostics = get_diagnostics_for_document("1 + 2", URI)

        assert diagnostics[0].source == "cyascript"
        assert diagnostics[0].code == "E0205"
        assert "note:" in diagnostics[0].message

    def test_unknown_byte_has_help(self) -> None:
        diagnostics = get_diagnostics_for_document("let x = $", URI)

        assert "help: remove the byte 0x24" in diagnostics[0].message

    def test_reanalysis_resets(self) -> None:
        provider = DiagnosticProvider("let x =", URI)
        assert len(provider.get_diagnostics()) == 1
        assert len(provider.get_diagnostics()) == 1
        diagnostics = provider.get_diagnostics()
        assert provider.diagnostics is diagnostics

    def test_range_ignores_other_line_breaks(self) -> None:
        """Only newlines separate lines, matching the tokenizer's line count."""
        source = 'let a = 1\x0c\nlet x Int "hi"'
        (diag,) = get_diagnostics_for_document(source, URI)

        assert diag.range.start.line == 1
        assert diag.range.end.character == 14

    def test_crlf_line_length(self) -> None:
        source = 'let a = 1\r\nlet x Int "hi"\r\n'
        (diag,) = get_diagnostics_for_document(source, URI)

        assert diag.range.start.line == 1
        assert diag.range.end.character == 14

    def test_deep_nesting_is_a_diagnostic(self) -> None:
        source = "let x: " + "(" * 5000 + ")" * 5000 + " = 1"
        (diag,) = get_diagnostics_for_document(source, URI)

        assert diag.code == "E0209"
        assert diag.range.start.line == 0
