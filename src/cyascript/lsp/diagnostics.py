"""
Diagnostic generation for CyaScript LSP.

Converts tokenizer and parser errors into LSP diagnostics. The front end
stops at the first error, so a document yields at most one diagnostic.
"""

from typing import Optional

from lsprotocol import types

from cyascript.frontend.ast_nodes import ParsedFile
from cyascript.frontend.lexer import Lexer
from cyascript.frontend.parser import Parser
from cyascript.utils.diagnostics import Diagnostic as FrontendDiagnostic, source_lines
from cyascript.utils.errors import CyaScriptError

SOURCE_NAME = "cyascript"


class DiagnosticProvider:
    """
    Generates LSP diagnostics from CyaScript source code.

    Runs the tokenizer and the parser; a successful parse is kept on
    ``parsed_file`` for the other language features.
    """

    def __init__(self, source: str, uri: str) -> None:
        """
        Initialize the diagnostic provider.

        Args:
            source: The CyaScript source code to analyze
            uri: The document URI for location information
        """
        self.source = source
        self.uri = uri
        self.parsed_file: Optional[ParsedFile] = None
        self._diagnostics: list[types.Diagnostic] = []
        self._lines = source_lines(source)

    @property
    def diagnostics(self) -> list[types.Diagnostic]:
        """Diagnostics from the most recent analysis."""
        return self._diagnostics

    def get_diagnostics(self) -> list[types.Diagnostic]:
        """
        Get all diagnostics for the document.

        Returns:
            List of LSP diagnostic objects, empty when the document parses
        """
        self._diagnostics = []
        self.parsed_file = None

        try:
            tokens, lines = Lexer(self.source).tokenize()
            self.parsed_file = Parser(tokens, lines).parse()
        except CyaScriptError as e:
            self._add_frontend_error(e)

        return self._diagnostics

    def _add_frontend_error(self, error: CyaScriptError) -> None:
        """
        Add a tokenizer or parser error as an LSP diagnostic.

        The range covers the whole offending line. Errors reported on the
        sentinel line past the end of the document are clamped to the last line.
        """
        frontend = FrontendDiagnostic.from_error(error, self.uri)

        line = 0
        if frontend.span is not None:
            line = max(0, frontend.span.start_line - 1)  # Convert to 0-indexed
        line = min(line, len(self._lines) - 1)
        end_character = len(self._lines[line])

        message_parts = [frontend.message]
        for note in frontend.notes:
            message_parts.append(f"note: {note}")
        for help_msg in frontend.helps:
            message_parts.append(f"help: {help_msg}")

        diagnostic = types.Diagnostic(
            range=types.Range(
                start=types.Position(line=line, character=0),
                end=types.Position(line=line, character=end_character),
            ),
            message="\n".join(message_parts),
            severity=types.DiagnosticSeverity.Error,
            source=SOURCE_NAME,
            code=frontend.code,
        )

        self._diagnostics.append(diagnostic)


def get_diagnostics_for_document(source: str, uri: str) -> list[types.Diagnostic]:
    """
    Convenience function to get diagnostics for a document.

    Args:
        source: The CyaScript source code
        uri: The document URI

    Returns:
        List of LSP diagnostics
    """
    provider = DiagnosticProvider(source, uri)
    return provider.get_diagnostics()
