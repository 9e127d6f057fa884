"""
Error types for the CyaScript front end.

Every error carries the 1-based source line it was raised on. Tokens carry
no columns, so the line is the finest position the front end can report.
"""

from typing import Optional

from cyascript.utils.diagnostics import ErrorCode


class CyaScriptError(Exception):
    """Base exception for all CyaScript front-end errors."""

    code: str = ErrorCode.E0201

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        filename: Optional[str] = None,
    ) -> None:
        self.message = message
        self.line = line
        self.filename = filename
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.line is None:
            return self.message
        if self.filename:
            return f"[{self.filename}:{self.line}] {self.message}"
        return f"[line {self.line}] {self.message}"


class LexerError(CyaScriptError):
    """
    Raised when the tokenizer meets input it cannot turn into a token.

    Attributes:
        byte: The offending byte, when the error is about a single byte
        hint: Suggested fix shown with the diagnostic, if any
    """

    def __init__(
        self,
        message: str,
        line: int,
        byte: Optional[int] = None,
        code: str = ErrorCode.E0208,
        hint: Optional[str] = None,
    ) -> None:
        self.byte = byte
        self.hint = hint
        self.code = code
        super().__init__(message, line)


class ParseError(CyaScriptError):
    """
    Raised when the parser finds a token sequence outside the grammar.

    ``reason`` is the human-readable explanation. Context added while the
    error propagates is appended to it, never replacing it.
    """

    def __init__(self, line: int, reason: str, code: str = ErrorCode.E0201) -> None:
        self.reason = reason
        self.code = code
        super().__init__(reason, line)

    def _format_message(self) -> str:
        return f"Parse error line {self.line} : {self.reason}"

    def with_context(self, message: str) -> "ParseError":
        """Return a copy of this error with ``message`` appended to the reason."""
        return ParseError(self.line, f"{self.reason}, {message}", self.code)


class UnsupportedFeatureError(CyaScriptError):
    """Raised when a reserved AST variant reaches code that cannot handle it yet."""

    code = ErrorCode.E0205

    def __init__(self, feature: str, line: Optional[int] = None) -> None:
        self.feature = feature
        super().__init__(f"{feature} is not supported in this version", line)
