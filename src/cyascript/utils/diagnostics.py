"""
Rust-like error diagnostics for CyaScript.

Turns a front-end error into a readable report with the offending source
line. Tokens carry line numbers only, so the label underlines the whole
line rather than a column range.

Example output:
    error[E0201]: expect token '=', found string "hi"
      --> example.cyas:3
       |
     3 | let x Int "hi"
       | ^^^^^^^^^^^^^^
       |
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# =============================================================================
# Error Codes Catalog
# =============================================================================


class ErrorCode:
    """
    Catalog of error codes reported by the front end.

    Only the syntax family (E02xx) exists; semantic codes belong to the
    analyzer that consumes the parser's output.
    """

    E0201 = "E0201"  # unexpected token
    E0202 = "E0202"  # unclosed delimiter
    E0203 = "E0203"  # unexpected end of input
    E0204 = "E0204"  # invalid expression
    E0205 = "E0205"  # unsupported construct
    E0206 = "E0206"  # unterminated string
    E0207 = "E0207"  # invalid number
    E0208 = "E0208"  # unexpected character
    E0209 = "E0209"  # nesting too deep


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.E0201: "unexpected token",
    ErrorCode.E0202: "unclosed delimiter",
    ErrorCode.E0203: "unexpected end of input",
    ErrorCode.E0204: "invalid expression",
    ErrorCode.E0205: "unsupported construct",
    ErrorCode.E0206: "unterminated string",
    ErrorCode.E0207: "invalid number",
    ErrorCode.E0208: "unexpected character",
    ErrorCode.E0209: "nesting too deep",
}


def source_lines(source: str) -> list[str]:
    """
    Split source text into lines the way the tokenizer counts them.

    Only ``\\n`` ends a line; a ``\\r`` before it is dropped. Other characters
    that ``str.splitlines`` treats as breaks stay inside the line.
    """
    return [line[:-1] if line.endswith("\r") else line for line in source.split("\n")]


# =============================================================================
# Diagnostic Types
# =============================================================================


class DiagnosticLevel(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"

    def color_code(self) -> str:
        """Get ANSI color code for this level."""
        colors = {
            DiagnosticLevel.ERROR: "\033[91m",  # Red
            DiagnosticLevel.WARNING: "\033[93m",  # Yellow
            DiagnosticLevel.NOTE: "\033[96m",  # Cyan
            DiagnosticLevel.HELP: "\033[92m",  # Green
        }
        return colors.get(self, "")


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """
    A range of whole source lines.

    Attributes:
        start_line: 1-indexed first line
        end_line: 1-indexed last line (inclusive)
        filename: Filename for display
    """

    start_line: int
    end_line: int
    filename: str = "<input>"

    @classmethod
    def from_line(cls, line: int, filename: str = "<input>") -> "SourceSpan":
        """Create a span covering a single line."""
        return cls(start_line=line, end_line=line, filename=filename)

    def __str__(self) -> str:
        return f"{self.filename}:{self.start_line}"


@dataclass
class Diagnostic:
    """
    A diagnostic message with source context.

    Attributes:
        code: Error code (e.g., "E0201")
        level: Severity level
        message: The main diagnostic message
        span: Lines the diagnostic points at, if known
        notes: Additional notes to display
        helps: Help messages
    """

    code: str
    level: DiagnosticLevel
    message: str
    span: Optional[SourceSpan] = None
    notes: list[str] = field(default_factory=list)
    helps: list[str] = field(default_factory=list)

    @classmethod
    def from_error(cls, error: Exception, filename: str = "<input>") -> "Diagnostic":
        """
        Build an error diagnostic from a front-end exception.

        Reads the ``code``, ``line`` and ``reason``/``message`` attributes the
        error hierarchy provides; anything else is reported without a span.
        """
        code = getattr(error, "code", ErrorCode.E0201)
        message = getattr(error, "reason", None) or getattr(error, "message", str(error))
        line = getattr(error, "line", None)
        span = SourceSpan.from_line(line, filename) if line is not None else None

        diagnostic = cls(code=code, level=DiagnosticLevel.ERROR, message=message, span=span)
        if code == ErrorCode.E0205:
            diagnostic.notes.append("only 'let' and single-atom expression statements are parsed")
        hint = getattr(error, "hint", None)
        if hint is None and getattr(error, "byte", None) is not None:
            hint = f"remove the byte 0x{error.byte:02x}"
        if hint is not None:
            diagnostic.helps.append(hint)
        return diagnostic

    def render(self, source_code: str, use_color: bool = True) -> str:
        """
        Render this diagnostic as a formatted string.

        Args:
            source_code: The original source code for context
            use_color: Whether to use ANSI color codes

        Returns:
            A formatted multi-line string representation
        """
        lines: list[str] = []
        lines_of_source = source_lines(source_code)

        reset = "\033[0m" if use_color else ""
        bold = "\033[1m" if use_color else ""
        level_color = self.level.color_code() if use_color else ""
        blue = "\033[94m" if use_color else ""
        green = "\033[92m" if use_color else ""

        level_str = self.level.value
        if self.code in ERROR_DESCRIPTIONS:
            header = (
                f"{level_color}{bold}{level_str}[{self.code}]{reset}: {bold}{self.message}{reset}"
            )
        else:
            header = f"{level_color}{bold}{level_str}{reset}: {bold}{self.message}{reset}"
        lines.append(header)

        if self.span is not None:
            lines.append(f"  {blue}-->{reset} {self.span}")

            shown = [
                n for n in range(self.span.start_line, self.span.end_line + 1)
                if 1 <= n <= len(lines_of_source)
            ]
            if shown:
                lines.append(f"   {blue}|{reset}")
                for line_num in shown:
                    source_line = lines_of_source[line_num - 1]
                    lines.append(f"{blue}{line_num:3} |{reset} {source_line}")

                    stripped = source_line.lstrip()
                    if stripped:
                        padding = " " * (len(source_line) - len(stripped))
                        underline = "^" * len(stripped.rstrip())
                        lines.append(f"   {blue}|{reset} {padding}{level_color}{underline}{reset}")
                lines.append(f"   {blue}|{reset}")

        for note in self.notes:
            lines.append(f"   {blue}={reset} {bold}note:{reset} {note}")

        for help_msg in self.helps:
            lines.append(f"   {blue}={reset} {green}help:{reset} {help_msg}")

        return "\n".join(lines)

    def to_simple_message(self) -> str:
        """Get a simple one-line error message."""
        return f"[{self.code}] {self.message}"


__all__ = [
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "SourceSpan",
    "Diagnostic",
    "source_lines",
]
