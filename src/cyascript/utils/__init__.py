"""
CyaScript Utilities Package.

Error types and diagnostics shared by the tokenizer, the parser and the
tools built on them.
"""

from cyascript.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    Diagnostic,
    DiagnosticLevel,
    ErrorCode,
    SourceSpan,
)
from cyascript.utils.errors import (
    CyaScriptError,
    LexerError,
    ParseError,
    UnsupportedFeatureError,
)

__all__ = [
    # Errors
    "CyaScriptError",
    "LexerError",
    "ParseError",
    "UnsupportedFeatureError",
    # Diagnostics
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "SourceSpan",
    "Diagnostic",
]
