"""
CyaScript Language Server Protocol support.

Publishes tokenizer and parser errors as editor diagnostics and lists
``let`` bindings in the document outline.
"""

from cyascript.lsp.diagnostics import DiagnosticProvider, get_diagnostics_for_document
from cyascript.lsp.symbols import get_document_symbols

__all__ = [
    "DiagnosticProvider",
    "get_diagnostics_for_document",
    "get_document_symbols",
]
