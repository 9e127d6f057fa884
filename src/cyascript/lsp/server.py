"""
CyaScript Language Server Protocol (LSP) Server.

This module implements an LSP server for CyaScript using pygls. It provides:

- Document synchronization (open, change, save, close)
- Diagnostics for tokenizer and parser errors
- Document symbols (outline of ``let`` bindings)

Usage:
    # Start the server in stdio mode (for IDE integration)
    cyascript-lsp

    # Start in TCP mode (for debugging)
    cyascript-lsp --tcp --port 2087
"""

import argparse
import logging
from typing import Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from cyascript import __version__
from cyascript.lsp.diagnostics import DiagnosticProvider
from cyascript.lsp.symbols import get_document_symbols

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("cyascript-lsp")


class CyaScriptLanguageServer(LanguageServer):
    """
    Language Server Protocol implementation for CyaScript.

    Each open document is re-analyzed on every notification; the last
    analysis is cached per URI for symbol requests.
    """

    def __init__(self) -> None:
        super().__init__(
            name="cyascript-lsp",
            version=f"v{__version__}",
        )

        # Document analyses cache (uri -> provider)
        self._providers: dict[str, DiagnosticProvider] = {}

    def analyze_document(self, uri: str, text: str) -> DiagnosticProvider:
        """Analyze a document and cache the result."""
        provider = DiagnosticProvider(text, uri)
        provider.get_diagnostics()
        self._providers[uri] = provider
        return provider

    def _publish_diagnostics(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        """Publish diagnostics to the client."""
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    def _refresh(self, uri: str) -> None:
        doc = self.workspace.get_text_document(uri)
        if doc is None:
            return
        provider = self.analyze_document(uri, doc.source)
        self._publish_diagnostics(uri, provider.diagnostics)

    # =========================================================================
    # Document Synchronization
    # =========================================================================

    def on_did_open(self, params: types.DidOpenTextDocumentParams) -> None:
        """Handle document open notification."""
        document = params.text_document
        logger.info(f"Document opened: {document.uri}")

        provider = self.analyze_document(document.uri, document.text)
        self._publish_diagnostics(document.uri, provider.diagnostics)

    def on_did_change(self, params: types.DidChangeTextDocumentParams) -> None:
        """Handle document change notification."""
        logger.debug(f"Document changed: {params.text_document.uri}")
        self._refresh(params.text_document.uri)

    def on_did_save(self, params: types.DidSaveTextDocumentParams) -> None:
        """Handle document save notification."""
        logger.info(f"Document saved: {params.text_document.uri}")
        self._refresh(params.text_document.uri)

    def on_did_close(self, params: types.DidCloseTextDocumentParams) -> None:
        """Handle document close notification."""
        uri = params.text_document.uri
        logger.info(f"Document closed: {uri}")

        self._providers.pop(uri, None)

        # Clear diagnostics
        self._publish_diagnostics(uri, [])

    # =========================================================================
    # Document Symbols
    # =========================================================================

    def on_document_symbol(
        self, params: types.DocumentSymbolParams
    ) -> Optional[list[types.DocumentSymbol]]:
        """Handle document symbols request (for outline view)."""
        uri = params.text_document.uri

        provider = self._providers.get(uri)
        if provider is None:
            doc = self.workspace.get_text_document(uri)
            if doc is None:
                return None
            provider = self.analyze_document(uri, doc.source)

        if provider.parsed_file is None:
            return []
        return get_document_symbols(provider.parsed_file, provider.source)


def create_server() -> CyaScriptLanguageServer:
    """Create and configure a CyaScript language server instance."""
    server = CyaScriptLanguageServer()

    # Handlers are plain functions; pygls passes the server as ``ls``.

    # Document synchronization
    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    def did_open(ls: CyaScriptLanguageServer, params: types.DidOpenTextDocumentParams) -> None:
        ls.on_did_open(params)

    @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    def did_change(
        ls: CyaScriptLanguageServer, params: types.DidChangeTextDocumentParams
    ) -> None:
        ls.on_did_change(params)

    @server.feature(types.TEXT_DOCUMENT_DID_SAVE)
    def did_save(ls: CyaScriptLanguageServer, params: types.DidSaveTextDocumentParams) -> None:
        ls.on_did_save(params)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    def did_close(ls: CyaScriptLanguageServer, params: types.DidCloseTextDocumentParams) -> None:
        ls.on_did_close(params)

    # Document symbols (outline)
    @server.feature(types.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
    def document_symbol(
        ls: CyaScriptLanguageServer, params: types.DocumentSymbolParams
    ) -> Optional[list[types.DocumentSymbol]]:
        return ls.on_document_symbol(params)

    @server.feature(types.INITIALIZED)
    def on_initialized(
        params: types.InitializedParams,  # noqa: ARG001
    ) -> None:
        """Handle initialized notification."""
        logger.info("CyaScript Language Server initialized successfully")

    @server.feature(types.SHUTDOWN)
    def on_shutdown(
        params: None,  # noqa: ARG001
    ) -> None:
        """Handle shutdown request."""
        logger.info("Shutting down CyaScript Language Server")

    return server


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the CyaScript language server.

    Starts the server in stdio mode for IDE integration.
    """
    parser = argparse.ArgumentParser(
        description="CyaScript Language Server",
        prog="cyascript-lsp",
    )
    parser.add_argument(
        "--tcp",
        action="store_true",
        help="Start server in TCP mode instead of stdio",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to in TCP mode (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=2087,
        help="Port to listen on in TCP mode (default: 2087)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)",
    )

    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level.upper())
    logging.getLogger("cyascript-lsp").setLevel(log_level)

    server = create_server()

    if args.tcp:
        logger.info(f"Starting CyaScript LSP in TCP mode on {args.host}:{args.port}")
        server.start_tcp(args.host, args.port)
    else:
        logger.info("Starting CyaScript LSP in stdio mode")
        server.start_io()


if __name__ == "__main__":
    main()
