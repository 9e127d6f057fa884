"""Tests for the CyaScript language server wiring."""

import pytest
from lsprotocol import types

from cyascript.lsp.server import CyaScriptLanguageServer, create_server

URI = "test://a.cyas"


@pytest.fixture
def server():
    """A server whose published diagnostics are recorded instead of sent."""
    server = create_server()
    server.published = []
    server.text_document_publish_diagnostics = server.published.append
    return server


def _handler(server, method):
    return server.protocol.fm.features[method]


def _open(server, text):
    params = types.DidOpenTextDocumentParams(
        text_document=types.TextDocumentItem(
            uri=URI, language_id="cyascript", version=1, text=text
        )
    )
    _handler(server, types.TEXT_DOCUMENT_DID_OPEN)(params)


class TestLanguageServer:
    """Test suite for CyaScriptLanguageServer."""

    def test_create_server(self, server) -> None:
        assert isinstance(server, CyaScriptLanguageServer)
        assert server.name == "cyascript-lsp"

    def test_features_registered(self, server) -> None:
        features = server.protocol.fm.features
        for method in (
            types.TEXT_DOCUMENT_DID_OPEN,
            types.TEXT_DOCUMENT_DID_CHANGE,
            types.TEXT_DOCUMENT_DID_SAVE,
            types.TEXT_DOCUMENT_DID_CLOSE,
            types.TEXT_DOCUMENT_DOCUMENT_SYMBOL,
        ):
            assert method in features

    def test_analyze_document_caches_result(self) -> None:
        server = CyaScriptLanguageServer()
        provider = server.analyze_document(URI, "let x = 1 +")

        assert server._providers[URI] is provider
        assert len(provider.diagnostics) == 1
        assert provider.parsed_file is None

    def test_open_publishes_diagnostics(self, server) -> None:
        _open(server, "let x =")

        (published,) = server.published
        assert published.uri == URI
        assert len(published.diagnostics) == 1

    def test_document_symbols_after_open(self, server) -> None:
        _open(server, "let name: Str = a\nlet count = 1")

        params = types.DocumentSymbolParams(
            text_document=types.TextDocumentIdentifier(uri=URI)
        )
        symbols = _handler(server, types.TEXT_DOCUMENT_DOCUMENT_SYMBOL)(params)
        assert [s.name for s in symbols] == ["name", "count"]

    def test_close_clears_diagnostics(self, server) -> None:
        _open(server, "let x =")
        params = types.DidCloseTextDocumentParams(
            text_document=types.TextDocumentIdentifier(uri=URI)
        )
        _handler(server, types.TEXT_DOCUMENT_DID_CLOSE)(params)

        assert server.published[-1].diagnostics == []
        assert URI not in server._providers
