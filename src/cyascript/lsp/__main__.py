"""
Entry point for running the CyaScript LSP server as a module.

Usage:
    python -m cyascript.lsp
    python -m cyascript.lsp --tcp --port 2087
"""

from cyascript.lsp.server import main

if __name__ == "__main__":
    main()
