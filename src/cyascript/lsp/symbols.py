"""
Document symbols for CyaScript LSP.

Every top-level ``let`` binding becomes a variable in the outline, with its
declared type (if any) as the detail text.
"""

import re
from typing import Optional

from lsprotocol import types

from cyascript.frontend.ast_nodes import LetStatement, ParsedFile, VarName
from cyascript.utils.diagnostics import source_lines


def _line_range(line: int, lines: list[str]) -> types.Range:
    """Range covering a whole 1-indexed source line."""
    index = min(max(0, line - 1), len(lines) - 1)
    return types.Range(
        start=types.Position(line=index, character=0),
        end=types.Position(line=index, character=len(lines[index])),
    )


class _BindingLocator:
    """
    Finds the name of each ``let`` binding in the document text.

    Bindings are located in source order; each search starts after the
    previous match, so repeated names on one line resolve to the right one.
    """

    def __init__(self, lines: list[str]) -> None:
        self.lines = lines
        self.text = "\n".join(lines)
        self.line_starts: list[int] = []
        offset = 0
        for line in lines:
            self.line_starts.append(offset)
            offset += len(line) + 1
        self.cursor = 0

    def _position(self, offset: int) -> types.Position:
        index = 0
        while index + 1 < len(self.line_starts) and self.line_starts[index + 1] <= offset:
            index += 1
        return types.Position(line=index, character=offset - self.line_starts[index])

    def find(self, name: str, line: int) -> Optional[types.Range]:
        """Range of ``name`` after a ``let`` keyword, searching from ``line`` on."""
        index = min(max(0, line - 1), len(self.lines) - 1)
        start = max(self.cursor, self.line_starts[index])

        pattern = re.compile(rf"\blet[\x00-\x20]+({re.escape(name)})\b")
        match = pattern.search(self.text, start)
        if match is None:
            return None

        self.cursor = match.end(1)
        return types.Range(
            start=self._position(match.start(1)),
            end=self._position(match.end(1)),
        )


def get_document_symbols(parsed_file: ParsedFile, source: str) -> list[types.DocumentSymbol]:
    """
    Collect outline symbols for a parsed document.

    Args:
        parsed_file: Result of a successful parse
        source: The document text, used to compute ranges

    Returns:
        One symbol per ``let`` binding, in source order
    """
    lines = source_lines(source)
    locator = _BindingLocator(lines)
    symbols: list[types.DocumentSymbol] = []

    for statement in parsed_file.statements:
        if not isinstance(statement, LetStatement):
            continue
        if not isinstance(statement.var, VarName):
            continue

        name = statement.var.name
        detail = str(statement.parsed_type) if statement.parsed_type is not None else None
        line_range = _line_range(statement.line, lines)
        selection = locator.find(name, statement.line)
        if selection is None:
            selection = line_range
        elif selection.end.line > line_range.end.line:
            # The name sits on a later line than ``let``; the range must contain it
            end_line = selection.end.line
            line_range = types.Range(
                start=line_range.start,
                end=types.Position(line=end_line, character=len(lines[end_line])),
            )

        symbols.append(
            types.DocumentSymbol(
                name=name,
                kind=types.SymbolKind.Variable,
                range=line_range,
                selection_range=selection,
                detail=detail,
            )
        )

    return symbols
