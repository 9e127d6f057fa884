"""
CyaScript Command-Line Interface.

Debug driver for the front end.

Usage:
    cyascript tokens input.cyas     # Dump the token stream with line numbers
    cyascript ast input.cyas        # Dump the parsed statements
    cyascript check input           # Validate syntax (".cyas" is implied)
    cat input.cyas | cyascript check -
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from cyascript import __version__
from cyascript.frontend.ast_nodes import (
    ASTNode,
    ASTVisitor,
    DiscardStatement,
    ExprStatement,
    IntLiteral,
    LetStatement,
    NegOp,
    NotOp,
    NumLiteral,
    ParsedFile,
    SelfType,
    SingleType,
    StrLiteral,
    TupleExpr,
    TupleType,
    VarExpr,
    VarName,
)
from cyascript.frontend.lexer import Lexer
from cyascript.frontend.parser import Parser
from cyascript.utils.diagnostics import Diagnostic
from cyascript.utils.errors import CyaScriptError

logger = logging.getLogger("cyascript")

SOURCE_SUFFIX = ".cyas"


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.GRAY = ""
        cls.BOLD = ""
        cls.RESET = ""

    @classmethod
    def enabled(cls) -> bool:
        return cls.RESET != ""


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


# =============================================================================
# AST Printing
# =============================================================================


class AstPrinter(ASTVisitor):
    """Renders parsed statements as an indented tree, one node per line."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._depth = 0

    def render(self, node: ASTNode) -> str:
        self.lines = []
        self._depth = 0
        self.visit(node)
        return "\n".join(self.lines)

    def _emit(self, text: str) -> None:
        self.lines.append("  " * self._depth + text)

    def _child(self, label: str, node: ASTNode) -> None:
        self._emit(f"{label}:")
        self._depth += 1
        self.visit(node)
        self._depth -= 1

    def visit_parsed_file(self, node: ParsedFile) -> None:
        self._emit(f"ParsedFile (index {node.index}, {len(node.statements)} statements)")
        self._depth += 1
        for statement in node.statements:
            self.visit(statement)
        self._depth -= 1

    # Statements

    def visit_let_statement(self, node: LetStatement) -> None:
        self._emit(f"Let (line {node.line}):")
        self._depth += 1
        self._emit(f"var: {_format_var(node.var)}")
        if node.parsed_type is not None:
            self._child("type", node.parsed_type)
        self._child("expr", node.expr)
        self._depth -= 1

    def visit_expr_statement(self, node: ExprStatement) -> None:
        self._child(f"Expr (line {node.line})", node.expr)

    def visit_discard_statement(self, node: DiscardStatement) -> None:
        self._child(f"Discard (line {node.line})", node.expr)

    # Types

    def visit_single_type(self, node: SingleType) -> None:
        if node.generic is None:
            self._emit(f"Single {node.name}")
            return
        self._emit(f"Single {node.name} <{len(node.generic)} generic>")
        self._depth += 1
        for arg in node.generic:
            self.visit(arg)
        self._depth -= 1

    def visit_tuple_type(self, node: TupleType) -> None:
        self._emit(f"Tuple ({len(node.items)} items)")
        self._depth += 1
        for item in node.items:
            self.visit(item)
        self._depth -= 1

    def visit_self_type(self, node: SelfType) -> None:
        self._emit("Self")

    # Expressions

    def visit_str_literal(self, node: StrLiteral) -> None:
        self._emit(f"Str {node.value!r}")

    def visit_int_literal(self, node: IntLiteral) -> None:
        self._emit(f"Int {node.value}")

    def visit_num_literal(self, node: NumLiteral) -> None:
        self._emit(f"Num {node.value!r}")

    def visit_var_expr(self, node: VarExpr) -> None:
        self._emit(f"Var {_format_var(node.var)}")

    def visit_tuple_expr(self, node: TupleExpr) -> None:
        self._emit(f"Tuple ({len(node.items)} items)")
        self._depth += 1
        for item in node.items:
            self.visit(item)
        self._depth -= 1

    def visit_neg_op(self, node: NegOp) -> None:
        self._child("Neg", node.operand)

    def visit_not_op(self, node: NotOp) -> None:
        self._child("Not", node.operand)


def _format_var(var: object) -> str:
    if isinstance(var, VarName):
        return var.name
    return repr(var)


# =============================================================================
# Commands
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="cyascript",
        description="CyaScript front end - tokenize and parse CyaScript source",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in (
        ("tokens", "Print the token stream with line numbers"),
        ("ast", "Print the parsed syntax tree"),
        ("check", "Check a file for syntax errors"),
    ):
        command_parser = subparsers.add_parser(name, help=help_text)
        command_parser.add_argument(
            "input",
            help="Input CyaScript file, or '-' to read from stdin",
        )

    return parser


def _read_input(name: str) -> Optional[bytes]:
    """
    Read source bytes from a path or stdin.

    A path without an extension gets ``SOURCE_SUFFIX`` appended. Returns None
    after reporting on stderr if the file does not exist.
    """
    if name == "-":
        return sys.stdin.buffer.read()

    path = Path(name)
    if path.suffix == "":
        path = path.with_suffix(SOURCE_SUFFIX)
    if not path.exists():
        print(
            f'{Colors.RED}Error:{Colors.RESET} File "{path}" does not exist.',
            file=sys.stderr,
        )
        return None
    return path.read_bytes()


def _display_name(name: str) -> str:
    return "<stdin>" if name == "-" else name


def _report(error: CyaScriptError, source: bytes, name: str) -> int:
    """Render a front-end error as a diagnostic on stderr."""
    diagnostic = Diagnostic.from_error(error, _display_name(name))
    text = source.decode("utf-8", errors="replace")
    print(diagnostic.render(text, use_color=Colors.enabled()), file=sys.stderr)
    return 1


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command."""
    source = _read_input(args.input)
    if source is None:
        return 1

    try:
        tokens, lines = Lexer(source).tokenize()
    except CyaScriptError as e:
        return _report(e, source, args.input)

    for token, line in zip(tokens, lines):
        print(f"{line}\t{token.describe()}")
    print(f"{lines[-1]}\t{Colors.GRAY}<end of input>{Colors.RESET}")
    return 0


def cmd_ast(args: argparse.Namespace) -> int:
    """Handle the ast command."""
    source = _read_input(args.input)
    if source is None:
        return 1

    try:
        tokens, lines = Lexer(source).tokenize()
        parsed_file = Parser(tokens, lines).parse()
    except CyaScriptError as e:
        return _report(e, source, args.input)

    print(AstPrinter().render(parsed_file))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the check command (syntax validation)."""
    source = _read_input(args.input)
    if source is None:
        return 1

    try:
        tokens, lines = Lexer(source).tokenize()
        parsed_file = Parser(tokens, lines).parse()
    except CyaScriptError as e:
        return _report(e, source, args.input)

    count = len(parsed_file.statements)
    print(f"{Colors.GREEN}OK{Colors.RESET} {_display_name(args.input)} ({count} statements)")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        Colors.disable()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "tokens": cmd_tokens,
        "ast": cmd_ast,
        "check": cmd_check,
    }

    handler = command_handlers.get(args.command)
    if handler:
        logger.debug(f"Running command '{args.command}' on {_display_name(args.input)}")
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
