"""
Tests for the CyaScript command-line interface.
"""

import io

import pytest

from cyascript import __version__
from cyascript.cli import AstPrinter, Colors, main


@pytest.fixture(autouse=True)
def no_color():
    Colors.disable()


class TestTokensCommand:
    """Tests for `cyascript tokens`."""

    def test_prints_line_and_token(self, source_file, capsys):
        path = source_file('let x = "hi";')
        assert main(["tokens", str(path)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "1\t'let'",
            "1\tidentifier 'x'",
            "1\t'='",
            '1\tstring "hi"',
            "1\t';'",
            "2\t<end of input>",
        ]

    def test_lexer_error_exits_1(self, source_file, capsys):
        path = source_file('let s = "open')
        assert main(["tokens", str(path)]) == 1
        err = capsys.readouterr().err
        assert "error[E0206]: unterminated string literal" in err


class TestAstCommand:
    """Tests for `cyascript ast`."""

    def test_prints_tree(self, source_file, capsys):
        path = source_file("let m: Map<Int, (Str,)> = -x;\n(1, 2);")
        assert main(["ast", str(path)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "ParsedFile (index 0, 2 statements)",
            "  Let (line 1):",
            "    var: m",
            "    type:",
            "      Single Map <2 generic>",
            "        Single Int",
            "        Tuple (1 items)",
            "          Single Str",
            "    expr:",
            "      Neg:",
            "        Var x",
            "  Discard (line 2):",
            "    Tuple (2 items)",
            "      Int 1",
            "      Int 2",
        ]

    def test_printer_handles_self_and_float(self, parse):
        rendered = AstPrinter().render(parse(b"let s Self = 1.5"))
        assert "Self" in rendered
        assert "Num 1.5" in rendered


class TestCheckCommand:
    """Tests for `cyascript check`."""

    def test_valid_file(self, source_file, capsys):
        path = source_file("let x = 1\nlet y: Str = \"a\"\n")
        assert main(["check", str(path)]) == 0
        assert capsys.readouterr().out.startswith("OK")

    def test_invalid_file(self, source_file, capsys):
        path = source_file('let x Int "hi"')
        assert main(["check", str(path)]) == 1
        err = capsys.readouterr().err
        assert "error[E0201]" in err
        assert "expect token '='" in err
        assert "program.cyas:1" in err

    def test_unsupported_construct_has_note(self, source_file, capsys):
        path = source_file("1 + 2")
        assert main(["check", str(path)]) == 1
        err = capsys.readouterr().err
        assert "error[E0205]" in err
        assert "note:" in err

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"let x = 1")))
        assert main(["check", "-"]) == 0
        assert "<stdin>" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        path = tmp_path / "nope.cyas"
        assert main(["check", str(path)]) == 1
        assert f'File "{path}" does not exist.' in capsys.readouterr().err

    def test_extension_is_implied(self, source_file, tmp_path, capsys):
        source_file("let x = 1")
        assert main(["check", str(tmp_path / "program")]) == 0
        assert "OK" in capsys.readouterr().out

    def test_missing_file_reports_implied_extension(self, tmp_path, capsys):
        assert main(["check", str(tmp_path / "nope")]) == 1
        assert f'File "{tmp_path / "nope.cyas"}" does not exist.' in capsys.readouterr().err

    def test_other_extension_is_kept(self, source_file, tmp_path):
        source_file("let x = 1", name="program.txt")
        assert main(["check", str(tmp_path / "program.txt")]) == 0


class TestMainOptions:
    """Tests for global options."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_verbose_and_no_color(self, source_file):
        path = source_file("x")
        assert main(["-v", "--no-color", "check", str(path)]) == 0
