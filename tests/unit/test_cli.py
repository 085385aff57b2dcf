"""Tests for the command-line interface."""

from typer.testing import CliRunner

from calcreducer.cli import app

runner = CliRunner()


class TestEval:
    def test_prints_display(self):
        result = runner.invoke(app, ["eval", "7+3*2="])
        assert result.exit_code == 0
        assert result.output.strip() == "20"

    def test_error_display(self):
        result = runner.invoke(app, ["eval", "5/0="])
        assert result.exit_code == 0
        assert "Error" in result.output

    def test_verbose_shows_history(self):
        result = runner.invoke(app, ["eval", "--verbose", "1+1="])
        assert result.exit_code == 0
        assert "1 + 1 = 2" in result.output
        assert "memory" in result.output

    def test_bad_key_sequence(self):
        result = runner.invoke(app, ["eval", "5[MS"])
        assert result.exit_code == 1
        assert "Unterminated key name" in result.output

    def test_bad_log_level(self):
        result = runner.invoke(app, ["--log-level", "LOUD", "eval", "1"])
        assert result.exit_code == 2


class TestRepl:
    def test_session(self):
        result = runner.invoke(app, ["repl"], input="2+3\n=\nundo\nquit\n")
        assert result.exit_code == 0
        lines = [line.strip() for line in result.output.splitlines()]
        assert "5" in "\n".join(lines)

    def test_undo_on_fresh_session(self):
        result = runner.invoke(app, ["repl"], input="undo\n")
        assert result.exit_code == 0
        assert "Nothing to undo" in result.output

    def test_eof_exits(self):
        result = runner.invoke(app, ["repl"], input="")
        assert result.exit_code == 0
