"""
CLI Test Suite
==============

Tests for the lcparse command and CLI error handling.
"""

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from lcfront import __version__
from lcfront.cli.errors import ExitCode, handle_cli_exception
from lcfront.cli.lcparse import main
from lcfront.lang.errors import ParseFailure


class TestLcparse:
    """Tests for the lcparse command."""

    def test_tree_dump_is_default(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("demo.lc").write_text("let x = 1;\n")
            result = runner.invoke(main, ["demo.lc"])
            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert result.output == "Program\n  Let x = 1\n"

    def test_format(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("demo.lc").write_text("x += 2;\n")
            result = runner.invoke(main, ["demo.lc", "--format"])
            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert result.output == "x = x + 2;\n"

    def test_explicit_ast_flag(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("demo.lc").write_text("print 1;\n")
            result = runner.invoke(main, ["demo.lc", "--ast"])
            assert result.exit_code == ExitCode.SUCCESS
            assert "Print 1" in result.output

    def test_expression(self):
        result = CliRunner().invoke(main, ["--expr", "-x++", "--format"])
        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert result.output == "-(x = x + 1)\n"

    def test_expression_tree(self):
        result = CliRunner().invoke(main, ["-e", "a or b"])
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == "(a or b)\n"

    def test_parse_error_exit_code(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.lc").write_text("5 = 3;\n")
            result = runner.invoke(main, ["bad.lc"])
            assert result.exit_code == ExitCode.PARSE_ERROR
            assert "bad.lc:1:3: error: invalid assignment target for '='" in result.output

    def test_scan_error_exit_code(self):
        result = CliRunner().invoke(main, ["--expr", "1 @ 2"])
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "invalid character '@'" in result.output

    def test_unicode_digit_is_parse_error(self):
        result = CliRunner().invoke(main, ["--expr", "²"])
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "invalid character" in result.output

    def test_missing_file(self):
        result = CliRunner().invoke(main, ["nope.lc"])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_requires_file_or_expression(self):
        result = CliRunner().invoke(main, [])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_rejects_file_and_expression(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("demo.lc").write_text("print 1;\n")
            result = runner.invoke(main, ["demo.lc", "--expr", "1"])
            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_max_errors(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.lc").write_text("1 = 1; 2 = 2; 3 = 3;\n")
            result = runner.invoke(main, ["bad.lc", "--max-errors", "2"])
            assert result.exit_code == ExitCode.PARSE_ERROR
            assert result.output.rstrip().endswith("2 errors")

    def test_verbose_summary(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("demo.lc").write_text("print 1; print 2;\n")
            result = runner.invoke(main, ["demo.lc", "-v"])
            assert result.exit_code == ExitCode.SUCCESS
            assert "Parsed demo.lc: 2 declarations, 7 tokens" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestHandleCliException:
    """Tests for exception to exit code mapping."""

    def test_parse_failure(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(ParseFailure("report", []))
        assert exc_info.value.code == ExitCode.PARSE_ERROR

    def test_bad_parameter(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(click.BadParameter("nope"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_internal_error(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
