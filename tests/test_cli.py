"""Tests for cli.py — global flags, argparse wiring, entry-point exit codes."""

from unittest.mock import patch

import pytest

from sentry_api_cli import config
from sentry_api_cli.cli import HELP_TEXT, _extract_global_flags, build_parser, main


def _main(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestExtractGlobalFlags:
    def test_no_flags(self):
        assert _extract_global_flags(["get-issue", "{}"]) == (False, ["get-issue", "{}"])

    def test_verbose_anywhere(self):
        verbose, rest = _extract_global_flags(["get-issue", "--verbose", "{}"])
        assert verbose is True
        assert rest == ["get-issue", "{}"]


class TestBuildParser:
    def test_command_and_json(self):
        ns = build_parser().parse_args(["get-issue", '{"issueId":"1"}'])
        assert ns.command == "get-issue"
        assert ns.args_json == '{"issueId":"1"}'

    def test_command_help(self):
        ns = build_parser().parse_args(["get-issue", "-h"])
        assert ns.show_help is True
        assert ns.command == "get-issue"

    def test_empty(self):
        ns = build_parser().parse_args([])
        assert ns.command is None
        assert ns.show_version is False


class TestMain:
    def test_version(self, capsys):
        assert _main(["--version"]) == 0
        assert capsys.readouterr().out.strip() == f"sentry-api-cli {config.VERSION}"

    def test_version_short(self, capsys):
        assert _main(["-v"]) == 0
        assert config.VERSION in capsys.readouterr().out

    def test_help(self, capsys):
        assert _main(["--help"]) == 0
        assert capsys.readouterr().out.strip() == HELP_TEXT.strip()

    def test_commands(self, capsys):
        assert _main(["--commands"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Available commands:")
        assert "list-org-issues" in out

    def test_command_help(self, capsys):
        assert _main(["update-issue", "-h"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("update-issue - Update an issue")
        assert "status (optional)" in out

    def test_unknown_command(self, capsys):
        assert _main(["frobnicate", "{}"]) == 1
        err = capsys.readouterr().err
        assert "Unknown command: frobnicate" in err
        assert "--commands" in err

    def test_too_many_arguments(self, capsys):
        assert _main(["get-issue", "{}", "extra"]) == 1
        assert capsys.readouterr().err.startswith("ERROR:")

    @patch("sentry_api_cli.cli.run_command")
    def test_headless_dispatch(self, mock_run):
        mock_run.return_value = 2
        assert _main(["get-issue", '{"issueId":"1"}']) == 2
        mock_run.assert_called_once_with("get-issue", '{"issueId":"1"}')

    @patch("sentry_api_cli.cli.run_command")
    def test_headless_without_json(self, mock_run):
        mock_run.return_value = 0
        assert _main(["test-connection"]) == 0
        mock_run.assert_called_once_with("test-connection", None)

    @patch("sentry_api_cli.cli.run_command")
    def test_verbose_enables_http_log(self, mock_run):
        mock_run.return_value = 0
        _main(["--verbose", "test-connection"])
        assert config.HTTP_LOG_ENABLED is True

    @patch("sentry_api_cli.interactive.InteractiveShell")
    def test_no_command_starts_interactive(self, mock_shell):
        assert _main([]) == 0
        mock_shell.return_value.run.assert_called_once()
