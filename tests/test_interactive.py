"""Tests for interactive.py — line splitting and the prompt loop."""

import io
from unittest.mock import patch

import pytest

from sentry_api_cli.interactive import PROMPT, InteractiveShell, split_line


def _feeder(lines):
    """input() replacement that yields *lines* then raises EOFError."""
    it = iter(lines)
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    fake_input.prompts = prompts
    return fake_input


@pytest.fixture
def mock_http():
    with patch("sentry_api_cli.api._http_request") as m:
        m.return_value = {"id": "1"}
        yield m


def _shell(cache, lines):
    out, err = io.StringIO(), io.StringIO()
    shell = InteractiveShell(cache=cache, input_fn=_feeder(lines), out=out, err=err)
    return shell, out, err


class TestSplitLine:
    def test_command_only(self):
        assert split_line("test-connection") == ("test-connection", None)

    def test_command_and_json(self):
        assert split_line('get-issue {"issueId":"1"}') == ("get-issue", '{"issueId":"1"}')

    def test_single_quotes_stripped(self):
        assert split_line("get-issue '{\"issueId\":\"1\"}'") == ("get-issue", '{"issueId":"1"}')

    def test_tab_separator(self):
        assert split_line('get-issue\t{"issueId":"1"}') == ("get-issue", '{"issueId":"1"}')

    def test_surrounding_whitespace(self):
        assert split_line("  commands  \n") == ("commands", None)

    def test_blank(self):
        assert split_line("   ") == ("", None)


class TestHandleLine:
    def test_exit_words(self, cache):
        shell, _, _ = _shell(cache, [])
        assert shell.handle_line("exit") is False
        assert shell.handle_line("quit") is False

    def test_blank_line_continues(self, cache):
        shell, out, _ = _shell(cache, [])
        assert shell.handle_line("") is True
        assert out.getvalue() == ""

    def test_help(self, cache):
        shell, out, _ = _shell(cache, [])
        shell.handle_line("help")
        assert "Built-ins:" in out.getvalue()

    def test_commands(self, cache):
        shell, out, _ = _shell(cache, [])
        shell.handle_line("commands")
        assert out.getvalue().startswith("Available commands:")

    def test_command_help(self, cache):
        shell, out, _ = _shell(cache, [])
        shell.handle_line("get-issue -h")
        assert out.getvalue().startswith("get-issue - Retrieve an issue")

    def test_runs_command(self, cache, mock_http):
        shell, out, _ = _shell(cache, [])
        assert shell.handle_line('get-issue {"issueId":"1"}') is True
        assert '"id": "1"' in out.getvalue()

    def test_errors_go_to_err_and_continue(self, cache, mock_http):
        shell, out, err = _shell(cache, [])
        assert shell.handle_line("get-issue {}") is True
        assert 'ERROR: "issueId" parameter is required' in err.getvalue()
        mock_http.assert_not_called()


class TestRun:
    def test_reuses_cache_then_clears(self, cache, mock_http):
        shell, _, _ = _shell(
            cache, ['get-issue {"issueId":"1"}', 'get-issue {"issueId":"2"}', "exit"]
        )
        sessions = []
        original = cache.get_client

        def spy(name):
            session = original(name)
            sessions.append(session)
            return session

        cache.get_client = spy
        shell.run()
        assert len(sessions) == 2
        assert sessions[0] is sessions[1]
        assert sessions[0].closed is True
        assert len(cache) == 0

    def test_stops_on_eof(self, cache):
        feeder = _feeder(["help"])
        shell = InteractiveShell(cache=cache, input_fn=feeder, out=io.StringIO())
        shell.run()
        assert feeder.prompts == [PROMPT, PROMPT]

    def test_banner(self, cache):
        shell, out, _ = _shell(cache, ["exit"])
        shell.run()
        assert "interactive mode" in out.getvalue()
