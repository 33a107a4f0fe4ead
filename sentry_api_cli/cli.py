"""
sentry-api-cli — command-line client for the Sentry issue-tracking API
"""

import argparse
import sys

from sentry_api_cli import config
from sentry_api_cli.commands import print_available_commands, print_command_detail, run_command
from sentry_api_cli.exceptions import CliError
from sentry_api_cli.registry import get_command

HELP_TEXT = """\
Usage: sentry-api-cli [command] ['<json arguments>']

Run without arguments to start interactive mode.

Options:
  -h, --help              Show this help
  -v, --version           Show version number
  --commands              List available commands
  --verbose               Log HTTP requests to stderr

Headless mode:
  sentry-api-cli <command> '<json>'
  sentry-api-cli <command> -h           Show parameters for one command

Cross-cutting arguments (any command):
  profile                 Profile name from .sentry-cli.json (default: defaultProfile)
  format                  json or toon (default: defaultFormat, then json)

Examples:
  sentry-api-cli list-org-issues '{"query":"is:unresolved","limit":10}'
  sentry-api-cli get-issue '{"issueId":"123456789","format":"toon"}'
  sentry-api-cli update-issue '{"issueId":"123456789","status":"resolved"}'
  sentry-api-cli test-connection '{"profile":"production"}'

Exit codes: 0 success, 1 command/API error, 2 configuration error.
"""


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so --verbose works anywhere)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Pull --verbose out of argv regardless of position.

    Returns (verbose, remaining_argv).
    """
    verbose = False
    remaining = []
    for arg in argv:
        if arg == "--verbose":
            verbose = True
        else:
            remaining.append(arg)
    return verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _CliParser(argparse.ArgumentParser):
    """Parser that raises CliError instead of printing usage and exiting."""

    def error(self, message):
        raise CliError(f"ERROR: {message}")


def build_parser():
    parser = _CliParser(prog="sentry-api-cli", add_help=False)
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    parser.add_argument("--version", "-v", action="store_true", dest="show_version")
    parser.add_argument("--commands", action="store_true", dest="show_commands")
    parser.add_argument("command", nargs="?")
    parser.add_argument("args_json", nargs="?")
    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else argv
    verbose, argv = _extract_global_flags(argv)
    if verbose:
        config.HTTP_LOG_ENABLED = True

    try:
        ns = build_parser().parse_args(argv)
    except CliError as e:
        print(str(e), file=sys.stderr)
        sys.exit(e.exit_code)

    if ns.show_version:
        print(f"sentry-api-cli {config.VERSION}")
        sys.exit(0)

    if ns.show_commands:
        print_available_commands()
        sys.exit(0)

    if ns.show_help:
        if ns.command:
            print_command_detail(ns.command)
        else:
            print(HELP_TEXT)
        sys.exit(0)

    if not ns.command:
        from sentry_api_cli.interactive import InteractiveShell

        InteractiveShell().run()
        sys.exit(0)

    if get_command(ns.command) is None:
        print(f"Unknown command: {ns.command}", file=sys.stderr)
        print("Run 'sentry-api-cli --commands' to list available commands.", file=sys.stderr)
        sys.exit(1)

    sys.exit(run_command(ns.command, ns.args_json))


if __name__ == "__main__":
    main()
