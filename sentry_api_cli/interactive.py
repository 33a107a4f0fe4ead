"""
Interactive mode for sentry-api-cli.
Reads one command per line and runs it to completion before prompting again.
"""

import sys

from sentry_api_cli import config
from sentry_api_cli.api import ClientCache
from sentry_api_cli.commands import print_available_commands, print_command_detail, run_command

PROMPT = "sentry> "
EXIT_WORDS = {"exit", "quit"}

INTERACTIVE_HELP = """\
Enter a command followed by optional JSON arguments:
  get-issue {"issueId":"123456789"}
  list-org-issues {"query":"is:unresolved","limit":5,"format":"toon"}

Built-ins:
  help                Show this help
  commands            List available commands
  <command> -h        Show parameters for one command
  exit, quit          Leave interactive mode
"""


def split_line(line):
    """Split an input line into (command, json_arg). json_arg may be None."""
    parts = line.split(None, 1)
    if not parts:
        return "", None
    command = parts[0]
    rest = parts[1].strip() if len(parts) > 1 else ""
    if len(rest) >= 2 and rest[0] == rest[-1] == "'":
        rest = rest[1:-1]
    return command, rest or None


class InteractiveShell:
    """Prompt loop. Client handles are reused across commands and dropped on exit."""

    def __init__(self, cache=None, input_fn=input, out=None, err=None):
        self.cache = cache if cache is not None else ClientCache()
        self.input_fn = input_fn
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def banner(self):
        print(f"sentry-api-cli {config.VERSION} — interactive mode", file=self.out)
        print("Type 'help' for usage, 'exit' to quit.\n", file=self.out)

    def handle_line(self, line):
        """Run one input line. Returns False when the loop should stop."""
        command, arg = split_line(line)
        if not command:
            return True
        if command in EXIT_WORDS:
            return False
        if command == "help":
            print(INTERACTIVE_HELP, file=self.out)
            return True
        if command == "commands":
            print_available_commands(self.out)
            return True
        if arg in ("-h", "--help"):
            print_command_detail(command, self.out)
            return True
        run_command(command, arg, cache=self.cache, out=self.out, err=self.err)
        return True

    def run(self):
        self.banner()
        try:
            while True:
                try:
                    line = self.input_fn(PROMPT)
                except (EOFError, KeyboardInterrupt):
                    print("", file=self.out)
                    break
                if not self.handle_line(line):
                    break
        finally:
            self.cache.clear()
