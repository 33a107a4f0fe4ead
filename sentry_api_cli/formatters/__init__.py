"""Output formatting package for sentry-api-cli.

Re-exports all public names so consumers can do:
    from sentry_api_cli.formatters import render
"""

from sentry_api_cli.formatters._core import format_as_json, format_as_toon, render
from sentry_api_cli.formatters._table import (
    _CONTROL_RE,
    _sanitize_str,
    _table,
    _trunc,
    format_commands_table,
)

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_as_json",
    "format_as_toon",
    "format_commands_table",
    "render",
]
