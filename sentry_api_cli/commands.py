"""
Command implementations for sentry-api-cli.
Each cmd_*() function receives a SentryClient and validated CommandArgs and
returns the ApiResult of exactly one API operation.

run_command() is the headless dispatcher: JSON args in, exit status out.
"""

import sys

from sentry_api_cli.api import ClientCache, _safe_json_parse
from sentry_api_cli.client import SentryClient
from sentry_api_cli.exceptions import CliError, UnknownCommandError
from sentry_api_cli.formatters import format_commands_table
from sentry_api_cli.models import CommandArgs, ObjectPayload
from sentry_api_cli.registry import COMMANDS, COMMANDS_INFO, get_command

# ---------------------------------------------------------------------------
# Project commands
# ---------------------------------------------------------------------------


def cmd_list_project_events(client, args):
    return client.list_project_events(args.profile, args.project_slug, args.params, args.format)


def cmd_list_project_issues(client, args):
    return client.list_project_issues(args.profile, args.project_slug, args.params, args.format)


def cmd_get_event(client, args):
    return client.get_event(args.profile, args.project_slug, args.event_id, args.format)


def cmd_debug_source_maps(client, args):
    return client.debug_source_maps(
        args.profile, args.project_slug, args.event_id, args.params, args.format
    )


# ---------------------------------------------------------------------------
# Organization / issue commands
# ---------------------------------------------------------------------------


def cmd_list_org_issues(client, args):
    return client.list_org_issues(args.profile, args.params, args.format)


def cmd_get_issue(client, args):
    return client.get_issue(args.profile, args.issue_id, args.format)


def cmd_update_issue(client, args):
    return client.update_issue(args.profile, args.issue_id, args.params)


def cmd_list_issue_events(client, args):
    return client.list_issue_events(args.profile, args.issue_id, args.params, args.format)


def cmd_get_issue_event(client, args):
    return client.get_issue_event(args.profile, args.issue_id, args.event_id, args.format)


def cmd_get_tag_details(client, args):
    return client.get_tag_details(
        args.profile, args.issue_id, args.tag_key, args.params, args.format
    )


def cmd_list_tag_values(client, args):
    return client.list_tag_values(
        args.profile, args.issue_id, args.tag_key, args.params, args.format
    )


def cmd_list_issue_hashes(client, args):
    return client.list_issue_hashes(args.profile, args.issue_id, args.format)


def cmd_test_connection(client, args):
    return client.test_connection(args.profile)


HANDLERS = {
    "list-project-events": cmd_list_project_events,
    "list-project-issues": cmd_list_project_issues,
    "list-org-issues": cmd_list_org_issues,
    "get-issue": cmd_get_issue,
    "update-issue": cmd_update_issue,
    "list-issue-events": cmd_list_issue_events,
    "get-event": cmd_get_event,
    "get-issue-event": cmd_get_issue_event,
    "get-tag-details": cmd_get_tag_details,
    "list-tag-values": cmd_list_tag_values,
    "list-issue-hashes": cmd_list_issue_hashes,
    "debug-source-maps": cmd_debug_source_maps,
    "test-connection": cmd_test_connection,
}


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def parse_arguments(arg):
    """Parse the JSON argument blob. Blank or None means no arguments."""
    if arg is None or not str(arg).strip():
        return {}
    return ObjectPayload.from_value(_safe_json_parse(arg, "arguments"), "arguments").data


def execute(command, payload, client):
    """Validate *payload* for *command* and run its operation. Returns ApiResult."""
    definition = get_command(command)
    if definition is None:
        raise UnknownCommandError(command)
    cfg = client.cache.config
    args = CommandArgs.from_payload(
        payload,
        required=definition.required,
        default_profile=cfg.default_profile,
        default_format=cfg.default_format,
    )
    return HANDLERS[command](client, args)


def run_command(command, arg=None, *, cache=None, out=None, err=None):
    """Run one command and print its result. Returns the process exit status.

    A cache passed in by the caller is left populated; otherwise a fresh cache
    is built for this call and cleared before returning.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    owns_cache = cache is None
    if owns_cache:
        cache = ClientCache()
    try:
        if get_command(command) is None:
            raise UnknownCommandError(command)
        result = execute(command, parse_arguments(arg), SentryClient(cache))
    except CliError as e:
        print(str(e), file=err)
        return e.exit_code
    except Exception as e:
        print(f"Error executing command: {e}", file=err)
        return 1
    finally:
        if owns_cache:
            cache.clear()

    if result.success:
        print(result.rendered, file=out)
        return 0
    print(result.error, file=err)
    return 1


# ---------------------------------------------------------------------------
# Help output
# ---------------------------------------------------------------------------


def print_available_commands(out=None):
    out = out or sys.stdout
    print("Available commands:\n", file=out)
    print(format_commands_table(COMMANDS, COMMANDS_INFO), file=out)


def print_command_detail(name, out=None):
    out = out or sys.stdout
    name = (name or "").strip()
    if not name:
        print("Please provide a command name.", file=out)
        return
    definition = get_command(name)
    if definition is None:
        print(f"Unknown command: {name}\n", file=out)
        print_available_commands(out)
        return
    print(f"{definition.name} - {definition.summary}\n{definition.detail}", file=out)
