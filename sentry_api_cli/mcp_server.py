"""MCP server exposing SentryClient operations as tools.

Run: sentry-api-cli-mcp   (or: python -m sentry_api_cli.mcp_server)
Requires: pip install .[mcp]
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from sentry_api_cli.api import ClientCache
from sentry_api_cli.client import SentryClient
from sentry_api_cli.exceptions import CliError, ConfigError
from sentry_api_cli.models import strip_cli_params

mcp = FastMCP(
    "sentry",
    instructions=(
        "Sentry issue-tracking tools. "
        "issue_id is the numeric issue ID, not the short ID (PROJ-1A). "
        "profile selects a configured Sentry account; omit it for the default. "
        "Extra query parameters (statsPeriod, query, cursor, environment, ...) "
        "go in params."
    ),
)

# Handles are reused for the lifetime of the server process.
_cache: ClientCache | None = None


def _get_client() -> SentryClient:
    """Return a SentryClient over the server-wide ClientCache."""
    global _cache
    if _cache is None:
        _cache = ClientCache()
    return SentryClient(_cache)


def _contract_error(message: str, error_type: str = "error") -> dict:
    return {"ok": False, "type": error_type, "error": message}


def _forwarded(params: dict[str, Any] | None) -> dict[str, Any]:
    """Query params for the API, without the keys the CLI consumes itself."""
    return strip_cli_params(params or {})


def _call(method_name: str, profile: str | None, *args: Any, with_message: bool = False) -> dict:
    """Call a SentryClient method, converting results and exceptions to dicts."""
    try:
        client = _get_client()
        profile_name = profile or client.cache.config.default_profile
        result = getattr(client, method_name)(profile_name, *args)
    except ConfigError as e:
        return _contract_error(str(e), "config")
    except CliError as e:
        return _contract_error(str(e))
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}")
    if not result.success:
        return _contract_error(result.error, "api")
    payload = {"ok": True, "data": result.data}
    if with_message:
        payload["message"] = result.rendered
    return payload


# -------------------------------------------------------------------
# Project tools
# -------------------------------------------------------------------


@mcp.tool()
def list_project_events(
    project_slug: str, params: dict[str, Any] | None = None, profile: str | None = None
) -> dict:
    """List a project's error events.

    Args:
        params: statsPeriod ("24h"), start, end (ISO-8601), cursor, full (bool).
    """
    return _call("list_project_events", profile, project_slug, _forwarded(params))


@mcp.tool()
def list_project_issues(
    project_slug: str, params: dict[str, Any] | None = None, profile: str | None = None
) -> dict:
    """List a project's issues.

    Args:
        params: statsPeriod, shortIdLookup (bool), query ("is:unresolved"), cursor.
    """
    return _call("list_project_issues", profile, project_slug, _forwarded(params))


@mcp.tool()
def get_event(project_slug: str, event_id: str, profile: str | None = None) -> dict:
    """Retrieve one event of a project by its hexadecimal event ID."""
    return _call("get_event", profile, project_slug, event_id)


@mcp.tool()
def debug_source_maps(
    project_slug: str,
    event_id: str,
    params: dict[str, Any] | None = None,
    profile: str | None = None,
) -> dict:
    """Explain why source maps did not apply to an event.

    Args:
        params: frame_idx, exception_idx.
    """
    return _call("debug_source_maps", profile, project_slug, event_id, _forwarded(params))


# -------------------------------------------------------------------
# Organization / issue tools
# -------------------------------------------------------------------


@mcp.tool()
def list_org_issues(params: dict[str, Any] | None = None, profile: str | None = None) -> dict:
    """List an organization's issues.

    Args:
        params: query, sort (date, new, trends, freq, user, inbox), limit (<=100),
            statsPeriod, start, end, project (list of IDs), environment (list), cursor.
    """
    return _call("list_org_issues", profile, _forwarded(params))


@mcp.tool()
def get_issue(issue_id: str, profile: str | None = None) -> dict:
    """Retrieve an issue."""
    return _call("get_issue", profile, issue_id)


@mcp.tool()
def update_issue(
    issue_id: str,
    status: str | None = None,
    status_details: dict[str, Any] | None = None,
    assigned_to: str | None = None,
    has_seen: bool | None = None,
    is_bookmarked: bool | None = None,
    is_subscribed: bool | None = None,
    is_public: bool | None = None,
    profile: str | None = None,
) -> dict:
    """Update an issue. Only the fields given are sent.

    Args:
        status: resolved, resolvedInNextRelease, unresolved, ignored.
        assigned_to: Actor ID or username.
    """
    fields = {
        "status": status,
        "statusDetails": status_details,
        "assignedTo": assigned_to,
        "hasSeen": has_seen,
        "isBookmarked": is_bookmarked,
        "isSubscribed": is_subscribed,
        "isPublic": is_public,
    }
    body = {k: v for k, v in fields.items() if v is not None}
    if not body:
        return _contract_error("ERROR: update_issue needs at least one field to change.")
    return _call("update_issue", profile, issue_id, body, with_message=True)


@mcp.tool()
def list_issue_events(
    issue_id: str, params: dict[str, Any] | None = None, profile: str | None = None
) -> dict:
    """List an issue's events.

    Args:
        params: statsPeriod, start, end, environment (list), full (bool), cursor.
    """
    return _call("list_issue_events", profile, issue_id, _forwarded(params))


@mcp.tool()
def get_issue_event(issue_id: str, event_id: str, profile: str | None = None) -> dict:
    """Retrieve one event of an issue (event ID, or latest / oldest / recommended)."""
    return _call("get_issue_event", profile, issue_id, event_id)


@mcp.tool()
def get_tag_details(
    issue_id: str,
    tag_key: str,
    params: dict[str, Any] | None = None,
    profile: str | None = None,
) -> dict:
    """Retrieve tag details (top values, counts) for an issue."""
    return _call("get_tag_details", profile, issue_id, tag_key, _forwarded(params))


@mcp.tool()
def list_tag_values(
    issue_id: str,
    tag_key: str,
    params: dict[str, Any] | None = None,
    profile: str | None = None,
) -> dict:
    """List all values seen for one tag of an issue."""
    return _call("list_tag_values", profile, issue_id, tag_key, _forwarded(params))


@mcp.tool()
def list_issue_hashes(issue_id: str, profile: str | None = None) -> dict:
    """List the grouping hashes merged into an issue."""
    return _call("list_issue_hashes", profile, issue_id)


@mcp.tool()
def test_connection(profile: str | None = None) -> dict:
    """Check that the profile's token and organization work."""
    return _call("test_connection", profile, with_message=True)


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()


if __name__ == "__main__":
    main()
