"""Command registry — single source of truth for command names and help.

Standalone module (no project imports). Adding a command means appending one
CommandDefinition to COMMAND_DEFS and a handler in commands.py.
"""

from dataclasses import dataclass

_PROFILE = (
    "- profile (optional): string - Sentry profile name (default: configured default profile)"
)
_FORMAT = "- format (optional): string - Output format: json or toon (default: json)"


@dataclass(frozen=True)
class CommandDefinition:
    """One headless command: name, required argument keys, and help text."""

    name: str
    summary: str
    required: tuple[str, ...]
    parameters: tuple[str, ...]
    example: str

    @property
    def detail(self):
        lines = ["", "Parameters:", *self.parameters, ""]
        lines += ["Example:", f"{self.name} '{self.example}'"]
        return "\n".join(lines)


COMMAND_DEFS: tuple[CommandDefinition, ...] = (
    CommandDefinition(
        name="list-project-events",
        summary="List a project's error events",
        required=("projectSlug",),
        parameters=(
            "- projectSlug (required): string - Project slug or ID",
            '- statsPeriod (optional): string - Time period (e.g., "24h", "7d")',
            "- start (optional): string - ISO-8601 timestamp",
            "- end (optional): string - ISO-8601 timestamp",
            "- cursor (optional): string - Pagination cursor",
            "- full (optional): boolean - Include full event body",
            _PROFILE,
            _FORMAT,
        ),
        example='{"projectSlug":"my-project","statsPeriod":"24h","profile":"production"}',
    ),
    CommandDefinition(
        name="list-project-issues",
        summary="List a project's issues",
        required=("projectSlug",),
        parameters=(
            "- projectSlug (required): string - Project slug or ID",
            '- statsPeriod (optional): string - Time period (default: "24h")',
            "- shortIdLookup (optional): boolean - Enable short ID lookups",
            '- query (optional): string - Search query (default: "is:unresolved")',
            "- cursor (optional): string - Pagination cursor",
            _PROFILE,
            _FORMAT,
        ),
        example='{"projectSlug":"my-project","query":"is:unresolved","format":"toon"}',
    ),
    CommandDefinition(
        name="list-org-issues",
        summary="List an organization's issues",
        required=(),
        parameters=(
            '- statsPeriod (optional): string - Time period (e.g., "24h", "14d")',
            "- start (optional): string - ISO-8601 timestamp",
            "- end (optional): string - ISO-8601 timestamp",
            "- project (optional): number[] - Filter by project IDs",
            "- environment (optional): string[] - Filter by environments",
            '- query (optional): string - Search query (default: "is:unresolved")',
            "- sort (optional): string - Sort order (date, new, trends, freq, user, inbox)",
            "- limit (optional): number - Maximum results (max 100)",
            "- cursor (optional): string - Pagination cursor",
            _PROFILE,
            _FORMAT,
        ),
        example='{"query":"is:unresolved","limit":50,"sort":"date"}',
    ),
    CommandDefinition(
        name="get-issue",
        summary="Retrieve an issue",
        required=("issueId",),
        parameters=("- issueId (required): string - Issue ID", _PROFILE, _FORMAT),
        example='{"issueId":"123456789"}',
    ),
    CommandDefinition(
        name="update-issue",
        summary="Update an issue",
        required=("issueId",),
        parameters=(
            "- issueId (required): string - Issue ID",
            "- status (optional): string - resolved, resolvedInNextRelease, unresolved, ignored",
            "- statusDetails (optional): object - Additional status details",
            "- assignedTo (optional): string - Actor ID or username",
            "- hasSeen (optional): boolean - Mark as seen",
            "- isBookmarked (optional): boolean - Bookmark status",
            "- isSubscribed (optional): boolean - Subscription status",
            "- isPublic (optional): boolean - Public visibility",
            _PROFILE,
        ),
        example='{"issueId":"123456789","status":"resolved"}',
    ),
    CommandDefinition(
        name="list-issue-events",
        summary="List an issue's events",
        required=("issueId",),
        parameters=(
            "- issueId (required): string - Issue ID",
            "- start (optional): string - ISO-8601 timestamp",
            "- end (optional): string - ISO-8601 timestamp",
            "- statsPeriod (optional): string - Time period",
            "- environment (optional): string[] - Filter by environments",
            "- full (optional): boolean - Include full event body",
            "- cursor (optional): string - Pagination cursor",
            _PROFILE,
            _FORMAT,
        ),
        example='{"issueId":"123456789","statsPeriod":"24h"}',
    ),
    CommandDefinition(
        name="get-event",
        summary="Retrieve an event for a project",
        required=("projectSlug", "eventId"),
        parameters=(
            "- projectSlug (required): string - Project slug or ID",
            "- eventId (required): string - Event ID (hexadecimal)",
            _PROFILE,
            _FORMAT,
        ),
        example='{"projectSlug":"my-project","eventId":"abc123def456"}',
    ),
    CommandDefinition(
        name="get-issue-event",
        summary="Retrieve an issue event",
        required=("issueId", "eventId"),
        parameters=(
            "- issueId (required): string - Issue ID",
            "- eventId (required): string - Event ID, or latest, oldest, recommended",
            _PROFILE,
            _FORMAT,
        ),
        example='{"issueId":"123456789","eventId":"latest"}',
    ),
    CommandDefinition(
        name="get-tag-details",
        summary="Retrieve tag details for an issue",
        required=("issueId", "tagKey"),
        parameters=(
            "- issueId (required): string - Issue ID",
            "- tagKey (required): string - Tag key to look up",
            "- environment (optional): string[] - Filter by environments",
            _PROFILE,
            _FORMAT,
        ),
        example='{"issueId":"123456789","tagKey":"browser"}',
    ),
    CommandDefinition(
        name="list-tag-values",
        summary="List a tag's values for an issue",
        required=("issueId", "tagKey"),
        parameters=(
            "- issueId (required): string - Issue ID",
            "- tagKey (required): string - Tag key to look up",
            "- environment (optional): string[] - Filter by environments",
            _PROFILE,
            _FORMAT,
        ),
        example='{"issueId":"123456789","tagKey":"environment"}',
    ),
    CommandDefinition(
        name="list-issue-hashes",
        summary="List an issue's hashes",
        required=("issueId",),
        parameters=("- issueId (required): string - Issue ID", _PROFILE, _FORMAT),
        example='{"issueId":"123456789"}',
    ),
    CommandDefinition(
        name="debug-source-maps",
        summary="Debug issues related to source maps",
        required=("projectSlug", "eventId"),
        parameters=(
            "- projectSlug (required): string - Project slug or ID",
            "- eventId (required): string - Event ID",
            "- frame_idx (optional): string - Frame index",
            "- exception_idx (optional): string - Exception index",
            _PROFILE,
            _FORMAT,
        ),
        example='{"projectSlug":"my-project","eventId":"abc123def456"}',
    ),
    CommandDefinition(
        name="test-connection",
        summary="Test Sentry API connection",
        required=(),
        parameters=(_PROFILE,),
        example='{"profile":"production"}',
    ),
)

COMMANDS: tuple[str, ...] = tuple(d.name for d in COMMAND_DEFS)
COMMANDS_INFO: tuple[str, ...] = tuple(d.summary for d in COMMAND_DEFS)

_BY_NAME = {d.name: d for d in COMMAND_DEFS}


def get_command(name):
    """Return the CommandDefinition for *name*, or None."""
    return _BY_NAME.get(name)
