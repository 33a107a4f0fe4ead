"""
SentryClient — public Python API for the Sentry issue-tracking endpoints.

Each method maps to exactly one HTTP request and returns an ApiResult.
Transport and HTTP failures are folded into ``ApiResult.fail``; a missing
profile (ConfigError) propagates to the caller.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from sentry_api_cli.api import ClientCache
from sentry_api_cli.exceptions import ApiError
from sentry_api_cli.formatters import render
from sentry_api_cli.models import ApiResult


def _seg(value: Any) -> str:
    """URL-quote one path segment."""
    return quote(str(value), safe="")


def _failure_message(exc: Exception) -> str:
    """Server detail, then transport message, then the exception text."""
    if isinstance(exc, ApiError) and exc.detail:
        return exc.detail
    return str(exc) or exc.__class__.__name__


class SentryClient:
    """Sentry API operations bound to an injected ClientCache."""

    def __init__(self, cache: ClientCache | None = None):
        self.cache = cache if cache is not None else ClientCache()

    # -- plumbing -----------------------------------------------------------

    def _org(self, profile: str) -> str:
        return _seg(self.cache.resolve(profile).organization)

    def _get(
        self,
        profile: str,
        path: str,
        params: dict[str, Any] | None = None,
        fmt: str = "json",
    ) -> ApiResult:
        client = self.cache.get_client(profile)
        try:
            data = client.get(path, params=params or None)
        except (ApiError, OSError, ValueError) as e:
            return ApiResult.fail(f"ERROR: {_failure_message(e)}")
        return ApiResult.ok(data, render(data, fmt))

    # -- project scoped -----------------------------------------------------

    def list_project_events(
        self,
        profile: str,
        project_slug: str,
        params: dict[str, Any] | None = None,
        fmt: str = "json",
    ) -> ApiResult:
        """List a project's error events (statsPeriod, start, end, cursor, full)."""
        path = f"/projects/{self._org(profile)}/{_seg(project_slug)}/events/"
        return self._get(profile, path, params, fmt)

    def list_project_issues(
        self,
        profile: str,
        project_slug: str,
        params: dict[str, Any] | None = None,
        fmt: str = "json",
    ) -> ApiResult:
        """List a project's issues (statsPeriod, shortIdLookup, query, cursor)."""
        path = f"/projects/{self._org(profile)}/{_seg(project_slug)}/issues/"
        return self._get(profile, path, params, fmt)

    def get_event(self, profile: str, project_slug: str, event_id: str, fmt: str = "json"):
        path = f"/projects/{self._org(profile)}/{_seg(project_slug)}/events/{_seg(event_id)}/"
        return self._get(profile, path, fmt=fmt)

    def debug_source_maps(
        self,
        profile: str,
        project_slug: str,
        event_id: str,
        params: dict[str, Any] | None = None,
        fmt: str = "json",
    ) -> ApiResult:
        """Debug source-map resolution for an event (frame_idx, exception_idx)."""
        path = (
            f"/projects/{self._org(profile)}/{_seg(project_slug)}"
            f"/events/{_seg(event_id)}/source-map-debug/"
        )
        return self._get(profile, path, params, fmt)

    # -- organization scoped ------------------------------------------------

    def list_org_issues(
        self, profile: str, params: dict[str, Any] | None = None, fmt: str = "json"
    ) -> ApiResult:
        """List an organization's issues (query, sort, limit, project, environment...)."""
        return self._get(profile, f"/organizations/{self._org(profile)}/issues/", params, fmt)

    def _issue_path(self, profile: str, issue_id: str) -> str:
        return f"/organizations/{self._org(profile)}/issues/{_seg(issue_id)}/"

    def get_issue(self, profile: str, issue_id: str, fmt: str = "json") -> ApiResult:
        return self._get(profile, self._issue_path(profile, issue_id), fmt=fmt)

    def update_issue(
        self, profile: str, issue_id: str, data: dict[str, Any] | None = None
    ) -> ApiResult:
        """Update an issue (status, statusDetails, assignedTo, hasSeen, isBookmarked...).

        The rendered text is a fixed confirmation, not the response body.
        """
        client = self.cache.get_client(profile)
        try:
            body = client.put(self._issue_path(profile, issue_id), data or {})
        except (ApiError, OSError, ValueError) as e:
            return ApiResult.fail(f"ERROR: {_failure_message(e)}")
        return ApiResult.ok(body, f"✅ Issue {issue_id} updated successfully!")

    def list_issue_events(
        self,
        profile: str,
        issue_id: str,
        params: dict[str, Any] | None = None,
        fmt: str = "json",
    ) -> ApiResult:
        path = self._issue_path(profile, issue_id) + "events/"
        return self._get(profile, path, params, fmt)

    def get_issue_event(
        self, profile: str, issue_id: str, event_id: str, fmt: str = "json"
    ) -> ApiResult:
        path = self._issue_path(profile, issue_id) + f"events/{_seg(event_id)}/"
        return self._get(profile, path, fmt=fmt)

    def get_tag_details(
        self,
        profile: str,
        issue_id: str,
        tag_key: str,
        params: dict[str, Any] | None = None,
        fmt: str = "json",
    ) -> ApiResult:
        path = self._issue_path(profile, issue_id) + f"tags/{_seg(tag_key)}/"
        return self._get(profile, path, params, fmt)

    def list_tag_values(
        self,
        profile: str,
        issue_id: str,
        tag_key: str,
        params: dict[str, Any] | None = None,
        fmt: str = "json",
    ) -> ApiResult:
        path = self._issue_path(profile, issue_id) + f"tags/{_seg(tag_key)}/values/"
        return self._get(profile, path, params, fmt)

    def list_issue_hashes(self, profile: str, issue_id: str, fmt: str = "json") -> ApiResult:
        path = self._issue_path(profile, issue_id) + "hashes/"
        return self._get(profile, path, fmt=fmt)

    # -- connectivity -------------------------------------------------------

    def test_connection(self, profile: str) -> ApiResult:
        """Fetch one org issue to prove the token and organization are valid."""
        options = self.cache.resolve(profile)
        client = self.cache.get_client(profile)
        try:
            client.get(f"/organizations/{_seg(options.organization)}/issues/", params={"limit": 1})
        except (ApiError, OSError, ValueError) as e:
            return ApiResult.fail(f"ERROR: {_failure_message(e)}")
        return ApiResult.ok(
            {"organization": options.organization, "baseUrl": options.base_url},
            "✅ Connection successful!\n\n"
            f"Profile: {profile}\n"
            f"Organization: {options.organization}\n"
            f"Base URL: {options.base_url}\n"
            "Status: Connected",
        )

    def close(self) -> None:
        self.cache.clear()
