"""Tests for models.py — payload validation, CLI-key stripping, ApiResult."""

import pytest

from sentry_api_cli.exceptions import ValidationError
from sentry_api_cli.models import (
    CLI_ONLY_KEYS,
    ApiResult,
    CommandArgs,
    ObjectPayload,
    strip_cli_params,
)


def _args(payload, required=()):
    return CommandArgs.from_payload(
        payload, required=required, default_profile="default", default_format="json"
    )


class TestStripCliParams:
    def test_removes_cli_keys(self):
        params = {
            "profile": "p",
            "format": "toon",
            "projectSlug": "web",
            "issueId": "1",
            "eventId": "e",
            "tagKey": "browser",
            "query": "is:unresolved",
            "limit": 5,
        }
        assert strip_cli_params(params) == {"query": "is:unresolved", "limit": 5}

    def test_does_not_mutate_input(self):
        params = {"profile": "p", "cursor": "c"}
        strip_cli_params(params)
        assert params == {"profile": "p", "cursor": "c"}

    def test_denylist_contents(self):
        assert CLI_ONLY_KEYS == {
            "profile",
            "format",
            "projectSlug",
            "issueId",
            "eventId",
            "tagKey",
        }


class TestObjectPayload:
    def test_none_is_empty(self):
        assert ObjectPayload.from_value(None, "arguments").data == {}

    def test_rejects_list(self):
        with pytest.raises(ValidationError) as exc_info:
            ObjectPayload.from_value([1], "arguments")
        assert "expected object, got list" in str(exc_info.value)


class TestCommandArgs:
    def test_defaults_applied(self):
        args = _args({"issueId": "123"}, required=("issueId",))
        assert args.profile == "default"
        assert args.format == "json"
        assert args.issue_id == "123"
        assert args.params == {}

    def test_explicit_profile_and_format(self):
        args = _args({"profile": "production", "format": "toon"})
        assert args.profile == "production"
        assert args.format == "toon"

    def test_numeric_ids_become_strings(self):
        args = _args({"issueId": 123456789}, required=("issueId",))
        assert args.issue_id == "123456789"

    def test_params_exclude_cli_keys(self):
        args = _args({"projectSlug": "web", "statsPeriod": "24h", "format": "toon"})
        assert args.project_slug == "web"
        assert args.params == {"statsPeriod": "24h"}

    def test_missing_one_field(self):
        with pytest.raises(ValidationError) as exc_info:
            _args({}, required=("issueId",))
        assert str(exc_info.value) == 'ERROR: "issueId" parameter is required'

    def test_missing_two_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            _args({}, required=("issueId", "tagKey"))
        assert str(exc_info.value) == 'ERROR: "issueId" and "tagKey" parameters are required'

    def test_only_missing_fields_named(self):
        with pytest.raises(ValidationError) as exc_info:
            _args({"projectSlug": "web"}, required=("projectSlug", "eventId"))
        assert str(exc_info.value) == 'ERROR: "eventId" parameter is required'

    def test_blank_string_counts_as_missing(self):
        with pytest.raises(ValidationError):
            _args({"issueId": "   "}, required=("issueId",))

    @pytest.mark.parametrize("value", [0, False, None, ""])
    def test_falsy_identifiers_count_as_missing(self, value):
        with pytest.raises(ValidationError) as exc_info:
            _args({"issueId": value}, required=("issueId",))
        assert str(exc_info.value) == 'ERROR: "issueId" parameter is required'

    def test_invalid_format(self):
        with pytest.raises(ValidationError) as exc_info:
            _args({"format": "yaml"})
        assert str(exc_info.value) == "ERROR: Invalid format 'yaml'. Use: json, toon"

    def test_missing_field_checked_before_format(self):
        with pytest.raises(ValidationError) as exc_info:
            _args({"format": "yaml"}, required=("issueId",))
        assert "issueId" in str(exc_info.value)


class TestApiResult:
    def test_ok(self):
        result = ApiResult.ok({"id": "1"}, "rendered")
        assert result.success is True
        assert result.error is None

    def test_fail(self):
        result = ApiResult.fail("ERROR: nope")
        assert result.success is False
        assert result.data is None
