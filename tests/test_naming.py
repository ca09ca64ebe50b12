"""Tests for restnav.naming -- instance names, URL segments, key casing."""

from __future__ import annotations

import pytest

from restnav.naming import (
    INSTANCE_NAME_OVERRIDES,
    camelize,
    camelize_keys,
    instance_name,
    path_segment,
    underscore,
    underscore_keys,
)


# ---------------------------------------------------------------------------
# instance_name
# ---------------------------------------------------------------------------


class TestInstanceName:
    @pytest.mark.parametrize(
        "collection, expected",
        [
            ("Calls", "Call"),
            ("Domains", "Domain"),
            ("IncomingPhoneNumbers", "IncomingPhoneNumber"),
            ("CredentialLists", "CredentialList"),
        ],
    )
    def test_strips_one_trailing_s(self, collection: str, expected: str) -> None:
        assert instance_name(collection) == expected

    @pytest.mark.parametrize("collection", sorted(INSTANCE_NAME_OVERRIDES))
    def test_override_table_wins(self, collection: str) -> None:
        assert instance_name(collection) == INSTANCE_NAME_OVERRIDES[collection]

    def test_ip_addresses_override(self) -> None:
        # Plain suffix stripping would give "IpAddresse".
        assert instance_name("IpAddresses") == "IpAddress"

    def test_name_without_plural_marker_gets_suffix(self) -> None:
        assert instance_name("Sip") == "SipInstance"
        assert instance_name("Feedback") == "FeedbackInstance"

    def test_only_one_s_is_stripped(self) -> None:
        assert instance_name("Statuss") == "Status"

    def test_single_s_is_not_emptied(self) -> None:
        assert instance_name("S") == "SInstance"

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError):
            instance_name("")

    def test_never_returns_the_collection_name(self) -> None:
        for name in ["Calls", "Media", "Sip", "Sms", "Feedback", "IpAddresses"]:
            assert instance_name(name) != name


# ---------------------------------------------------------------------------
# path_segment
# ---------------------------------------------------------------------------


class TestPathSegment:
    def test_override_for_abbreviations(self) -> None:
        assert path_segment("sip") == "SIP"
        assert path_segment("sms") == "SMS"

    def test_snake_case_is_camelized(self) -> None:
        assert path_segment("incoming_phone_numbers") == "IncomingPhoneNumbers"
        assert path_segment("ip_access_control_list_mappings") == "IpAccessControlListMappings"

    def test_single_word(self) -> None:
        assert path_segment("calls") == "Calls"


# ---------------------------------------------------------------------------
# Key casing
# ---------------------------------------------------------------------------


class TestCamelize:
    def test_snake_to_camel(self) -> None:
        assert camelize("page_size") == "PageSize"

    def test_idempotent_on_camel_case(self) -> None:
        assert camelize("PageSize") == "PageSize"
        assert camelize(camelize("friendly_name")) == "FriendlyName"

    def test_empty(self) -> None:
        assert camelize("") == ""

    def test_collapses_double_underscores(self) -> None:
        assert camelize("voice__url") == "VoiceUrl"


class TestUnderscore:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("IncomingPhoneNumbers", "incoming_phone_numbers"),
            ("DateCreated", "date_created"),
            ("SMSMessages", "sms_messages"),
            ("date_created", "date_created"),
            ("Sid", "sid"),
        ],
    )
    def test_conversion(self, name: str, expected: str) -> None:
        assert underscore(name) == expected

    def test_hyphens_become_underscores(self) -> None:
        assert underscore("X-Request-Id") == "x_request_id"


class TestKeyMaps:
    def test_camelize_keys(self) -> None:
        assert camelize_keys({"page_size": 1, "To": "+1"}) == {"PageSize": 1, "To": "+1"}

    def test_underscore_keys(self) -> None:
        assert underscore_keys({"FriendlyName": "a", "sid": "b"}) == {
            "friendly_name": "a",
            "sid": "b",
        }

    def test_inputs_are_not_mutated(self) -> None:
        params = {"page_size": 1}
        camelize_keys(params)
        assert params == {"page_size": 1}
