import pytest

from dsync.core.events import (
    ATTRIBUTE_EVENT_KINDS,
    EVENT_KINDS,
    DirectorySyncEvent,
    EventError,
)


def test_from_dict_reads_envelope(okta_payload):
    event = DirectorySyncEvent.from_dict(okta_payload)
    assert event.event == "user.created"
    assert event.directory_id == "dir_okta"
    assert event.tenant == "acme"
    assert event.product == "crm"
    assert event.raw["territory"] == {"territory": "NAM"}
    assert event.supports_attributes is True


def test_from_dict_defaults_missing_raw_to_empty():
    event = DirectorySyncEvent.from_dict({"event": "group.created", "data": {}})
    assert event.raw == {}
    assert event.directory_id is None
    assert event.supports_attributes is False


@pytest.mark.parametrize(
    "payload, message",
    [
        ([], "must be a JSON object"),
        ({"data": {}}, "missing 'event'"),
        ({"event": 5, "data": {}}, "missing 'event'"),
        ({"event": "user.created"}, "missing 'data'"),
        ({"event": "user.created", "data": []}, "missing 'data'"),
        ({"event": "user.created", "data": {"raw": "oops"}}, "data.raw"),
    ],
)
def test_from_dict_rejects_malformed_envelopes(payload, message):
    with pytest.raises(EventError, match=message):
        DirectorySyncEvent.from_dict(payload)


def test_attribute_kinds_are_user_events():
    assert ATTRIBUTE_EVENT_KINDS == {"user.created", "user.updated"}
    assert ATTRIBUTE_EVENT_KINDS < EVENT_KINDS
