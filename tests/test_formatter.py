"""
Tests for Discord message formatting.
"""

from datetime import datetime, timezone

from planerelay.models import EventEnvelope
from planerelay.notifications.formatter import EMBED_COLOR, build_embed, build_message

from conftest import make_payload

NOW = datetime(2025, 1, 27, 10, 0, 1, tzinfo=timezone.utc)


def _envelope(**kwargs) -> EventEnvelope:
    return EventEnvelope.model_validate(make_payload("2025-01-27T10:00:00Z", **kwargs))


def _fields(embed):
    return {field["name"]: field["value"] for field in embed["fields"]}


def test_state_change_renders_sentence():
    envelope = _envelope(activity={
        "field": "state",
        "new_value": "done",
        "actor": {"display_name": "Ada"},
    })

    embed = build_embed(envelope, now=NOW)

    assert embed["title"] == "ISSUE UPDATED"
    assert embed["description"] == "**Entity:** Fix login redirect"
    assert embed["color"] == EMBED_COLOR
    assert embed["timestamp"] == NOW.isoformat()
    assert _fields(embed) == {
        "Type": "state",
        "By": "Ada",
        "Content": "Issue is now in DONE",
    }


def test_state_change_without_new_value():
    embed = build_embed(_envelope(activity={"field": "state"}), now=NOW)
    assert _fields(embed)["Content"] == "Issue is now in UNKNOWN"


def test_other_field_uses_raw_name():
    embed = build_embed(_envelope(activity={"field": "priority", "new_value": "high"}), now=NOW)

    fields = _fields(embed)
    assert fields["Type"] == "priority"
    assert fields["Content"] == "priority"
    assert fields["By"] == "Unknown User"


def test_missing_activity_falls_back():
    embed = build_embed(_envelope(), now=NOW)

    assert _fields(embed) == {
        "Type": "No field data",
        "By": "Unknown User",
        "Content": "No field data",
    }


def test_entity_falls_back_to_id():
    embed = build_embed(_envelope(name=None, entity_id="a1b2"), now=NOW)
    assert embed["description"] == "**Entity:** a1b2"


def test_message_wraps_single_embed():
    message = build_message(_envelope(event="project", action="created"), now=NOW)

    assert list(message) == ["embeds"]
    assert len(message["embeds"]) == 1
    assert message["embeds"][0]["title"] == "PROJECT CREATED"
