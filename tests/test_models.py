"""
Tests for inbound envelope parsing.
"""

import json

import pytest

from planerelay.errors import MalformedEnvelope
from planerelay.models import EventEnvelope

from conftest import make_payload


class TestEventEnvelope:
    """Test cases for EventEnvelope."""

    def test_parse_body(self):
        body = json.dumps(make_payload(
            "2025-01-27T10:00:00.500Z",
            activity={"field": "state", "new_value": "done", "actor": {"display_name": "Ada"}},
        )).encode()

        envelope = EventEnvelope.parse_body(body)

        assert envelope.event == "issue"
        assert envelope.action == "updated"
        assert envelope.sequence_key == "issue:7"
        assert envelope.timestamp_ms == 1737972000500
        assert envelope.activity.actor.display_name == "Ada"

    def test_string_entity_id(self):
        body = json.dumps(make_payload("2025-01-27T10:00:00Z", entity_id="uuid-1")).encode()
        assert EventEnvelope.parse_body(body).sequence_key == "issue:uuid-1"

    def test_entity_label(self):
        with_name = EventEnvelope.model_validate(make_payload("2025-01-27T10:00:00Z"))
        without_name = EventEnvelope.model_validate(make_payload("2025-01-27T10:00:00Z", name=None))

        assert with_name.entity_label == "Fix login redirect"
        assert without_name.entity_label == "7"

    @pytest.mark.parametrize("body", [
        b"not json",
        b"{}",
        b'{"event": "issue", "action": "updated"}',
        b'{"event": "issue", "action": "updated", "data": {"id": 7}}',
        b'{"event": "issue", "action": "updated", "data": {"id": 7, "updated_at": "yesterday"}}',
    ])
    def test_malformed_body(self, body):
        with pytest.raises(MalformedEnvelope):
            EventEnvelope.parse_body(body)
