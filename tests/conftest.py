"""
Shared fixtures for relay tests.
"""

import json

import pytest

from planerelay.webhooks.signature import compute_signature

SECRET = "test-webhook-secret"
SINK_URL = "https://discord.test/api/webhooks/1/token"


class FakeScheduler:
    """Collects scheduled expiry callbacks so tests can fire them by hand."""

    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        self.calls.append((delay, callback))
        return len(self.calls)

    def fire(self, index):
        self.calls[index][1]()

    def fire_all(self):
        for _, callback in list(self.calls):
            callback()


def make_payload(updated_at, event="issue", action="updated", entity_id=7,
                 name="Fix login redirect", activity=None):
    """Build a Plane webhook payload."""
    payload = {
        "event": event,
        "action": action,
        "data": {"id": entity_id, "updated_at": updated_at, "name": name},
    }
    if activity is not None:
        payload["activity"] = activity
    return payload


def sign(body: bytes, secret: str = SECRET) -> str:
    return compute_signature(secret, body)


def encode(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def scheduler():
    return FakeScheduler()
