"""
Turns a completed delivery pair into a Discord embed.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..models import EventEnvelope

EMBED_COLOR = 0x509BEA
NO_FIELD = "No field data"
UNKNOWN_USER = "Unknown User"
STATE_FIELD = "state"


def _content_line(field: str, new_value: Any) -> str:
    if field == STATE_FIELD:
        state = str(new_value if new_value is not None else "Unknown").upper()
        return f"Issue is now in {state}"
    return field


def build_embed(envelope: EventEnvelope, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Build the embed describing the change carried by ``envelope``."""
    activity = envelope.activity
    field = (activity.field if activity else None) or NO_FIELD
    new_value = activity.new_value if activity else None
    actor = activity.actor.display_name if activity and activity.actor else None

    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    return {
        "title": f"{envelope.event.upper()} {envelope.action.upper()}",
        "description": f"**Entity:** {envelope.entity_label}",
        "color": EMBED_COLOR,
        "fields": [
            {"name": "Type", "value": field, "inline": True},
            {"name": "By", "value": actor or UNKNOWN_USER, "inline": True},
            {"name": "Content", "value": _content_line(field, new_value)},
        ],
        "timestamp": timestamp,
    }


def build_message(envelope: EventEnvelope, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Wrap the embed in a Discord webhook body."""
    return {"embeds": [build_embed(envelope, now)]}
