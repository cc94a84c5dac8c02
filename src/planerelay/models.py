"""
Inbound Plane webhook payload models.
"""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError

from .errors import MalformedEnvelope


class Actor(BaseModel):
    """User who performed the activity."""
    display_name: Optional[str] = None


class Activity(BaseModel):
    """Field-level change attached to the event."""
    field: Optional[str] = None
    old_value: Optional[Any] = None
    new_value: Optional[Any] = None
    actor: Optional[Actor] = None


class EntityData(BaseModel):
    """The entity the event is about."""
    id: Union[int, str]
    updated_at: datetime
    name: Optional[str] = None


class EventEnvelope(BaseModel):
    """Standardized Plane webhook event."""
    event: str
    action: str
    data: EntityData
    activity: Optional[Activity] = None

    @property
    def sequence_key(self) -> str:
        """Identity shared by both deliveries of one logical change."""
        return f"{self.event}:{self.data.id}"

    @property
    def timestamp_ms(self) -> int:
        """``data.updated_at`` as epoch milliseconds."""
        return int(self.data.updated_at.timestamp() * 1000)

    @property
    def entity_label(self) -> str:
        return self.data.name or str(self.data.id)

    @classmethod
    def parse_body(cls, raw_body: bytes) -> "EventEnvelope":
        """Parse a raw request body, raising MalformedEnvelope on bad input."""
        try:
            return cls.model_validate_json(raw_body)
        except ValidationError as e:
            raise MalformedEnvelope(
                "Malformed webhook payload",
                context={"errors": e.errors(include_url=False)},
            ) from e
