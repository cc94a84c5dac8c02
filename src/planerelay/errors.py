"""
Exception hierarchy for the relay.
"""

from typing import Any, Dict, Optional


class RelayError(RuntimeError):
    """Base exception that carries structured context."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(RelayError):
    """Raised at startup when required settings are missing."""


class MissingCredentials(RelayError):
    """No shared secret configured or no signature presented."""
    status_code = 401


class SignatureMismatch(RelayError):
    """Presented signature differs from the expected HMAC."""
    status_code = 403


class MalformedEnvelope(RelayError):
    """Payload is not JSON or lacks required fields."""


class DownstreamDeliveryFailure(RelayError):
    """The Discord webhook did not accept the notification."""

    def __init__(self, message: str, *, status_code: Optional[int] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context=context)
        self.status_code = status_code


__all__ = [
    "RelayError",
    "ConfigurationError",
    "MissingCredentials",
    "SignatureMismatch",
    "MalformedEnvelope",
    "DownstreamDeliveryFailure",
]
