"""
Webhook handling module for planerelay.

This module provides the HTTP surface that receives signed Plane webhooks,
pairs the duplicate deliveries of one change and relays a summary to Discord.
"""

from .webhook_server import WebhookServer, create_app
from .relay import RelayOrchestrator
from .signature import SignatureStatus, verify_signature, compute_signature

__all__ = [
    "WebhookServer",
    "create_app",
    "RelayOrchestrator",
    "SignatureStatus",
    "verify_signature",
    "compute_signature",
]
