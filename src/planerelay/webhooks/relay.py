"""
Per-request pipeline: verify, correlate, format, deliver.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from loguru import logger

from ..correlation import CorrelationResult, Decision, EventCorrelator
from ..errors import (
    DownstreamDeliveryFailure,
    MalformedEnvelope,
    MissingCredentials,
    SignatureMismatch,
)
from ..models import EventEnvelope
from ..notifications import DiscordNotifier, build_message
from .signature import SignatureStatus, verify_signature


class RelayOrchestrator:
    """Wires the verifier, correlator, formatter and notifier together."""

    def __init__(self, secret: Optional[str], correlator: EventCorrelator, notifier: DiscordNotifier):
        self.secret = secret
        self.correlator = correlator
        self.notifier = notifier
        self.decision_counts: Dict[str, int] = {d.value: 0 for d in Decision}
        self.deliveries = 0
        self.delivery_failures = 0
        self.rejected_signatures = 0
        self.malformed_envelopes = 0
        self.last_delivered: Optional[str] = None

    async def handle(self, raw_body: bytes, signature: Optional[str]) -> CorrelationResult:
        """
        Process one inbound delivery.

        Args:
            raw_body: Request body exactly as received
            signature: Value of the signature header, if any

        Returns:
            CorrelationResult: The correlator's decision

        Raises:
            MissingCredentials, SignatureMismatch: Before the correlator is touched
            MalformedEnvelope: Payload could not be parsed
            DownstreamDeliveryFailure: Discord rejected a completed sequence
        """
        self._authenticate(raw_body, signature)

        try:
            envelope = EventEnvelope.parse_body(raw_body)
        except MalformedEnvelope:
            self.malformed_envelopes += 1
            raise

        result = self.correlator.observe(
            envelope.sequence_key, envelope.timestamp_ms, envelope.action
        )
        self.decision_counts[result.decision.value] += 1

        if result.decision is Decision.COMPLETED:
            await self._deliver(envelope)

        return result

    def _authenticate(self, raw_body: bytes, signature: Optional[str]) -> None:
        status = verify_signature(self.secret, raw_body, signature)
        if status.is_authentic:
            return
        self.rejected_signatures += 1
        logger.warning(f"Rejected webhook: {status.value}")
        if status is SignatureStatus.MISSING_CREDENTIALS:
            raise MissingCredentials("Missing webhook secret or signature")
        raise SignatureMismatch("Webhook signature mismatch")

    async def _deliver(self, envelope: EventEnvelope) -> None:
        message = build_message(envelope)
        try:
            await self.notifier.send(message)
        except DownstreamDeliveryFailure:
            self.delivery_failures += 1
            raise
        self.deliveries += 1
        self.last_delivered = datetime.now().isoformat()

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about handled deliveries."""
        return {
            "decisions": dict(self.decision_counts),
            "deliveries": self.deliveries,
            "delivery_failures": self.delivery_failures,
            "rejected_signatures": self.rejected_signatures,
            "malformed_envelopes": self.malformed_envelopes,
            "pending": self.correlator.pending_count(),
            "last_delivered": self.last_delivered,
        }
