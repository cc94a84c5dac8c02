"""
Event correlation for paired Plane webhook deliveries.
"""

from .store import PendingRecord, PendingStore
from .correlator import Decision, CorrelationResult, EventCorrelator

__all__ = [
    "PendingRecord",
    "PendingStore",
    "Decision",
    "CorrelationResult",
    "EventCorrelator",
]
