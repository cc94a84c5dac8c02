"""
Stateful pairing of near-duplicate webhook deliveries.

Plane emits two notifications in quick succession for a single change. The
first one is cached; a second delivery for the same sequence key whose
timestamp falls within the window completes the pair. Anything else resets
the window to the newer delivery.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from loguru import logger

from ..config import DEFAULT_WINDOW_MS
from .store import PendingRecord, PendingStore

# (delay_seconds, callback) -> handle
Scheduler = Callable[[float, Callable[[], None]], Any]


def loop_scheduler(delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    """Schedule ``callback`` on the running event loop."""
    return asyncio.get_running_loop().call_later(delay, callback)


class Decision(str, Enum):
    """What the correlator did with an observation."""
    CACHED = "cached"
    COMPLETED = "completed"
    RESET = "reset"


@dataclass
class CorrelationResult:
    """Decision for one observation, with the record it matched against."""
    decision: Decision
    key: str
    timestamp: int
    action: str
    previous: Optional[PendingRecord] = None

    @property
    def delta_ms(self) -> Optional[int]:
        if self.previous is None:
            return None
        return self.timestamp - self.previous.timestamp


class EventCorrelator:
    """Decides whether a delivery starts, completes or resets a change."""

    def __init__(
        self,
        store: PendingStore,
        window_ms: int = DEFAULT_WINDOW_MS,
        scheduler: Optional[Scheduler] = None,
    ):
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")
        self.store = store
        self.window_ms = window_ms
        self._schedule = scheduler or loop_scheduler

    def observe(self, key: str, timestamp: int, action: str) -> CorrelationResult:
        """Apply one delivery to the table and return the decision.

        Runs without awaiting, so the check-then-act sequence is atomic with
        respect to expiry callbacks on the same loop.
        """
        existing = self.store.get(key)

        if existing is None:
            self._cache(key, timestamp, action)
            logger.debug(f"Cached first delivery for {key} at {timestamp}")
            return CorrelationResult(Decision.CACHED, key, timestamp, action)

        delta = timestamp - existing.timestamp

        if 0 <= delta < self.window_ms:
            # Removed before any downstream call so a third delivery starts fresh
            self.store.pop(key)
            logger.info(f"Completed sequence {key} ({existing.action} -> {action}, delta={delta}ms)")
            return CorrelationResult(Decision.COMPLETED, key, timestamp, action, previous=existing)

        self._cache(key, timestamp, action)
        logger.info(f"Window reset for {key} (delta={delta}ms)")
        return CorrelationResult(Decision.RESET, key, timestamp, action, previous=existing)

    def _cache(self, key: str, timestamp: int, action: str) -> PendingRecord:
        record = PendingRecord(timestamp=timestamp, action=action)
        self.store.put(key, record)
        self._schedule(self.window_ms / 1000.0, lambda: self._expire(key, record))
        return record

    def _expire(self, key: str, record: PendingRecord) -> None:
        if self.store.discard_if_current(key, record):
            logger.debug(f"Expired pending record for {key} at {record.timestamp}")

    def pending_count(self) -> int:
        return len(self.store)
