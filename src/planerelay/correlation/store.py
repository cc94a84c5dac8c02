"""
In-memory table of first-half deliveries awaiting their pair.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional


@dataclass(eq=False)
class PendingRecord:
    """First-seen delivery for a sequence key."""
    timestamp: int
    action: str


class PendingStore:
    """Mapping from sequence key to its single pending record.

    Not thread-safe: all access must happen on one event loop.
    """

    def __init__(self):
        self._records: Dict[str, PendingRecord] = {}

    def get(self, key: str) -> Optional[PendingRecord]:
        return self._records.get(key)

    def put(self, key: str, record: PendingRecord) -> None:
        self._records[key] = record

    def pop(self, key: str) -> Optional[PendingRecord]:
        return self._records.pop(key, None)

    def discard_if_current(self, key: str, record: PendingRecord) -> bool:
        """Remove ``key`` only if it still maps to ``record`` (compare-and-remove)."""
        if self._records.get(key) is record:
            del self._records[key]
            return True
        return False

    def __contains__(self, key: str) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._records))
