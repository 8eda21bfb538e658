"""Calculation history for Flux Calc.

Keeps the most recent committed calculations, newest first:
- Bounded capacity, oldest entries evicted first
- Collision-free ids from a per-ledger sequence
- Recall of raw expression and result for re-editing
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional, Tuple, Union

from .formatter import format_display_expression


DEFAULT_CAPACITY = 10


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class IdSequence:
    """Generates unique, strictly increasing history ids.

    Ids combine a millisecond timestamp with a counter owned by this
    instance, e.g. "1700000000000-000001". Entries created within the same
    millisecond still get distinct, ordered ids.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        """Initialize the sequence.

        Args:
            clock: Returns the current time in milliseconds. Defaults to the
                system clock.
        """
        self._clock = clock or _now_ms
        self._counter = 0

    def next(self) -> Tuple[str, int]:
        """Return the next (id, timestamp_ms) pair."""
        self._counter += 1
        timestamp = self._clock()
        return f"{timestamp:013d}-{self._counter:06d}", timestamp


@dataclass(frozen=True)
class HistoryEntry:
    """A committed calculation."""

    id: str
    raw_expression: str
    result: str
    created_at: datetime
    display_expression: str = field(default="")

    def __post_init__(self):
        if not self.display_expression:
            object.__setattr__(
                self, "display_expression", format_display_expression(self.raw_expression)
            )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "raw_expression": self.raw_expression,
            "display_expression": self.display_expression,
            "result": self.result,
            "created_at": self.created_at.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.display_expression} = {self.result}"


class HistoryLedger:
    """Bounded, newest-first record of committed calculations."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, ids: Optional[IdSequence] = None):
        """Initialize an empty ledger.

        Args:
            capacity: Maximum number of entries kept.
            ids: Id sequence; each ledger gets its own by default.
        """
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self._entries: List[HistoryEntry] = []
        self._capacity = capacity
        self._ids = ids or IdSequence()

    def append(self, raw_expression: str, result: str) -> HistoryEntry:
        """Record a calculation, evicting the oldest beyond capacity."""
        entry_id, timestamp = self._ids.next()
        entry = HistoryEntry(
            id=entry_id,
            raw_expression=raw_expression,
            result=result,
            created_at=datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc),
        )
        self._entries.insert(0, entry)

        # Trim if exceeds capacity
        del self._entries[self._capacity:]
        return entry

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        """Find an entry by id."""
        return next((e for e in self._entries if e.id == entry_id), None)

    def recall(self, entry: Union[HistoryEntry, str]) -> Tuple[str, str]:
        """Return the (raw_expression, result) pair of an entry.

        Args:
            entry: Entry or entry id.

        Raises:
            KeyError: If an id is given that is not in the ledger.
        """
        if isinstance(entry, str):
            found = self.get(entry)
            if found is None:
                raise KeyError(entry)
            entry = found
        return entry.raw_expression, entry.result

    @property
    def entries(self) -> List[HistoryEntry]:
        """Entries, most recent first."""
        return list(self._entries)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))
