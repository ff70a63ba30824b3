"""
Temporal Gain Tracker

Pending experience gains ordered by expiry. A record stays in the tracker
until its deadline passes and the owner drains it. Nothing is evicted in the
background: expiry is a plain time comparison made when the owner polls.

The tracker also keeps a rolling per-skill total of pending XP, which is what
diminishing-returns logic reads to spot bursts of gains.
"""

from __future__ import annotations

import heapq
import threading
import time
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from skillxp.tables.categories import Skill


MS_PER_MINUTE = 60_000

DEFAULT_INTERVAL_MINUTES = 10


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True, eq=False)
class GainRecord:
    """
    One pending experience gain.

    Ordering uses the absolute deadline only, so two records expiring in the
    same millisecond are neither less nor greater than each other. Equality
    and hashing stay per instance: distinct gains are never equal.
    """
    expires_at_ms: int
    skill: Skill
    xp: float
    interval_minutes: int
    created_at_ms: int

    @classmethod
    def create(cls, skill: Skill, xp: float, interval_minutes: int, now_ms: int) -> GainRecord:
        return cls(
            expires_at_ms=now_ms + int(interval_minutes * MS_PER_MINUTE),
            skill=skill,
            xp=xp,
            interval_minutes=interval_minutes,
            created_at_ms=now_ms,
        )

    def delay(self, now_ms: int) -> int:
        """Milliseconds until expiry; zero or negative once expired."""
        return self.expires_at_ms - now_ms

    def is_expired(self, now_ms: int) -> bool:
        return self.delay(now_ms) <= 0

    def __lt__(self, other):
        if not isinstance(other, GainRecord):
            return NotImplemented
        return self.expires_at_ms < other.expires_at_ms

    def __le__(self, other):
        if not isinstance(other, GainRecord):
            return NotImplemented
        return self.expires_at_ms <= other.expires_at_ms

    def __gt__(self, other):
        if not isinstance(other, GainRecord):
            return NotImplemented
        return self.expires_at_ms > other.expires_at_ms

    def __ge__(self, other):
        if not isinstance(other, GainRecord):
            return NotImplemented
        return self.expires_at_ms >= other.expires_at_ms

    def __repr__(self):
        return f"GainRecord({self.skill.name} +{self.xp}, expires {self.expires_at_ms})"


class GainTracker:
    """
    Delay-ordered queue of GainRecords.

    Usage:
        tracker = GainTracker(interval_minutes=10)
        tracker.insert(Skill.MINING, 30)
        ...
        for record in tracker.drain_expired():
            ...

    Insert and drain share one lock, so any number of producers can insert
    while a consumer drains.
    """

    def __init__(
        self,
        interval_minutes: int = DEFAULT_INTERVAL_MINUTES,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.interval_minutes = interval_minutes
        self._clock = clock or wall_clock_ms
        self._heap: List[GainRecord] = []
        self._lock = threading.Lock()

        # Rolling totals of pending xp per skill
        self._rolling: Dict[Skill, float] = {}
        self._pending: Counter = Counter()

    def now(self) -> int:
        return self._clock()

    def insert(self, skill: Skill, xp: float, interval_minutes: Optional[int] = None) -> GainRecord:
        """
        Record a gain expiring ``interval_minutes`` from now.

        A non-positive interval is allowed and yields an already expired record.
        """
        if interval_minutes is None:
            interval_minutes = self.interval_minutes
        record = GainRecord.create(skill, xp, interval_minutes, self._clock())

        with self._lock:
            heapq.heappush(self._heap, record)
            self._rolling[skill] = self._rolling.get(skill, 0.0) + xp
            self._pending[skill] += 1
        return record

    def peek_delay(self, record: GainRecord) -> int:
        """Remaining milliseconds for a record, measured now."""
        return record.delay(self._clock())

    def peek(self) -> Optional[GainRecord]:
        """Record with the earliest deadline, expired or not."""
        with self._lock:
            return self._heap[0] if self._heap else None

    def poll(self) -> Optional[GainRecord]:
        """Remove and return the head record if it has expired, else None."""
        now = self._clock()
        with self._lock:
            if not self._heap or not self._heap[0].is_expired(now):
                return None
            record = heapq.heappop(self._heap)
            self._release(record)
            return record

    def drain_expired(self) -> List[GainRecord]:
        """Remove every expired record, earliest deadline first."""
        now = self._clock()
        drained: List[GainRecord] = []
        with self._lock:
            while self._heap and self._heap[0].is_expired(now):
                record = heapq.heappop(self._heap)
                self._release(record)
                drained.append(record)
        return drained

    def registered_xp(self, skill: Skill) -> float:
        """Sum of xp over records for this skill that have not been drained."""
        return self._rolling.get(skill, 0.0)

    def clear(self) -> None:
        with self._lock:
            self._heap.clear()
            self._rolling.clear()
            self._pending.clear()

    def _release(self, record: GainRecord) -> None:
        # Caller holds the lock
        skill = record.skill
        self._pending[skill] -= 1
        if self._pending[skill] <= 0:
            del self._pending[skill]
            self._rolling.pop(skill, None)
        else:
            self._rolling[skill] -= record.xp

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self):
        return f"GainTracker({len(self._heap)} pending, interval {self.interval_minutes}m)"
