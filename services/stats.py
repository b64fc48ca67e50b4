"""Running counters for the monitoring loop."""

from __future__ import annotations

from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, Deque, Optional

from models.records import Stats


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StatsTracker:
    """Counts readings and alerts and derives the average sampling interval.

    Only the most recent ``history_size`` reading timestamps are retained;
    the first timestamp and the totals cover the whole run.
    """

    def __init__(
        self,
        history_size: int = 500,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._clock = clock
        self.start_time = clock()
        self._reading_count = 0
        self._alert_count = 0
        self._first_reading: Optional[datetime] = None
        self._last_reading: Optional[datetime] = None
        self._recent: Deque[datetime] = deque(maxlen=history_size)
        self._lock = Lock()

    def record_reading(self, at: Optional[datetime] = None) -> None:
        timestamp = at or self._clock()
        with self._lock:
            if self._first_reading is None:
                self._first_reading = timestamp
            self._last_reading = timestamp
            self._reading_count += 1
            self._recent.append(timestamp)

    def record_alert(self) -> None:
        with self._lock:
            self._alert_count += 1

    def get_stats(self) -> Stats:
        now = self._clock()
        with self._lock:
            average_interval_ms = 0.0
            if self._reading_count > 1 and self._first_reading and self._last_reading:
                span = self._last_reading - self._first_reading
                average_interval_ms = span.total_seconds() * 1000 / self._reading_count

            return Stats(
                total_readings=self._reading_count,
                total_alerts=self._alert_count,
                start_time=self.start_time,
                uptime_minutes=(now - self.start_time).total_seconds() / 60,
                average_interval_ms=average_interval_ms,
                recent_readings=tuple(self._recent),
            )
