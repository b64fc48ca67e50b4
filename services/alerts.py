"""Threshold alerting with a bounded registry of fired alerts."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Deque, List, Optional

from models.records import Alert, Reading, Severity
from services.stats import StatsTracker

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.info: logging.INFO,
    Severity.warning: logging.WARNING,
    Severity.critical: logging.ERROR,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AlertEngine:
    """Evaluates threshold rules and keeps the most recent alerts.

    Temperature rules are mutually exclusive, as are humidity rules; the
    light rule is independent of both. The registry holds at most
    ``capacity`` alerts and evicts the oldest entry when full. An alert stops
    being active when acknowledged or, if ``ttl_seconds`` is positive, once it
    is older than the TTL.
    """

    def __init__(
        self,
        stats: Optional[StatsTracker] = None,
        capacity: int = 100,
        ttl_seconds: float = 0.0,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if capacity <= 0:
            raise ValueError("Alert registry capacity must be positive.")
        self.stats = stats
        self.capacity = capacity
        self.ttl = timedelta(seconds=ttl_seconds) if ttl_seconds > 0 else None
        self._clock = clock
        self._registry: Deque[Alert] = deque(maxlen=capacity)
        # The HTTP layer reads and acknowledges from other threads.
        self._lock = Lock()

    def evaluate(self, reading: Reading) -> bool:
        """Register an alert for every rule the reading fires.

        Returns ``True`` when at least one new alert was raised.
        """
        now = self._clock()
        fired = [
            Alert(message=message, severity=severity, triggered_at=now)
            for severity, message in self._matching_rules(reading)
        ]

        with self._lock:
            self._registry.extend(fired)
            self._expire(now)

        for alert in fired:
            if self.stats is not None:
                self.stats.record_alert()
            logger.log(
                _LOG_LEVELS[alert.severity],
                "Alert raised: %s",
                alert.message,
                extra={"alert_id": alert.id, "severity": alert.severity},
            )

        return bool(fired)

    def get_active_alerts(self) -> List[Alert]:
        """Active alerts in the order they were raised."""
        with self._lock:
            self._expire(self._clock())
            return [alert for alert in self._registry if alert.active]

    def get_alerts(self) -> List[Alert]:
        with self._lock:
            return list(self._registry)

    def acknowledge(self, alert_id: str) -> Alert:
        with self._lock:
            for alert in self._registry:
                if alert.id == alert_id:
                    alert.active = False
                    return alert
        raise KeyError(f"Alert {alert_id!r} not found.")

    @staticmethod
    def _matching_rules(reading: Reading) -> List[tuple[Severity, str]]:
        matches: List[tuple[Severity, str]] = []

        if reading.temperature > 35:
            matches.append((Severity.critical, "CRITICAL: high temperature"))
        elif reading.temperature > 30:
            matches.append((Severity.warning, "WARNING: temperature rising"))
        elif reading.temperature < 5:
            matches.append((Severity.critical, "CRITICAL: freezing temperature"))

        if reading.humidity > 85:
            matches.append((Severity.warning, "HIGH HUMIDITY: condensation risk"))
        elif reading.humidity < 20:
            matches.append((Severity.info, "LOW HUMIDITY: dry conditions"))

        if reading.light_level < 0.1:
            matches.append((Severity.info, "NIGHT MODE: low light / night mode"))

        return matches

    def _expire(self, now: datetime) -> None:
        if self.ttl is None:
            return
        cutoff = now - self.ttl
        for alert in self._registry:
            if alert.active and alert.triggered_at <= cutoff:
                alert.active = False
