"""Timer-driven monitoring loop and its composition root."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from threading import Event, Lock, Thread
from typing import Callable, List, Optional, Sequence

from app.schemas import SnapshotDocument
from datastore.snapshot_store import SnapshotStore
from models.errors import InvariantViolation, TransientReadFailure
from models.records import Alert, BuildingZone, Snapshot, Stats, ZoneType
from sensors.base import EnvironmentReader, SnapshotSink
from sensors.http import HttpSensorReader
from sensors.simulated import (
    SimulatedEquipment,
    SimulatedIndicator,
    SimulatedOccupancySensor,
    SimulatedReader,
)
from services.aggregator import BuildingAggregator
from services.alerts import AlertEngine
from services.maintenance import MaintenanceAdvisor
from services.stats import StatsTracker
from settings import Settings, get_settings
from storage.csv_log import CsvSnapshotSink

logger = logging.getLogger(__name__)


class BuildingMonitor:
    """Runs aggregation cycles one after another and hands snapshots to sinks.

    Cancellation is only observed between cycles. Sinks run on a dedicated
    executor and receive the immutable snapshot, so a slow sink never delays
    the next cycle.
    """

    def __init__(
        self,
        aggregator: BuildingAggregator,
        sinks: Sequence[SnapshotSink] = (),
        interval: float = 3.0,
        store: Optional[SnapshotStore] = None,
        maintenance: Optional[MaintenanceAdvisor] = None,
        maintenance_every: int = 100,
    ) -> None:
        self.aggregator = aggregator
        self.interval = interval
        self.store = store
        self.sinks: List[SnapshotSink] = list(sinks)
        if store is not None and store not in self.sinks:
            self.sinks.append(store)
        self.maintenance = maintenance
        self.maintenance_every = max(1, maintenance_every)
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="snapshot-sink")
        self._stop = Event()
        self._thread: Optional[Thread] = None
        self._closed = False
        self._cycle = 0
        self._latest: Optional[Snapshot] = None
        self._latest_lock = Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> Optional[Snapshot]:
        """Execute one cycle. Returns ``None`` when the cycle was abandoned."""
        self._cycle += 1
        try:
            snapshot = self.aggregator.run_cycle()
        except TransientReadFailure as exc:
            logger.warning(
                "Cycle skipped after a failed read",
                extra={"cycle": self._cycle, "reason": str(exc)},
            )
            return None
        except InvariantViolation as exc:
            logger.error(
                "Cycle abandoned with an incomplete snapshot",
                extra={"cycle": self._cycle, "reason": str(exc)},
            )
            return None

        with self._latest_lock:
            self._latest = snapshot
        self._dispatch(snapshot)

        if self.maintenance is not None and self._cycle % self.maintenance_every == 0:
            due = self.maintenance.due_components()
            if due:
                logger.warning("Maintenance due", extra={"components": due})

        logger.debug(
            "Cycle complete",
            extra={"cycle": self._cycle, "zone_id": snapshot.zone_id},
        )
        return snapshot

    def run(
        self,
        stop_event: Optional[Event] = None,
        max_cycles: Optional[int] = None,
        on_snapshot: Optional[Callable[[Snapshot], None]] = None,
    ) -> int:
        """Loop until ``stop_event`` is set or ``max_cycles`` have run.

        Returns the number of cycles attempted.
        """
        if self._closed:
            raise RuntimeError("Monitor has been shut down and cannot be restarted.")
        stop = stop_event or self._stop
        attempted = 0
        while not stop.is_set():
            try:
                snapshot = self.run_once()
            except Exception:
                logger.exception(
                    "Unexpected error in monitoring cycle", extra={"cycle": self._cycle}
                )
                snapshot = None
            attempted += 1

            if snapshot is not None and on_snapshot is not None:
                on_snapshot(snapshot)

            if max_cycles is not None and attempted >= max_cycles:
                break
            if stop.wait(self.interval):
                break
        return attempted

    def start(self) -> None:
        if self._closed:
            raise RuntimeError("Monitor has been shut down and cannot be restarted.")
        if self.running:
            return
        self._stop.clear()
        self._thread = Thread(target=self.run, name="building-monitor", daemon=True)
        self._thread.start()
        logger.info(
            "Building monitoring started",
            extra={"zone_id": self.aggregator.zone.zone_id},
        )

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the background loop and wait for the current cycle to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Stop the loop, drain the sink executor and close the reader.

        A monitor that has been shut down cannot be started again.
        """
        self.stop(timeout=timeout)
        self._closed = True
        self.executor.shutdown(wait=True)
        close = getattr(self.aggregator.reader, "close", None)
        if callable(close):
            close()

    def latest_snapshot(self) -> Optional[Snapshot]:
        with self._latest_lock:
            return self._latest

    def latest_document(self) -> Optional[SnapshotDocument]:
        snapshot = self.latest_snapshot()
        if snapshot is not None:
            return SnapshotDocument.from_snapshot(snapshot)
        if self.store is not None:
            return self.store.latest()
        return None

    def get_stats(self) -> Stats:
        return self.aggregator.stats.get_stats()

    def get_active_alerts(self) -> List[Alert]:
        return self.aggregator.alerts.get_active_alerts()

    def acknowledge_alert(self, alert_id: str) -> Alert:
        return self.aggregator.alerts.acknowledge(alert_id)

    def _dispatch(self, snapshot: Snapshot) -> None:
        for sink in self.sinks:
            self.executor.submit(self._deliver, sink, snapshot)

    @staticmethod
    def _deliver(sink: SnapshotSink, snapshot: Snapshot) -> None:
        try:
            sink.consume(snapshot)
        except Exception as exc:  # noqa: BLE001 - sinks never affect the loop
            logger.error(
                "Snapshot sink failed",
                extra={"sink": type(sink).__name__, "reason": str(exc)},
            )


def _build_zone(settings: Settings) -> BuildingZone:
    try:
        zone_type = ZoneType(settings.zone_type)
    except ValueError:
        zone_type = ZoneType.office
    return BuildingZone(
        zone_id=settings.zone_id,
        zone_name=settings.zone_name,
        zone_type=zone_type,
        target_temperature=settings.zone_target_temperature,
        target_humidity=settings.zone_target_humidity,
    )


def _build_reader(settings: Settings) -> EnvironmentReader:
    if settings.sensor_source == "http":
        return HttpSensorReader(settings.sensor_gateway_url)
    return SimulatedReader(failure_rate=settings.sensor_failure_rate)


def build_default_monitor(
    settings: Optional[Settings] = None,
    reader: Optional[EnvironmentReader] = None,
) -> BuildingMonitor:
    """Wire the monitor with simulated plant and file sinks from settings."""
    settings = settings or get_settings()
    stats = StatsTracker(history_size=settings.stats_history_size)
    alerts = AlertEngine(
        stats=stats,
        capacity=settings.alert_capacity,
        ttl_seconds=settings.alert_ttl_seconds,
    )
    aggregator = BuildingAggregator(
        reader=reader or _build_reader(settings),
        equipment=SimulatedEquipment(),
        occupancy=SimulatedOccupancySensor(),
        alerts=alerts,
        stats=stats,
        indicator=SimulatedIndicator(),
        zone=_build_zone(settings),
    )

    sinks: List[SnapshotSink] = []
    if settings.metrics_csv_path:
        sinks.append(CsvSnapshotSink(Path(settings.metrics_csv_path)))
    json_path = Path(settings.status_json_path) if settings.status_json_path else None
    store = SnapshotStore(persistence_path=json_path, export_every=settings.json_export_every)

    return BuildingMonitor(
        aggregator=aggregator,
        sinks=sinks,
        interval=settings.sampling_interval,
        store=store,
        maintenance=MaintenanceAdvisor(),
        maintenance_every=settings.maintenance_check_every,
    )
