"""One monitoring cycle: sample, derive, evaluate, act, assemble."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional

from models.errors import InvariantViolation, TransientReadFailure
from models.records import (
    BuildingZone,
    DerivedReading,
    EnergyMetrics,
    EquipmentStatus,
    IndicatorColor,
    Reading,
    Snapshot,
)
from sensors.base import (
    EnvironmentReader,
    EquipmentController,
    IndicatorController,
    OccupancySensor,
)
from services.alerts import AlertEngine
from services.classifier import StatusClassifier
from services.compliance import ComplianceEngine
from services.stats import StatsTracker

logger = logging.getLogger(__name__)

COOLING_SET_POINT_ABOVE = 25.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _finite(source: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise TransientReadFailure(source, f"non-numeric value {value!r}") from exc
    if not math.isfinite(number):
        raise TransientReadFailure(source, f"non-finite value {number}")
    return number


class BuildingAggregator:
    """Coordinates readers, rule engines and equipment for a single zone.

    Every collaborator is pulled before any internal state changes, so a
    cycle that fails leaves the alert registry and statistics untouched.
    """

    def __init__(
        self,
        reader: EnvironmentReader,
        equipment: EquipmentController,
        occupancy: OccupancySensor,
        alerts: AlertEngine,
        stats: StatsTracker,
        classifier: Optional[StatusClassifier] = None,
        compliance: Optional[ComplianceEngine] = None,
        indicator: Optional[IndicatorController] = None,
        zone: Optional[BuildingZone] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.reader = reader
        self.equipment = equipment
        self.occupancy = occupancy
        self.alerts = alerts
        self.stats = stats
        self.classifier = classifier or StatusClassifier()
        self.compliance = compliance or ComplianceEngine(clock=clock)
        self.indicator = indicator
        self.zone = zone or BuildingZone()
        self._clock = clock

    def run_cycle(self) -> Snapshot:
        reading = self.sample()
        equipment = self.equipment.get_status()
        people = self.occupancy.get_people_count()
        energy = self.equipment.get_energy_metrics()
        self._validate_inputs(equipment, people, energy)

        alert_triggered = self.alerts.evaluate(reading)
        derived = self.classifier.classify(reading, alert_triggered=alert_triggered)
        findings = self.compliance.check(reading, equipment)

        self._apply_corrective_actions(derived, equipment, people)

        snapshot = Snapshot(
            reading=derived,
            equipment=equipment,
            occupancy=people,
            energy=energy,
            findings=tuple(findings),
            timestamp=self._clock(),
            zone_id=self.zone.zone_id,
        )
        self.stats.record_reading(snapshot.timestamp)
        return snapshot

    def sample(self) -> Reading:
        """Pull one reading set, rejecting values that are not finite."""
        temperature = _finite("temperature", self.reader.read_temperature())
        humidity = _finite("humidity", self.reader.read_humidity())
        light_level = _finite("light", self.reader.read_light_level())
        if not 0.0 <= light_level <= 1.0:
            raise TransientReadFailure("light", f"level {light_level} outside [0, 1]")
        return Reading(
            temperature=temperature,
            humidity=humidity,
            light_level=light_level,
            timestamp=self._clock(),
        )

    @staticmethod
    def _validate_inputs(
        equipment: Optional[EquipmentStatus],
        people: Optional[int],
        energy: Optional[EnergyMetrics],
    ) -> None:
        if equipment is None:
            raise InvariantViolation("Snapshot is missing equipment status.")
        if energy is None:
            raise InvariantViolation("Snapshot is missing energy metrics.")
        if people is None or isinstance(people, bool) or not isinstance(people, int):
            raise InvariantViolation(f"Occupancy count {people!r} is not an integer.")
        if people < 0:
            raise InvariantViolation(f"Occupancy count {people} is negative.")
        _finite("equipment", equipment.fan_speed)
        _finite("equipment", equipment.energy_consumption)
        for value in (
            energy.total_used,
            energy.cost,
            energy.carbon_footprint,
            energy.efficiency_score,
        ):
            _finite("energy", value)

    def _apply_corrective_actions(
        self, derived: DerivedReading, equipment: EquipmentStatus, people: int
    ) -> None:
        # Best-effort: a failed command never abandons the cycle.
        if people > 0:
            self._command(
                "optimize_for_occupancy", self.equipment.optimize_for_occupancy, people
            )

        if derived.temperature > COOLING_SET_POINT_ABOVE and not equipment.cooling:
            self._command(
                "set_target_temperature",
                self.equipment.set_target_temperature,
                self.zone.target_temperature,
            )

        if self.indicator is not None:
            self._command("set_color", self._sync_indicator, derived.indicator_color)

    def _sync_indicator(self, color: IndicatorColor) -> None:
        assert self.indicator is not None
        if self.indicator.current_color() != color:
            self.indicator.set_color(color)

    @staticmethod
    def _command(name: str, action: Callable[..., None], *args: object) -> None:
        try:
            action(*args)
        except Exception as exc:  # noqa: BLE001 - corrective actions are fire-and-forget
            logger.warning(
                "Corrective action %s failed",
                name,
                extra={"reason": str(exc)},
            )
