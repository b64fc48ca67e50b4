"""Regulatory checks evaluated fresh on every cycle."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List

from models.records import ComplianceFinding, ComplianceLevel, EquipmentStatus, Reading

MINIMUM_WORKPLACE_TEMPERATURE = 16.0
COOLING_REQUIRED_ABOVE = 30.0
MAXIMUM_HUMIDITY = 70.0
ENERGY_CONSUMPTION_LIMIT = 4.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ComplianceEngine:
    """Stateless rule set; every applicable rule yields one finding."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock

    def check(self, reading: Reading, equipment: EquipmentStatus) -> List[ComplianceFinding]:
        detected_at = self._clock()
        findings: List[ComplianceFinding] = []

        def add(regulation: str, requirement: str, level: ComplianceLevel) -> None:
            findings.append(
                ComplianceFinding(
                    regulation=regulation,
                    requirement=requirement,
                    level=level,
                    detected_at=detected_at,
                )
            )

        if reading.temperature < MINIMUM_WORKPLACE_TEMPERATURE:
            add("UK Workplace Regulations", "Minimum temperature 16°C", ComplianceLevel.violation)

        if reading.temperature > COOLING_REQUIRED_ABOVE and not equipment.cooling:
            add("HSE Guidelines", "Cooling required above 30°C", ComplianceLevel.warning)

        if reading.humidity > MAXIMUM_HUMIDITY:
            add("Building Standards", "Humidity should be 40-70%", ComplianceLevel.warning)

        if equipment.energy_consumption > ENERGY_CONSUMPTION_LIMIT:
            add("Energy Efficiency", "High energy consumption detected", ComplianceLevel.warning)

        return findings
