"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Tuple
from uuid import uuid4


class Severity(str, Enum):
    """Alert severities, lowest first."""

    info = "Info"
    warning = "Warning"
    critical = "Critical"


class ComplianceLevel(str, Enum):
    compliant = "Compliant"
    warning = "Warning"
    violation = "Violation"


class IndicatorColor(str, Enum):
    """Single status signal shown on the zone indicator."""

    red = "Red"
    blue = "Blue"
    purple = "Purple"
    green = "Green"


class ZoneType(str, Enum):
    office = "Office"
    server_room = "ServerRoom"
    laboratory = "Laboratory"
    manufacturing = "Manufacturing"
    warehouse = "Warehouse"


@dataclass(frozen=True, slots=True)
class BuildingZone:
    zone_id: str = "Zone-A"
    zone_name: str = "Main Office Area"
    zone_type: ZoneType = ZoneType.office
    target_temperature: float = 22.0
    target_humidity: float = 45.0


@dataclass(frozen=True, slots=True)
class Reading:
    """One sampled set of environmental values."""

    temperature: float
    humidity: float
    light_level: float
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class DerivedReading:
    """A reading together with its categorical statuses."""

    reading: Reading
    temperature_status: str
    humidity_status: str
    light_category: str
    indicator_color: IndicatorColor
    alert_triggered: bool = False

    @property
    def temperature(self) -> float:
        return self.reading.temperature

    @property
    def humidity(self) -> float:
        return self.reading.humidity

    @property
    def light_level(self) -> float:
        return self.reading.light_level

    @property
    def timestamp(self) -> datetime:
        return self.reading.timestamp


@dataclass(slots=True)
class Alert:
    """A fired threshold rule. Only ``active`` changes after creation."""

    message: str
    severity: Severity
    triggered_at: datetime
    id: str = field(default_factory=lambda: str(uuid4()))
    active: bool = True


@dataclass(frozen=True, slots=True)
class EquipmentStatus:
    heating: bool
    cooling: bool
    ventilating: bool
    fan_speed: int
    energy_consumption: float


@dataclass(frozen=True, slots=True)
class EnergyMetrics:
    total_used: float
    cost: float
    carbon_footprint: float
    efficiency_score: float


@dataclass(frozen=True, slots=True)
class ComplianceFinding:
    regulation: str
    requirement: str
    level: ComplianceLevel
    detected_at: datetime


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Consolidated result of one monitoring cycle."""

    reading: DerivedReading
    equipment: EquipmentStatus
    occupancy: int
    energy: EnergyMetrics
    findings: Tuple[ComplianceFinding, ...]
    timestamp: datetime
    zone_id: str

    def to_record(self) -> Dict[str, Any]:
        """Flatten into a single row, one per cycle."""
        return {
            "timestamp": self.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "temperature": self.reading.temperature,
            "humidity": self.reading.humidity,
            "light": self.reading.light_level,
            "occupancy": self.occupancy,
            "energy_used": self.energy.total_used,
            "energy_cost": self.energy.cost,
            "carbon_footprint": self.energy.carbon_footprint,
            "efficiency": self.energy.efficiency_score,
            "compliance_alerts": len(self.findings),
        }

    def to_document(self) -> Dict[str, Any]:
        """Nested representation suitable for JSON export."""
        derived = self.reading
        return {
            "zone_id": self.zone_id,
            "timestamp": self.timestamp,
            "environment": {
                "temperature": derived.temperature,
                "humidity": derived.humidity,
                "light_level": derived.light_level,
                "temperature_status": derived.temperature_status,
                "humidity_status": derived.humidity_status,
                "light_category": derived.light_category,
                "indicator_color": derived.indicator_color.value,
                "alert_triggered": derived.alert_triggered,
                "timestamp": derived.timestamp,
            },
            "equipment": {
                "heating": self.equipment.heating,
                "cooling": self.equipment.cooling,
                "ventilating": self.equipment.ventilating,
                "fan_speed": self.equipment.fan_speed,
                "energy_consumption": self.equipment.energy_consumption,
            },
            "occupancy": self.occupancy,
            "energy": {
                "total_used": self.energy.total_used,
                "cost": self.energy.cost,
                "carbon_footprint": self.energy.carbon_footprint,
                "efficiency_score": self.energy.efficiency_score,
            },
            "findings": [
                {
                    "regulation": finding.regulation,
                    "requirement": finding.requirement,
                    "level": finding.level.value,
                    "detected_at": finding.detected_at,
                }
                for finding in self.findings
            ],
        }


@dataclass(frozen=True, slots=True)
class Stats:
    total_readings: int
    total_alerts: int
    start_time: datetime
    uptime_minutes: float
    average_interval_ms: float
    recent_readings: Tuple[datetime, ...] = ()
