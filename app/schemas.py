"""Pydantic schemas for the HTTP API layer and JSON export."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from models.records import (
    Alert,
    BuildingZone,
    ComplianceLevel,
    IndicatorColor,
    Severity,
    Snapshot,
    Stats,
    ZoneType,
)


class EnvironmentDocument(BaseModel):
    temperature: float
    humidity: float
    light_level: float = Field(..., ge=0.0, le=1.0)
    temperature_status: str
    humidity_status: str
    light_category: str
    indicator_color: IndicatorColor
    alert_triggered: bool
    timestamp: datetime


class EquipmentDocument(BaseModel):
    heating: bool
    cooling: bool
    ventilating: bool
    fan_speed: int
    energy_consumption: float


class EnergyDocument(BaseModel):
    total_used: float
    cost: float
    carbon_footprint: float
    efficiency_score: float


class ComplianceFindingDocument(BaseModel):
    regulation: str
    requirement: str
    level: ComplianceLevel
    detected_at: datetime


class SnapshotDocument(BaseModel):
    """Structured record of one monitoring cycle."""

    zone_id: str
    timestamp: datetime
    environment: EnvironmentDocument
    equipment: EquipmentDocument
    occupancy: int = Field(..., ge=0)
    energy: EnergyDocument
    findings: List[ComplianceFindingDocument] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "SnapshotDocument":
        return cls.model_validate(snapshot.to_document())


class StatsResponse(BaseModel):
    total_readings: int = Field(..., ge=0)
    total_alerts: int = Field(..., ge=0)
    start_time: datetime
    uptime_minutes: float
    average_interval_ms: float

    @classmethod
    def from_stats(cls, stats: Stats) -> "StatsResponse":
        return cls(
            total_readings=stats.total_readings,
            total_alerts=stats.total_alerts,
            start_time=stats.start_time,
            uptime_minutes=stats.uptime_minutes,
            average_interval_ms=stats.average_interval_ms,
        )


class AlertResponse(BaseModel):
    id: str
    message: str
    severity: Severity
    triggered_at: datetime
    active: bool

    @classmethod
    def from_alert(cls, alert: Alert) -> "AlertResponse":
        return cls(
            id=alert.id,
            message=alert.message,
            severity=alert.severity,
            triggered_at=alert.triggered_at,
            active=alert.active,
        )


class ZoneResponse(BaseModel):
    zone_id: str
    zone_name: str
    zone_type: ZoneType
    target_temperature: float
    target_humidity: float

    @classmethod
    def from_zone(cls, zone: BuildingZone) -> "ZoneResponse":
        return cls(
            zone_id=zone.zone_id,
            zone_name=zone.zone_name,
            zone_type=zone.zone_type,
            target_temperature=zone.target_temperature,
            target_humidity=zone.target_humidity,
        )


class MaintenanceResponse(BaseModel):
    threshold_hours: int
    due_components: List[str] = Field(default_factory=list)
