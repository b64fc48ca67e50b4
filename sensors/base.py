"""Interfaces for the collaborators a monitoring cycle pulls from and commands."""

from __future__ import annotations

from typing import Protocol

from models.records import EnergyMetrics, EquipmentStatus, IndicatorColor, Snapshot


class EnvironmentReader(Protocol):
    """Source of raw environmental samples.

    Implementations raise ``TransientReadFailure`` when a value cannot be
    produced this cycle.
    """

    def read_temperature(self) -> float:
        ...

    def read_humidity(self) -> float:
        ...

    def read_light_level(self) -> float:
        ...


class EquipmentController(Protocol):
    """HVAC plant serving the monitored zone."""

    def get_status(self) -> EquipmentStatus:
        ...

    def set_target_temperature(self, target: float) -> None:
        ...

    def optimize_for_occupancy(self, people_count: int) -> None:
        ...

    def get_energy_metrics(self) -> EnergyMetrics:
        ...


class OccupancySensor(Protocol):
    def get_people_count(self) -> int:
        ...


class IndicatorController(Protocol):
    def set_color(self, color: IndicatorColor) -> None:
        ...

    def current_color(self) -> IndicatorColor | None:
        ...


class SnapshotSink(Protocol):
    """Consumer of finished snapshots (persistence, display)."""

    def consume(self, snapshot: Snapshot) -> None:
        ...
