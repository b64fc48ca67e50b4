from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import pytest

from models.records import EnergyMetrics, EquipmentStatus, IndicatorColor
from services.aggregator import BuildingAggregator
from services.alerts import AlertEngine
from services.stats import StatsTracker


class FixedClock:
    """Deterministic clock that only moves when told to."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class StubReader:
    def __init__(
        self, temperature: float = 22.0, humidity: float = 45.0, light: float = 0.5
    ) -> None:
        self.temperature = temperature
        self.humidity = humidity
        self.light = light
        self.failures: List[Exception] = []

    def read_temperature(self) -> float:
        if self.failures:
            raise self.failures.pop(0)
        return self.temperature

    def read_humidity(self) -> float:
        return self.humidity

    def read_light_level(self) -> float:
        return self.light


class StubEquipment:
    def __init__(self, cooling: bool = False, energy_consumption: float = 1.0) -> None:
        self.status: Optional[EquipmentStatus] = EquipmentStatus(
            heating=False,
            cooling=cooling,
            ventilating=True,
            fan_speed=50,
            energy_consumption=energy_consumption,
        )
        self.metrics = EnergyMetrics(
            total_used=1.5, cost=0.51, carbon_footprint=0.35, efficiency_score=92.0
        )
        self.commands: List[tuple[str, object]] = []
        self.command_error: Optional[Exception] = None

    def get_status(self) -> Optional[EquipmentStatus]:
        return self.status

    def set_target_temperature(self, target: float) -> None:
        if self.command_error is not None:
            raise self.command_error
        self.commands.append(("set_target_temperature", target))

    def optimize_for_occupancy(self, people_count: int) -> None:
        if self.command_error is not None:
            raise self.command_error
        self.commands.append(("optimize_for_occupancy", people_count))

    def get_energy_metrics(self) -> EnergyMetrics:
        return self.metrics


class StubOccupancy:
    def __init__(self, count: int = 0) -> None:
        self.count = count

    def get_people_count(self) -> int:
        return self.count


class StubIndicator:
    def __init__(self) -> None:
        self.colors: List[IndicatorColor] = []

    def set_color(self, color: IndicatorColor) -> None:
        self.colors.append(color)

    def current_color(self) -> Optional[IndicatorColor]:
        return self.colors[-1] if self.colors else None


class RecordingSink:
    def __init__(self) -> None:
        self.snapshots: list = []

    def consume(self, snapshot) -> None:
        self.snapshots.append(snapshot)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def reader() -> StubReader:
    return StubReader()


@pytest.fixture()
def equipment() -> StubEquipment:
    return StubEquipment()


@pytest.fixture()
def occupancy() -> StubOccupancy:
    return StubOccupancy()


@pytest.fixture()
def indicator() -> StubIndicator:
    return StubIndicator()


@pytest.fixture()
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def make_aggregator(
    reader: StubReader,
    equipment: StubEquipment,
    occupancy: StubOccupancy,
    indicator: StubIndicator,
    clock: FixedClock,
) -> Callable[..., BuildingAggregator]:
    def factory(**overrides) -> BuildingAggregator:
        stats = overrides.pop("stats", None) or StatsTracker(clock=clock)
        alerts = overrides.pop("alerts", None) or AlertEngine(stats=stats, clock=clock)
        options = dict(
            reader=reader,
            equipment=equipment,
            occupancy=occupancy,
            alerts=alerts,
            stats=stats,
            indicator=indicator,
            clock=clock,
        )
        options.update(overrides)
        return BuildingAggregator(**options)

    return factory
