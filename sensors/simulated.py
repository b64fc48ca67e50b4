"""Simulated collaborators used when no sensor gateway is configured."""

from __future__ import annotations

import logging
import math
import random
from datetime import datetime
from typing import Callable, Optional

from models.errors import TransientReadFailure
from models.records import EnergyMetrics, EquipmentStatus, IndicatorColor

logger = logging.getLogger(__name__)

MIN_TEMPERATURE = 15.0
MAX_TEMPERATURE = 35.0
MIN_HUMIDITY = 20.0
MAX_HUMIDITY = 80.0

# kg CO2 and GBP per kWh.
CARBON_PER_KWH = 0.233
COST_PER_KWH = 0.34


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class SimulatedReader:
    """Random-walk environment with an occasional failed read."""

    def __init__(
        self,
        failure_rate: float = 0.05,
        rng: Optional[random.Random] = None,
        start_temperature: float = 22.0,
        start_humidity: float = 45.0,
    ) -> None:
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()
        self._temperature = start_temperature
        self._humidity = start_humidity
        self._cycle = 0

    def read_temperature(self) -> float:
        if self._rng.random() < self.failure_rate:
            raise TransientReadFailure("temperature", "sensor did not respond")
        change = (self._rng.random() - 0.5) * 1.5
        self._temperature = _clamp(self._temperature + change, MIN_TEMPERATURE, MAX_TEMPERATURE)
        return round(self._temperature, 1)

    def read_humidity(self) -> float:
        change = (self._rng.random() - 0.5) * 10.0
        self._humidity = _clamp(self._humidity + change, MIN_HUMIDITY, MAX_HUMIDITY)
        if self._rng.random() < self.failure_rate / 2:
            raise TransientReadFailure("humidity", "checksum mismatch")
        return round(self._humidity, 1)

    def read_light_level(self) -> float:
        self._cycle += 1
        time_of_day = math.sin(self._cycle * 0.1) * 0.5 + 0.5
        noise = (self._rng.random() - 0.5) * 0.2
        return round(_clamp(time_of_day + noise, 0.0, 1.0), 2)


class SimulatedEquipment:
    """HVAC plant that reports random status and accumulates energy use."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._energy_used = 0.0
        self.target_temperature: Optional[float] = None
        self.fan_speed: Optional[int] = None

    def get_status(self) -> EquipmentStatus:
        return EquipmentStatus(
            heating=self._rng.random() > 0.7,
            cooling=self._rng.random() > 0.6,
            ventilating=True,
            fan_speed=self._rng.randint(30, 79),
            energy_consumption=round(self._rng.random() * 5.0, 2),
        )

    def set_target_temperature(self, target: float) -> None:
        self.target_temperature = target
        logger.info("HVAC set point adjusted", extra={"target_temperature": target})

    def optimize_for_occupancy(self, people_count: int) -> None:
        self.fan_speed = 80 if people_count > 10 else 50
        logger.info(
            "HVAC optimized for occupancy (fan %s%%)",
            self.fan_speed,
            extra={"occupancy": people_count},
        )

    def get_energy_metrics(self) -> EnergyMetrics:
        self._energy_used += 0.1
        return EnergyMetrics(
            total_used=round(self._energy_used, 1),
            cost=round(self._energy_used * COST_PER_KWH, 2),
            carbon_footprint=round(self._energy_used * CARBON_PER_KWH, 2),
            efficiency_score=round(85 + self._rng.random() * 15, 1),
        )


class SimulatedOccupancySensor:
    """People count following a working-day profile."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._rng = rng or random.Random()
        self._clock = clock

    @staticmethod
    def baseline_for_hour(hour: int) -> int:
        if 9 <= hour <= 17:
            return 15
        if 7 <= hour < 9:
            return 5
        if 17 < hour <= 20:
            return 3
        return 1

    def get_people_count(self) -> int:
        baseline = self.baseline_for_hour(self._clock().hour)
        return max(0, baseline + self._rng.randint(-3, 3))


class SimulatedIndicator:
    def __init__(self) -> None:
        self._color: Optional[IndicatorColor] = None

    def set_color(self, color: IndicatorColor) -> None:
        self._color = color
        logger.info("Indicator changed", extra={"color": color})

    def current_color(self) -> Optional[IndicatorColor]:
        return self._color
