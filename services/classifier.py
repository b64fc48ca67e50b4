"""Mapping of raw readings onto categorical statuses."""

from __future__ import annotations

from models.records import DerivedReading, IndicatorColor, Reading


def temperature_status(temperature: float) -> str:
    if temperature < 10:
        return "Freezing"
    if temperature < 18:
        return "Chilly"
    if temperature < 24:
        return "Comfortable"
    if temperature < 30:
        return "Warm"
    return "Hot"


def humidity_status(humidity: float) -> str:
    if humidity < 30:
        return "Dry"
    if humidity < 50:
        return "Comfortable"
    if humidity < 70:
        return "Humid"
    return "Very Humid"


def light_category(light_level: float) -> str:
    if light_level < 0.2:
        return "Dark"
    if light_level < 0.4:
        return "Dim"
    if light_level < 0.7:
        return "Normal"
    return "Bright"


def indicator_color(reading: Reading) -> IndicatorColor:
    """First matching rule wins."""
    if reading.temperature > 32 or reading.humidity > 75:
        return IndicatorColor.red
    if reading.temperature < 15 or reading.humidity < 25:
        return IndicatorColor.blue
    if reading.light_level < 0.2:
        return IndicatorColor.purple
    return IndicatorColor.green


class StatusClassifier:
    """Pure classifier that can be unit tested in isolation."""

    def classify(self, reading: Reading, alert_triggered: bool = False) -> DerivedReading:
        return DerivedReading(
            reading=reading,
            temperature_status=temperature_status(reading.temperature),
            humidity_status=humidity_status(reading.humidity),
            light_category=light_category(reading.light_level),
            indicator_color=indicator_color(reading),
            alert_triggered=alert_triggered,
        )
