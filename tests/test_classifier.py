"""Unit tests for the status classifier."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from models.records import IndicatorColor, Reading
from services.classifier import (
    StatusClassifier,
    humidity_status,
    light_category,
    temperature_status,
)


def _reading(temperature: float = 22.0, humidity: float = 45.0, light: float = 0.5) -> Reading:
    return Reading(
        temperature=temperature,
        humidity=humidity,
        light_level=light,
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize(
    ("temperature", "expected"),
    [
        (-5.0, "Freezing"),
        (9.99, "Freezing"),
        (10.0, "Chilly"),
        (17.9, "Chilly"),
        (18.0, "Comfortable"),
        (23.99, "Comfortable"),
        (24.0, "Warm"),
        (29.9, "Warm"),
        (30.0, "Hot"),
        (45.0, "Hot"),
    ],
)
def test_temperature_status_boundaries(temperature: float, expected: str) -> None:
    assert temperature_status(temperature) == expected


@pytest.mark.parametrize(
    ("humidity", "expected"),
    [
        (29.9, "Dry"),
        (30.0, "Comfortable"),
        (50.0, "Humid"),
        (69.9, "Humid"),
        (70.0, "Very Humid"),
    ],
)
def test_humidity_status_boundaries(humidity: float, expected: str) -> None:
    assert humidity_status(humidity) == expected


@pytest.mark.parametrize(
    ("light", "expected"),
    [
        (0.0, "Dark"),
        (0.19, "Dark"),
        (0.2, "Dim"),
        (0.4, "Normal"),
        (0.69, "Normal"),
        (0.7, "Bright"),
        (1.0, "Bright"),
    ],
)
def test_light_category_boundaries(light: float, expected: str) -> None:
    assert light_category(light) == expected


def test_red_wins_when_either_hot_condition_holds() -> None:
    classifier = StatusClassifier()

    assert classifier.classify(_reading(temperature=33, humidity=80)).indicator_color == IndicatorColor.red
    assert classifier.classify(_reading(temperature=33, humidity=20)).indicator_color == IndicatorColor.red
    assert classifier.classify(_reading(temperature=20, humidity=76)).indicator_color == IndicatorColor.red


def test_blue_takes_priority_over_purple() -> None:
    classifier = StatusClassifier()

    derived = classifier.classify(_reading(temperature=14, humidity=45, light=0.1))

    assert derived.indicator_color == IndicatorColor.blue


def test_purple_for_dark_rooms_and_green_otherwise() -> None:
    classifier = StatusClassifier()

    assert classifier.classify(_reading(light=0.1)).indicator_color == IndicatorColor.purple
    assert classifier.classify(_reading()).indicator_color == IndicatorColor.green


def test_classify_is_idempotent() -> None:
    classifier = StatusClassifier()
    reading = _reading(temperature=26.5, humidity=55.0, light=0.3)

    first = classifier.classify(reading)
    second = classifier.classify(reading)

    assert first == second
    assert first.temperature_status == "Warm"
    assert first.humidity_status == "Humid"
    assert first.light_category == "Dim"
    assert first.alert_triggered is False
