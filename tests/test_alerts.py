"""Unit tests for the alert engine."""

from __future__ import annotations

import pytest

from models.records import Reading, Severity
from services.alerts import AlertEngine
from services.stats import StatsTracker


def _reading(clock, temperature: float = 22.0, humidity: float = 45.0, light: float = 0.5) -> Reading:
    return Reading(temperature=temperature, humidity=humidity, light_level=light, timestamp=clock())


def test_high_temperature_fires_single_critical_alert(clock) -> None:
    stats = StatsTracker(clock=clock)
    engine = AlertEngine(stats=stats, clock=clock)

    fired = engine.evaluate(_reading(clock, temperature=36))

    alerts = engine.get_active_alerts()
    assert fired is True
    assert len(alerts) == 1
    assert alerts[0].severity == Severity.critical
    assert "high temperature" in alerts[0].message
    assert alerts[0].active is True
    assert alerts[0].triggered_at == clock.now
    assert stats.get_stats().total_alerts == 1


def test_temperature_and_humidity_rules_are_independent(clock) -> None:
    engine = AlertEngine(clock=clock)

    engine.evaluate(_reading(clock, temperature=36, humidity=90))

    messages = [alert.message for alert in engine.get_active_alerts()]
    assert len(messages) == 2
    assert "high temperature" in messages[0]
    assert "condensation risk" in messages[1]
    assert not any("temperature rising" in message for message in messages)


@pytest.mark.parametrize(
    ("temperature", "severity", "fragment"),
    [
        (31.0, Severity.warning, "temperature rising"),
        (4.0, Severity.critical, "freezing temperature"),
    ],
)
def test_temperature_rules(clock, temperature: float, severity: Severity, fragment: str) -> None:
    engine = AlertEngine(clock=clock)

    engine.evaluate(_reading(clock, temperature=temperature))

    (alert,) = engine.get_active_alerts()
    assert alert.severity == severity
    assert fragment in alert.message


def test_temperature_at_critical_threshold_is_only_a_warning(clock) -> None:
    engine = AlertEngine(clock=clock)

    engine.evaluate(_reading(clock, temperature=35.0))

    (alert,) = engine.get_active_alerts()
    assert alert.severity == Severity.warning
    assert "temperature rising" in alert.message


@pytest.mark.parametrize(
    ("temperature", "humidity", "light"),
    [
        (30.0, 45.0, 0.5),
        (5.0, 45.0, 0.5),
        (22.0, 85.0, 0.5),
        (22.0, 20.0, 0.5),
        (22.0, 45.0, 0.1),
    ],
)
def test_thresholds_are_exclusive(
    clock, temperature: float, humidity: float, light: float
) -> None:
    engine = AlertEngine(clock=clock)

    fired = engine.evaluate(
        _reading(clock, temperature=temperature, humidity=humidity, light=light)
    )

    assert fired is False
    assert engine.get_active_alerts() == []


def test_dry_air_and_darkness_raise_info_alerts(clock) -> None:
    engine = AlertEngine(clock=clock)

    engine.evaluate(_reading(clock, humidity=15, light=0.05))

    alerts = engine.get_active_alerts()
    assert [alert.severity for alert in alerts] == [Severity.info, Severity.info]
    assert "dry conditions" in alerts[0].message
    assert "night mode" in alerts[1].message


def test_comfortable_reading_fires_nothing(clock) -> None:
    stats = StatsTracker(clock=clock)
    engine = AlertEngine(stats=stats, clock=clock)

    assert engine.evaluate(_reading(clock)) is False
    assert engine.get_active_alerts() == []
    assert stats.get_stats().total_alerts == 0


def test_alerts_are_returned_in_insertion_order(clock) -> None:
    engine = AlertEngine(clock=clock)

    engine.evaluate(_reading(clock, temperature=31))
    clock.advance(seconds=3)
    engine.evaluate(_reading(clock, temperature=36))

    alerts = engine.get_active_alerts()
    assert [alert.severity for alert in alerts] == [Severity.warning, Severity.critical]
    assert len({alert.id for alert in alerts}) == 2


def test_registry_evicts_oldest_when_full(clock) -> None:
    stats = StatsTracker(clock=clock)
    engine = AlertEngine(stats=stats, capacity=2, clock=clock)

    engine.evaluate(_reading(clock, temperature=31))
    engine.evaluate(_reading(clock, temperature=36))
    engine.evaluate(_reading(clock, temperature=4))

    messages = [alert.message for alert in engine.get_alerts()]
    assert len(messages) == 2
    assert "high temperature" in messages[0]
    assert "freezing temperature" in messages[1]
    assert stats.get_stats().total_alerts == 3


def test_acknowledge_deactivates_alert(clock) -> None:
    engine = AlertEngine(clock=clock)
    engine.evaluate(_reading(clock, temperature=36))
    (alert,) = engine.get_active_alerts()

    acknowledged = engine.acknowledge(alert.id)

    assert acknowledged.active is False
    assert engine.get_active_alerts() == []
    assert len(engine.get_alerts()) == 1


def test_acknowledge_unknown_alert_raises(clock) -> None:
    engine = AlertEngine(clock=clock)

    with pytest.raises(KeyError):
        engine.acknowledge("missing")


def test_alerts_expire_after_ttl(clock) -> None:
    engine = AlertEngine(ttl_seconds=60, clock=clock)
    engine.evaluate(_reading(clock, temperature=36))

    clock.advance(seconds=59)
    assert len(engine.get_active_alerts()) == 1

    clock.advance(seconds=1)
    assert engine.get_active_alerts() == []


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        AlertEngine(capacity=0)
