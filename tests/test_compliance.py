from __future__ import annotations

from models.records import ComplianceLevel, EquipmentStatus, Reading
from services.compliance import ComplianceEngine


def _equipment(cooling: bool = False, energy: float = 1.0) -> EquipmentStatus:
    return EquipmentStatus(
        heating=False, cooling=cooling, ventilating=True, fan_speed=40, energy_consumption=energy
    )


def _reading(clock, temperature: float = 22.0, humidity: float = 45.0) -> Reading:
    return Reading(temperature=temperature, humidity=humidity, light_level=0.5, timestamp=clock())


def test_cold_workplace_is_a_single_violation(clock) -> None:
    engine = ComplianceEngine(clock=clock)

    for equipment in (_equipment(), _equipment(cooling=True)):
        findings = engine.check(_reading(clock, temperature=15.0), equipment)

        assert len(findings) == 1
        assert findings[0].level == ComplianceLevel.violation
        assert findings[0].requirement == "Minimum temperature 16°C"
        assert findings[0].detected_at == clock.now


def test_sixteen_degrees_is_compliant(clock) -> None:
    engine = ComplianceEngine(clock=clock)

    assert engine.check(_reading(clock, temperature=16.0), _equipment()) == []


def test_cooling_warning_depends_on_equipment(clock) -> None:
    engine = ComplianceEngine(clock=clock)
    reading = _reading(clock, temperature=31.0)

    without_cooling = engine.check(reading, _equipment(cooling=False))
    with_cooling = engine.check(reading, _equipment(cooling=True))

    assert [finding.regulation for finding in without_cooling] == ["HSE Guidelines"]
    assert without_cooling[0].level == ComplianceLevel.warning
    assert with_cooling == []


def test_all_rules_fire_in_declaration_order(clock) -> None:
    engine = ComplianceEngine(clock=clock)

    hot = engine.check(_reading(clock, temperature=31.0, humidity=75.0), _equipment(energy=4.5))
    cold = engine.check(_reading(clock, temperature=12.0, humidity=75.0), _equipment(energy=4.5))

    assert [finding.regulation for finding in hot] == [
        "HSE Guidelines",
        "Building Standards",
        "Energy Efficiency",
    ]
    assert [finding.regulation for finding in cold] == [
        "UK Workplace Regulations",
        "Building Standards",
        "Energy Efficiency",
    ]


def test_energy_limit_is_exclusive(clock) -> None:
    engine = ComplianceEngine(clock=clock)

    assert engine.check(_reading(clock), _equipment(energy=4.0)) == []
