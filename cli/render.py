from __future__ import annotations

from typing import Any, Dict, Iterable, List

import typer

_LEVEL_COLORS = {
    "Critical": typer.colors.RED,
    "Violation": typer.colors.RED,
    "Warning": typer.colors.YELLOW,
    "Info": typer.colors.BLUE,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _on_off(value: Any) -> str:
    return "ON" if value else "OFF"


def render_snapshot(payload: Dict[str, Any]) -> None:
    environment = payload.get("environment") or {}
    equipment = payload.get("equipment") or {}
    energy = payload.get("energy") or {}

    echo_heading(f"Building Status ({payload.get('zone_id')})")
    echo_key_values([("timestamp", payload.get("timestamp"))])

    typer.echo()
    echo_heading("Environment")
    echo_key_values(
        [
            (
                "temperature",
                f"{environment.get('temperature')}°C - {environment.get('temperature_status')}",
            ),
            (
                "humidity",
                f"{environment.get('humidity')}% - {environment.get('humidity_status')}",
            ),
            ("light", f"{environment.get('light_level')} - {environment.get('light_category')}"),
            ("indicator", environment.get("indicator_color")),
        ]
    )

    typer.echo()
    echo_heading("HVAC")
    echo_key_values(
        [
            ("heating", _on_off(equipment.get("heating"))),
            ("cooling", _on_off(equipment.get("cooling"))),
            ("ventilation", _on_off(equipment.get("ventilating"))),
            ("fan_speed", f"{equipment.get('fan_speed')}%"),
            ("energy_use", f"{equipment.get('energy_consumption')} kWh"),
        ]
    )

    typer.echo()
    echo_heading("Occupancy & Energy")
    echo_key_values(
        [
            ("occupancy", payload.get("occupancy")),
            ("total_energy", f"{energy.get('total_used')} kWh"),
            ("energy_cost", f"£{energy.get('cost')}"),
            ("carbon_footprint", f"{energy.get('carbon_footprint')} kg CO2"),
            ("efficiency", f"{energy.get('efficiency_score')}%"),
        ]
    )

    findings = payload.get("findings") or []
    typer.echo()
    echo_heading("Compliance")
    if findings:
        for finding in findings:
            level = finding.get("level")
            typer.secho(
                f"  - [{level}] {finding.get('regulation')}: {finding.get('requirement')}",
                fg=_LEVEL_COLORS.get(level),
            )
    else:
        typer.secho("All regulations met.", fg=typer.colors.GREEN)


def render_stats(payload: Dict[str, Any]) -> None:
    echo_heading("Monitor Statistics")
    echo_key_values(
        [
            ("total_readings", payload.get("total_readings")),
            ("total_alerts", payload.get("total_alerts")),
            ("uptime_minutes", round(payload.get("uptime_minutes") or 0.0, 2)),
            ("average_interval_ms", round(payload.get("average_interval_ms") or 0.0, 1)),
        ]
    )


def render_alerts(alerts: List[Dict[str, Any]]) -> None:
    echo_heading("Active Alerts")
    if not alerts:
        typer.echo("No active alerts.")
        return
    for alert in alerts:
        severity = alert.get("severity")
        typer.secho(
            f"  - {alert.get('id')} [{severity}] {alert.get('message')} at {alert.get('triggered_at')}",
            fg=_LEVEL_COLORS.get(severity),
        )
