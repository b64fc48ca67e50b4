from __future__ import annotations

import signal
from dataclasses import dataclass, replace
from threading import Event
from typing import Any, Optional

import typer

from app.schemas import SnapshotDocument, StatsResponse
from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_alerts, render_snapshot, render_stats
from logging_config import configure_logging
from models.records import Snapshot
from services.monitor import build_default_monitor
from settings import get_settings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Run the building monitor or query a running instance.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Monitor API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each API request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("run")
def run_command(
    cycles: Optional[int] = typer.Option(
        None,
        "--cycles",
        "-n",
        min=1,
        help="Stop after this many cycles (runs until Ctrl+C by default).",
    ),
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        min=0.0,
        help="Seconds between cycles (defaults to SAMPLING_INTERVAL_SECONDS).",
    ),
) -> None:
    """Run the monitoring loop in the foreground."""
    configure_logging()
    settings = get_settings()
    if interval is not None:
        settings = replace(settings, sampling_interval=interval)

    monitor = build_default_monitor(settings)
    stop = Event()

    def _cancel(_signum: int, _frame: Any) -> None:
        typer.echo("Stopping after the current cycle ...")
        stop.set()

    def _show(snapshot: Snapshot) -> None:
        typer.echo()
        render_snapshot(SnapshotDocument.from_snapshot(snapshot).model_dump(mode="json"))

    previous_handler = signal.signal(signal.SIGINT, _cancel)
    typer.echo(f"Monitoring {settings.zone_id} every {settings.sampling_interval}s ...")
    try:
        monitor.run(stop_event=stop, max_cycles=cycles, on_snapshot=_show)
    finally:
        signal.signal(signal.SIGINT, previous_handler)
        monitor.shutdown()

    typer.echo()
    render_stats(StatsResponse.from_stats(monitor.get_stats()).model_dump(mode="json"))


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on."),
) -> None:
    """Serve the HTTP API with the monitoring loop running in the background."""
    import uvicorn

    uvicorn.run("app.main:app", host=host, port=port)


@app.command("status")
def status_command(ctx: typer.Context) -> None:
    """Show the latest snapshot from a running monitor."""
    state = _get_state(ctx)
    render_snapshot(state.client.get_status())


@app.command("stats")
def stats_command(ctx: typer.Context) -> None:
    """Show reading and alert counters from a running monitor."""
    state = _get_state(ctx)
    render_stats(state.client.get_stats())


@app.command("alerts")
def alerts_command(ctx: typer.Context) -> None:
    """List active alerts."""
    state = _get_state(ctx)
    render_alerts(state.client.get_alerts())


@app.command("ack")
def acknowledge_command(
    ctx: typer.Context,
    alert_id: str = typer.Argument(..., help="Identifier shown by the alerts command."),
) -> None:
    """Acknowledge an alert so it is no longer active."""
    state = _get_state(ctx)
    alert = state.client.acknowledge_alert(alert_id)
    typer.secho(f"Acknowledged {alert.get('id')}: {alert.get('message')}", fg=typer.colors.GREEN)
