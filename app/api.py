"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.schemas import (
    AlertResponse,
    MaintenanceResponse,
    SnapshotDocument,
    StatsResponse,
    ZoneResponse,
)
from services.monitor import BuildingMonitor

router = APIRouter()


def get_monitor(request: Request) -> BuildingMonitor:
    return request.app.state.monitor


@router.get(
    "/status",
    response_model=SnapshotDocument,
    summary="Latest consolidated building snapshot.",
)
async def get_status(monitor: BuildingMonitor = Depends(get_monitor)) -> SnapshotDocument:
    document = monitor.latest_document()
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No monitoring cycle has completed yet.",
        )
    return document


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Reading and alert counters for the running monitor.",
)
async def get_stats(monitor: BuildingMonitor = Depends(get_monitor)) -> StatsResponse:
    return StatsResponse.from_stats(monitor.get_stats())


@router.get(
    "/alerts",
    response_model=List[AlertResponse],
    summary="Currently active alerts, oldest first.",
)
async def get_alerts(monitor: BuildingMonitor = Depends(get_monitor)) -> List[AlertResponse]:
    return [AlertResponse.from_alert(alert) for alert in monitor.get_active_alerts()]


@router.post(
    "/alerts/{alert_id}/acknowledge",
    response_model=AlertResponse,
    summary="Mark an alert as no longer active.",
)
async def acknowledge_alert(
    alert_id: str,
    monitor: BuildingMonitor = Depends(get_monitor),
) -> AlertResponse:
    try:
        alert = monitor.acknowledge_alert(alert_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Alert {alert_id!r} not found.",
        ) from exc
    return AlertResponse.from_alert(alert)


@router.get(
    "/zone",
    response_model=ZoneResponse,
    summary="The building zone this monitor serves.",
)
async def get_zone(monitor: BuildingMonitor = Depends(get_monitor)) -> ZoneResponse:
    return ZoneResponse.from_zone(monitor.aggregator.zone)


@router.get(
    "/maintenance",
    response_model=MaintenanceResponse,
    summary="Plant components due for maintenance.",
)
async def get_maintenance(monitor: BuildingMonitor = Depends(get_monitor)) -> MaintenanceResponse:
    advisor = monitor.maintenance
    if advisor is None:
        return MaintenanceResponse(threshold_hours=0, due_components=[])
    return MaintenanceResponse(
        threshold_hours=advisor.threshold_hours,
        due_components=advisor.due_components(),
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck(monitor: BuildingMonitor = Depends(get_monitor)) -> dict[str, str]:
    return {"status": "ok", "monitor": "running" if monitor.running else "stopped"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
