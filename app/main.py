from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.monitor import build_default_monitor
from settings import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    monitor = build_default_monitor(settings)
    app.state.monitor = monitor
    if settings.monitor_autostart:
        monitor.start()
    try:
        yield
    finally:
        monitor.shutdown(timeout=settings.sampling_interval + 5.0)


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Building Monitor",
        description="Environmental and HVAC monitoring with alerting and compliance checks.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app

app = create_app()
