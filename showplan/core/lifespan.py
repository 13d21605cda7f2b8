"""Application lifespan: logging and tracing on startup, engine and tracer shutdown."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from showplan.core.config import get_settings
from showplan.infrastructure.persistence.database import dispose_engine
from showplan.shared.logging import setup_logging
from showplan.shared.telemetry import TelemetryConfig, get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


def _start_telemetry(app: FastAPI) -> None:
    settings = get_settings()
    if not settings.telemetry_enabled:
        return
    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        enabled=True,
        environment=settings.telemetry_environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    set_telemetry(telemetry)
    telemetry.instrument_fastapi(app)
    telemetry.instrument_logging()


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging()
    settings = get_settings()
    _start_telemetry(app)
    if not settings.database_url:
        logger.warning("DATABASE_URL is not set; schedule endpoints will return 503")
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield
    await dispose_engine()
    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
