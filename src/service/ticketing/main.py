"""
Ticketing Service - Main Application
Handles event management, orders, ticket issuance and gate scanning.

Run with:
    granian src.service.ticketing.main:app --interface asgi --host 0.0.0.0 --port 8100
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('[Ticketing Service] Starting up...')

    # Setup OpenTelemetry tracing
    tracing = TracingConfig(service_name=settings.OTEL_SERVICE_NAME)
    tracing.setup()
    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('[Ticketing Service] OpenTelemetry tracing configured')

    # Wire dependency injection for use cases and auth
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('[Ticketing Service] Dependency injection wired')

    if settings.AUTO_CREATE_TABLES:
        await create_db_and_tables()
        Logger.base.info('[Ticketing Service] Database tables ensured')

    Logger.base.info('[Ticketing Service] Startup complete')

    yield

    Logger.base.info('[Ticketing Service] Shutting down...')

    await dispose_engine()
    Logger.base.info('[Ticketing Service] Database engine disposed')

    # Shutdown tracing (flush remaining spans)
    tracing.shutdown()

    container.unwire()
    Logger.base.info('[Ticketing Service] Shutdown complete')


app = create_app(lifespan=lifespan)
