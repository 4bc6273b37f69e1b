"""FastAPI application entry point for the dispute resolution engine."""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lostfound_disputes.api.dependencies import disputes as dispute_dependencies
from lostfound_disputes.api.middleware import LoggingMiddleware
from lostfound_disputes.api.routes import disputes_router
from lostfound_disputes.bootstrap.disputes import get_dispute_service, get_sla_monitor
from lostfound_disputes.bootstrap.logging import configure_structlog


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Wire dependencies and run the SLA monitor for the app's lifetime."""
    configure_structlog(os.environ.get("ENVIRONMENT", "development"))
    if not dispute_dependencies.is_dispute_service_set():
        dispute_dependencies.set_dispute_service(get_dispute_service())
    service = dispute_dependencies.get_dispute_service()
    monitor = None
    if os.environ.get("DISPUTE_SLA_MONITOR_ENABLED", "true").lower() == "true":
        monitor = get_sla_monitor(service)
        await monitor.start_monitoring()
    try:
        yield
    finally:
        if monitor is not None:
            await monitor.stop_monitoring()


app = FastAPI(
    title="Lost & Found Dispute Resolution API",
    description="Multi-enterprise ownership dispute resolution",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
app.include_router(disputes_router)
