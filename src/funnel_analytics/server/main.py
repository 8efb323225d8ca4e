import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator

from funnel_analytics.config import Settings, load_settings
from funnel_analytics.server.routers import (
    ab_test,
    admin,
    events,
    funnel,
    overview,
    trends,
)
from funnel_analytics.store import EventStore


# -------------------------
# Logging configuration
# -------------------------
def configure_logging(settings: Settings) -> None:
    log_level = getattr(logging, settings.log_level, logging.INFO)

    logging.basicConfig(level=log_level, stream=sys.stdout)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if settings.log_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Bind common fields
    structlog.contextvars.bind_contextvars(service=settings.service_name)


log = structlog.get_logger()


# -------------------------
# App & instrumentation
# -------------------------
def create_app(
    settings: Optional[Settings] = None, store: Optional[EventStore] = None
) -> FastAPI:
    """Build the API app. `store` defaults to one reading `settings.events_path`."""
    settings = settings or load_settings()
    store = store or EventStore(settings.events_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("service.startup", events_path=str(store.path))
        try:
            yield
        finally:
            log.info("service.shutdown")

    app = FastAPI(title=settings.service_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    # API Routers
    app.include_router(events.router)
    app.include_router(funnel.router)
    app.include_router(ab_test.router)
    app.include_router(trends.router)
    app.include_router(overview.router)
    app.include_router(admin.router)

    # Prometheus: exposes /metrics by default, one registry per app
    Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app)

    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok"}

    return app


_settings = load_settings()
configure_logging(_settings)
app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "funnel_analytics.server.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=False,
    )
