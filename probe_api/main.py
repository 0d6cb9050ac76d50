"""
File: main.py
Purpose: Application entrypoint for probe-api. Wires routers, logging, metrics and middleware.

Endpoints:
- GET /healthz      : liveness check
- GET /api/version  : APP_VERSION (default 1.0.0)
- GET /api/fault    : 500 when FAULT=1, otherwise ok
- GET /metrics      : Prometheus metrics

Env:
- PORT=3000
- APP_VERSION=1.0.0
- FAULT=1
- ENV=test  (no listener)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from . import __version__
from .config import Settings, get_settings
from .error_handlers import register_exception_handlers
from .instrumentation import build_instrumentation, setup_metrics
from .logging_setup import configure_logging
from .middleware import TimingMiddleware
from .routers import fault, health, metrics, version

log = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app with its own metric registry and timing middleware."""
    injected = settings is not None
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage app startup/shutdown lifecycle."""
        configure_logging(settings.LOG_LEVEL)
        log.info("Starting %s version=%s", settings.SERVICE_NAME, settings.version)
        yield
        log.info("Stopping %s", settings.SERVICE_NAME)

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=__version__,
        lifespan=lifespan,
    )

    # DuplicateNameError here is fatal: the app must not start half-instrumented
    registry, latency = build_instrumentation()
    setup_metrics(app, registry)
    app.add_middleware(TimingMiddleware, histogram=latency)
    register_exception_handlers(app)

    # Routers
    app.include_router(health.router, prefix="", tags=["system"])
    app.include_router(metrics.router, prefix="", tags=["system"])
    # routers carry their own /api prefix so scope["route"].path is the full template
    app.include_router(version.router, tags=["api"])
    app.include_router(fault.router, tags=["api"])

    if injected:
        app.dependency_overrides[get_settings] = lambda: settings
    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn unless running in test mode."""
    settings = get_settings()
    if settings.testing:
        log.info("ENV=test, listener suppressed")
        return
    configure_logging(settings.LOG_LEVEL)
    log.info("App listening on :%s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, access_log=False, log_config=None)
