from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request

from rollsum.api.routes_metrics import metric_method_guard, router as metrics_router
from rollsum.api.schemas import HealthResponse
from rollsum.config.logging import configure_logging
from rollsum.config.settings import settings
from rollsum.services.accumulator import Accumulator
from rollsum.services.sweeper import BucketSweeper

logger = structlog.get_logger(__name__)


def create_app(
    accumulator: Accumulator | None = None,
    sweep_interval_s: float | None = None,
) -> FastAPI:
    """
    Build the service around one Accumulator.

    Tests pass their own Accumulator (usually on a ManualClock) so every
    app instance has independent state.
    """
    configure_logging(settings.log_level, settings.log_json)
    acc = accumulator or Accumulator()
    interval = settings.sweep_interval_s if sweep_interval_s is None else sweep_interval_s

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper = BucketSweeper(acc, interval) if interval > 0 else None
        app.state.sweeper = sweeper
        if sweeper is not None:
            sweeper.start()
        logger.info("app_started", sweep_interval_s=interval)
        try:
            yield
        finally:
            if sweeper is not None:
                sweeper.stop()

    app = FastAPI(title="rollsum", lifespan=lifespan)
    app.state.accumulator = acc
    app.state.sweeper = None
    app.middleware("http")(metric_method_guard)
    app.include_router(metrics_router)

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request) -> HealthResponse:
        buckets = request.app.state.accumulator.bucket_count()
        return HealthResponse(status="healthy", buckets=buckets)

    return app


app = create_app()
