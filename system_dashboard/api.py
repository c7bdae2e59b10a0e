"""FastAPI application serving the host metrics dashboard."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .instrumentation import ObservableRegistry
from .metrics import Sampler

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def create_app(sampler: Sampler, registry: Optional[ObservableRegistry] = None) -> FastAPI:
    app = FastAPI(
        title="System Metrics Dashboard",
        description="Live CPU, memory, and disk usage of the host.",
        version="0.1.0",
    )
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info("[%s] %d  %s", request.method, response.status_code, request.url.path)
        return response

    # Plain def endpoints run in the threadpool; sample() blocks for the CPU window.
    @app.get("/", response_class=HTMLResponse, summary="Render the metrics dashboard", tags=["dashboard"])
    def dashboard(request: Request):
        metrics = sampler.sample()
        return templates.TemplateResponse(request, "index.html", {"metrics": metrics})

    @app.get("/system", summary="Return the current metrics snapshot", tags=["system"])
    def system_metrics():
        return sampler.sample().as_dict()

    if registry is not None:

        @app.get("/metrics", summary="Prometheus exposition of the host gauges", tags=["system"])
        def prometheus_metrics():
            return Response(content=generate_latest(registry.registry), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health", summary="Service health check", tags=["system"])
    async def health():
        return {"status": "ok"}

    return app
