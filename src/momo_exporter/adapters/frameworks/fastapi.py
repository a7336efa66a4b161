"""FastAPI adapter for the exporter endpoints."""

from fastapi import APIRouter, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from momo_exporter.adapters.frameworks.asgi import landing_page


def create_exporter_router(
    registry: CollectorRegistry,
    telemetry_path: str = "/metrics",
) -> APIRouter:
    """Create a FastAPI router with the metrics endpoint and landing page.

    Args:
        registry: Registry holding the MomoCollector.
        telemetry_path: Path of the metrics endpoint.

    Returns:
        APIRouter with both routes configured.
    """
    router = APIRouter()

    @router.get(telemetry_path)
    async def get_metrics() -> Response:
        """Return metrics in Prometheus text format."""
        body = await run_in_threadpool(generate_latest, registry)
        return Response(content=body, media_type=CONTENT_TYPE_LATEST)

    @router.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Return the landing page."""
        return HTMLResponse(landing_page(telemetry_path))

    return router
