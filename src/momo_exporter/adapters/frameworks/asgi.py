"""ASGI adapter serving the exporter endpoints.

Framework-agnostic: runs on any ASGI server (uvicorn, hypercorn, daphne)
without requiring FastAPI.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

logger = logging.getLogger(__name__)

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

LANDING_PAGE = """<html>
<head><title>Momo Exporter</title></head>
<body>
<h1>WebRTC Native Client Momo Exporter</h1>
<p><a href="{path}">Metrics</a></p>
</body>
</html>
"""


def landing_page(telemetry_path: str) -> str:
    """Render the index page linking to the metrics path."""
    return LANDING_PAGE.format(path=telemetry_path)


async def _send_response(send: Send, status: int, content_type: str, body: str | bytes) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body (str is encoded as UTF-8).
    """
    payload = body.encode() if isinstance(body, str) else body
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": payload})


async def _handle_endpoint(
    send: Send,
    endpoint_func: Callable[[], Coroutine[Any, Any, bytes]],
    content_type: str,
    log_message: str,
) -> None:
    """Execute an endpoint function with error handling and send response.

    Args:
        send: ASGI send callable for writing response.
        endpoint_func: Async function that returns response body.
        content_type: Content-Type header for success response.
        log_message: Message to log on error.
    """
    try:
        body = await endpoint_func()
        await _send_response(send, 200, content_type, body)
    except Exception:
        logger.exception(log_message)
        error_body = json.dumps({"error": "Internal Server Error"})
        await _send_response(send, 500, "application/json", error_body)


def create_asgi_app(
    registry: CollectorRegistry,
    telemetry_path: str = "/metrics",
) -> ASGIApp:
    """Create an ASGI app exposing ``registry`` and a landing page.

    Collection runs in a worker thread, since each collection performs a
    blocking scrape of the Momo endpoint.

    Args:
        registry: Registry holding the MomoCollector.
        telemetry_path: Path of the metrics endpoint.

    Returns:
        ASGI application callable.
    """

    async def render() -> bytes:
        return await asyncio.to_thread(generate_latest, registry)

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        path = scope["path"]

        if path == telemetry_path:
            await _handle_endpoint(
                send, render, CONTENT_TYPE_LATEST, "Error rendering metrics endpoint"
            )
        elif path == "/":
            await _send_response(
                send, 200, "text/html; charset=utf-8", landing_page(telemetry_path)
            )
        else:
            await _send_response(send, 404, "text/plain", "Not Found")

    return app
