"""HTTP server exposing scans as a Server-Sent-Events stream and as JSON.

Endpoints:
- ``GET /api/scan``: live progress events followed by a ``complete`` or
  ``error`` event
- ``GET /api/scan-sync``: one JSON document once the scan has finished

Every request builds its own orchestrator, so concurrent scans share no
state. Responses carry CORS headers and, when configured, a static
directory is served at ``/``.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from typing import Final

from aiohttp import web

from safari_scanner.app.payloads import (
    error_payload,
    progress_payload,
    results_payload,
    sse_message,
)
from safari_scanner.config.models import ScannerConfig
from safari_scanner.core.data.filesystem import SizeCalculator
from safari_scanner.core.exceptions import ScanError
from safari_scanner.core.orchestrator import ScanOrchestrator
from safari_scanner.types import ProgressEvent

__all__ = [
    "CONFIG_KEY",
    "ORCHESTRATOR_FACTORY_KEY",
    "create_app",
    "default_orchestrator_factory",
    "run_server",
]

logger = logging.getLogger(__name__)

type OrchestratorFactory = Callable[[ScannerConfig, float], ScanOrchestrator]
type Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

SSE_HEADERS: Final[dict[str, str]] = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}
CORS_ALLOW_METHODS: Final[str] = "GET, OPTIONS"
CORS_ALLOW_HEADERS: Final[str] = "Content-Type"

ENDPOINTS: Final[tuple[tuple[str, str], ...]] = (
    ("GET /api/scan", "Real-time scan (SSE)"),
    ("GET /api/scan-sync", "One-time scan (JSON)"),
)


def default_orchestrator_factory(config: ScannerConfig, category_delay: float) -> ScanOrchestrator:
    """Build a fresh orchestrator for one request."""
    return ScanOrchestrator(
        config.scan_targets(),
        calculator=SizeCalculator(record_files=config.scan.record_files),
        category_delay=category_delay,
    )


CONFIG_KEY: Final[web.AppKey[ScannerConfig]] = web.AppKey("config", ScannerConfig)
ORCHESTRATOR_FACTORY_KEY: Final[web.AppKey[OrchestratorFactory]] = web.AppKey("orchestrator_factory")


@web.middleware
async def preflight_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Answer CORS preflight requests for any path."""
    if request.method == "OPTIONS":
        return web.Response(
            status=204,
            headers={
                "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
                "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
            },
        )
    return await handler(request)


async def add_cors_headers(request: web.Request, response: web.StreamResponse) -> None:
    """Add the allow-origin header before any response is sent.

    Runs as an ``on_response_prepare`` hook so streamed responses, static
    files and error pages all get the header.
    """
    response.headers["Access-Control-Allow-Origin"] = request.app[CONFIG_KEY].server.cors_origin


async def handle_scan_stream(request: web.Request) -> web.StreamResponse:
    """Stream a scan as Server-Sent Events.

    Progress events are produced on the traversal worker thread and handed to
    this handler through a queue. A disconnecting client cancels the scan.
    """
    config = request.app[CONFIG_KEY]
    orchestrator = request.app[ORCHESTRATOR_FACTORY_KEY](config, config.scan.category_delay)

    response = web.StreamResponse(headers=SSE_HEADERS)
    _ = await response.prepare(request)
    logger.info("Starting streaming scan for %s", request.remote)

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[ProgressEvent | None] = asyncio.Queue()
    cancel_event = threading.Event()

    def sink(event: ProgressEvent) -> None:
        _ = loop.call_soon_threadsafe(queue.put_nowait, event)

    scan_task = asyncio.create_task(orchestrator.scan(sink, cancel_event=cancel_event))
    # Queued after every event the scan emitted, so it marks end of stream
    scan_task.add_done_callback(lambda _task: queue.put_nowait(None))

    try:
        while (event := await queue.get()) is not None:
            await response.write(sse_message(progress_payload(event)))

        try:
            summary = scan_task.result()
        except ScanError as exc:
            logger.warning("Streaming scan failed: %s", exc)
            await response.write(sse_message(error_payload(str(exc))))
        except Exception as exc:
            logger.exception("Unexpected error in streaming scan")
            await response.write(sse_message(error_payload(f"Internal error: {exc}")))
        else:
            await response.write(sse_message({"type": "complete", "results": results_payload(summary)}))

        await response.write_eof()
    except ConnectionResetError:
        logger.info("Client disconnected, cancelling scan")
    finally:
        if not scan_task.done():
            cancel_event.set()
            _ = scan_task.cancel()

    return response


async def handle_scan_sync(request: web.Request) -> web.Response:
    """Run a scan without pacing and return the results as JSON."""
    config = request.app[CONFIG_KEY]
    orchestrator = request.app[ORCHESTRATOR_FACTORY_KEY](config, 0.0)

    try:
        summary = await orchestrator.scan()
    except ScanError as exc:
        logger.warning("Scan failed: %s", exc)
        return web.json_response({"success": False, "error": str(exc)}, status=500)

    return web.json_response({"success": True, "results": results_payload(summary)})


def create_app(
    config: ScannerConfig,
    orchestrator_factory: OrchestratorFactory | None = None,
) -> web.Application:
    """Create the aiohttp application.

    Args:
        config: Validated scanner configuration
        orchestrator_factory: Builds one orchestrator per request from the
            config and a category delay

    Returns:
        Configured application, ready for ``web.run_app`` or a test server
    """
    app = web.Application(middlewares=[preflight_middleware])
    app[CONFIG_KEY] = config
    app[ORCHESTRATOR_FACTORY_KEY] = orchestrator_factory or default_orchestrator_factory
    app.on_response_prepare.append(add_cors_headers)

    _ = app.router.add_get("/api/scan", handle_scan_stream)
    _ = app.router.add_get("/api/scan-sync", handle_scan_sync)

    static_dir = config.server.static_dir
    if static_dir is not None:
        index_file = static_dir / "index.html"

        async def handle_index(_request: web.Request) -> web.StreamResponse:
            if not index_file.is_file():
                raise web.HTTPNotFound()
            return web.FileResponse(index_file)

        _ = app.router.add_get("/", handle_index)
        _ = app.router.add_static("/", static_dir)
        logger.debug("Serving static files from %s", static_dir)

    return app


def run_server(config: ScannerConfig) -> None:
    """Serve the application until interrupted."""
    app = create_app(config)
    logger.info("Listening on http://%s:%d", config.server.host, config.server.port)
    web.run_app(app, host=config.server.host, port=config.server.port, print=None)
