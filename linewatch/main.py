from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from linewatch.adapters.api.controllers.lines import router as lines_router
from linewatch.adapters.api.controllers.shapes import router as shapes_router
from linewatch.adapters.api.controllers.status import router as status_router
from linewatch.adapters.api.controllers.vehicles import router as vehicles_router
from linewatch.adapters.api.dependencies import build_schedulers, get_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if not get_config().schedulers_enabled:
        yield
        return

    refresh, poll = build_schedulers()
    logger.info("Starting feed refresh and vehicle poll schedulers")
    refresh.start()
    poll.start()
    try:
        yield
    finally:
        await poll.stop()
        await refresh.stop()


app = FastAPI(title="linewatch", lifespan=lifespan)
app.include_router(lines_router)
app.include_router(shapes_router)
app.include_router(vehicles_router)
app.include_router(status_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep API errors JSON, like every other response."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    if get_config().reveal_errors or isinstance(exc, (RuntimeError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/")
def index() -> dict[str, object]:
    return {
        "message": "Wrocław public transport line API",
        "endpoints": [
            {"method": "GET", "path": "/lines", "description": "All categorized lines"},
            {
                "method": "GET",
                "path": "/lines/{category}",
                "description": "Lines of one category",
            },
            {
                "method": "GET",
                "path": "/classify/{line}",
                "description": "Vehicle category of a line identifier",
            },
            {"method": "GET", "path": "/locations", "description": "Vehicle locations"},
            {
                "method": "GET",
                "path": "/shapes/{line}",
                "description": "Shape of a line (?lat=&lon= picks the best variant)",
            },
            {
                "method": "GET",
                "path": "/shapes/{line}/variants",
                "description": "All variants of a line",
            },
            {"method": "GET", "path": "/stops/{line}", "description": "Stops of a line"},
            {
                "method": "GET",
                "path": "/stop/{stop_id}",
                "description": "Schedule of a stop",
            },
            {"method": "GET", "path": "/health", "description": "Health check"},
            {"method": "GET", "path": "/status", "description": "Feed and cache status"},
        ],
    }
