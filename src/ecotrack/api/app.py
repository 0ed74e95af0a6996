"""
FastAPI application wiring.

This file creates the `FastAPI` instance and its middleware. Handlers live in
`ecotrack.api.routes`; ranking logic lives in `ecotrack.recycling.query`.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from ecotrack import __version__
from ecotrack.config.settings import get_settings
from ecotrack.core.logging import configure_logging

from .routes import router

configure_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title=f"{get_settings().app.name} API", version=__version__)

# CORS (dev-friendly): the web client usually runs on its own localhost port.
# Configure via env:
# - ECOTRACK_CORS_ORIGINS="http://localhost:5173,http://127.0.0.1:5173"
# - ECOTRACK_CORS_ALLOW_LOCAL=0 to disable the default localhost allowance
cors_origins = [s.strip() for s in os.getenv("ECOTRACK_CORS_ORIGINS", "").split(",") if s.strip()]
cors_allow_local = os.getenv("ECOTRACK_CORS_ALLOW_LOCAL", "1").strip().lower() in {"1", "true", "yes", "y"}
cors_origin_regex = (
    r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$" if cors_allow_local and not cors_origins else ""
)
if cors_origins or cors_origin_regex:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_origin_regex=cors_origin_regex or None,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(router)


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Give unexpected failures the same `{"detail": {"code", "message"}}` shape as other errors."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": {"code": "INTERNAL_ERROR", "message": str(exc)}},
    )
