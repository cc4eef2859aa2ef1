"""Exception handlers translating upstream failures into JSON responses."""

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from crowdplex.exceptions import UpstreamError

logger = logging.getLogger(__name__)


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "Upstream API Error",
            "message": exc.message,
            "status": exc.status_code,
        },
    )


async def transport_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    logger.error(f"Upstream request failed for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={
            "error": "Bad Gateway",
            "message": "Could not reach the Cineplex API",
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": f"Failed to handle {request.url.path}",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UpstreamError, upstream_error_handler)
    app.add_exception_handler(httpx.HTTPError, transport_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
