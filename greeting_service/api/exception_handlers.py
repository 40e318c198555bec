from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("greeting_service.not_found")


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(404)
    async def handle_not_found(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Only `/` is served; anything else is a probe, a scanner or a typo.
        logger.info(
            "Route not found",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": 404,
            },
        )
        return JSONResponse(status_code=404, content={"detail": exc.detail})
