"""Exception handler registration for FastAPI."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

if TYPE_CHECKING:  # pragma: no cover - type checking imports
    from fastapi import FastAPI, Request

from app.core.exceptions import NotFoundError, ServiceException

logger = logging.getLogger(__name__)

NOT_FOUND = 404


def server_error_response() -> JSONResponse:
    """Return the generic 500 error envelope.

    Unhandled exceptions are turned into this response by
    :class:`~app.core.security.SecurityHeadersMiddleware`, which wraps every
    route, so no catch-all exception handler is registered.
    """
    generic = ServiceException(
        "Internal server error", error_type="server_error", status_code=500
    )
    return JSONResponse(status_code=500, content=generic.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on the application."""

    @app.exception_handler(ServiceException)
    async def handle_service_exception(
        _request: Request, exc: ServiceException
    ) -> JSONResponse:
        logger.error("%s: %s", exc.error_type, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == NOT_FOUND:
            logger.info("No route for %s %s", request.method, request.url.path)
            error = NotFoundError()
        else:
            error = ServiceException(
                str(exc.detail),
                error_type="invalid_request_error",
                status_code=exc.status_code,
            )
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_dict(),
            headers=getattr(exc, "headers", None),
        )
