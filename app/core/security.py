"""Security header middleware and helpers."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from app.core.error_handlers import server_error_response
from app.models.policy import SERVER_HEADER

if TYPE_CHECKING:  # pragma: no cover - type checking imports
    from collections.abc import Awaitable, Callable

    from starlette.datastructures import MutableHeaders
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from app.models.policy import SecurityPolicy

logger = logging.getLogger(__name__)

# Visible ASCII, space, tab and obs-text; everything else cannot be sent.
_HEADER_VALUE = re.compile(r"[\t\x20-\x7e\x80-\xff]*")


def is_valid_header_value(value: str) -> bool:
    """Return whether ``value`` can be written as an HTTP header value."""
    return _HEADER_VALUE.fullmatch(value) is not None


def apply_security_headers(headers: MutableHeaders, policy: SecurityPolicy) -> None:
    """Write the policy headers into ``headers`` in place.

    The security headers always replace whatever the handler set. The Server
    header is only added when missing. A value that is not valid header text
    is skipped for that header alone.
    """
    for name, value in policy.to_header_map().items():
        if not is_valid_header_value(value):
            logger.debug("Skipping %s header: invalid header value", name)
            continue
        headers[name] = value

    if SERVER_HEADER not in headers:
        if is_valid_header_value(policy.server_identity):
            headers[SERVER_HEADER] = policy.server_identity
        else:
            logger.debug("Skipping %s header: invalid header value", SERVER_HEADER)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add the configured security headers to every response.

    Also the single place where unhandled handler errors are logged and
    replaced by the 500 envelope.
    """

    def __init__(self, app: ASGIApp, policy: SecurityPolicy) -> None:
        super().__init__(app)
        self.policy = policy

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error for %s %s", request.method, request.url.path
            )
            response = server_error_response()
        apply_security_headers(response.headers, self.policy)
        return response
