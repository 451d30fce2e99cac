"""Request body size limit.

Requests whose declared Content-Length exceeds the configured maximum are
answered with 413 before the body is read. Bodies without a declared
length (chunked uploads) are counted as they stream in, and reading stops
with RequestTooLargeError once the running total passes the maximum.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from speedy_proxy.errors.formatter import ProxyError

logger = logging.getLogger(__name__)


class RequestTooLargeError(HTTPException):
    """Raised while reading a streamed body that outgrew the limit."""

    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            status_code=413, detail=f"Request body exceeds {max_bytes} bytes"
        )
        self.max_bytes = max_bytes


def too_large_response(max_bytes: int) -> JSONResponse:
    """Build the 413 / E-2002 response body."""
    error = ProxyError.from_code("E-2002", status_code=413, max_bytes=max_bytes)
    return JSONResponse(
        status_code=error.status_code,
        content={
            "error": error.message,
            "error_code": error.code,
            "remediation": error.remediation,
        },
    )


def _declared_length(headers: Headers) -> int:
    try:
        return int(headers.get("content-length", "0"))
    except ValueError:
        return 0


class BodyLimitMiddleware:
    """ASGI middleware enforcing ``max_bytes`` on request bodies.

    Example:
        app.add_middleware(BodyLimitMiddleware, max_bytes=10 * 1024 * 1024)
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = _declared_length(Headers(scope=scope))
        if declared > self.max_bytes:
            logger.warning(
                "Rejected %s %s: Content-Length %d exceeds %d",
                scope["method"], scope["path"], declared, self.max_bytes,
            )
            await too_large_response(self.max_bytes)(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    logger.warning(
                        "Rejected %s %s: streamed body exceeds %d",
                        scope["method"], scope["path"], self.max_bytes,
                    )
                    raise RequestTooLargeError(self.max_bytes)
            return message

        await self.app(scope, limited_receive, send)
