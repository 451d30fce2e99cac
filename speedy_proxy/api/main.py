"""FastAPI application for the Speedy proxy.

Builds the app with routers, middleware and exception handlers. Settings
are loaded once here and handed to the gateway; nothing below reads the
environment again.

Run with:
    uvicorn speedy_proxy.api.main:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

# Configure logging to stdout for uvicorn to capture
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

from speedy_proxy.api.middleware.body_limit import (
    BodyLimitMiddleware,
    RequestTooLargeError,
    too_large_response,
)
from speedy_proxy.api.routes import labels, locations, shipments
from speedy_proxy.config import ProxySettings, load_settings
from speedy_proxy.errors import (
    InvalidRequestError,
    MissingCredentialsError,
    ProxyError,
)
from speedy_proxy.services.speedy_gateway import SpeedyGateway
from speedy_proxy.services.transport import SpeedyTransport

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return _pkg_version("speedy-proxy")
    except PackageNotFoundError:
        return "unknown"


def _has_default_credentials(settings: ProxySettings) -> bool:
    defaults = settings.speedy.default_credentials()
    return defaults is not None and defaults.is_complete


def _error_response(error: ProxyError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={
            "error": error.message,
            "error_code": error.code,
            "remediation": error.remediation,
            **error.details,
        },
    )


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    """Render ProxyError with its own status and code."""
    return _error_response(exc)


async def invalid_request_handler(
    request: Request, exc: InvalidRequestError
) -> JSONResponse:
    """Malformed caller input maps to 400 / E-2001."""
    return _error_response(
        ProxyError.from_code(
            "E-2001", status_code=400, reason=str(exc), details={"field": exc.field}
        )
    )


async def missing_credentials_handler(
    request: Request, exc: MissingCredentialsError
) -> JSONResponse:
    """Unconfigured credentials map to 500 / E-5001."""
    logger.error("Refusing %s %s: %s", request.method, request.url.path, exc)
    return _error_response(ProxyError.from_code("E-5001", status_code=500))


async def request_too_large_handler(
    request: Request, exc: RequestTooLargeError
) -> JSONResponse:
    """Streamed body over the limit maps to 413 / E-2002."""
    return too_large_response(exc.max_bytes)


def create_app(
    settings: ProxySettings | None = None,
    transport: SpeedyTransport | None = None,
) -> FastAPI:
    """Build the proxy application.

    Args:
        settings: Loaded settings; read from file/env when omitted.
        transport: Speedy transport; built from settings when omitted.

    Returns:
        Configured FastAPI app.
    """
    settings = settings or load_settings()
    transport = transport or SpeedyTransport(
        base_url=settings.speedy.base_url,
        timeout=settings.speedy.timeout_seconds,
        label_content_type=settings.speedy.label_content_type,
    )
    logging.getLogger("speedy_proxy").setLevel(settings.server.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Speedy proxy ready (upstream=%s, default credentials %s)",
            settings.speedy.base_url,
            "configured" if _has_default_credentials(settings) else "not configured",
        )
        yield
        await transport.aclose()

    app = FastAPI(
        title="Speedy Proxy",
        description="Credential-injecting proxy for the Speedy shipping API",
        version=_package_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.transport = transport
    app.state.gateway = SpeedyGateway(settings.speedy, transport)

    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.server.max_body_bytes)

    # No allowlist means any origin with any request header
    origins = list(settings.server.allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"] if origins else ["*"],
    )

    app.add_exception_handler(ProxyError, proxy_error_handler)
    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.add_exception_handler(MissingCredentialsError, missing_credentials_handler)
    app.add_exception_handler(RequestTooLargeError, request_too_large_handler)

    app.include_router(locations.router)
    app.include_router(shipments.router)
    app.include_router(labels.router)

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        """Plain-text liveness message."""
        return "OK: speedy-api proxy is live"

    @app.get("/health")
    def health_check() -> dict:
        """Health check with credential configuration status."""
        return {
            "status": "healthy",
            "version": _package_version(),
            "upstream": settings.speedy.base_url,
            "credentials_configured": _has_default_credentials(settings),
        }

    return app
