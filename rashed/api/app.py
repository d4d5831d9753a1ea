"""
Main FastAPI application for the Rashed API.

This module provides the FastAPI application with middleware, exception
handlers and the ``/api`` routers.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Dict, Iterable, List, Optional, cast

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from .. import __version__
from ..core.config import RashedConfig, get_config
from ..core.database import close_tortoise, init_tortoise
from ..core.errors import RashedError, create_error_response
from ..core.logging import get_logger
from ..core.redis import close_redis, initialize_redis

API_PREFIX = "/api"
RATE_LIMITED_PATHS = ("/api/login", "/api/register")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        """Dispatch request with security headers."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = (
            "geolocation=(), microphone=(), camera=()"
        )

        if "server" in response.headers:
            del response.headers["server"]

        return cast(Response, response)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window rate limiting per client IP for the login endpoints."""

    def __init__(
        self,
        app: ASGIApp,
        max_requests: int = 10,
        window_seconds: int = 60,
        paths: Iterable[str] = RATE_LIMITED_PATHS,
    ) -> None:
        """Initialize rate limiting middleware."""
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.paths = tuple(paths)
        self.requests: Dict[str, List[float]] = {}

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        """Dispatch request with rate limiting for login endpoints."""
        if request.url.path in self.paths:
            client_ip = request.client.host if request.client else "unknown"
            current_time = time.time()

            # Drop clients whose latest request left the window
            self.requests = {
                ip: timestamps
                for ip, timestamps in self.requests.items()
                if timestamps and current_time - timestamps[-1] < self.window_seconds
            }

            timestamps = [
                ts
                for ts in self.requests.get(client_ip, [])
                if current_time - ts < self.window_seconds
            ]

            if len(timestamps) >= self.max_requests:
                get_logger(__name__).warning(
                    "Rate limit exceeded", client_ip=client_ip, path=request.url.path
                )
                return JSONResponse(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    content={
                        "detail": "Rate limit exceeded",
                        "error": (
                            f"Too many requests. Limit: {self.max_requests} "
                            f"per {self.window_seconds} seconds"
                        ),
                        "path": request.url.path,
                    },
                )

            timestamps.append(current_time)
            self.requests[client_ip] = timestamps

        return cast(Response, await call_next(request))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger = get_logger("api.app")
    logger.info("Starting Rashed API server...")

    config = get_config()
    logger.info("Loaded configuration", environment=config.environment.value)

    await init_tortoise()
    await initialize_redis()

    yield

    logger.info("Shutting down Rashed API server...")
    await close_redis()
    await close_tortoise()


def create_app(
    config: Optional[RashedConfig] = None, use_lifespan: bool = True
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Configuration to build the app from, defaults to the global one
        use_lifespan: Whether startup opens the database and Redis connections.
            Tests that manage those connections themselves pass False.
    """
    config = config or get_config()

    app = FastAPI(
        title="Rashed API",
        description="""
        ## Rashed developer dashboard API

        Projects, deployments, environments, integrations, approvals and logs,
        plus an AI assistant proxied to an OpenAI-compatible completion API.

        ### Authentication
        `POST /api/login` (or `/api/register`) sets an HTTP-only session
        cookie. Every other endpoint except `/api/health` requires it.

        ### Rate Limiting
        Login and registration are rate-limited per client IP address.
        """,
        version=__version__,
        docs_url="/docs" if not config.is_production() else None,
        redoc_url="/redoc" if not config.is_production() else None,
        lifespan=lifespan if use_lifespan else None,
    )

    _setup_middleware(app, config)
    _setup_exception_handlers(app)
    _setup_routes(app)

    return app


def _setup_middleware(app: FastAPI, config: RashedConfig) -> None:
    """Set up application middleware."""
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        RateLimitMiddleware,
        max_requests=config.security.login_rate_limit_requests,
        window_seconds=config.security.login_rate_limit_window,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_resolved,
        allow_credentials=config.api.cors_credentials,
        allow_methods=config.cors_methods_resolved,
        allow_headers=config.cors_headers_resolved,
        max_age=config.api.cors_max_age,
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        logger = get_logger("api.middleware")
        start_time = time.time()

        response = await call_next(request)

        if request.url.path.startswith(API_PREFIX):
            logger.info(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.time() - start_time) * 1000, 1),
                client=request.client.host if request.client else "unknown",
            )

        return response


def _validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Field errors without the exception objects pydantic keeps in ``ctx``."""
    return cast(
        List[Dict[str, Any]],
        jsonable_encoder(
            [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
        ),
    )


def _setup_exception_handlers(app: FastAPI) -> None:
    """Set up exception handlers."""
    logger = get_logger("api.exceptions")

    @app.exception_handler(RashedError)
    async def rashed_exception_handler(
        request: Request, exc: RashedError
    ) -> JSONResponse:
        record = create_error_response(
            exc.error_type, exc.error, exc.context, source=request.url.path
        )
        if exc.status_code >= 500:
            logger.error(exc.message, **record)
        else:
            logger.warning(exc.message, **record)
        return JSONResponse(
            status_code=exc.status_code, content=exc.to_response(request.url.path)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = _validation_errors(exc)
        logger.warning("Validation error", path=request.url.path, errors=errors)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": "Validation error",
                "errors": errors,
                "path": request.url.path,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.warning(
            "HTTP exception", status_code=exc.status_code, detail=exc.detail
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "path": request.url.path},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error("Unexpected error", error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error",
                "error": str(exc),
                "path": request.url.path,
            },
        )


def _setup_routes(app: FastAPI) -> None:
    """Set up application routes."""
    from .auth.endpoints import router as auth_router
    from .routes import (
        ai,
        deployments,
        feeds,
        files,
        health,
        integrations,
        messages,
        projects,
        settings,
    )

    app.include_router(health.router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(projects.router, prefix=API_PREFIX)
    app.include_router(deployments.router, prefix=API_PREFIX)
    app.include_router(integrations.router, prefix=API_PREFIX)
    app.include_router(feeds.router, prefix=API_PREFIX)
    app.include_router(messages.router, prefix=API_PREFIX)
    app.include_router(ai.router, prefix=API_PREFIX)
    app.include_router(files.router, prefix=API_PREFIX)
    app.include_router(settings.router, prefix=API_PREFIX)


# Create the main application instance
app = create_app()


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    config = get_config()

    uvicorn.run(
        "rashed.api.app:app",
        host=config.api.host,
        port=config.api.port,
        reload=config.api.reload and config.is_development(),
        log_level="info",
    )


if __name__ == "__main__":
    main()
