"""
FastAPI application factory shared by the backend services.

Every service builds its app through ``create_fastapi_app`` so that logging,
CORS, request timing, health reporting and last-resort error handling behave
the same way everywhere.

Middleware:
    - CORS: read-only API, so only GET/OPTIONS are allowed. Origins come from
      CORS_ORIGINS; when that is empty the local dashboard dev servers are used.
    - Request Timing: ``X-Process-Time`` header (seconds) on every response,
      plus one access log line per request (health probes at DEBUG).

Endpoints:
    - GET /: Service name, version and links
    - GET /health: Liveness plus optional service-specific readiness checks
    - GET /docs, /redoc: OpenAPI documentation

Error Handling:
    Exceptions nobody else handled are logged with their traceback and turned
    into a 500 whose body never contains exception details.
"""

from collections.abc import Callable
import time
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger

from common.config import BaseServiceSettings, get_settings
from common.exceptions import GENERIC_ERROR_MESSAGE, HTTP_500_INTERNAL_SERVER_ERROR
from common.logging import setup_logging

LOCAL_DASHBOARD_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
]

QUIET_PATHS = {"/health", "/"}

HealthCheck = Callable[[BaseServiceSettings], dict[str, bool]]


def _cors_origins(settings: BaseServiceSettings) -> list[str]:
    if settings.CORS_ORIGINS:
        return settings.CORS_ORIGINS
    if settings.ENVIRONMENT == "production":
        logger.warning("CORS_ORIGINS is empty in production; cross-origin requests will be refused")
        return []
    return LOCAL_DASHBOARD_ORIGINS


def create_fastapi_app(
    service_name: str,
    description: str,
    api_router: APIRouter | None = None,
    additional_setup: Callable[[FastAPI, BaseServiceSettings], None] | None = None,
    root_path: str = "",
    health_checks: HealthCheck | None = None,
) -> FastAPI:
    """
    Create a FastAPI application with the shared middleware and endpoints.

    Args:
        service_name: Service identifier (e.g., "queue-service"). Selects the
            settings class and names the log files.
        description: Shown in the OpenAPI documentation.
        api_router: Routes to mount under API_V1_STR (default "/api/v1").
        additional_setup: Called last with ``(app, settings)``; services use it
            to register their own exception handlers.
        root_path: Reverse-proxy prefix. Ignored in the DEV environment.
        health_checks: Optional callable returning named boolean readiness
            checks. Any False check reports the service as "degraded".

    Returns:
        Configured FastAPI application.

    Example:
        ```python
        app = create_fastapi_app(
            service_name="queue-service",
            description="Live store queue aggregation",
            api_router=api_router,
            health_checks=lambda s: {"store_list_upstream": bool(s.STORE_LIST_API_URL)},
        )
        ```
    """

    setup_logging(service_name)

    settings = get_settings(service_name)

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        description=description,
        openapi_url="/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        root_path=root_path if settings.ENVIRONMENT != "DEV" else "",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time"],
    )

    @app.middleware("http")
    async def add_process_time_header(
        request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        log = logger.debug if request.url.path in QUIET_PATHS else logger.info
        log(f"{request.method} {request.url.path} - {response.status_code} - {elapsed:.3f}s")
        return response

    if api_router:
        app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        checks = health_checks(settings) if health_checks else {}
        return {
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "status": "healthy" if all(checks.values()) else "degraded",
            "checks": checks,
            "timestamp": time.time(),
        }

    @app.get("/")
    async def root() -> dict[str, Any]:
        return {
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "message": f"{settings.SERVICE_NAME} is running",
            "docs": "/docs",
            "health": "/health",
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error(
            f"Unhandled exception in {request.method} {request.url.path}: {exc}"
        )
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "INTERNAL_SERVER_ERROR", "message": GENERIC_ERROR_MESSAGE},
        )

    if additional_setup:
        additional_setup(app, settings)

    return app
