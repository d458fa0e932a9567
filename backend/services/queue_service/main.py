"""
Queue Service - FastAPI Application Entrypoint

This module serves as the main entry point for the Queue Service, the microservice
behind the live store dashboard. It merges an upstream store roster with per-store
queue feeds and returns a single envelope per request.

Architecture:
    - API Layer: FastAPI endpoints (services.queue_service.api.v1.endpoints)
    - Service Layer: Aggregation, fan-out, merge and classification
      (services.queue_service.services)
    - Client Layer: httpx clients for the two upstream feeds
      (services.queue_service.clients)

Example:
    To run the service locally:
        ```bash
        uv run uvicorn services.queue_service:app --port 8004 --reload
        ```

    The service will be available at:
        - Live stores: http://localhost:8004/api/v1/stores/live
        - Swagger UI: http://localhost:8004/docs
        - Health Check: http://localhost:8004/health

Attributes:
    app (FastAPI): The FastAPI application instance configured with:
        - Service name: "queue-service"
        - Root path: "/queue" (for reverse proxy routing)
        - API router: All v1 store endpoints
        - APIError handler rendering the standard envelope
        - /health reporting whether both upstream URLs are configured
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from common.config import BaseServiceSettings, QueueServiceSettings
from common.exceptions import APIError
from common.fastapi import create_fastapi_app
from services.queue_service.api.v1.api import api_router
from services.queue_service.services.envelope import internal_error_envelope, rejection_envelope


def upstream_health_checks(settings: QueueServiceSettings) -> dict[str, bool]:
    """Readiness depends on both upstream URLs being configured."""
    return {
        "store_list_upstream_configured": bool(settings.STORE_LIST_API_URL),
        "queue_upstream_configured": bool(settings.QUEUE_API_URL),
    }


def register_error_handlers(app: FastAPI, settings: BaseServiceSettings) -> None:
    """
    Render APIError (e.g. gating rejections) and any unhandled exception in the
    store envelope shape, replacing the factory's generic 500 body.
    """

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        logger.info(
            f"{request.method} {request.url.path} rejected: {exc.status_code} {exc.error_code}"
        )
        result = rejection_envelope(exc.status_code, exc.error_code or "ERROR", exc.message)
        return JSONResponse(status_code=result.status_code, content=result.body.to_payload())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error(
            f"Unhandled exception in {request.method} {request.url.path}: {exc}"
        )
        result = internal_error_envelope()
        return JSONResponse(status_code=result.status_code, content=result.body.to_payload())


app = create_fastapi_app(
    service_name="queue-service",
    description="Live store queue aggregation for the store dashboard",
    api_router=api_router,
    additional_setup=register_error_handlers,
    root_path="/queue",
    health_checks=upstream_health_checks,
)
