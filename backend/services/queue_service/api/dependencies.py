"""
Shared API Dependencies for the Queue Service

This module provides FastAPI dependency functions used by the store routes:
settings and service instances, query-parameter parsing, and request gating.

Request Gating:
    Applied to every store route, in this order:
    - verify_request_origin: Origin/Referer must be in ALLOWED_ORIGINS (403)
    - verify_api_key: x-api-key must match API_SECRET_KEY when one is set (401)
    - enforce_rate_limit: fixed-window limit per client (429)

    Rejections raise ``APIError`` with a machine-readable ``error_code``; the
    handler registered in ``main.py`` renders them in the standard envelope.

Example:
    ```python
    from fastapi import Depends
    from services.queue_service.api.dependencies import get_aggregation_service

    @router.get("/endpoint")
    async def my_endpoint(service=Depends(get_aggregation_service)):
        ...
    ```
"""

from functools import lru_cache

from fastapi import Depends, Header, Query, Request
from loguru import logger

from common.config import QueueServiceSettings, get_settings
from common.exceptions import (
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_429_TOO_MANY_REQUESTS,
    APIError,
)
from common.security import (
    RateLimiter,
    client_identifier,
    is_allowed_origin,
    validate_api_key,
)
from services.queue_service.models import StoreListParams
from services.queue_service.services.aggregation_service import StoreAggregationService


@lru_cache(maxsize=1)
def get_queue_settings() -> QueueServiceSettings:
    """Get cached queue service settings."""
    return get_settings("queue-service")


@lru_cache(maxsize=1)
def get_aggregation_service() -> StoreAggregationService:
    """
    Get cached aggregation service instance.
    Using lru_cache to ensure only one instance is created.
    """
    return StoreAggregationService(get_queue_settings())


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiter:
    """Process-wide rate limiter shared by all store routes."""
    settings = get_queue_settings()
    return RateLimiter(
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )


def get_store_list_params(
    latitude: float | None = Query(None, ge=-90, le=90, description="Query latitude"),
    longitude: float | None = Query(None, ge=-180, le=180, description="Query longitude"),
    numresults: int | None = Query(None, ge=1, description="Maximum number of stores"),
    region: str | None = Query(None, min_length=1, description="Region code, e.g. HK"),
    settings: QueueServiceSettings = Depends(get_queue_settings),
) -> StoreListParams:
    """
    Build the store-list query from request parameters.

    Every parameter is optional; missing ones fall back to the configured
    defaults (a fixed Hong Kong coordinate, 25 results, region "HK").
    """
    return StoreListParams(
        latitude=settings.DEFAULT_LATITUDE if latitude is None else latitude,
        longitude=settings.DEFAULT_LONGITUDE if longitude is None else longitude,
        numresults=numresults or settings.DEFAULT_NUM_RESULTS,
        region=region or settings.DEFAULT_REGION,
    )


async def verify_request_origin(
    request: Request,
    settings: QueueServiceSettings = Depends(get_queue_settings),
) -> None:
    """Reject requests coming from origins outside ALLOWED_ORIGINS."""
    origin = request.headers.get("origin")
    referer = request.headers.get("referer")
    if not is_allowed_origin(origin, referer, settings.ALLOWED_ORIGINS):
        logger.warning(f"Rejected request from origin={origin!r} referer={referer!r}")
        raise APIError(
            message="Access denied. This API is only accessible from authorized origins.",
            status_code=HTTP_403_FORBIDDEN,
            error_code="UNAUTHORIZED_ORIGIN",
        )


async def verify_api_key(
    api_key: str | None = Header(default=None, alias="x-api-key"),
    settings: QueueServiceSettings = Depends(get_queue_settings),
) -> None:
    """Require a matching x-api-key header when API_SECRET_KEY is configured."""
    if not validate_api_key(api_key, settings.API_SECRET_KEY):
        logger.warning("Rejected request with missing or invalid API key")
        raise APIError(
            message="Access denied. Valid API key required.",
            status_code=HTTP_401_UNAUTHORIZED,
            error_code="UNAUTHORIZED",
        )


async def enforce_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> None:
    """Apply the per-client fixed-window rate limit."""
    client_id = client_identifier(request.headers)
    if not limiter.check(client_id):
        logger.warning(f"Rate limit exceeded for client {client_id}")
        raise APIError(
            message="Too many requests. Please try again later.",
            status_code=HTTP_429_TOO_MANY_REQUESTS,
            error_code="RATE_LIMIT_EXCEEDED",
        )
