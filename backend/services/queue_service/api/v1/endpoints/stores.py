"""
Live Store API Endpoints

This module defines the REST API endpoints serving live store queue data to the
dashboard.

Endpoints:
    GET /stores/live
        Merge the upstream store roster with per-store queue data.

    GET /stores/live/stats
        Same aggregation, summarized into dashboard header figures.

Query Parameters (all optional):
    - latitude (float): Defaults to the configured reference latitude
    - longitude (float): Defaults to the configured reference longitude
    - numresults (int): Defaults to 25
    - region (str): Defaults to "HK"

Status Codes:
    - 200: Complete data (queue data for at least one store)
    - 206: Store data only; queue data unavailable for every store
    - 404: The store list is empty for these parameters
    - 503: The store list could not be fetched
    - 500: Unexpected internal error
    - 401/403/429: Request gating rejections

Every response, including failures, uses the same envelope shape
(``success``, ``data``, ``timestamp``, ``message`` plus optional fields), so the
dashboard never has to handle a raw error.

Example:
    ```bash
    GET /api/v1/stores/live?region=HK&numresults=10
    ```

See Also:
    - services.queue_service.services.aggregation_service.StoreAggregationService
    - services.queue_service.models.response: Envelope models
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from services.queue_service.api.dependencies import (
    enforce_rate_limit,
    get_aggregation_service,
    get_store_list_params,
    verify_api_key,
    verify_request_origin,
)
from services.queue_service.api.v1.models import (
    StatsEnvelope,
    StoreListEnvelope,
    StoreListParams,
)
from services.queue_service.services.aggregation_service import StoreAggregationService
from services.queue_service.services.stats import compute_dashboard_stats

router = APIRouter(
    prefix="/stores",
    dependencies=[
        Depends(verify_request_origin),
        Depends(verify_api_key),
        Depends(enforce_rate_limit),
    ],
)

_ENVELOPE_RESPONSES = {
    206: {"model": StoreListEnvelope, "description": "Store data without queue data"},
    404: {"model": StoreListEnvelope, "description": "No stores found"},
    503: {"model": StoreListEnvelope, "description": "Store data unavailable"},
    500: {"model": StoreListEnvelope, "description": "Unexpected internal error"},
}

_STATS_RESPONSES = {
    status_code: {**response, "model": StatsEnvelope}
    for status_code, response in _ENVELOPE_RESPONSES.items()
}


@router.get("/live", response_model=StoreListEnvelope, responses=_ENVELOPE_RESPONSES)
async def get_live_stores(
    params: StoreListParams = Depends(get_store_list_params),
    service: StoreAggregationService = Depends(get_aggregation_service),
) -> JSONResponse:
    """
    Return every store in the roster merged with its live queue data.

    Args:
        params: Store-list query built from the request's query parameters.
        service: Aggregation service dependency injection.

    Returns:
        JSONResponse: Envelope body with the status code chosen by the
        aggregation classification.
    """
    logger.info(f"Fetching live store data with params: {params}")
    result = await service.aggregate(params)
    return JSONResponse(status_code=result.status_code, content=result.body.to_payload())


@router.get("/live/stats", response_model=StatsEnvelope, responses=_STATS_RESPONSES)
async def get_live_store_stats(
    params: StoreListParams = Depends(get_store_list_params),
    service: StoreAggregationService = Depends(get_aggregation_service),
) -> JSONResponse:
    """
    Return dashboard summary figures over the live store data.

    The status code, success flag, message and error code are those of the
    underlying aggregation; figures are computed over whatever stores it returned.
    """
    result = await service.aggregate(params)
    envelope = result.body
    body = StatsEnvelope(
        success=envelope.success,
        data=compute_dashboard_stats(envelope.data),
        timestamp=envelope.timestamp,
        message=envelope.message,
        error=envelope.error,
    )
    return JSONResponse(status_code=result.status_code, content=body.to_payload())
