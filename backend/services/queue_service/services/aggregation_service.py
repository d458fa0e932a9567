"""
Live Store Aggregation Service

This module implements the request flow behind ``GET /stores/live``:

    params → StoreListClient → QueueFetchOrchestrator (QueueClient × N)
           → merge_stores → classify → build_envelope

Failure Policy:
    - Store list unavailable (any upstream failure): 503, no store data.
    - Store list empty: 404, no store data.
    - Queue data missing for every store: 206, stores returned with defaults.
    - Queue data missing for some stores: 200 with an informational note.
    - Anything unexpected: 500 with a generic message; details only in logs.

The service is stateless across requests: every call opens its own HTTP client
and re-fetches everything. Nothing is retried.

Example:
    ```python
    service = StoreAggregationService(get_settings("queue-service"))
    result = await service.aggregate(
        StoreListParams(latitude=22.3193, longitude=114.1694, numresults=25, region="HK")
    )
    result.status_code  # 200 / 206 / 404 / 503 / 500
    result.body.to_payload()
    ```
"""

import httpx
from loguru import logger

from common.config import QueueServiceSettings
from services.queue_service.clients import (
    QueueClient,
    StoreListClient,
    StoreListUnavailableError,
)
from services.queue_service.models import StoreListParams
from services.queue_service.services.classification import Classification, classify
from services.queue_service.services.envelope import (
    EnvelopeResult,
    build_envelope,
    internal_error_envelope,
)
from services.queue_service.services.fetch_orchestrator import QueueFetchOrchestrator
from services.queue_service.services.merge import merge_stores


class StoreAggregationService:
    """
    Aggregate the store roster with per-store queue data.

    Args:
        settings: Queue service settings (upstream URLs, fan-out limits, timeouts).
        transport: Optional httpx transport, used to swap in a mock upstream.
    """

    def __init__(
        self,
        settings: QueueServiceSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.transport = transport

    def default_params(self) -> StoreListParams:
        return StoreListParams(
            latitude=self.settings.DEFAULT_LATITUDE,
            longitude=self.settings.DEFAULT_LONGITUDE,
            numresults=self.settings.DEFAULT_NUM_RESULTS,
            region=self.settings.DEFAULT_REGION,
        )

    async def aggregate(self, params: StoreListParams) -> EnvelopeResult:
        """
        Run one aggregation and return its response envelope.

        Args:
            params: Store-list query; ``params.region`` is also used for queue requests.

        Returns:
            EnvelopeResult. Never raises for upstream or internal failures.
        """
        try:
            return await self._aggregate(params)
        except Exception as e:
            logger.opt(exception=e).error(f"Error in live stores aggregation: {e}")
            return internal_error_envelope()

    async def _aggregate(self, params: StoreListParams) -> EnvelopeResult:
        settings = self.settings

        async with httpx.AsyncClient(
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS, transport=self.transport
        ) as http_client:
            store_list_client = StoreListClient(
                http_client,
                api_url=settings.STORE_LIST_API_URL,
                proxy_url=settings.CORS_PROXY_URL,
                timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            )
            queue_client = QueueClient(
                http_client,
                api_url=settings.QUEUE_API_URL,
                proxy_url=settings.CORS_PROXY_URL,
                timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            )

            try:
                entries = await store_list_client.fetch_stores(params)
            except StoreListUnavailableError as e:
                logger.error(f"Failed to fetch store list: {e}")
                return build_envelope(classify(False, 0, 0), [])

            if not entries:
                logger.warning(f"Store list is empty for params: {params}")
                return build_envelope(classify(True, 0, 0), [])

            logger.info(f"Found {len(entries)} stores, fetching queue data...")

            orchestrator = QueueFetchOrchestrator(
                queue_client,
                chunk_size=settings.QUEUE_CONCURRENCY_LIMIT,
                chunk_delay=settings.QUEUE_CHUNK_DELAY_SECONDS,
                fetch_timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            )
            report = await orchestrator.fetch_all([entry.id for entry in entries], params.region)

        stores = merge_stores(entries, report.queue_data())
        classification = classify(True, len(entries), report.successful_fetches)

        if report.errors:
            logger.warning(
                f"Queue fetch errors for {len(report.errors)} stores: "
                + ", ".join(f"{item.store_id} ({item.error})" for item in report.errors)
            )
        if classification is Classification.PARTIAL_SUCCESS:
            logger.warning(f"No queue data for any of {len(stores)} stores; returning partial data")

        logger.info(f"Successfully processed {len(stores)} stores ({classification.tier})")

        return build_envelope(
            classification,
            stores,
            report,
            max_errors=settings.MAX_REPORTED_QUEUE_ERRORS,
        )
