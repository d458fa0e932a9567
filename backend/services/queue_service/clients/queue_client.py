"""
Queue Upstream Client

Fetches the ticket queue for a single store. A 404 from the upstream means the
store has no active queue right now; that is an expected outcome and maps to
``None``. Every other failure raises ``QueueFetchError`` so the orchestrator can
record it against the store and carry on with the rest of the batch.
"""

import httpx
from pydantic import ValidationError

from common.exceptions import HTTP_404_NOT_FOUND
from services.queue_service.clients.base import build_upstream_url
from services.queue_service.clients.exceptions import QueueFetchError
from services.queue_service.models import RawQueueEntry


class QueueClient:
    """
    Client for the per-store queue upstream.

    Args:
        http_client: Shared async HTTP client (owned by the caller).
        api_url: Queue endpoint, queried with ``region`` and ``storeid``.
        proxy_url: Optional CORS proxy prefix.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_url: str,
        proxy_url: str = "",
        timeout: float = 5.0,
    ) -> None:
        self.http_client = http_client
        self.api_url = api_url
        self.proxy_url = proxy_url
        self.timeout = timeout

    async def fetch_queue(self, store_id: int, region: str) -> RawQueueEntry | None:
        """
        Fetch queue state for one store.

        Args:
            store_id: Upstream store id.
            region: Region code (e.g. "HK").

        Returns:
            RawQueueEntry, or None when the upstream answers 404 (no queue data).

        Raises:
            QueueFetchError: Transport error, timeout, non-2xx other than 404,
                or a body that is not a valid queue object.
        """
        if not self.api_url:
            raise QueueFetchError(store_id, "Queue API URL is not configured")

        url = build_upstream_url(
            self.api_url, {"region": region, "storeid": str(store_id)}, self.proxy_url
        )

        try:
            response = await self.http_client.get(url, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise QueueFetchError(store_id, f"{type(e).__name__}: {e}") from e

        if response.status_code == HTTP_404_NOT_FOUND:
            return None

        if not response.is_success:
            raise QueueFetchError(
                store_id,
                f"Queue API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise QueueFetchError(
                store_id, "Queue API returned a non-JSON body", response.status_code
            ) from e

        if not isinstance(payload, dict):
            raise QueueFetchError(
                store_id,
                f"Queue API returned {type(payload).__name__}, expected an object",
                response.status_code,
            )

        try:
            return RawQueueEntry.model_validate(payload)
        except ValidationError as e:
            raise QueueFetchError(
                store_id,
                f"Queue API returned a malformed body: {e.error_count()} validation error(s)",
                response.status_code,
            ) from e
