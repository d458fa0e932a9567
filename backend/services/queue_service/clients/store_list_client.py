"""
Store-List Upstream Client

Fetches the current store roster for a geographic query. Any failure here means
the service has no store data at all, so every failure mode is raised as
``StoreListUnavailableError`` for the caller to turn into a 503 response.
There is no retry; each aggregation request calls the upstream exactly once.

Failure Modes:
    - Store list URL not configured
    - Transport error or timeout (httpx.HTTPError)
    - Non-2xx status
    - Body that is not JSON, or JSON that is not an array
    - An array element that does not validate as a store entry
"""

import httpx
from loguru import logger
from pydantic import ValidationError

from services.queue_service.clients.base import build_upstream_url
from services.queue_service.clients.exceptions import StoreListUnavailableError
from services.queue_service.models import RawStoreListEntry, StoreListParams


class StoreListClient:
    """
    Client for the store-list upstream.

    Args:
        http_client: Shared async HTTP client (owned by the caller).
        api_url: Store-list endpoint.
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

    async def fetch_stores(self, params: StoreListParams) -> list[RawStoreListEntry]:
        """
        Fetch the store roster.

        Args:
            params: Latitude, longitude, result count and region code.

        Returns:
            list[RawStoreListEntry]: Stores in upstream order (possibly empty).

        Raises:
            StoreListUnavailableError: On any failure described in the module docstring.
        """
        if not self.api_url:
            raise StoreListUnavailableError("Store list API URL is not configured")

        url = build_upstream_url(self.api_url, params.to_query(), self.proxy_url)

        try:
            response = await self.http_client.get(url, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise StoreListUnavailableError(
                f"Failed to fetch store list: {type(e).__name__}: {e}"
            ) from e

        if not response.is_success:
            raise StoreListUnavailableError(
                f"Store list API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise StoreListUnavailableError(
                "Store list API returned a non-JSON body",
                status_code=response.status_code,
            ) from e

        if not isinstance(payload, list):
            raise StoreListUnavailableError(
                f"Store list API returned {type(payload).__name__}, expected an array",
                status_code=response.status_code,
            )

        try:
            stores = [RawStoreListEntry.model_validate(item) for item in payload]
        except ValidationError as e:
            raise StoreListUnavailableError(
                f"Store list API returned a malformed entry: {e.error_count()} validation error(s)",
                status_code=response.status_code,
            ) from e

        logger.debug(f"Store list upstream returned {len(stores)} stores")
        return stores
