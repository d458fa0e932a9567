"""
Response envelope models for the store routes.

The dashboard UI consumes exactly this shape. Optional fields are omitted from
the JSON body when unset (see ``to_payload``).

Example:
    ```json
    {
        "success": true,
        "data": [{"shopId": 34, "waitingGroup": 62, "storeQueue": ["265", "266"], ...}],
        "timestamp": "2025-08-17T10:35:23.683000Z",
        "message": "Successfully fetched complete data for 3 stores",
        "queueErrors": [{"storeId": 58, "error": "ConnectError: ..."}]
    }
    ```
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from services.queue_service.models.store import Store


class EnvelopeModel(BaseModel):
    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict with unset optional fields dropped."""
        return self.model_dump(mode="json", exclude_none=True)


class QueueErrorResponse(BaseModel):
    """A store whose queue could not be fetched."""

    storeId: int = Field(..., description="Store id whose queue fetch failed")
    error: str = Field(..., description="Diagnostic message")


class StoreListEnvelope(EnvelopeModel):
    """
    Response body of ``GET /stores/live``.

    Attributes:
        success (bool): True only for a full success.
        data (list[Store]): Merged stores; empty only when the store list failed or was empty.
        timestamp (datetime): When the response was built.
        message (str): Human-readable summary.
        error (str | None): Machine-readable code on partial success or failure.
        warnings (list[str] | None): Present on partial success.
        partialData (bool | None): True on partial success.
        queueErrors (list[QueueErrorResponse] | None): At most the first few per-store errors.
    """

    success: bool = Field(..., description="Whether complete data was returned")
    data: list[Store] = Field(default_factory=list, description="Merged store records")
    timestamp: datetime = Field(..., description="Response build time")
    message: str = Field(..., description="Human-readable status message")
    error: str | None = Field(None, description="Machine-readable error code")
    warnings: list[str] | None = Field(None, description="Warnings for partial data")
    partialData: bool | None = Field(None, description="Set when only partial data is available")
    queueErrors: list[QueueErrorResponse] | None = Field(
        None, description="First per-store queue errors"
    )


class DashboardStats(BaseModel):
    """Aggregate figures for the dashboard header."""

    totalStores: int = Field(..., description="Number of stores returned")
    openStores: int = Field(..., description="Stores with status OPEN")
    closedStores: int = Field(..., description="Stores with status CLOSED")
    totalWaiting: int = Field(..., description="Sum of waiting groups")
    totalQueueTickets: int = Field(..., description="Sum of active tickets across stores")
    busiestStoreId: int | None = Field(None, description="Store with the most waiting groups")
    leastBusyStoreId: int | None = Field(
        None, description="Open store with the fewest waiting groups"
    )
    priorityCounts: dict[str, int] = Field(
        default_factory=dict, description="Store count per queue priority level"
    )


class StatsEnvelope(EnvelopeModel):
    """Response body of ``GET /stores/live/stats``."""

    success: bool = Field(..., description="Whether complete data was used")
    data: DashboardStats = Field(..., description="Aggregate figures")
    timestamp: datetime = Field(..., description="Response build time")
    message: str = Field(..., description="Human-readable status message")
    error: str | None = Field(None, description="Machine-readable error code")
