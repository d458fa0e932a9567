"""
Merged store model returned to dashboard clients.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Store(BaseModel):
    """
    One physical store with its current queue state.

    Built once per request by merging a store-list entry with its (optional)
    queue entry. Instances are frozen.

    Attributes:
        shopId (int): Store identifier, unique within a response.
        name (str): Localized store name.
        nameEn (str): English store name.
        storeStatus (str): "OPEN", "CLOSED", ... or "UNKNOWN" when absent upstream.
        waitingGroup (int): Parties currently waiting.
        storeQueue (list[str]): Active ticket numbers, in upstream order.
        address (str): Free-text address.
        region (str): Region label.
        area (str): Sub-area label.
        latitude (float | None): Store latitude if known.
        longitude (float | None): Store longitude if known.
        timestamp (datetime): When this record was assembled (UTC).
    """

    model_config = ConfigDict(frozen=True)

    shopId: int = Field(..., description="Store identifier")
    name: str = Field("", description="Localized store name")
    nameEn: str = Field("", description="English store name")
    storeStatus: str = Field("UNKNOWN", description="Store status reported by the store list")
    waitingGroup: int = Field(0, description="Number of parties currently waiting")
    storeQueue: list[str] = Field(default_factory=list, description="Active ticket numbers")
    address: str = Field("", description="Store address")
    region: str = Field("", description="Region label")
    area: str = Field("", description="Sub-area label")
    latitude: float | None = Field(None, description="Store latitude")
    longitude: float | None = Field(None, description="Store longitude")
    timestamp: datetime = Field(..., description="Assembly time of this record")
