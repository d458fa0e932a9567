"""
Upstream payload models.

Field names mirror the upstream JSON (camelCase) so payloads validate without
alias mapping. Unknown upstream fields are ignored; every field except the
store id is optional because the feeds are not strict about what they send.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StoreListParams(BaseModel):
    """Query parameters for one store-list request."""

    latitude: float
    longitude: float
    numresults: int = Field(..., ge=1)
    region: str

    def to_query(self) -> dict[str, str]:
        return {
            "latitude": str(self.latitude),
            "longitude": str(self.longitude),
            "numresults": str(self.numresults),
            "region": self.region,
        }


class RawStoreListEntry(BaseModel):
    """One store from the store-list upstream."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str | None = None
    nameEn: str | None = None
    address: str | None = None
    region: str | None = None
    area: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    storeStatus: str | None = None
    waitingGroup: int | None = None


class RawQueueEntry(BaseModel):
    """
    Queue state for one store from the queue upstream.

    ``storeQueue`` is the ordered list of active ticket numbers. Some upstream
    responses send tickets as numbers, so they are normalized to strings; a
    null queue becomes an empty list.
    """

    model_config = ConfigDict(extra="ignore")

    shopId: int | None = None
    storeQueue: list[str] = Field(default_factory=list)
    waitingGroup: int | None = None
    storeStatus: str | None = None

    @field_validator("storeQueue", mode="before")
    @classmethod
    def normalize_tickets(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if not isinstance(v, list):
            msg = f"storeQueue must be a list, got {type(v).__name__}"
            raise ValueError(msg)
        return [str(ticket) for ticket in v]
