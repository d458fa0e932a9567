"""
Domain models for the queue service.

Models:
    - StoreListParams: Geographic query sent to the store-list upstream
    - RawStoreListEntry: One row of the upstream store roster
    - RawQueueEntry: Queue state for one store from the queue upstream
    - Store: Merged store record returned to dashboard clients
    - StoreListEnvelope / StatsEnvelope: Response bodies of the store routes
"""

from .response import (
    DashboardStats,
    QueueErrorResponse,
    StatsEnvelope,
    StoreListEnvelope,
)
from .store import Store
from .upstream import RawQueueEntry, RawStoreListEntry, StoreListParams

__all__ = [
    "DashboardStats",
    "QueueErrorResponse",
    "RawQueueEntry",
    "RawStoreListEntry",
    "StatsEnvelope",
    "Store",
    "StoreListEnvelope",
    "StoreListParams",
]
