"""
Queue Service API v1 Models Package

This package exports all Pydantic models used for request/response validation
in the queue service API v1.

Models:
    - StoreListParams: Parsed query parameters of the store routes
    - Store: Merged store record
    - StoreListEnvelope: Response body of GET /stores/live
    - QueueErrorResponse: Per-store queue failure entry
    - DashboardStats: Aggregate dashboard figures
    - StatsEnvelope: Response body of GET /stores/live/stats
"""

from services.queue_service.models import (
    DashboardStats,
    QueueErrorResponse,
    StatsEnvelope,
    Store,
    StoreListEnvelope,
    StoreListParams,
)

__all__ = [
    "DashboardStats",
    "QueueErrorResponse",
    "StatsEnvelope",
    "Store",
    "StoreListEnvelope",
    "StoreListParams",
]
