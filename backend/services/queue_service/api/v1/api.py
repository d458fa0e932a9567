"""
API Router Aggregation for Queue Service v1

The v1 API provides the following endpoint groups:
    - Stores: live store queue data
        - GET /stores/live: Merged store roster and queue data
        - GET /stores/live/stats: Dashboard summary figures

Attributes:
    api_router (APIRouter): FastAPI router containing all v1 queue service endpoints
"""

from fastapi import APIRouter

from services.queue_service.api.v1.endpoints import stores

api_router = APIRouter()

# Tags are used for organizing endpoints in Swagger/OpenAPI documentation
api_router.include_router(stores.router, tags=["stores"])
