"""
Queue Service Package

This package provides the Queue Service for the store dashboard. It exports the
FastAPI application instance for use with ASGI servers like Uvicorn.

The package structure:
    - main.py: FastAPI application entrypoint
    - api/: API layer with endpoints and models
    - clients/: Upstream store-list and queue clients
    - models/: Upstream, store and envelope models
    - services/: Business logic layer

Usage:
    ```python
    from services.queue_service import app

    # uvicorn services.queue_service:app --port 8004
    ```
"""

from services.queue_service.main import app

__all__ = ["app"]
