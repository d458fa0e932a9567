"""
Common FastAPI utilities and middleware.

This module provides shared FastAPI functionality used across the backend services,
including the application factory, middleware, and common route handlers.

Usage:
    ```python
    from common.fastapi import create_fastapi_app

    app = create_fastapi_app(
        service_name="queue-service",
        description="Live store queue aggregation",
        api_router=api_router,
    )
    ```
"""
from .app_factory import create_fastapi_app

__all__ = ["create_fastapi_app"]
