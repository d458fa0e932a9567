"""
Common utilities and shared code for the store queue dashboard backend services.

This package provides shared functionality used across the backend services.
It includes:

Modules:
    - config: Centralized configuration management with environment-based settings
    - exceptions: Standardized error handling and API error responses
    - fastapi: FastAPI application factory with common middleware and configuration
    - logging: Centralized logging configuration using loguru
    - security: Request gating (origin allow-list, API key, rate limiting)

Usage:
    Import specific modules as needed:

    ```python
    from common.config import get_settings
    from common.logging import setup_logging
    from common.exceptions import APIError
    ```

Version:
    Current version: 0.1.0
"""

__version__ = "0.1.0"
