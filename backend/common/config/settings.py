"""
Centralized configuration management for all backend services.

This module defines Pydantic Settings classes for managing configuration across
the backend services. It provides a hierarchical settings system with base
settings shared by all services and service-specific overrides.

Configuration Loading:
    Settings are loaded in the following priority order (highest to lowest):
    1. Environment variables
    2. .env file in the project root
    3. Default values defined in the classes

Validation:
    All settings are validated using Pydantic validators to ensure:
    - Type correctness
    - Value constraints (e.g., positive integers, positive timeouts)
    - Format requirements (e.g., comma-separated origin lists)

Service Settings Hierarchy:
    BaseServiceSettings (base class)
    └── QueueServiceSettings

Example:
    ```python
    from common.config.settings import QueueServiceSettings

    settings = QueueServiceSettings()
    print(settings.SERVICE_NAME)  # "queue-service"
    print(settings.PORT)  # 8004
    print(settings.QUEUE_CONCURRENCY_LIMIT)  # 5
    ```

Environment Variables:
    All settings can be overridden via environment variables. For example:
    - LOG_LEVEL=DEBUG
    - STORE_LIST_API_URL=https://upstream.example.com/stores
    - ALLOWED_ORIGINS=http://localhost:3000,https://dashboard.example.com
"""

from typing import Any

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(v: Any) -> list[str]:
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    if isinstance(v, list):
        return v
    return []


class BaseServiceSettings(BaseSettings):
    """
    Base settings class providing common configuration for all services.

    Attributes:
        SERVICE_NAME (str): Name identifier for the service. Default: "base-service"
        SERVICE_VERSION (str): Version string for the service. Default: "0.0.1"
        PORT (int): Port number the service listens on. Default: 8000

        ENVIRONMENT (str): Deployment environment. Values: "DEV" or "production". Default: "DEV"
        DEBUG (bool): Enable debug mode. Default: False
        LOG_LEVEL (str): Logging level. Values: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL". Default: "INFO"
        LOG_DIR (str): Directory for rotating log files, relative to the working directory. Default: "logs"

        API_V1_STR (str): API version prefix for routes. Default: "/api/v1"
        CORS_ORIGINS (list[str]): List of allowed CORS origins. Can be set via comma-separated string or list.

    Note:
        - CORS_ORIGINS can be set as a comma-separated string or a list
    """

    # Service Information (defaults)
    SERVICE_NAME: str = "base-service"
    SERVICE_VERSION: str = "0.0.1"
    PORT: int = 8000

    # Global Configuration
    ENVIRONMENT: str = "DEV"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # API Configuration
    API_V1_STR: str = "/api/v1"

    # CORS Configuration
    CORS_ORIGINS: Any = ""

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> list[str]:
        """
        Assemble CORS origins from string or list format.

        Accepts either a comma-separated string ("http://a,http://b") or a
        list of strings. Whitespace is stripped and empty items are dropped.
        Invalid types return an empty list.
        """
        return _split_csv(v)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


class QueueServiceSettings(BaseServiceSettings):
    """
    Settings configuration for the store queue aggregation service.

    This class extends BaseServiceSettings with the upstream endpoints, the
    default geographic query, the fan-out limits used when fetching per-store
    queues, and the request-gating options applied to the public routes.

    Inherited Attributes:
        All attributes from BaseServiceSettings are available with these overrides:
        - SERVICE_NAME: "queue-service"
        - SERVICE_VERSION: "0.1.0"
        - PORT: 8004

    Additional Attributes:
        STORE_LIST_API_URL (str): Upstream endpoint returning the store roster
            as a JSON array.
        QUEUE_API_URL (str): Upstream endpoint returning queue state for a
            single store (queried with ``region`` and ``storeid``).
        CORS_PROXY_URL (str): Optional proxy prefix. When set, upstream calls
            are sent as ``{CORS_PROXY_URL}/?{api_url}?{query}``.

        DEFAULT_LATITUDE (float): Latitude used when the request omits it.
        DEFAULT_LONGITUDE (float): Longitude used when the request omits it.
        DEFAULT_NUM_RESULTS (int): Store count requested when omitted. Default: 25
        DEFAULT_REGION (str): Region code used when omitted. Default: "HK"

        QUEUE_CONCURRENCY_LIMIT (int): Stores per chunk; also the ceiling on
            in-flight queue requests. Default: 5
        QUEUE_CHUNK_DELAY_SECONDS (float): Pause between chunks. Default: 0.1
        UPSTREAM_TIMEOUT_SECONDS (float): Timeout applied to every outbound
            call. Default: 5.0
        MAX_REPORTED_QUEUE_ERRORS (int): Upper bound on ``queueErrors``
            entries in a response. Default: 5

        ALLOWED_ORIGINS (list[str]): Origins allowed to call the store routes.
        API_SECRET_KEY (str): When non-empty, the ``x-api-key`` header must match.
        RATE_LIMIT_WINDOW_SECONDS (int): Fixed rate-limit window. Default: 60
        RATE_LIMIT_MAX_REQUESTS (int): Requests allowed per client per window. Default: 100

    Example:
        ```python
        from common.config.settings import QueueServiceSettings

        settings = QueueServiceSettings(QUEUE_CONCURRENCY_LIMIT=3)
        print(settings.DEFAULT_REGION)  # "HK"
        ```
    """

    SERVICE_NAME: str = "queue-service"
    SERVICE_VERSION: str = "0.1.0"
    PORT: int = 8004

    # Upstream Configuration
    STORE_LIST_API_URL: str = ""
    QUEUE_API_URL: str = ""
    CORS_PROXY_URL: str = ""

    # Default Store-List Query (Hong Kong)
    DEFAULT_LATITUDE: float = 22.3193
    DEFAULT_LONGITUDE: float = 114.1694
    DEFAULT_NUM_RESULTS: int = 25
    DEFAULT_REGION: str = "HK"

    # Queue Fan-out Configuration
    QUEUE_CONCURRENCY_LIMIT: int = 5
    QUEUE_CHUNK_DELAY_SECONDS: float = 0.1
    UPSTREAM_TIMEOUT_SECONDS: float = 5.0
    MAX_REPORTED_QUEUE_ERRORS: int = 5

    # Request Gating Configuration
    ALLOWED_ORIGINS: Any = "http://localhost:3000,http://localhost:3001"
    API_SECRET_KEY: str = ""
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_MAX_REQUESTS: int = 100

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def assemble_allowed_origins(cls, v: Any) -> list[str]:
        """Parse allowed origins the same way as CORS_ORIGINS."""
        return _split_csv(v)

    @field_validator(
        "DEFAULT_NUM_RESULTS",
        "QUEUE_CONCURRENCY_LIMIT",
        "RATE_LIMIT_WINDOW_SECONDS",
        "RATE_LIMIT_MAX_REQUESTS",
        mode="before",
    )
    @classmethod
    def validate_positive_int(cls, v: Any, info: ValidationInfo) -> int:
        """
        Validate that count-like fields are positive integers.

        Handles type conversion from strings (common when loading from
        environment variables) and rejects zero or negative values.

        Raises:
            ValueError: If the value cannot be converted to an integer or is below 1.
        """
        try:
            int_val = int(v)
        except (ValueError, TypeError) as e:
            msg = f"{info.field_name} must be a valid positive integer, got: {v}"
            raise ValueError(msg) from e
        if int_val < 1:
            msg = f"{info.field_name} must be a positive integer"
            raise ValueError(msg)
        return int_val

    @field_validator("MAX_REPORTED_QUEUE_ERRORS")
    @classmethod
    def validate_error_bound(cls, v: int, info: ValidationInfo) -> int:
        if v < 0:
            msg = f"{info.field_name} cannot be negative"
            raise ValueError(msg)
        return v

    @field_validator("QUEUE_CHUNK_DELAY_SECONDS", "UPSTREAM_TIMEOUT_SECONDS")
    @classmethod
    def validate_durations(cls, v: float, info: ValidationInfo) -> float:
        """Delays may be zero; timeouts must be strictly positive."""
        if v < 0:
            msg = f"{info.field_name} cannot be negative"
            raise ValueError(msg)
        if info.field_name == "UPSTREAM_TIMEOUT_SECONDS" and v == 0:
            msg = f"{info.field_name} must be greater than zero"
            raise ValueError(msg)
        return v
