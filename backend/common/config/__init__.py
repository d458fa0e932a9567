"""
Centralized configuration management for all backend services.

This module provides a unified interface for accessing service-specific configuration
settings. It automatically selects the appropriate settings class based on the service
name, ensuring each service gets its correct configuration.

The configuration system uses Pydantic Settings, which automatically loads values from:
    1. Environment variables (highest priority)
    2. .env file in the project root
    3. Default values defined in the settings classes

Service-Specific Settings:
    - QueueServiceSettings: Configuration for queue-service
    - BaseServiceSettings: Base configuration shared by all services

Example:
    ```python
    from common.config import get_settings

    settings = get_settings("queue-service")
    print(settings.SERVICE_NAME)  # "queue-service"
    print(settings.PORT)  # 8004
    ```
"""

from common.config.settings import (
    BaseServiceSettings,
    QueueServiceSettings,
)


def get_settings(service_name: str | None = None) -> BaseServiceSettings:
    """
    Get settings instance for the specified service.

    This function returns the appropriate settings class based on the service name.
    It performs fuzzy matching to handle variations in service naming (e.g., "queue"
    matches "queue-service").

    Args:
        service_name: Name of the service to get settings for. Can be:
            - "queue-service" or any string containing "queue"
            - None or any other value returns BaseServiceSettings

    Returns:
        Instance of the appropriate settings class:
            - QueueServiceSettings if service_name contains "queue"
            - BaseServiceSettings otherwise (default)

    Note:
        - Settings are loaded from environment variables and .env file
        - Each call returns a new instance (settings are not cached)
        - Service name matching is case-insensitive
    """
    if service_name:
        service_lower = service_name.lower()
        if service_lower == "queue-service" or "queue" in service_lower:
            return QueueServiceSettings()
    # Default to base settings
    return BaseServiceSettings()


__all__ = [
    "BaseServiceSettings",
    "QueueServiceSettings",
    "get_settings",
]
