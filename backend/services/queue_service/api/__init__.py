"""
Queue Service API Package

Package Structure:
    - dependencies.py: Settings, service and request-gating dependencies
    - v1/: Version 1 API implementation
        - api.py: Router aggregation
        - endpoints/: API endpoint handlers
        - models/: Pydantic request/response models
"""
