"""
Queue Service API v1 Package

Version 1 provides the live store aggregation endpoints. All endpoints are
prefixed with /api/v1 and answer with the standard response envelope.
"""
