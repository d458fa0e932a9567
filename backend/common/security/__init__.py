"""
Common security utilities for request gating.
"""

from .gating import RateLimiter, client_identifier, is_allowed_origin, validate_api_key

__all__ = ["RateLimiter", "client_identifier", "is_allowed_origin", "validate_api_key"]
