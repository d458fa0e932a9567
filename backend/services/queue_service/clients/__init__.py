"""
Upstream clients for the queue service.

Clients:
    - StoreListClient: Store roster for a geographic query (failures are fatal)
    - QueueClient: Ticket queue for one store (404 means "no queue", not an error)
"""

from .exceptions import QueueFetchError, StoreListUnavailableError, UpstreamError
from .queue_client import QueueClient
from .store_list_client import StoreListClient

__all__ = [
    "QueueClient",
    "QueueFetchError",
    "StoreListClient",
    "StoreListUnavailableError",
    "UpstreamError",
]
