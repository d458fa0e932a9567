"""
Exceptions raised by the upstream clients.
"""


class UpstreamError(Exception):
    """
    Base class for failures talking to an upstream data source.

    Attributes:
        message (str): Short diagnostic message (safe to surface in queueErrors).
        status_code (int | None): Upstream HTTP status, when a response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class StoreListUnavailableError(UpstreamError):
    """The store roster could not be obtained; fatal for the whole request."""


class QueueFetchError(UpstreamError):
    """Queue data for one store could not be obtained; recorded, never fatal."""

    def __init__(
        self, store_id: int, message: str, status_code: int | None = None
    ) -> None:
        self.store_id = store_id
        super().__init__(message, status_code)
