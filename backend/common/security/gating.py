"""
Request gating utilities: origin allow-list, API key check and rate limiting.

These helpers are framework-agnostic; services wrap them in FastAPI
dependencies that raise ``APIError`` on rejection.

Rate Limiting:
    ``RateLimiter`` is a fixed-window counter keyed by client identifier. The
    counter map lives in process memory, so limits are per worker process. A
    multi-instance deployment needs a shared counter store instead.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
import hmac
import time
from urllib.parse import urlparse

from loguru import logger


def is_allowed_origin(
    origin: str | None, referer: str | None, allowed_origins: list[str]
) -> bool:
    """
    Check whether a request's Origin/Referer headers are acceptable.

    Requests carrying neither header (same-origin navigation, server-to-server
    calls) are allowed. Otherwise the Origin must be listed exactly, or the
    Referer hostname must match the hostname of a listed origin.
    """
    if not origin and not referer:
        return True

    if origin and origin in allowed_origins:
        return True

    if referer:
        referer_host = urlparse(referer).hostname
        if not referer_host:
            return False
        return any(
            urlparse(allowed).hostname == referer_host for allowed in allowed_origins
        )

    return False


def validate_api_key(provided_key: str | None, required_key: str | None) -> bool:
    """Return True when no key is configured or the provided key matches."""
    if not required_key:
        return True
    if not provided_key:
        logger.debug("No API key provided in request")
        return False
    # Header values arrive latin-1 decoded; compare_digest rejects non-ASCII str
    return hmac.compare_digest(provided_key.encode("utf-8"), required_key.encode("utf-8"))


def client_identifier(headers: Mapping[str, str]) -> str:
    """Identify the caller for rate limiting (proxy headers first)."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return headers.get("x-real-ip") or "unknown"


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """
    Fixed-window request counter.

    Args:
        max_requests: Requests allowed per client within one window.
        window_seconds: Window length in seconds.
        clock: Monotonic time source, injectable for tests.

    Example:
        ```python
        limiter = RateLimiter(max_requests=100, window_seconds=60)
        if not limiter.check("203.0.113.7"):
            ...  # reject with 429
        ```
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def check(self, client_id: str) -> bool:
        """Record one request for ``client_id``; False when the limit is exceeded."""
        now = self._clock()
        window = self._windows.get(client_id)

        if window is None or now > window.reset_at:
            self._evict_expired(now)
            self._windows[client_id] = _Window(count=1, reset_at=now + self.window_seconds)
            return True

        if window.count >= self.max_requests:
            return False

        window.count += 1
        return True

    def reset(self) -> None:
        self._windows.clear()

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in expired:
            del self._windows[key]
