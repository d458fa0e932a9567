"""
Bounded-Concurrency Queue Fetch Orchestrator

Drives the queue client across every store in the roster without overwhelming
the queue upstream.

Algorithm:
    1. De-duplicate store ids, keeping first-occurrence order.
    2. Split the ids into chunks of ``chunk_size``.
    3. Run chunks strictly one after another. Inside a chunk every fetch runs
       concurrently and the chunk finishes only when all of them have resolved.
    4. Sleep ``chunk_delay`` seconds between chunks (not after the last one).

Guarantees:
    - At most ``chunk_size`` queue requests are in flight at any instant.
    - Each fetch is bounded by ``fetch_timeout`` so one hung store cannot stall
      its chunk indefinitely.
    - A failure for one store is recorded against that store only; nothing
      raised by a fetch escapes ``fetch_all``.

Concurrency Model:
    Single event loop. Outcomes are written into a plain dict keyed by store id
    after each ``asyncio.gather`` returns, so no lock is needed.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from loguru import logger

from services.queue_service.clients.exceptions import QueueFetchError
from services.queue_service.models import RawQueueEntry

DEFAULT_CHUNK_SIZE = 5
DEFAULT_CHUNK_DELAY_SECONDS = 0.1
DEFAULT_FETCH_TIMEOUT_SECONDS = 5.0


class QueueSource(Protocol):
    async def fetch_queue(self, store_id: int, region: str) -> RawQueueEntry | None: ...


@dataclass(frozen=True)
class QueueError:
    """A per-store queue failure surfaced to clients."""

    store_id: int
    error: str


@dataclass
class QueueFetchOutcome:
    """Result of fetching one store's queue: data, nothing, or an error."""

    store_id: int
    entry: RawQueueEntry | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.entry is not None


@dataclass
class QueueFetchReport:
    """
    Per-store outcomes of one orchestration run.

    ``outcomes`` is keyed by store id and filled chunk by chunk in roster
    order, so iteration order matches the store list.
    """

    outcomes: dict[int, QueueFetchOutcome] = field(default_factory=dict)

    @property
    def successful_fetches(self) -> int:
        return sum(1 for outcome in self.outcomes.values() if outcome.succeeded)

    @property
    def errors(self) -> list[QueueError]:
        return [
            QueueError(store_id=outcome.store_id, error=outcome.error)
            for outcome in self.outcomes.values()
            if outcome.error is not None
        ]

    def queue_data(self) -> dict[int, RawQueueEntry | None]:
        return {store_id: outcome.entry for store_id, outcome in self.outcomes.items()}


def chunk_ids(store_ids: Sequence[int], chunk_size: int) -> list[list[int]]:
    """Split ids into consecutive chunks of at most ``chunk_size``."""
    if chunk_size < 1:
        msg = f"chunk_size must be at least 1, got {chunk_size}"
        raise ValueError(msg)
    return [
        list(store_ids[start : start + chunk_size])
        for start in range(0, len(store_ids), chunk_size)
    ]


class QueueFetchOrchestrator:
    """
    Fetch queue data for many stores with a fixed concurrency ceiling.

    Args:
        queue_client: Anything with ``async fetch_queue(store_id, region)``.
        chunk_size: Stores per chunk (the concurrency ceiling).
        chunk_delay: Seconds to pause between chunks.
        fetch_timeout: Upper bound in seconds for a single store's fetch.

    Example:
        ```python
        orchestrator = QueueFetchOrchestrator(queue_client, chunk_size=5)
        report = await orchestrator.fetch_all([34, 42, 58], region="HK")
        report.successful_fetches  # e.g. 1
        report.errors              # [QueueError(store_id=58, error="...")]
        ```
    """

    def __init__(
        self,
        queue_client: QueueSource,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_delay: float = DEFAULT_CHUNK_DELAY_SECONDS,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    ) -> None:
        if chunk_size < 1:
            msg = f"chunk_size must be at least 1, got {chunk_size}"
            raise ValueError(msg)
        self.queue_client = queue_client
        self.chunk_size = chunk_size
        self.chunk_delay = chunk_delay
        self.fetch_timeout = fetch_timeout

    async def fetch_all(self, store_ids: Sequence[int], region: str) -> QueueFetchReport:
        """
        Fetch queue data for every store id.

        Args:
            store_ids: Store ids in roster order. Duplicates are fetched once.
            region: Region code passed to every queue request.

        Returns:
            QueueFetchReport with one outcome per distinct store id.
        """
        unique_ids = list(dict.fromkeys(store_ids))
        if len(unique_ids) != len(store_ids):
            logger.warning(
                f"Store list contains {len(store_ids) - len(unique_ids)} duplicate store id(s); "
                "fetching each queue once"
            )

        chunks = chunk_ids(unique_ids, self.chunk_size)
        report = QueueFetchReport()

        for index, chunk in enumerate(chunks):
            results = await asyncio.gather(
                *(self._fetch_one(store_id, region) for store_id in chunk)
            )
            for outcome in results:
                report.outcomes[outcome.store_id] = outcome

            if index < len(chunks) - 1 and self.chunk_delay > 0:
                await asyncio.sleep(self.chunk_delay)

        logger.info(
            f"Queue data available for {report.successful_fetches}/{len(unique_ids)} stores "
            f"({len(chunks)} chunk(s) of up to {self.chunk_size})"
        )
        return report

    async def _fetch_one(self, store_id: int, region: str) -> QueueFetchOutcome:
        try:
            entry = await asyncio.wait_for(
                self.queue_client.fetch_queue(store_id, region),
                timeout=self.fetch_timeout,
            )
        except asyncio.TimeoutError:
            message = f"Queue request timed out after {self.fetch_timeout:g}s"
        except QueueFetchError as e:
            message = e.message
        except Exception as e:
            logger.opt(exception=e).error(f"Unexpected error fetching queue for store {store_id}")
            message = str(e) or type(e).__name__
        else:
            return QueueFetchOutcome(store_id=store_id, entry=entry)

        logger.warning(f"Failed to fetch queue for store {store_id}: {message}")
        return QueueFetchOutcome(store_id=store_id, error=message)
