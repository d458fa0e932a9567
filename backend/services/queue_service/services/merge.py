"""
Merge store-list entries with their queue entries.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from services.queue_service.models import RawQueueEntry, RawStoreListEntry, Store

UNKNOWN_STATUS = "UNKNOWN"


def resolve_waiting_group(entry: RawStoreListEntry, queue: RawQueueEntry | None) -> int:
    """Queue value, else store-list value, else 0. A reported 0 is kept."""
    if queue is not None and queue.waitingGroup is not None:
        return queue.waitingGroup
    if entry.waitingGroup is not None:
        return entry.waitingGroup
    return 0


def merge_store(
    entry: RawStoreListEntry, queue: RawQueueEntry | None, assembled_at: datetime
) -> Store:
    return Store(
        shopId=entry.id,
        name=entry.name or "",
        nameEn=entry.nameEn or "",
        storeStatus=entry.storeStatus or UNKNOWN_STATUS,
        waitingGroup=resolve_waiting_group(entry, queue),
        storeQueue=list(queue.storeQueue) if queue is not None else [],
        address=entry.address or "",
        region=entry.region or "",
        area=entry.area or "",
        latitude=entry.latitude,
        longitude=entry.longitude,
        timestamp=assembled_at,
    )


def merge_stores(
    entries: Sequence[RawStoreListEntry],
    queue_data: Mapping[int, RawQueueEntry | None],
    assembled_at: datetime | None = None,
) -> list[Store]:
    """
    Build one Store per store-list entry, in store-list order.

    Queue data is looked up by store id and is supplementary: entries without
    queue data still produce a Store, and queue data for ids absent from the
    store list is ignored. Duplicate ids in the store list each produce their
    own Store and share the same queue data.

    Args:
        entries: Store-list entries in upstream order.
        queue_data: Queue entry (or None) keyed by store id.
        assembled_at: Timestamp stamped on every Store; defaults to now (UTC).
    """
    assembled_at = assembled_at or datetime.now(timezone.utc)
    return [merge_store(entry, queue_data.get(entry.id), assembled_at) for entry in entries]
