"""
Dashboard summary statistics over merged stores.
"""

from collections.abc import Sequence

from services.queue_service.models import DashboardStats, Store

STATUS_OPEN = "OPEN"
STATUS_CLOSED = "CLOSED"

PRIORITY_LOW = "LOW"
PRIORITY_MEDIUM = "MEDIUM"
PRIORITY_HIGH = "HIGH"
PRIORITY_EXTREME = "EXTREME"

PRIORITY_LEVELS = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH, PRIORITY_EXTREME)


def queue_priority(waiting_group: int) -> str:
    """Bucket a waiting-group count: <=20 LOW, <=50 MEDIUM, <=100 HIGH, else EXTREME."""
    if waiting_group <= 20:
        return PRIORITY_LOW
    if waiting_group <= 50:
        return PRIORITY_MEDIUM
    if waiting_group <= 100:
        return PRIORITY_HIGH
    return PRIORITY_EXTREME


def compute_dashboard_stats(stores: Sequence[Store]) -> DashboardStats:
    """
    Summarize merged stores for the dashboard header.

    The busiest store is the one with the most waiting groups; the least busy
    store is the open store with the fewest. Ties keep the earliest store in
    list order. Both are None when there is no candidate.
    """
    open_stores = [store for store in stores if store.storeStatus == STATUS_OPEN]

    priority_counts = dict.fromkeys(PRIORITY_LEVELS, 0)
    for store in stores:
        priority_counts[queue_priority(store.waitingGroup)] += 1

    busiest = max(stores, key=lambda store: store.waitingGroup, default=None)
    least_busy = min(open_stores, key=lambda store: store.waitingGroup, default=None)

    return DashboardStats(
        totalStores=len(stores),
        openStores=len(open_stores),
        closedStores=sum(1 for store in stores if store.storeStatus == STATUS_CLOSED),
        totalWaiting=sum(store.waitingGroup for store in stores),
        totalQueueTickets=sum(len(store.storeQueue) for store in stores),
        busiestStoreId=busiest.shopId if busiest else None,
        leastBusyStoreId=least_busy.shopId if least_busy else None,
        priorityCounts=priority_counts,
    )
