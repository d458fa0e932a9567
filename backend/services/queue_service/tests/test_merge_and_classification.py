"""
Tests for store merging and response classification.
"""

from datetime import datetime, timezone

import pytest

from services.queue_service.models import RawQueueEntry, RawStoreListEntry
from services.queue_service.services.classification import (
    CLASSIFICATION_CONTRACTS,
    Classification,
    classify,
)
from services.queue_service.services.merge import merge_stores, resolve_waiting_group

ASSEMBLED_AT = datetime(2025, 8, 17, 10, 35, 23, tzinfo=timezone.utc)


def entry(store_id, **fields):
    return RawStoreListEntry(id=store_id, **fields)


def queue(store_id, tickets=(), waiting_group=None):
    return RawQueueEntry(shopId=store_id, storeQueue=list(tickets), waitingGroup=waiting_group)


class TestResolveWaitingGroup:
    """Tests for waiting-group precedence."""

    def test_queue_value_wins(self):
        assert resolve_waiting_group(entry(34, waitingGroup=10), queue(34, waiting_group=25)) == 25

    def test_falls_back_to_store_list(self):
        assert resolve_waiting_group(entry(34, waitingGroup=10), queue(34)) == 10
        assert resolve_waiting_group(entry(34, waitingGroup=10), None) == 10

    def test_defaults_to_zero(self):
        assert resolve_waiting_group(entry(34), None) == 0

    def test_reported_zero_is_kept(self):
        assert resolve_waiting_group(entry(34, waitingGroup=10), queue(34, waiting_group=0)) == 0


class TestMergeStores:
    """Tests for merge_stores."""

    def test_combines_store_and_queue_fields(self):
        entries = [entry(34, name="旺角店", nameEn="Mong Kok", storeStatus="OPEN", waitingGroup=10)]
        queue_data = {34: queue(34, ["265", "266"], waiting_group=25)}

        [store] = merge_stores(entries, queue_data, ASSEMBLED_AT)

        assert store.shopId == 34
        assert store.name == "旺角店"
        assert store.nameEn == "Mong Kok"
        assert store.storeStatus == "OPEN"
        assert store.waitingGroup == 25
        assert store.storeQueue == ["265", "266"]
        assert store.timestamp == ASSEMBLED_AT

    def test_store_without_queue_data(self):
        [store] = merge_stores([entry(58, storeStatus="OPEN")], {58: None}, ASSEMBLED_AT)

        assert store.storeQueue == []
        assert store.waitingGroup == 0

    def test_missing_status_is_unknown(self):
        [store] = merge_stores([entry(42)], {}, ASSEMBLED_AT)

        assert store.storeStatus == "UNKNOWN"
        assert store.name == ""
        assert store.nameEn == ""

    def test_preserves_store_list_order(self):
        entries = [entry(58), entry(34), entry(42)]

        stores = merge_stores(entries, {34: queue(34, ["1"])}, ASSEMBLED_AT)

        assert [store.shopId for store in stores] == [58, 34, 42]

    def test_queue_data_for_unknown_store_is_ignored(self):
        stores = merge_stores([entry(34)], {99: queue(99, ["1"])}, ASSEMBLED_AT)

        assert [store.shopId for store in stores] == [34]

    def test_duplicate_ids_share_queue_data(self):
        entries = [entry(34, nameEn="A"), entry(34, nameEn="B")]

        stores = merge_stores(entries, {34: queue(34, ["265"], waiting_group=4)}, ASSEMBLED_AT)

        assert [store.nameEn for store in stores] == ["A", "B"]
        assert all(store.storeQueue == ["265"] for store in stores)

    def test_all_stores_share_one_timestamp(self):
        stores = merge_stores([entry(1), entry(2), entry(3)], {})

        assert len({store.timestamp for store in stores}) == 1

    def test_empty_input(self):
        assert merge_stores([], {}, ASSEMBLED_AT) == []


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "available, store_count, successful, expected",
        [
            (False, 0, 0, Classification.STORE_LIST_UNAVAILABLE),
            (True, 0, 0, Classification.NO_STORES_FOUND),
            (True, 3, 0, Classification.PARTIAL_SUCCESS),
            (True, 3, 1, Classification.SUCCESS),
            (True, 3, 3, Classification.SUCCESS),
        ],
    )
    def test_classification_matrix(self, available, store_count, successful, expected):
        assert classify(available, store_count, successful) is expected

    def test_unavailable_store_list_wins(self):
        assert classify(False, 5, 5) is Classification.STORE_LIST_UNAVAILABLE

    def test_is_deterministic(self):
        assert classify(True, 3, 0) is classify(True, 3, 0)

    def test_every_classification_has_a_contract(self):
        assert set(CLASSIFICATION_CONTRACTS) == set(Classification)

    @pytest.mark.parametrize(
        "classification, status_code, success, error_code",
        [
            (Classification.SUCCESS, 200, True, None),
            (Classification.PARTIAL_SUCCESS, 206, False, "QUEUE_DATA_UNAVAILABLE"),
            (Classification.NO_STORES_FOUND, 404, False, "NO_STORES_FOUND"),
            (Classification.STORE_LIST_UNAVAILABLE, 503, False, "STORE_DATA_UNAVAILABLE"),
        ],
    )
    def test_contract_table(self, classification, status_code, success, error_code):
        assert classification.status_code == status_code
        assert classification.success is success
        assert classification.error_code == error_code

    def test_tiers(self):
        assert Classification.SUCCESS.tier == "success"
        assert Classification.PARTIAL_SUCCESS.tier == "partial_success"
        assert Classification.NO_STORES_FOUND.tier == "error"
        assert Classification.STORE_LIST_UNAVAILABLE.tier == "error"
