"""
End-to-end tests for StoreAggregationService against a mock upstream.
"""

from unittest.mock import patch

import pytest

from services.queue_service.services.aggregation_service import StoreAggregationService


@pytest.fixture
def service(settings, upstream):
    return StoreAggregationService(settings, transport=upstream.transport())


class TestAggregate:
    """Tests for StoreAggregationService.aggregate."""

    @pytest.mark.asyncio
    async def test_mixed_queue_outcomes_are_a_success(self, service, upstream, store_entry, queue_entry, network_error):
        upstream.store_list = [
            store_entry(34, waitingGroup=10),
            store_entry(42, waitingGroup=3),
            store_entry(58, waitingGroup=7),
        ]
        upstream.queues[34] = queue_entry(34, ["265", "266"], waiting_group=25)
        upstream.queues[42] = 404
        upstream.queues[58] = network_error

        result = await service.aggregate(service.default_params())

        payload = result.body.to_payload()
        assert result.status_code == 200
        assert payload["success"] is True
        assert [store["shopId"] for store in payload["data"]] == [34, 42, 58]

        by_id = {store["shopId"]: store for store in payload["data"]}
        assert by_id[34]["waitingGroup"] == 25
        assert by_id[34]["storeQueue"] == ["265", "266"]
        assert by_id[42]["waitingGroup"] == 3
        assert by_id[42]["storeQueue"] == []
        assert by_id[58]["storeQueue"] == []

        assert [item["storeId"] for item in payload["queueErrors"]] == [58]
        assert payload["message"].endswith("Note: Queue data may be incomplete for some stores.")

    @pytest.mark.asyncio
    async def test_store_list_failure_returns_503(self, service, upstream):
        upstream.store_list_status = 500

        result = await service.aggregate(service.default_params())

        assert result.status_code == 503
        assert result.body.error == "STORE_DATA_UNAVAILABLE"
        assert result.body.data == []
        assert upstream.queue_requests == []

    @pytest.mark.asyncio
    async def test_store_list_network_error_returns_503(self, service, upstream, network_error):
        upstream.store_list_error = network_error

        result = await service.aggregate(service.default_params())

        assert result.status_code == 503

    @pytest.mark.asyncio
    async def test_non_array_store_list_returns_503(self, service, upstream):
        upstream.store_list = {"error": "maintenance"}

        result = await service.aggregate(service.default_params())

        assert result.status_code == 503

    @pytest.mark.asyncio
    async def test_empty_store_list_returns_404(self, service, upstream):
        upstream.store_list = []

        result = await service.aggregate(service.default_params())

        assert result.status_code == 404
        assert result.body.error == "NO_STORES_FOUND"
        assert upstream.queue_requests == []

    @pytest.mark.asyncio
    async def test_no_queue_data_returns_206(self, service, upstream, store_entry):
        upstream.store_list = [store_entry(34, waitingGroup=10), store_entry(42)]
        upstream.queues[34] = 503

        result = await service.aggregate(service.default_params())

        payload = result.body.to_payload()
        assert result.status_code == 206
        assert payload["partialData"] is True
        assert payload["warnings"] == ["Queue data unavailable for 2 stores"]
        assert [store["waitingGroup"] for store in payload["data"]] == [10, 10]
        assert [item["storeId"] for item in payload["queueErrors"]] == [34]

    @pytest.mark.asyncio
    async def test_all_queues_succeed(self, service, upstream, store_entry, queue_entry):
        upstream.store_list = [store_entry(34), store_entry(42)]
        upstream.queues[34] = queue_entry(34, ["1"])
        upstream.queues[42] = queue_entry(42, ["2"])

        result = await service.aggregate(service.default_params())

        payload = result.body.to_payload()
        assert result.status_code == 200
        assert payload["message"] == "Successfully fetched complete data for 2 stores"
        assert "queueErrors" not in payload

    @pytest.mark.asyncio
    async def test_queue_requests_use_query_region(self, service, upstream, store_entry):
        upstream.store_list = [store_entry(34)]
        params = service.default_params().model_copy(update={"region": "MO"})

        await service.aggregate(params)

        assert upstream.queue_requests[0].url.params["region"] == "MO"

    @pytest.mark.asyncio
    async def test_queue_errors_capped_by_settings(self, settings, upstream, store_entry, queue_entry):
        settings.MAX_REPORTED_QUEUE_ERRORS = 2
        service = StoreAggregationService(settings, transport=upstream.transport())
        upstream.store_list = [store_entry(store_id) for store_id in range(1, 8)]
        upstream.queues = {store_id: 500 for store_id in range(2, 8)}
        upstream.queues[1] = queue_entry(1, ["1"])

        result = await service.aggregate(service.default_params())

        assert result.status_code == 200
        assert len(result.body.queueErrors) == 2

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_generic_500(self, service, upstream, store_entry):
        upstream.store_list = [store_entry(34)]

        with patch(
            "services.queue_service.services.aggregation_service.merge_stores",
            side_effect=RuntimeError("database password is hunter2"),
        ):
            result = await service.aggregate(service.default_params())

        payload = result.body.to_payload()
        assert result.status_code == 500
        assert payload["error"] == "INTERNAL_SERVER_ERROR"
        assert "hunter2" not in payload["message"]
        assert payload["data"] == []

    @pytest.mark.asyncio
    async def test_each_call_refetches(self, service, upstream, store_entry):
        upstream.store_list = [store_entry(34)]

        await service.aggregate(service.default_params())
        await service.aggregate(service.default_params())

        store_list_requests = [r for r in upstream.requests if r.url.path == "/storelist"]
        assert len(store_list_requests) == 2
        assert len(upstream.queue_requests) == 2
