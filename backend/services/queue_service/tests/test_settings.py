"""
Tests for queue service settings.
"""

import pytest
from pydantic import ValidationError

from common.config import BaseServiceSettings, QueueServiceSettings, get_settings


class TestQueueServiceSettings:
    """Tests for QueueServiceSettings validation."""

    def test_defaults(self):
        settings = QueueServiceSettings()

        assert settings.SERVICE_NAME == "queue-service"
        assert settings.DEFAULT_REGION == "HK"
        assert settings.DEFAULT_NUM_RESULTS == 25
        assert settings.QUEUE_CONCURRENCY_LIMIT == 5
        assert settings.MAX_REPORTED_QUEUE_ERRORS == 5

    def test_allowed_origins_from_comma_string(self):
        settings = QueueServiceSettings(ALLOWED_ORIGINS=" http://a.test , ,http://b.test")

        assert settings.ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]

    def test_concurrency_from_string(self):
        assert QueueServiceSettings(QUEUE_CONCURRENCY_LIMIT="3").QUEUE_CONCURRENCY_LIMIT == 3

    @pytest.mark.parametrize("value", [0, -1, "abc"])
    def test_rejects_invalid_concurrency(self, value):
        with pytest.raises(ValidationError):
            QueueServiceSettings(QUEUE_CONCURRENCY_LIMIT=value)

    def test_rejects_zero_timeout(self):
        with pytest.raises(ValidationError):
            QueueServiceSettings(UPSTREAM_TIMEOUT_SECONDS=0)

    def test_allows_zero_chunk_delay(self):
        assert QueueServiceSettings(QUEUE_CHUNK_DELAY_SECONDS=0).QUEUE_CHUNK_DELAY_SECONDS == 0

    def test_rejects_negative_error_bound(self):
        with pytest.raises(ValidationError):
            QueueServiceSettings(MAX_REPORTED_QUEUE_ERRORS=-1)


def test_get_settings_by_service_name():
    assert isinstance(get_settings("queue-service"), QueueServiceSettings)
    assert type(get_settings("other-service")) is BaseServiceSettings


def test_settings_config():
    config = QueueServiceSettings.model_config

    assert config["env_file"] == ".env"
    assert config["case_sensitive"] is True
    assert config["extra"] == "ignore"


def test_unknown_fields_are_ignored():
    settings = QueueServiceSettings(NOT_A_SETTING="x")

    assert not hasattr(settings, "NOT_A_SETTING")
