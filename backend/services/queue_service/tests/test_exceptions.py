"""
Tests for the shared APIError type.
"""

from common.exceptions import GENERIC_ERROR_MESSAGE, APIError, default_message_for_status


class TestAPIError:
    """Tests for APIError."""

    def test_explicit_message(self):
        error = APIError("Access denied.", status_code=403, error_code="UNAUTHORIZED_ORIGIN")

        assert error.message == "Access denied."
        assert error.status_code == 403
        assert error.error_code == "UNAUTHORIZED_ORIGIN"

    def test_default_message_for_status(self):
        error = APIError(status_code=429)

        assert error.message == default_message_for_status(429)
        assert error.message != GENERIC_ERROR_MESSAGE

    def test_unknown_status_uses_generic_message(self):
        assert APIError(status_code=418).message == GENERIC_ERROR_MESSAGE

    def test_internal_error_not_in_message(self):
        error = APIError(status_code=500, internal_error=RuntimeError("dsn=postgres://secret"))

        assert "secret" not in error.message
        assert isinstance(error.internal_error, RuntimeError)
